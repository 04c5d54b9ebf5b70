"""
Upload coordinator.

Drives one upload attempt per submitted payload through its state machine:

    CREATED -> BUILDING -> SENT -> SUCCEEDED | FAILED
    CREATED | BUILDING | SENT -> CANCELLED

Every attempt ends with exactly one UploadOutcome. Errors raised while an
attempt runs are converted into a Failure outcome and never propagate.
"""
import asyncio
import itertools
from typing import Callable, Dict, List, Optional

from ..events import EventEmitter
from ..exceptions import InvalidStateTransition, UnreadableSourceError
from ..logging import get_logger
from ..share.models import MultiImage, SharePayload, SingleImage
from .models import (
    AttemptState,
    ErrorKind,
    Failure,
    Success,
    TRANSITIONS,
    UploadOutcome,
    UploadRequest,
)
from .protocols import ByteSource, LoggerProtocol, Uploader
from .services import FileByteSource, build_image_request, build_text_request


class UploadAttempt:
    """
    Handle to one in-flight or finished upload.

    Attempts are never reused. Once terminal, ``state`` and ``outcome``
    do not change again.

    Events emitted through the owning coordinator:
    - ``state``: (attempt, AttemptState) on every transition
    - ``outcome``: (attempt, UploadOutcome) once, when the attempt ends
    """

    def __init__(
        self,
        payload: SharePayload,
        attempt_id: int,
        events: Optional[EventEmitter] = None
    ):
        self._payload = payload
        self._attempt_id = attempt_id
        self._events = events
        self._state = AttemptState.CREATED
        self._outcome: Optional[UploadOutcome] = None
        self._finished = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._done_callbacks: List[Callable[['UploadAttempt'], None]] = []
        self._logger = get_logger('clipboarder.upload.coordinator')

    def __repr__(self) -> str:
        return (
            f"<UploadAttempt #{self._attempt_id} "
            f"{self._payload.kind.value} state={self._state.value}>"
        )

    @property
    def attempt_id(self) -> int:
        return self._attempt_id

    @property
    def payload(self) -> SharePayload:
        return self._payload

    @property
    def state(self) -> AttemptState:
        return self._state

    @property
    def outcome(self) -> Optional[UploadOutcome]:
        """Terminal outcome, or None while the attempt is running."""
        return self._outcome

    def done(self) -> bool:
        """Returns True once the attempt reached a terminal state."""
        return self._state.is_terminal

    async def wait(self) -> UploadOutcome:
        """Wait for the terminal outcome."""
        await self._finished.wait()
        return self._outcome

    def cancel(self, message: str = "Upload cancelled") -> bool:
        """
        Cancel the attempt.

        The running task is cancelled and the outcome is set to
        Failure(CANCELLED) immediately.

        Returns:
            False if the attempt had already finished
        """
        if self.done():
            return False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        return self._finish(Failure(ErrorKind.CANCELLED, message))

    def add_done_callback(self, callback: Callable[['UploadAttempt'], None]) -> None:
        """Call ``callback(attempt)`` when the attempt ends (at once if it has)."""
        if self.done():
            callback(self)
        else:
            self._done_callbacks.append(callback)

    def _advance(self, state: AttemptState) -> bool:
        """
        Move to a non-terminal state.

        Returns:
            False if the attempt already finished (e.g. was cancelled)
        """
        if self.done():
            return False
        self._set_state(state)
        return True

    def _check_transition(self, state: AttemptState) -> None:
        if state not in TRANSITIONS[self._state]:
            raise InvalidStateTransition(
                f"Attempt #{self._attempt_id}: {self._state.value} -> {state.value}"
            )

    def _set_state(self, state: AttemptState) -> None:
        self._check_transition(state)
        self._state = state
        if self._events is not None:
            self._events.emit('state', self, state)

    def _finish(self, outcome: UploadOutcome) -> bool:
        """
        Record the terminal outcome.

        Returns:
            False if an outcome was already recorded
        """
        if self.done():
            return False

        if isinstance(outcome, Success):
            state = AttemptState.SUCCEEDED
        elif outcome.kind is ErrorKind.CANCELLED:
            state = AttemptState.CANCELLED
        else:
            state = AttemptState.FAILED

        self._check_transition(state)

        self._outcome = outcome
        self._set_state(state)
        self._finished.set()

        if self._events is not None:
            self._events.emit('outcome', self, outcome)

        callbacks, self._done_callbacks = self._done_callbacks, []
        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                self._logger.error(f"Done callback of attempt #{self._attempt_id} failed: {e}")
        return True


class UploadCoordinator:
    """
    Coordinates share uploads.

    Uses dependency injection for the transport and the byte source.
    At most one attempt per payload is in flight: submitting an equal
    payload while its attempt is running yields Failure(ALREADY_IN_PROGRESS)
    without touching the uploader. Distinct payloads run concurrently.

    Example:
        >>> coordinator = UploadCoordinator(uploader=HttpUploader(config))
        >>> outcome = await coordinator.submit(MultiText(["hello"]))
    """

    def __init__(
        self,
        uploader: Optional[Uploader] = None,
        byte_source: Optional[ByteSource] = None,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            uploader: Default transport for submissions
            byte_source: Reader for image sources (local files by default)
            logger: Logger instance
        """
        self._uploader = uploader
        self._byte_source = byte_source or FileByteSource()
        self._logger = logger if logger is not None else get_logger('clipboarder.upload.coordinator')
        self._events = EventEmitter('clipboarder.upload.events')
        self._in_flight: Dict[SharePayload, UploadAttempt] = {}
        self._ids = itertools.count(1)

    @property
    def in_flight(self) -> int:
        """Number of attempts currently running."""
        return len(self._in_flight)

    def on(self, event: str, callback: Callable) -> 'UploadCoordinator':
        """Register a handler for ``state`` or ``outcome`` events."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'UploadCoordinator':
        """Remove an event handler."""
        self._events.off(event, callback)
        return self

    def start(
        self,
        payload: SharePayload,
        uploader: Optional[Uploader] = None
    ) -> UploadAttempt:
        """
        Schedule an upload attempt and return its handle.

        Must be called from a running event loop.

        Args:
            payload: Classified payload
            uploader: Transport for this attempt (defaults to the injected one)

        Returns:
            The new attempt, already failed if the payload is in flight

        Raises:
            ValueError: If no uploader is available
        """
        uploader = uploader or self._uploader
        if uploader is None:
            raise ValueError("No uploader configured")

        attempt = UploadAttempt(payload, next(self._ids), self._events)

        running = self._in_flight.get(payload)
        if running is not None and not running.done():
            self._logger.warning(
                f"Rejecting attempt #{attempt.attempt_id}: "
                f"attempt #{running.attempt_id} for the same payload is in progress"
            )
            attempt._finish(Failure(
                ErrorKind.ALREADY_IN_PROGRESS,
                f"Upload #{running.attempt_id} is already in progress"
            ))
            return attempt

        attempt._task = asyncio.get_running_loop().create_task(self._run(attempt, uploader))
        self._in_flight[payload] = attempt
        attempt.add_done_callback(self._release)
        self._logger.info(f"Starting upload #{attempt.attempt_id} ({payload.kind.value})")
        return attempt

    async def submit(
        self,
        payload: SharePayload,
        uploader: Optional[Uploader] = None
    ) -> UploadOutcome:
        """
        Upload a payload and wait for its outcome.

        Cancelling the caller cancels the attempt.
        """
        attempt = self.start(payload, uploader)
        try:
            return await attempt.wait()
        except asyncio.CancelledError:
            attempt.cancel()
            raise

    async def close(self) -> None:
        """Cancel every running attempt and wait for the tasks to exit."""
        attempts = list(self._in_flight.values())
        tasks = [a._task for a in attempts if a._task is not None]
        for attempt in attempts:
            attempt.cancel("Coordinator closed")
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _release(self, attempt: UploadAttempt) -> None:
        if self._in_flight.get(attempt.payload) is attempt:
            del self._in_flight[attempt.payload]

    async def _run(self, attempt: UploadAttempt, uploader: Uploader) -> None:
        """Body of the attempt task."""
        try:
            if not attempt._advance(AttemptState.BUILDING):
                return
            requests = await self._build_requests(attempt.payload)

            if not attempt._advance(AttemptState.SENT):
                return
            outcome = await self._send_all(attempt, requests, uploader)
            if attempt._finish(outcome):
                self._log_outcome(attempt, outcome)

        except UnreadableSourceError as e:
            self._logger.error(f"Upload #{attempt.attempt_id}: {e}")
            attempt._finish(Failure(ErrorKind.UNREADABLE, str(e)))
        except asyncio.CancelledError:
            if attempt._finish(Failure(ErrorKind.CANCELLED, "Upload cancelled")):
                self._logger.info(f"Upload #{attempt.attempt_id} cancelled")
            raise
        except Exception as e:
            self._logger.error(f"Upload #{attempt.attempt_id} failed: {e}")
            attempt._finish(Failure(ErrorKind.TRANSPORT_FAILURE, str(e) or type(e).__name__))

    async def _build_requests(self, payload: SharePayload) -> List[UploadRequest]:
        """Build every transport request of a payload."""
        if isinstance(payload, SingleImage):
            data = await self._byte_source.open(payload.source)
            return [build_image_request(data, payload.declared_mime_type)]

        if isinstance(payload, MultiImage):
            requests = []
            for source in payload.sources:
                data = await self._byte_source.open(source)
                requests.append(build_image_request(data, source.mime_type))
            return requests

        return [build_text_request(payload)]

    async def _send_all(
        self,
        attempt: UploadAttempt,
        requests: List[UploadRequest],
        uploader: Uploader
    ) -> UploadOutcome:
        """
        Send requests one after another.

        The first failure ends the attempt; the acknowledgement is the
        conjunction of all responses.
        """
        acked = True
        for index, request in enumerate(requests):
            self._logger.debug(
                f"Upload #{attempt.attempt_id}: sending request {index + 1}/{len(requests)}"
            )
            outcome = await uploader.send(request)
            if isinstance(outcome, Failure):
                return outcome
            acked = acked and outcome.server_ack
        return Success(server_ack=acked)

    def _log_outcome(self, attempt: UploadAttempt, outcome: UploadOutcome) -> None:
        if isinstance(outcome, Success):
            self._logger.info(
                f"Upload #{attempt.attempt_id} finished (ack={outcome.server_ack})"
            )
        else:
            self._logger.warning(
                f"Upload #{attempt.attempt_id} failed: {outcome.kind.value}: {outcome.message}"
            )
