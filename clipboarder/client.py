"""
ClipboarderClient - High-level async client for share uploads.

Example:
    >>> async with ClipboarderClient(access_token="token") as client:
    ...     result = await client.share_text("hello")
    ...     print(result.message)
"""
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .core.exceptions import AuthenticationRequiredError
from .core.logging import get_logger
from .core.presenter import DefaultResultPresenter
from .core.session import MemoryTokenStorage, TokenStorage
from .core.share import (
    ActionKind,
    ByteSourceRef,
    PayloadClassifier,
    PayloadKind,
    SharePayload,
    ShareRequest,
)
from .core.transport import TransportConfig
from .core.upload import (
    ByteSource,
    FileByteSource,
    HttpUploader,
    ResultPresenter,
    UploadCoordinator,
    UploadOutcome,
    Uploader,
)

logger = get_logger('clipboarder.client')


@dataclass(frozen=True)
class ShareResult:
    """
    Result of one share event.

    Attributes:
        kind: Kind of the classified payload
        outcome: Terminal upload outcome
        message: Text rendered by the presenter
    """
    kind: PayloadKind
    outcome: UploadOutcome
    message: str

    @property
    def ok(self) -> bool:
        """True when the upload succeeded and the backend acknowledged it."""
        return self.outcome.ok and getattr(self.outcome, 'server_ack', False)


class ClipboarderClient:
    """
    High-level client for forwarding shared content.

    Wires the access token gate, the classifier, the upload coordinator
    and a presenter together.

    Example:
        >>> client = ClipboarderClient(token_storage=keyring_storage)
        >>> result = await client.share(ShareRequest(
        ...     ActionKind.SEND, "image/png",
        ...     streams=[ByteSourceRef("/tmp/cat.png")]
        ... ))
    """

    def __init__(
        self,
        token_storage: Optional[TokenStorage] = None,
        access_token: Optional[str] = None,
        config: Optional[TransportConfig] = None,
        uploader: Optional[Uploader] = None,
        byte_source: Optional[ByteSource] = None,
        presenter: Optional[ResultPresenter] = None,
        on_result: Optional[Callable[[ShareResult], None]] = None
    ):
        """
        Initialize client.

        Args:
            token_storage: Where to look up the access token
            access_token: Token to use when no storage is given
            config: Transport configuration for the default uploader
            uploader: Custom transport (the HTTP uploader by default)
            byte_source: Reader for image sources (local files by default)
            presenter: Outcome renderer (English texts by default)
            on_result: Optional callback receiving each ShareResult
        """
        self._tokens = token_storage or MemoryTokenStorage(access_token)
        self._config = config or TransportConfig.default()
        self._owns_uploader = uploader is None
        self._uploader = uploader or HttpUploader(self._config)
        self._classifier = PayloadClassifier()
        self._coordinator = UploadCoordinator(
            uploader=self._uploader,
            byte_source=byte_source or FileByteSource()
        )
        self._presenter = presenter or DefaultResultPresenter()
        self._on_result = on_result

    @property
    def coordinator(self) -> UploadCoordinator:
        return self._coordinator

    @property
    def is_logged_in(self) -> bool:
        return self._tokens.load_token() is not None

    async def __aenter__(self) -> 'ClipboarderClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Cancel running uploads and release the HTTP session."""
        await self._coordinator.close()
        if self._owns_uploader:
            await self._uploader.close()

    def _require_token(self) -> str:
        token = self._tokens.load_token()
        if token is None:
            logger.warning("Share rejected: no access token")
            raise AuthenticationRequiredError("Login required")
        if isinstance(self._uploader, HttpUploader):
            self._uploader.access_token = token
        return token

    def classify(self, request: ShareRequest) -> SharePayload:
        """Classify a request without uploading it."""
        return self._classifier.classify_request(request)

    async def share(self, request: ShareRequest) -> ShareResult:
        """
        Forward a share event to the backend.

        Args:
            request: Share event built by the host

        Returns:
            ShareResult with outcome and message

        Raises:
            AuthenticationRequiredError: If no access token is available
            ClassificationError: If the request is unsupported or empty
        """
        self._require_token()
        payload = self._classifier.classify_request(request)
        return await self.upload(payload)

    async def upload(self, payload: SharePayload) -> ShareResult:
        """Upload an already classified payload."""
        self._require_token()
        outcome = await self._coordinator.submit(payload)
        result = ShareResult(
            kind=payload.kind,
            outcome=outcome,
            message=self._presenter.present(payload.kind, outcome)
        )
        if self._on_result:
            self._on_result(result)
        return result

    async def share_text(self, *texts: str) -> ShareResult:
        """
        Share text.

        One text is sent as selected text, several as a multiple share.
        """
        if len(texts) == 1:
            request = ShareRequest(ActionKind.PROCESS_TEXT, 'text/plain', texts=texts)
        else:
            request = ShareRequest(ActionKind.SEND_MULTIPLE, 'text/plain', texts=texts)
        return await self.share(request)

    async def share_image(
        self,
        *paths: Union[str, Path],
        mime_type: Optional[str] = None
    ) -> ShareResult:
        """
        Share local image files.

        Args:
            paths: Image files
            mime_type: Content type; guessed from each file name if omitted
        """
        refs = [ByteSourceRef(str(p), mime_type or guess_mime_type(p)) for p in paths]
        declared = mime_type or common_mime_type(refs)
        action = ActionKind.SEND if len(refs) == 1 else ActionKind.SEND_MULTIPLE
        return await self.share(ShareRequest(action, declared, streams=refs))


def guess_mime_type(path: Union[str, Path]) -> Optional[str]:
    """Guess an image MIME type from a file name."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def common_mime_type(refs: Sequence[ByteSourceRef]) -> Optional[str]:
    types = {ref.mime_type for ref in refs}
    if len(types) == 1:
        return types.pop()
    if types and all(t and t.startswith('image/') for t in types):
        return 'image/*'
    return None
