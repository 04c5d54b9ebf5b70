"""
HTTP uploader service.

Sends text and image requests to the Clipboarder REST backend.
"""
from typing import Optional, Any
import asyncio
import json
import logging
import time

import aiohttp

from ...logging import get_logger
from ...transport import TransportConfig
from ..models import (
    ErrorKind,
    Failure,
    ImageUpload,
    Success,
    TextUpload,
    UploadOutcome,
    UploadRequest,
)


class HttpUploader:
    """
    Uploads shared content over HTTP.

    Reuses one HTTP session for all requests. The session is created
    lazily and closed by ``close()`` unless it was injected.

    Responsibilities:
    - POST text as JSON and images as multipart form data
    - Attach the bearer token
    - Map HTTP responses to outcomes

    Example:
        >>> async with HttpUploader(config, access_token="abc") as uploader:
        ...     outcome = await uploader.send(TextUpload("hello"))
    """

    IMAGE_FIELD = 'image'

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        access_token: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize HTTP uploader.

        Args:
            config: Transport configuration (uses defaults if not provided)
            access_token: Bearer token for the backend
            session: Optional shared session
        """
        self._config = config or TransportConfig.default()
        self._access_token = access_token
        self._session = session
        self._owns_session = False
        self._logger = get_logger('clipboarder.upload.http')
        # Only set level while logging is unconfigured; otherwise inherit from root
        if not logging.getLogger().handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @access_token.setter
    def access_token(self, value: Optional[str]):
        self._access_token = value

    async def __aenter__(self) -> 'HttpUploader':
        await self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    def _headers(self) -> dict:
        if self._access_token:
            return {'Authorization': f"Bearer {self._access_token}"}
        return {}

    async def send(self, request: UploadRequest) -> UploadOutcome:
        """
        Send one request.

        Network errors and error statuses are reported as a
        TRANSPORT_FAILURE outcome. Cancellation propagates to the caller.
        """
        if isinstance(request, TextUpload):
            url = self._config.text_url
            kwargs = {'json': {'content': request.content}}
            label = f"text ({len(request.content)} chars)"
        elif isinstance(request, ImageUpload):
            url = self._config.image_url
            form = aiohttp.FormData()
            form.add_field(
                self.IMAGE_FIELD,
                request.data,
                filename=request.filename,
                content_type=request.mime_type
            )
            kwargs = {'data': form}
            label = f"image {request.filename} ({request.size / 1024:.1f} KB)"
        else:
            raise TypeError(f"Unknown upload request: {type(request).__name__}")

        session = await self._get_session()
        start = time.time()
        self._logger.debug(f"Uploading {label} to {url}")

        try:
            async with session.post(url, headers=self._headers(), **kwargs) as response:
                body = await response.text()
                elapsed = time.time() - start
                if response.status >= 400:
                    self._logger.error(
                        f"Upload of {label} failed: HTTP {response.status} after {elapsed:.2f}s"
                    )
                    return Failure(
                        ErrorKind.TRANSPORT_FAILURE,
                        f"HTTP {response.status}: {response.reason or body[:200]}"
                    )
                ack = self._parse_ack(body)
                self._logger.debug(f"Uploaded {label} in {elapsed:.2f}s (ack={ack})")
                return Success(server_ack=ack)
        except asyncio.TimeoutError:
            elapsed = time.time() - start
            self._logger.error(f"Upload of {label} timed out after {elapsed:.2f}s")
            return Failure(ErrorKind.TRANSPORT_FAILURE, f"Request timed out after {elapsed:.1f}s")
        except aiohttp.ClientError as e:
            self._logger.error(f"Upload of {label} failed: {e}")
            return Failure(ErrorKind.TRANSPORT_FAILURE, str(e) or type(e).__name__)

    @staticmethod
    def _parse_ack(body: str) -> bool:
        """
        Read the ``result`` flag of a backend response.

        A body that is not a JSON object counts as acknowledged.
        """
        try:
            data: Any = json.loads(body) if body else None
        except ValueError:
            return True
        if isinstance(data, dict) and 'result' in data:
            return data['result'] is True
        return True
