"""Direct-to-storage transfer using a MediaSilo upload ticket."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .mediasilo_client import MediaSiloError, UploadContext

logger = logging.getLogger(__name__)


class StorageUploadError(MediaSiloError):
    """Raised when the storage endpoint rejects an upload."""


class StorageUploader:
    """Send a local file to the pre-signed URL of an upload ticket.

    Storage requests are authorized by the ticket alone, so this client
    carries neither the MediaSilo basic auth nor the host context header.
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self._client: httpx.AsyncClient | None = None
        self._consumed: set[str] = set()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> StorageUploader:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def upload(self, context: UploadContext) -> UploadContext:
        """
        Upload ``context.file_path`` using ``context.upload_ticket``.

        The whole file is read into memory and sent in one request body.

        Args:
            context: Ticket and the file it authorizes

        Returns:
            The same ``context``, so the asset URL can be registered next

        Raises:
            OSError: The file is missing or unreadable
            StorageUploadError: The ticket was already used or storage returned >= 400
        """
        ticket = context.upload_ticket
        if ticket.asset_url in self._consumed:
            raise StorageUploadError(f"Upload ticket already used for {ticket.asset_url}")

        file_size = context.file_path.stat().st_size
        with open(context.file_path, "rb") as f:
            file_data = f.read()

        if len(file_data) != file_size:
            logger.warning(
                "Read %d bytes but file size is %d bytes: %s",
                len(file_data),
                file_size,
                context.file_path,
            )

        self._consumed.add(ticket.asset_url)
        logger.info("Uploading %s to MediaSilo S3 ingest bucket", context.file_path)

        response = await self.client.request(
            ticket.http_method,
            ticket.asset_url,
            content=file_data,
            headers=ticket.storage_headers(len(file_data)),
        )

        if response.status_code >= 400:
            raise StorageUploadError(
                f"Could not upload file. Received {response.status_code} from remote server",
                response.status_code,
                response.text,
            )

        logger.debug("Upload of %s finished with %s", context.file_path, response.status_code)
        return context
