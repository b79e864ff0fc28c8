"""MediaSilo REST API client."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from mediasilo_upload.config import MediaSiloConfig

from .models import Asset, UploadContext, UploadTicket

logger = logging.getLogger(__name__)

HOST_CONTEXT_HEADER = "MediaSiloHostContext"


class MediaSiloError(Exception):
    """Base exception for MediaSilo API errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        # Include response body in the message for debugging
        full_message = message
        if response:
            full_message = (
                f"{message} - Response: {response[:500] if len(str(response)) > 500 else response}"
            )
        super().__init__(full_message)
        self.status_code = status_code
        self.response = response


def raise_for_status(response: httpx.Response, action: str) -> None:
    """Raise :class:`MediaSiloError` when *response* is not a success."""
    if response.status_code < 400:
        return
    if response.status_code == 401:
        raise MediaSiloError(
            f"{action}. Received 401 from remote server - check your username and password",
            401,
            response.text,
        )
    if response.status_code == 403:
        raise MediaSiloError(
            f"{action}. Received 403 from remote server - insufficient permissions "
            "(Asset.Create is required) or wrong host context",
            403,
            response.text,
        )
    raise MediaSiloError(
        f"{action}. Received {response.status_code} from remote server",
        response.status_code,
        response.text,
    )


class MediaSiloClient:
    """Client for the MediaSilo asset endpoints."""

    def __init__(
        self,
        config: MediaSiloConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the MediaSilo client.

        Args:
            config: Credentials, host context and API base URL
            transport: Optional httpx transport (used by tests to fake the API)
        """
        self.config = config
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url,
                auth=self.config.auth,
                headers={HOST_CONTEXT_HEADER: self.config.host_context},
                timeout=self.config.timeout,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> MediaSiloClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _post(self, path: str, json: dict[str, Any], action: str) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        logger.debug("POST %s%s", self.config.api_url, path)
        response = await self.client.post(path, json=json)
        logger.debug("POST %s -> %s", path, response.status_code)
        raise_for_status(response, action)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise MediaSiloError(
                f"{action}: response is not JSON", response.status_code, response.text
            ) from e

    # ==================== Upload tickets ====================

    async def create_upload_ticket(self, file_path: str | os.PathLike[str]) -> UploadContext:
        """
        Request an upload ticket for a local file.

        Only the file name is sent; the file itself is not opened here.

        See http://docs.mediasilo.com/v3.0/docs/create-upload-ticket

        Args:
            file_path: Path to the file that will be uploaded

        Returns:
            The ticket paired with ``file_path``
        """
        file_name = Path(file_path).name
        data = await self._post(
            "assets/upload",
            {"fileName": file_name},
            "Could not request upload ticket",
        )
        try:
            ticket = UploadTicket.model_validate(data)
        except ValidationError as e:
            raise MediaSiloError(f"Unexpected upload ticket payload: {e}", None, str(data)) from e

        logger.debug("Upload ticket for %s: %s %s", file_name, ticket.http_method, ticket.asset_url)
        return UploadContext(file_path=Path(file_path), upload_ticket=ticket)

    # ==================== Assets ====================

    async def create_asset(self, source_url: str) -> Asset:
        """
        Create an asset in the configured project from a URL.

        See http://docs.mediasilo.com/v3.0/docs/create-asset

        Args:
            source_url: A publicly accessible URL or a URL in MediaSilo's S3 ingest bucket
        """
        data = await self._post(
            "assets",
            {"projectId": self.config.project_id, "sourceUrl": source_url},
            "Could not create asset",
        )
        try:
            return Asset.model_validate(data or {})
        except ValidationError as e:
            raise MediaSiloError(f"Unexpected asset payload: {e}", None, str(data)) from e
