"""Ticket -> upload -> asset pipeline."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from .config import MediaSiloConfig
from .mediasilo_client import MediaSiloClient, UploadResult
from .storage import StorageUploader

logger = logging.getLogger(__name__)


class UploadPipeline:
    """Run the three upload stages in order for one file.

    Each stage starts only after the previous one succeeded; the first
    failure propagates and the remaining stages are skipped.
    """

    def __init__(
        self,
        config: MediaSiloConfig,
        api_transport: httpx.AsyncBaseTransport | None = None,
        storage_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.api = MediaSiloClient(config, transport=api_transport)
        self.storage = StorageUploader(timeout=config.upload_timeout, transport=storage_transport)

    async def close(self) -> None:
        """Close both HTTP clients."""
        await self.api.close()
        await self.storage.close()

    async def __aenter__(self) -> UploadPipeline:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def run(self, file_path: str | os.PathLike[str]) -> UploadResult:
        """Upload *file_path* and register it as an asset in the configured project."""
        logger.info("Requesting upload ticket for %s", file_path)
        context = await self.api.create_upload_ticket(file_path)

        context = await self.storage.upload(context)

        logger.info("Creating asset in project %s", self.config.project_id)
        asset = await self.api.create_asset(context.upload_ticket.asset_url)
        logger.debug("Asset record: %s", asset.model_dump())

        return UploadResult(context=context, asset=asset)


async def run_upload(
    config: MediaSiloConfig,
    file_path: str | os.PathLike[str],
    api_transport: httpx.AsyncBaseTransport | None = None,
    storage_transport: httpx.AsyncBaseTransport | None = None,
) -> UploadResult:
    """Run one upload with freshly opened clients."""
    async with UploadPipeline(config, api_transport, storage_transport) as pipeline:
        return await pipeline.run(file_path)
