"""Tests for the ticket -> upload -> asset pipeline."""

import pytest

from conftest import ASSET_URL, json_body
from mediasilo_upload.mediasilo_client import MediaSiloError
from mediasilo_upload.pipeline import UploadPipeline, run_upload
from mediasilo_upload.storage import StorageUploadError


@pytest.mark.asyncio
async def test_run_upload_end_to_end(fake_api, config, video_file):
    transport = fake_api.transport
    result = await run_upload(config, video_file, transport, transport)

    assert result.asset.id == "a1"
    assert result.context.file_path == video_file
    assert result.context.upload_ticket.asset_url == ASSET_URL
    assert [r.url.path for r in fake_api.requests] == [
        "/v3/assets/upload",
        "/ingest-east.mediasilo.com/6cdb4514/video.mov",
        "/v3/assets",
    ]


@pytest.mark.asyncio
async def test_asset_source_url_is_ticket_asset_url(fake_api, config, video_file):
    odd_url = "https://s3.amazonaws.com/ingest-east.mediasilo.com/abc/video%20final.mov?x-id=1"
    fake_api.ticket_payload["assetUrl"] = odd_url
    transport = fake_api.transport

    await run_upload(config, video_file, transport, transport)

    [request] = fake_api.asset_requests()
    assert json_body(request)["sourceUrl"] == odd_url


@pytest.mark.asyncio
async def test_ticket_failure_skips_upload_and_asset(fake_api, config, tmp_path):
    fake_api.ticket_status = 403
    transport = fake_api.transport
    # The file does not exist: a read attempt would raise FileNotFoundError instead
    missing = tmp_path / "never-read.mov"

    with pytest.raises(MediaSiloError) as exc_info:
        await run_upload(config, missing, transport, transport)

    assert exc_info.value.status_code == 403
    assert fake_api.upload_requests() == []
    assert fake_api.asset_requests() == []


@pytest.mark.asyncio
async def test_upload_failure_skips_asset(fake_api, config, video_file):
    fake_api.upload_status = 500
    transport = fake_api.transport

    with pytest.raises(StorageUploadError):
        await run_upload(config, video_file, transport, transport)

    assert len(fake_api.ticket_requests()) == 1
    assert fake_api.asset_requests() == []


@pytest.mark.asyncio
async def test_missing_file_skips_upload_and_asset(fake_api, config, tmp_path):
    transport = fake_api.transport

    with pytest.raises(FileNotFoundError):
        await run_upload(config, tmp_path / "missing.mov", transport, transport)

    assert len(fake_api.ticket_requests()) == 1
    assert fake_api.upload_requests() == []
    assert fake_api.asset_requests() == []


@pytest.mark.asyncio
async def test_asset_failure_propagates(fake_api, config, video_file):
    fake_api.asset_status = 400
    transport = fake_api.transport

    with pytest.raises(MediaSiloError) as exc_info:
        await run_upload(config, video_file, transport, transport)

    assert exc_info.value.status_code == 400
    assert not isinstance(exc_info.value, StorageUploadError)


@pytest.mark.asyncio
async def test_pipeline_closes_clients(fake_api, config, video_file):
    transport = fake_api.transport
    async with UploadPipeline(config, transport, transport) as pipeline:
        await pipeline.run(video_file)
        api_client = pipeline.api.client
        storage_client = pipeline.storage.client

    assert api_client.is_closed
    assert storage_client.is_closed


@pytest.mark.asyncio
async def test_storage_requests_do_not_carry_service_credentials(fake_api, config, video_file):
    transport = fake_api.transport
    await run_upload(config, video_file, transport, transport)

    [upload_request] = fake_api.upload_requests()
    assert not upload_request.headers["Authorization"].startswith("Basic ")
