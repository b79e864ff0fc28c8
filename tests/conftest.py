"""Pytest configuration and fixtures."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest

from mediasilo_upload.config import MediaSiloConfig

pytest_plugins = ("pytest_asyncio",)

API_URL = "https://api.test/v3/"
ASSET_URL = "https://s3.amazonaws.com/ingest-east.mediasilo.com/6cdb4514/video.mov"

TICKET_PAYLOAD = {
    "assetUrl": ASSET_URL,
    "amzDate": "Wed, 10 Jun 2015 18:01:46 GMT",
    "amzAcl": "private",
    "contentType": "application/octet-stream",
    "authorization": "AWS AKIAEXAMPLE:signature=",
    "httpMethod": "PUT",
}


@dataclass
class FakeMediaSilo:
    """In-memory stand-in for the MediaSilo API and its S3 ingest bucket."""

    ticket_status: int = 200
    ticket_payload: dict = field(default_factory=lambda: dict(TICKET_PAYLOAD))
    upload_status: int = 200
    asset_status: int = 200
    asset_payload: dict | list = field(default_factory=lambda: {"id": "a1"})
    # Raw non-JSON bodies, sent instead of the payloads when set
    ticket_text: str | None = None
    asset_text: str | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.url.host == "api.test" and path == "/v3/assets/upload":
            if self.ticket_text is not None:
                return httpx.Response(self.ticket_status, text=self.ticket_text)
            return httpx.Response(self.ticket_status, json=self.ticket_payload)
        if request.url.host == "api.test" and path == "/v3/assets":
            if self.asset_text is not None:
                return httpx.Response(self.asset_status, text=self.asset_text)
            return httpx.Response(self.asset_status, json=self.asset_payload)
        if request.url.host == "s3.amazonaws.com":
            return httpx.Response(self.upload_status)
        return httpx.Response(404, text="unexpected request")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def ticket_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/v3/assets/upload"]

    def asset_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/v3/assets"]

    def upload_requests(self) -> list[httpx.Request]:
        return self.requests_to("s3.amazonaws.com")


def json_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


@pytest.fixture
def fake_api() -> FakeMediaSilo:
    return FakeMediaSilo()


@pytest.fixture
def config() -> MediaSiloConfig:
    return MediaSiloConfig(
        host_context="acme",
        username="bob",
        password="secret",
        project_id="proj1",
        api_url=API_URL,
    )


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "video.mov"
    path.write_bytes(b"0123456789")
    return path
