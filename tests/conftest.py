import copy

import httpx
import pytest

from config.platform import Config, ProviderConfig


ACR_MATCH_REPLY = {
    "status": {"code": 0, "msg": "Success", "version": "1.0"},
    "metadata": {
        "timestamp_utc": "2024-01-01 12:00:00",
        "music": [
            {
                "title": "Song A",
                "artists": [{"name": "Artist A"}, {"name": "Featured B"}],
                "album": {
                    "name": "Album A",
                    "artwork_url_500": "https://img.example/500.jpg",
                    "artwork_url": "https://img.example/full.jpg",
                },
                "release_date": "2019-05-17",
                "score": 0.97,
                "duration_ms": 215467,
                "acrid": "abc123def456",
                "external_metadata": {
                    "spotify": {
                        "track": {
                            "id": "sp1",
                            "external_urls": {"spotify": "https://open.spotify.com/track/sp1"},
                            "preview_url": "https://p.scdn.co/mp3-preview/sp1",
                        }
                    },
                    "youtube": {"vid": "dQw4w9WgXcQ"},
                    "apple_music": {"url": "https://music.apple.com/song/1"},
                },
            },
            {"title": "Runner Up", "artists": [{"name": "Someone Else"}], "score": 0.5},
        ],
    },
    "cost_time": 0.7,
    "result_type": 0,
}


@pytest.fixture
def match_reply():
    """A full code-0 reply with two candidates; mutable copy per test."""
    return copy.deepcopy(ACR_MATCH_REPLY)


@pytest.fixture
def provider_config():
    return ProviderConfig(
        host="identify-test.acrcloud.com",
        access_key="test-access-key",
        access_secret="test-access-secret",
        endpoint="/v1/identify",
        timeout_seconds=5.0,
    )


@pytest.fixture
def configured_env(monkeypatch):
    """Populate ACRCloud credentials on Config."""
    monkeypatch.setattr(Config, "ACRCLOUD_HOST", "identify-test.acrcloud.com")
    monkeypatch.setattr(Config, "ACRCLOUD_ACCESS_KEY", "test-access-key")
    monkeypatch.setattr(Config, "ACRCLOUD_ACCESS_SECRET", "test-access-secret")
    return monkeypatch


@pytest.fixture
def unconfigured_env(monkeypatch):
    monkeypatch.setattr(Config, "ACRCLOUD_ACCESS_KEY", None)
    monkeypatch.setattr(Config, "ACRCLOUD_ACCESS_SECRET", None)
    return monkeypatch


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, status_code=200, json=None, content=None, exc=None):
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        super().__init__(handler)


@pytest.fixture
def recording_transport():
    """Factory for a RecordingTransport with a canned provider reply."""
    return RecordingTransport
