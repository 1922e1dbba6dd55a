import pytest

from config.platform import Config, ProviderConfig, detect_platform, get_cors_origins, provider_config


@pytest.mark.parametrize(
    "env,expected",
    [
        ("RAILWAY_ENVIRONMENT_ID", "railway"),
        ("DD_ENV", "digitalocean"),
        ("FLY_APP_NAME", "fly"),
    ],
)
def test_detect_platform(monkeypatch, env, expected):
    for name in ("RAILWAY_ENVIRONMENT_ID", "DD_ENV", "FLY_APP_NAME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(env, "1")
    assert detect_platform() == expected


def test_detect_platform_generic(monkeypatch):
    for name in ("RAILWAY_ENVIRONMENT_ID", "DD_ENV", "FLY_APP_NAME"):
        monkeypatch.delenv(name, raising=False)
    assert detect_platform() == "generic"


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGIN", raising=False)
    assert get_cors_origins() == [
        "https://songlify.lol",
        "http://localhost:3000",
        "http://127.0.0.1:5500",
    ]


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGIN", "https://a.example, https://b.example,")
    assert get_cors_origins() == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize(
    "key,secret,configured",
    [("k", "s", True), ("k", None, False), (None, "s", False), ("", "", False)],
)
def test_provider_config_configured(key, secret, configured):
    config = ProviderConfig(host="h", access_key=key, access_secret=secret)
    assert config.configured is configured


def test_provider_config_url():
    config = ProviderConfig(host="identify-eu-west-1.acrcloud.com", access_key="k", access_secret="s")
    assert config.url == "https://identify-eu-west-1.acrcloud.com/v1/identify"


def test_provider_config_snapshots_config(configured_env):
    config = provider_config()

    assert config.host == "identify-test.acrcloud.com"
    assert config.access_key == "test-access-key"
    assert config.access_secret == "test-access-secret"
    assert config.endpoint == Config.ACRCLOUD_ENDPOINT
    assert config.timeout_seconds == Config.ACRCLOUD_TIMEOUT
