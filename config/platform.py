import os
from dataclasses import dataclass
from typing import List, Literal, Optional


def detect_platform() -> Literal["railway", "digitalocean", "fly", "generic"]:
    """Auto-detect deployment platform based on environment variables."""
    if os.getenv("RAILWAY_ENVIRONMENT_ID"):
        return "railway"
    if os.getenv("DD_ENV"):  # DigitalOcean App Platform
        return "digitalocean"
    if os.getenv("FLY_APP_NAME"):
        return "fly"
    return "generic"


def get_port() -> int:
    """Get port from PORT, defaulting to 3000."""
    return int(os.getenv("PORT", "3000"))


def get_host() -> str:
    """Get host binding address."""
    return os.getenv("HOST", "0.0.0.0")


def get_cors_origins() -> List[str]:
    """Comma-separated CORS_ORIGIN, falling back to the public frontend and local dev hosts."""
    raw = os.getenv(
        "CORS_ORIGIN",
        "https://songlify.lol,http://localhost:3000,http://127.0.0.1:5500",
    )
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Config:
    """Global configuration."""

    PLATFORM = detect_platform()
    PORT = get_port()
    HOST = get_host()
    CORS_ORIGINS = get_cors_origins()
    VERSION = "1.0.0"

    # ACRCloud configuration
    ACRCLOUD_HOST = os.getenv("ACRCLOUD_HOST", "identify-ap-southeast-1.acrcloud.com")
    ACRCLOUD_ENDPOINT = "/v1/identify"
    ACRCLOUD_ACCESS_KEY = os.getenv("ACRCLOUD_ACCESS_KEY")
    ACRCLOUD_ACCESS_SECRET = os.getenv("ACRCLOUD_ACCESS_SECRET")
    ACRCLOUD_TIMEOUT = float(os.getenv("ACRCLOUD_TIMEOUT", "30"))

    # Upload settings
    MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
    MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
    # Allowance for multipart boundaries and part headers on top of the file itself
    MULTIPART_OVERHEAD_BYTES = int(os.getenv("MULTIPART_OVERHEAD_BYTES", "65536"))

    # Feature flags
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"


@dataclass(frozen=True)
class ProviderConfig:
    """Connection and credential settings for the identification provider."""

    host: str
    access_key: Optional[str]
    access_secret: Optional[str]
    endpoint: str = "/v1/identify"
    timeout_seconds: float = 30.0

    @property
    def configured(self) -> bool:
        return bool(self.access_key and self.access_secret)

    @property
    def url(self) -> str:
        return f"https://{self.host}{self.endpoint}"


def provider_config() -> ProviderConfig:
    """Snapshot the provider settings currently held on Config."""
    return ProviderConfig(
        host=Config.ACRCLOUD_HOST,
        access_key=Config.ACRCLOUD_ACCESS_KEY,
        access_secret=Config.ACRCLOUD_ACCESS_SECRET,
        endpoint=Config.ACRCLOUD_ENDPOINT,
        timeout_seconds=Config.ACRCLOUD_TIMEOUT,
    )
