"""
Songlify Identification Gateway
FastAPI server that forwards uploaded audio samples to ACRCloud and returns a normalized song match
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from config.platform import Config, provider_config
from errors import (
    MissingCredentialsError,
    ProviderRejectionError,
    ProviderTransportError,
)
from identifier import ACRCloudClient
from models import HealthResponse
from signer import require_credentials

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if Config.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Songlify Gateway",
    description="Music identification gateway for ACRCloud",
    version=Config.VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


def create_client() -> ACRCloudClient:
    """Build a provider client from the current configuration."""
    return ACRCloudClient(provider_config())


@app.on_event("startup")
async def log_configuration():
    configured = provider_config().configured
    logger.info(f"Server running on {Config.PLATFORM} (port {Config.PORT})")
    logger.info(f"ACRCloud configured: {configured}")
    if not configured:
        logger.warning(
            "ACRCLOUD_ACCESS_KEY / ACRCLOUD_ACCESS_SECRET not set - identification requests will fail"
        )


# Size limit middleware - runs BEFORE multipart parsing
@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    if request.method == "POST" and request.url.path == "/api/identify":
        content_length = request.headers.get("content-length")
        # The file itself is checked against MAX_UPLOAD_BYTES after parsing
        max_request_bytes = Config.MAX_UPLOAD_BYTES + Config.MULTIPART_OVERHEAD_BYTES
        if content_length and content_length.isdigit():
            if int(content_length) > max_request_bytes:
                logger.warning(
                    f"Upload too large: {content_length} bytes (max {max_request_bytes})"
                )
                return JSONResponse(
                    status_code=413,
                    content={"error": f"Request exceeds {Config.MAX_UPLOAD_MB}MB upload limit"},
                )
    return await call_next(request)


@app.get("/")
async def root():
    """Service info endpoint"""
    return {
        "service": "Songlify Gateway",
        "version": Config.VERSION,
        "status": "healthy",
        "platform": Config.PLATFORM,
    }


@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Liveness check; reports whether ACRCloud credentials are present without calling ACRCloud."""
    now = datetime.now(timezone.utc)
    return HealthResponse(
        status="ok",
        timestamp=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        acrcloud_configured=provider_config().configured,
    )


@app.post("/api/identify")
async def identify(audio: Optional[UploadFile] = File(None)):
    """
    Identify the song in an uploaded audio sample.

    Args:
        audio: Audio file upload (multipart field "audio")

    Returns:
        {"success": true, "song": {...}} on a match, otherwise
        {"success": false, "error": ...} with the provider code or raw reply
    """
    if audio is None:
        return JSONResponse(status_code=400, content={"error": "No audio file provided"})

    client = create_client()
    try:
        require_credentials(client.config.access_key, client.config.access_secret)
    except MissingCredentialsError as e:
        logger.error(e.message)
        return JSONResponse(status_code=e.http_status, content={"error": e.message})

    try:
        audio_bytes = await audio.read()

        if not audio_bytes:
            return JSONResponse(status_code=400, content={"error": "Empty file uploaded"})
        if len(audio_bytes) > Config.MAX_UPLOAD_BYTES:
            return JSONResponse(
                status_code=413,
                content={"error": f"File exceeds {Config.MAX_UPLOAD_MB}MB limit"},
            )

        logger.info(
            f"Received audio file: name={audio.filename!r} size={len(audio_bytes)} "
            f"type={audio.content_type!r}"
        )

        async with client:
            outcome = await client.identify(
                audio_bytes,
                filename=audio.filename,
                content_type=audio.content_type,
            )

        logger.info(f"Identification outcome: {outcome.kind}")
        return JSONResponse(content=outcome.to_response())

    except ProviderRejectionError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "ACRCloud API error", "details": e.payload},
        )
    except ProviderTransportError as e:
        logger.error(f"Identification error: {e.message}")
        return JSONResponse(
            status_code=e.http_status,
            content={"error": "Internal server error", "message": e.message},
        )
    except Exception as e:
        logger.error(f"Identification error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e)},
        )


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=Config.HOST,
        port=Config.PORT,
        log_level="info",
    )
