import json
import logging
from typing import Any, Optional

import httpx

from config.platform import ProviderConfig
from errors import ProviderRejectionError, ProviderTransportError
from models import IdentifyOutcome
from normalizer import normalize
from signer import require_credentials, sign_request

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "audio.wav"
DEFAULT_CONTENT_TYPE = "audio/wav"


class ACRCloudClient:
    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()

    async def identify(
        self,
        sample: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> IdentifyOutcome:
        """
        Send an audio sample to ACRCloud and normalize the reply.

        Args:
            sample: Raw audio bytes
            filename: Original upload name (defaults to audio.wav)
            content_type: Upload MIME type (defaults to audio/wav)

        Returns:
            One IdentifyOutcome variant

        Raises:
            MissingCredentialsError: Access key or secret not configured
            ProviderRejectionError: Provider answered with a non-2xx status
            ProviderTransportError: Provider could not be reached
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        require_credentials(self.config.access_key, self.config.access_secret)
        signed = sign_request(
            self.config.access_key,
            self.config.access_secret,
            self.config.endpoint,
        )

        files = {
            "sample": (
                filename or DEFAULT_FILENAME,
                sample,
                content_type or DEFAULT_CONTENT_TYPE,
            ),
        }
        data = signed.form_fields(len(sample))

        logger.info(f"Making request to ACRCloud ({self.config.host})")
        try:
            response = await self.client.post(self.config.url, data=data, files=files)
        except httpx.HTTPError as e:
            raise ProviderTransportError(f"Failed to reach ACRCloud: {e}") from e

        payload = self._parse_body(response)
        logger.info(f"ACRCloud response: HTTP {response.status_code}, status {_status_summary(payload)}")

        if not response.is_success:
            logger.error(f"ACRCloud API error: HTTP {response.status_code} {payload}")
            raise ProviderRejectionError(response.status_code, payload)

        return normalize(payload)

    def _parse_body(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(f"ACRCloud returned a non-JSON body (HTTP {response.status_code})")
            return {"raw": response.text}


def _status_summary(payload: Any) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("status"), dict):
        status = payload["status"]
        return f"{status.get('code')} {status.get('msg', '')}".strip()
    return "missing"
