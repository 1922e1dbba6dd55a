"""
ACRCloud Request Signing
Builds the canonical string to sign and the HMAC-SHA1 signature for identify requests.
"""

import base64
import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Dict, Optional

from errors import MissingCredentialsError

HTTP_METHOD = "POST"
DATA_TYPE = "audio"
SIGNATURE_VERSION = "1"


def require_credentials(access_key_id: Optional[str], shared_secret: Optional[str]) -> None:
    """Raise MissingCredentialsError unless both credential values are present."""
    if not access_key_id or not shared_secret:
        raise MissingCredentialsError()


def build_string_to_sign(
    access_key_id: str,
    endpoint_path: str,
    timestamp_seconds: int,
    http_method: str = HTTP_METHOD,
) -> str:
    # Field order is fixed by the provider
    return "\n".join([
        http_method,
        endpoint_path,
        access_key_id,
        DATA_TYPE,
        SIGNATURE_VERSION,
        str(timestamp_seconds),
    ])


def sign(access_key_id: str, shared_secret: str, endpoint_path: str, timestamp_seconds: int) -> str:
    """
    Compute the request signature.

    Args:
        access_key_id: ACRCloud access key
        shared_secret: ACRCloud access secret, used as the HMAC key
        endpoint_path: Provider route, e.g. "/v1/identify"
        timestamp_seconds: Unix time that is also sent as the timestamp field

    Returns:
        Base64 text of HMAC-SHA1 over the UTF-8 canonical string
    """
    string_to_sign = build_string_to_sign(access_key_id, endpoint_path, timestamp_seconds)
    digest = hmac.new(
        shared_secret.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        digestmod=hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


@dataclass(frozen=True)
class SigningRequest:
    endpoint_path: str
    access_key_id: str
    timestamp_seconds: int
    http_method: str = HTTP_METHOD
    data_type: str = DATA_TYPE
    signature_version: str = SIGNATURE_VERSION

    def string_to_sign(self) -> str:
        return build_string_to_sign(
            self.access_key_id,
            self.endpoint_path,
            self.timestamp_seconds,
            self.http_method,
        )


@dataclass(frozen=True)
class SignedRequest:
    request: SigningRequest
    signature: str

    def form_fields(self, sample_bytes: int) -> Dict[str, str]:
        """Flat multipart fields sent alongside the audio sample."""
        return {
            "sample_bytes": str(sample_bytes),
            "access_key": self.request.access_key_id,
            "data_type": self.request.data_type,
            "signature_version": self.request.signature_version,
            "signature": self.signature,
            "timestamp": str(self.request.timestamp_seconds),
        }


def sign_request(
    access_key_id: Optional[str],
    shared_secret: Optional[str],
    endpoint_path: str,
    timestamp_seconds: Optional[int] = None,
) -> SignedRequest:
    """
    Sign an identify request, capturing the timestamp once.

    The same timestamp feeds the signature and the outgoing timestamp field;
    the provider rejects requests where the two disagree.
    """
    require_credentials(access_key_id, shared_secret)
    if timestamp_seconds is None:
        timestamp_seconds = int(time.time())

    request = SigningRequest(
        endpoint_path=endpoint_path,
        access_key_id=access_key_id,
        timestamp_seconds=timestamp_seconds,
    )
    signature = sign(access_key_id, shared_secret, endpoint_path, timestamp_seconds)
    return SignedRequest(request=request, signature=signature)
