"""
Identification Errors
Exception hierarchy for failures that stop an identification request before a
provider outcome can be produced.
"""

from typing import Any


class IdentifyError(Exception):
    """Base exception for identification errors."""
    def __init__(self, message: str, error_type: str = "unknown", http_status: int = 500):
        """
        Initialize IdentifyError.

        Args:
            message: Human-readable error message
            error_type: Machine-readable error classification
            http_status: Suggested HTTP status code for the gateway response
        """
        self.message = message
        self.error_type = error_type
        self.http_status = http_status
        super().__init__(message)


class MissingCredentialsError(IdentifyError):
    """ACRCloud access key or secret not configured (never reaches the provider)."""
    def __init__(self, message: str = "ACRCloud API keys not configured"):
        super().__init__(message, error_type="configuration", http_status=500)


class ProviderRejectionError(IdentifyError):
    """Provider answered with a non-2xx HTTP status."""
    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        super().__init__(
            f"ACRCloud API error (HTTP {status_code})",
            error_type="provider_rejection",
            http_status=status_code,
        )


class ProviderTransportError(IdentifyError):
    """Network failure reaching the provider."""
    def __init__(self, message: str):
        super().__init__(message, error_type="transport", http_status=500)
