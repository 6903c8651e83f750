"""Auth Package - Credentials and request-key session"""

from sikka.auth.credentials import (
    ApiErrorBody,
    GrantType,
    RequestKeyRequest,
    RequestKeyResponse,
    SikkaAppCredentials,
    SikkaClientCredentials,
)
from sikka.auth.session import (
    REFRESH_MARGIN,
    REQUEST_KEY_ENDPOINT,
    SessionManager,
    utc_now,
)

__all__ = [
    "ApiErrorBody",
    "GrantType",
    "RequestKeyRequest",
    "RequestKeyResponse",
    "SikkaAppCredentials",
    "SikkaClientCredentials",
    "SessionManager",
    "REFRESH_MARGIN",
    "REQUEST_KEY_ENDPOINT",
    "utc_now",
]
