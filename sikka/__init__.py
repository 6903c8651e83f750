"""Sikka - Async client for the Sikka ONE practice-management API"""

from sikka.auth import (
    REFRESH_MARGIN,
    SessionManager,
    SikkaAppCredentials,
    SikkaClientCredentials,
)
from sikka.client import SikkaClient, create_sikka_client
from sikka.config import Settings, get_settings
from sikka.dispatcher import RequestDispatcher
from sikka.errors import (
    ApiRequestError,
    AuthenticationError,
    NotAuthenticatedError,
    ResponseDecodeError,
    SikkaError,
)
from sikka.logger import (
    Logger,
    create_console_logger,
    create_noop_logger,
    get_logger,
    set_logger,
)
from sikka.models import PaginatedResponse, Pagination
from sikka.resources import (
    AuthorizedPractice,
    Claim,
    ClaimListParams,
    ClaimPaymentRequest,
    ClaimPaymentResponse,
    Patient,
    PatientListParams,
    PaymentType,
    PaymentTypeListParams,
    Transaction,
    TransactionListParams,
    list_authorized_practices,
)

__version__ = "0.1.0"

__all__ = [
    "SikkaClient",
    "create_sikka_client",
    "SessionManager",
    "RequestDispatcher",
    "REFRESH_MARGIN",
    "SikkaAppCredentials",
    "SikkaClientCredentials",
    "Settings",
    "get_settings",
    "SikkaError",
    "NotAuthenticatedError",
    "AuthenticationError",
    "ApiRequestError",
    "ResponseDecodeError",
    "Logger",
    "create_console_logger",
    "create_noop_logger",
    "get_logger",
    "set_logger",
    "PaginatedResponse",
    "Pagination",
    "Patient",
    "PatientListParams",
    "Claim",
    "ClaimListParams",
    "Transaction",
    "TransactionListParams",
    "PaymentType",
    "PaymentTypeListParams",
    "ClaimPaymentRequest",
    "ClaimPaymentResponse",
    "AuthorizedPractice",
    "list_authorized_practices",
]
