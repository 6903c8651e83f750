"""Resources Package - Typed accessors for Sikka API endpoints"""

from sikka.resources.base import ListParams, ListResource, QueryField, QueryKind, build_query
from sikka.resources.claim_payment import (
    ClaimPaymentRequest,
    ClaimPaymentResource,
    ClaimPaymentResponse,
)
from sikka.resources.claims import Claim, ClaimListParams, ClaimsResource
from sikka.resources.patients import Patient, PatientListParams, PatientsResource
from sikka.resources.payment_types import (
    PaymentType,
    PaymentTypeListParams,
    PaymentTypesResource,
)
from sikka.resources.practices import AuthorizedPractice, list_authorized_practices
from sikka.resources.transactions import (
    TRANSACTION_TYPE_PAYMENT,
    TRANSACTION_TYPE_PROCEDURE,
    Transaction,
    TransactionListParams,
    TransactionsResource,
)

__all__ = [
    "ListParams",
    "ListResource",
    "QueryField",
    "QueryKind",
    "build_query",
    "Patient",
    "PatientListParams",
    "PatientsResource",
    "Claim",
    "ClaimListParams",
    "ClaimsResource",
    "Transaction",
    "TransactionListParams",
    "TransactionsResource",
    "TRANSACTION_TYPE_PROCEDURE",
    "TRANSACTION_TYPE_PAYMENT",
    "PaymentType",
    "PaymentTypeListParams",
    "PaymentTypesResource",
    "ClaimPaymentRequest",
    "ClaimPaymentResponse",
    "ClaimPaymentResource",
    "AuthorizedPractice",
    "list_authorized_practices",
]
