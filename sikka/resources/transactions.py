"""Transactions endpoint (procedures and payments)"""

from __future__ import annotations

from typing import Optional

from sikka.models import SikkaRecord
from sikka.resources.base import PAGING_FIELDS, ListParams, ListResource, QueryField

TRANSACTION_TYPE_PROCEDURE = "Procedure"
TRANSACTION_TYPE_PAYMENT = "Payment"


class Transaction(SikkaRecord):
    """
    Ledger entry of a claim.

    ``transaction_type`` is ``Procedure`` for service line items and
    ``Payment`` for payments received.
    """

    transaction_sr_no: Optional[str] = None
    transaction_type: Optional[str] = None
    transaction_date: Optional[str] = None
    transaction_entry_date: Optional[str] = None
    claim_sr_no: Optional[str] = None
    patient_id: Optional[str] = None
    practice_id: Optional[str] = None
    provider_id: Optional[str] = None
    guarantor_id: Optional[str] = None
    cust_id: Optional[str] = None
    amount: Optional[str] = None
    quantity: Optional[str] = None
    procedure_code: Optional[str] = None
    procedure_description: Optional[str] = None
    tooth_from: Optional[str] = None
    tooth_to: Optional[str] = None
    surface: Optional[str] = None
    payment_type: Optional[str] = None
    insurance_payment: Optional[str] = None
    estimated_insurance_payment: Optional[str] = None
    primary_insurance_estimate: Optional[str] = None
    note: Optional[str] = None
    created_by: Optional[str] = None
    last_updated_by: Optional[str] = None
    rowhash: Optional[str] = None
    href: Optional[str] = None
    claim_href: Optional[str] = None
    patient_href: Optional[str] = None
    practice_href: Optional[str] = None
    provider_href: Optional[str] = None
    guarantor_href: Optional[str] = None

    @property
    def is_procedure(self) -> bool:
        return self.transaction_type == TRANSACTION_TYPE_PROCEDURE


class TransactionListParams(ListParams):
    claim_sr_no: Optional[str] = None
    patient_id: Optional[str] = None
    transaction_type: Optional[str] = None


class TransactionsResource(ListResource[Transaction, TransactionListParams]):
    """``GET /v4/transactions``"""

    endpoint = "/v4/transactions"
    record_type = Transaction
    params_type = TransactionListParams
    query_fields = (
        QueryField("claim_sr_no"),
        QueryField("patient_id"),
        QueryField("transaction_type"),
        *PAGING_FIELDS,
    )

    async def list_procedures(self, claim_sr_no: str) -> list[Transaction]:
        """
        List the procedure line items of a claim.

        The filter on transaction type is applied locally, after fetching
        every transaction of the first page for the claim.

        Args:
            claim_sr_no: Claim serial number

        Returns:
            Transactions whose type is ``Procedure``
        """
        transactions = await self.list(claim_sr_no=claim_sr_no)
        return [txn for txn in transactions if txn.is_procedure]
