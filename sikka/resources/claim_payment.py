"""Claim payment write-back endpoint"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from sikka.dispatcher import RequestDispatcher
from sikka.models import SikkaRecord

PaymentMode = Literal["Cash", "Check", "EFT"]
BoolString = Literal["true", "false"]


class ClaimPaymentRequest(BaseModel):
    """
    Payment to post against a claim.

    When ``is_payment_by_procedure_code`` is ``"true"``, amounts and
    transaction ids are pipe-delimited, one value per line item, e.g.
    ``payment_amount="100.00|50.00"`` with ``transaction_sr_no="789|790"``.
    Which optional fields are accepted depends on the practice management
    system behind the office (Dentrix, Open Dental, Tracker, ...).
    """

    model_config = ConfigDict(extra="forbid")

    claim_sr_no: str
    practice_id: str
    payment_amount: str
    is_payment_by_procedure_code: BoolString
    claim_payment_date: str  # yyyy-MM-dd
    payment_mode: PaymentMode
    deductible: str
    write_off: str

    transaction_sr_no: Optional[str] = None
    note: Optional[str] = None
    provider_id: Optional[str] = None

    # Credit adjustment
    adjustment_type: Optional[str] = None
    credit_adjustment_provider: Optional[str] = None

    # Debit adjustment write-back
    is_debit_adjustment_writeback: Optional[BoolString] = None
    debit_adjustment_amount: Optional[str] = None
    debit_adjustment_date: Optional[str] = None
    debit_adjustment_type: Optional[str] = None
    debit_adjustment_note: Optional[str] = None
    is_debit_adjustment_by_procedure: Optional[BoolString] = None
    debit_adjustment_transaction_sr_no: Optional[str] = None
    debit_adjustment_provider: Optional[str] = None

    # Cheque / bank details
    cheque_no: Optional[str] = None
    bank_no: Optional[str] = None
    bank_name: Optional[str] = None
    direct_deposit_number: Optional[str] = None


class ClaimPaymentResponse(SikkaRecord):
    claim_sr_no: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None


class ClaimPaymentResource:
    """``POST /v4/claim_payment``"""

    endpoint = "/v4/claim_payment"

    def __init__(self, dispatcher: RequestDispatcher):
        self._dispatcher = dispatcher

    async def post(
        self, request: Union[ClaimPaymentRequest, dict]
    ) -> ClaimPaymentResponse:
        """
        Post a payment to a claim.

        Args:
            request: Payment details; a plain dict is validated first

        Returns:
            Sikka's acknowledgement
        """
        if not isinstance(request, ClaimPaymentRequest):
            request = ClaimPaymentRequest.model_validate(request)

        return await self._dispatcher.post(
            self.endpoint,
            request.model_dump(mode="json", exclude_none=True),
            response_model=ClaimPaymentResponse,
        )
