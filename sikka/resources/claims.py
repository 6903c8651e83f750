"""Claims endpoint"""

from typing import Optional

from sikka.models import SikkaRecord
from sikka.resources.base import PAGING_FIELDS, ListParams, ListResource, QueryField


class Claim(SikkaRecord):
    """Insurance claim."""

    claim_sr_no: Optional[str] = None
    primary_claim_id: Optional[str] = None
    claim_description_id: Optional[str] = None
    claim_status: Optional[str] = None
    sent_claim_status: Optional[str] = None
    claim_channel: Optional[str] = None
    primary_or_secondary: Optional[str] = None
    patient_id: Optional[str] = None
    practice_id: Optional[str] = None
    provider_id: Optional[str] = None
    rendering_provider: Optional[str] = None
    pay_to_provider: Optional[str] = None
    guarantor_id: Optional[str] = None
    carrier_id: Optional[str] = None
    payer_id: Optional[str] = None
    insurance_company_id: Optional[str] = None
    insurance_company_name: Optional[str] = None
    creation_date: Optional[str] = None
    claim_sent_date: Optional[str] = None
    resent_date: Optional[str] = None
    on_hold_date: Optional[str] = None
    return_date: Optional[str] = None
    claim_payment_date: Optional[str] = None
    total_billed_amount: Optional[str] = None
    total_paid_amount: Optional[str] = None
    estimated_amount: Optional[str] = None
    payment_amount: Optional[str] = None
    standard: Optional[str] = None
    preventive: Optional[str] = None
    others: Optional[str] = None
    bank_no: Optional[str] = None
    cheque_no: Optional[str] = None
    tracer: Optional[str] = None
    tp: Optional[str] = None
    note: Optional[str] = None
    href: Optional[str] = None
    patient_href: Optional[str] = None
    practice_href: Optional[str] = None
    provider_href: Optional[str] = None
    guarantor_href: Optional[str] = None
    insurance_company_href: Optional[str] = None
    claim_description_href: Optional[str] = None


class ClaimListParams(ListParams):
    patient_id: Optional[str] = None
    claim_id: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class ClaimsResource(ListResource[Claim, ClaimListParams]):
    """``GET /v4/claims``"""

    endpoint = "/v4/claims"
    record_type = Claim
    params_type = ClaimListParams
    query_fields = (
        QueryField("patient_id"),
        QueryField("claim_id"),
        QueryField("status"),
        QueryField("start_date"),
        QueryField("end_date"),
        *PAGING_FIELDS,
    )
