"""Payment types endpoint"""

from typing import Optional

from sikka.models import SikkaRecord
from sikka.resources.base import (
    PAGING_FIELDS,
    ListParams,
    ListResource,
    QueryField,
    QueryKind,
)


class PaymentType(SikkaRecord):
    """A payment or adjustment type configured in the practice."""

    code: Optional[str] = None
    description: Optional[str] = None
    practice_id: Optional[str] = None
    href: Optional[str] = None
    practice_href: Optional[str] = None


class PaymentTypeListParams(ListParams):
    code: Optional[str] = None
    customer_id: Optional[str] = None
    practice_id: Optional[str] = None
    # Credit adjustment types only
    is_adjustment_type: bool = False
    # Debit adjustment types only
    is_debit_adjustment_type: bool = False
    # Insurance payment types only
    is_insurance_type: bool = False
    # Types that need card details when posting (Planet DDS only)
    are_credit_card_details_required: bool = False


class PaymentTypesResource(ListResource[PaymentType, PaymentTypeListParams]):
    """``GET /v4/payment_types``"""

    endpoint = "/v4/payment_types"
    record_type = PaymentType
    params_type = PaymentTypeListParams
    query_fields = (
        QueryField("code"),
        QueryField("customer_id"),
        QueryField("practice_id"),
        QueryField("is_adjustment_type", QueryKind.FLAG),
        QueryField("is_debit_adjustment_type", QueryKind.FLAG),
        QueryField("is_insurance_type", QueryKind.FLAG),
        QueryField("are_credit_card_details_required", QueryKind.FLAG),
        *PAGING_FIELDS,
    )
