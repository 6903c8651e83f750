"""Patients endpoint"""

from typing import Optional

from sikka.models import SikkaRecord
from sikka.resources.base import PAGING_FIELDS, ListParams, ListResource, QueryField


class Patient(SikkaRecord):
    """Patient record as stored in the practice management system."""

    patient_id: Optional[str] = None
    practice_id: Optional[str] = None
    firstname: Optional[str] = None
    middlename: Optional[str] = None
    lastname: Optional[str] = None
    preferred_name: Optional[str] = None
    salutation: Optional[str] = None
    birthdate: Optional[str] = None
    status: Optional[str] = None
    email: Optional[str] = None
    cell: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    preferred_contact: Optional[str] = None
    preferred_communication_method: Optional[str] = None
    created_date: Optional[str] = None
    first_visit: Optional[str] = None
    last_visit: Optional[str] = None
    fee_no: Optional[str] = None
    provider_id: Optional[str] = None
    guarantor_id: Optional[str] = None
    guarantor_first_name: Optional[str] = None
    guarantor_last_name: Optional[str] = None
    subscriber_id: Optional[str] = None
    primary_relationship: Optional[str] = None
    primary_insurance_company_id: Optional[str] = None
    primary_medical_insurance: Optional[str] = None
    primary_medical_insurance_id: Optional[str] = None
    primary_medical_relationship: Optional[str] = None
    primary_medical_subscriber_id: Optional[str] = None
    patient_referral: Optional[str] = None
    other_referral: Optional[str] = None
    referred_out: Optional[str] = None
    href: Optional[str] = None
    practice_href: Optional[str] = None
    provider_href: Optional[str] = None
    guarantor_href: Optional[str] = None
    appointment_href: Optional[str] = None
    primary_insurance_company_href: Optional[str] = None


class PatientListParams(ListParams):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    birthdate: Optional[str] = None
    patient_id: Optional[str] = None


class PatientsResource(ListResource[Patient, PatientListParams]):
    """``GET /v4/patients``"""

    endpoint = "/v4/patients"
    record_type = Patient
    params_type = PatientListParams
    query_fields = (
        QueryField("firstname"),
        QueryField("lastname"),
        QueryField("birthdate"),
        QueryField("patient_id"),
        *PAGING_FIELDS,
    )
