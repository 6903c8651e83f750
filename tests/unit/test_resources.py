"""Unit tests for the resource accessors."""

import json

import httpx
import pydantic
import pytest

from conftest import BASE_URL, envelope
from sikka.auth.credentials import SikkaAppCredentials
from sikka.errors import ApiRequestError
from sikka.resources import (
    ClaimPaymentRequest,
    Patient,
    PatientListParams,
    PaymentTypeListParams,
    Transaction,
    list_authorized_practices,
)


def _filters(request: httpx.Request) -> dict:
    """Query parameters of a request, without the request key."""
    params = dict(request.url.params)
    params.pop("request_key")
    return params


class TestPatients:
    """Tests for client.patients."""

    async def test_only_supplied_filters_are_sent(self, authenticated_client, fake):
        fake.queue(envelope([]))

        await authenticated_client.patients.list(PatientListParams(firstname="John"))

        request = fake.requests[-1]
        assert request.url.path == "/v4/patients"
        assert dict(request.url.params) == {
            "request_key": "test-request-key",
            "firstname": "John",
        }

    async def test_keyword_filters(self, authenticated_client, fake):
        fake.queue(envelope([]))

        await authenticated_client.patients.list(
            lastname="Doe", birthdate="1980-01-01", patient_id="", limit=25, offset=50
        )

        assert _filters(fake.requests[-1]) == {
            "lastname": "Doe",
            "birthdate": "1980-01-01",
            "limit": "25",
            "offset": "50",
        }

    async def test_returns_items(self, authenticated_client, fake):
        fake.queue(
            envelope(
                [
                    {"patient_id": "1", "firstname": "John", "lastname": "Doe"},
                    {"patient_id": "2", "firstname": "Jane", "lastname": "Doe"},
                ]
            )
        )

        patients = await authenticated_client.patients.list(lastname="Doe")

        assert [p.patient_id for p in patients] == ["1", "2"]
        assert all(isinstance(p, Patient) for p in patients)

    async def test_list_page_keeps_the_envelope(self, authenticated_client, fake):
        fake.queue(envelope([{"patient_id": "1"}], total_count="120", offset="100"))

        page = await authenticated_client.patients.list_page(limit=20, offset=100)

        assert page.total_count == "120"
        assert page.offset == "100"
        assert len(page.items) == 1

    async def test_empty_body_gives_empty_list(self, authenticated_client, fake):
        fake.queue(httpx.Response(200, text=""))

        assert await authenticated_client.patients.list(firstname="Nobody") == []

    async def test_unknown_filter_is_rejected(self, authenticated_client, fake):
        with pytest.raises(pydantic.ValidationError):
            await authenticated_client.patients.list(first_name="John")

        assert fake.requests_to("/v4/patients") == []

    async def test_params_and_keywords_are_exclusive(self, authenticated_client):
        with pytest.raises(TypeError):
            await authenticated_client.patients.list(
                PatientListParams(firstname="John"), lastname="Doe"
            )


class TestClaims:
    """Tests for client.claims."""

    async def test_filters(self, authenticated_client, fake):
        fake.queue(envelope([{"claim_sr_no": "123", "claim_status": "Pending"}]))

        claims = await authenticated_client.claims.list(
            patient_id="12345",
            status="Pending",
            start_date="2024-01-01",
            end_date="2024-12-31",
        )

        assert fake.requests[-1].url.path == "/v4/claims"
        assert _filters(fake.requests[-1]) == {
            "patient_id": "12345",
            "status": "Pending",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
        }
        assert claims[0].claim_status == "Pending"

    async def test_zero_paging_values_are_omitted(self, authenticated_client, fake):
        fake.queue(envelope([]))

        await authenticated_client.claims.list(claim_id="9", limit=0, offset=0)

        assert _filters(fake.requests[-1]) == {"claim_id": "9"}


class TestTransactions:
    """Tests for client.transactions."""

    async def test_filters(self, authenticated_client, fake):
        fake.queue(envelope([]))

        await authenticated_client.transactions.list(
            claim_sr_no="123", transaction_type="Payment"
        )

        assert fake.requests[-1].url.path == "/v4/transactions"
        assert _filters(fake.requests[-1]) == {
            "claim_sr_no": "123",
            "transaction_type": "Payment",
        }

    async def test_list_procedures_filters_locally(self, authenticated_client, fake):
        """Only the Procedure entries of the claim are returned."""
        fake.queue(
            envelope(
                [
                    {
                        "transaction_sr_no": "789",
                        "transaction_type": "Procedure",
                        "claim_sr_no": "123",
                        "procedure_code": "D0120",
                        "amount": "100.00",
                    },
                    {
                        "transaction_sr_no": "790",
                        "transaction_type": "Payment",
                        "claim_sr_no": "123",
                        "amount": "-80.00",
                    },
                ]
            )
        )

        procedures = await authenticated_client.transactions.list_procedures("123")

        assert _filters(fake.requests[-1]) == {"claim_sr_no": "123"}
        assert len(procedures) == 1
        assert isinstance(procedures[0], Transaction)
        assert procedures[0].transaction_sr_no == "789"
        assert procedures[0].procedure_code == "D0120"


class TestPaymentTypes:
    """Tests for client.payment_types."""

    async def test_no_filters(self, authenticated_client, fake):
        fake.queue(envelope([{"code": "INS", "description": "Insurance check"}]))

        types = await authenticated_client.payment_types.list()

        assert _filters(fake.requests[-1]) == {}
        assert types[0].code == "INS"

    async def test_flags_sent_only_when_true(self, authenticated_client, fake):
        fake.queue(envelope([]))

        await authenticated_client.payment_types.list(
            PaymentTypeListParams(
                is_insurance_type=True,
                is_adjustment_type=False,
                are_credit_card_details_required=True,
                practice_id="1",
            )
        )

        assert _filters(fake.requests[-1]) == {
            "practice_id": "1",
            "is_insurance_type": "true",
            "are_credit_card_details_required": "true",
        }


class TestClaimPayment:
    """Tests for client.claim_payment."""

    PAYMENT = {
        "claim_sr_no": "123456",
        "practice_id": "1",
        "payment_amount": "100.00|50.00",
        "transaction_sr_no": "789|790",
        "write_off": "0.00|0.00",
        "deductible": "0",
        "claim_payment_date": "2024-01-15",
        "payment_mode": "EFT",
        "cheque_no": "CHK123",
        "is_payment_by_procedure_code": "true",
        "note": "Insurance payment",
    }

    async def test_posts_request_as_body(self, authenticated_client, fake):
        fake.queue(
            httpx.Response(
                200,
                json={"claim_sr_no": "123456", "status": "success", "message": "Posted"},
            )
        )

        result = await authenticated_client.claim_payment.post(
            ClaimPaymentRequest(**self.PAYMENT)
        )

        request = fake.requests[-1]
        assert request.method == "POST"
        assert request.url.path == "/v4/claim_payment"
        assert json.loads(request.content) == self.PAYMENT
        assert result.status == "success"
        assert result.claim_sr_no == "123456"

    async def test_accepts_plain_dict(self, authenticated_client, fake):
        fake.queue(httpx.Response(200, json={"status": "success"}))

        await authenticated_client.claim_payment.post(dict(self.PAYMENT))

        assert json.loads(fake.requests[-1].content) == self.PAYMENT

    async def test_invalid_payment_mode(self, authenticated_client, fake):
        with pytest.raises(pydantic.ValidationError):
            await authenticated_client.claim_payment.post(
                dict(self.PAYMENT, payment_mode="Bitcoin")
            )

        assert fake.requests_to("/v4/claim_payment") == []


class TestAuthorizedPractices:
    """Tests for list_authorized_practices()."""

    @pytest.fixture
    def app_credentials(self):
        return SikkaAppCredentials(app_id="test-app-id", app_key="test-app-key")

    async def test_uses_app_headers(self, app_credentials, http_client, fake):
        fake.queue(
            envelope(
                [
                    {
                        "office_id": "D1234",
                        "secret_key": "office-secret",
                        "practice_id": "1",
                        "practice_name": "Smile Dental",
                    }
                ]
            )
        )

        practices = await list_authorized_practices(
            app_credentials, BASE_URL, http_client=http_client
        )

        request = fake.requests[-1]
        assert request.url.path == "/v4/authorized_practices"
        assert request.headers["App-Id"] == "test-app-id"
        assert request.headers["App-Key"] == "test-app-key"
        assert "request_key" not in request.url.params
        assert practices[0].office_id == "D1234"
        assert practices[0].secret_key.get_secret_value() == "office-secret"
        assert "office-secret" not in repr(practices[0])

    async def test_error_status(self, app_credentials, http_client, fake):
        fake.queue(httpx.Response(401, text="invalid app key"))

        with pytest.raises(ApiRequestError, match="401 Unauthorized - invalid app key"):
            await list_authorized_practices(app_credentials, BASE_URL, http_client=http_client)
