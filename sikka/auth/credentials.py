"""Credential and request-key payloads for the /v4/request_key endpoint"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from sikka.models import SikkaRecord


class GrantType(str, Enum):
    """Selects a first-time key request or a refresh."""

    REQUEST_KEY = "request_key"
    REFRESH_KEY = "refresh_key"


class SikkaAppCredentials(BaseModel):
    """Application-level credentials issued to the integrator."""

    model_config = ConfigDict(frozen=True)

    app_id: str
    app_key: SecretStr


class SikkaClientCredentials(SikkaAppCredentials):
    """Credentials needed to act on behalf of one practice office."""

    office_id: str
    secret_key: SecretStr


class RequestKeyRequest(BaseModel):
    """Body posted to the request_key endpoint."""

    app_id: str
    app_key: str
    grant_type: GrantType
    office_id: Optional[str] = None
    secret_key: Optional[str] = None
    refresh_key: Optional[str] = None

    @classmethod
    def new_key(cls, credentials: SikkaClientCredentials) -> "RequestKeyRequest":
        return cls(
            app_id=credentials.app_id,
            app_key=credentials.app_key.get_secret_value(),
            grant_type=GrantType.REQUEST_KEY,
            office_id=credentials.office_id,
            secret_key=credentials.secret_key.get_secret_value(),
        )

    @classmethod
    def refresh(
        cls, credentials: SikkaAppCredentials, refresh_key: str
    ) -> "RequestKeyRequest":
        return cls(
            app_id=credentials.app_id,
            app_key=credentials.app_key.get_secret_value(),
            grant_type=GrantType.REFRESH_KEY,
            refresh_key=refresh_key,
        )

    def to_body(self) -> dict:
        """Serialize for the wire, leaving out fields the grant does not use."""
        return self.model_dump(mode="json", exclude_none=True)


class RequestKeyResponse(SikkaRecord):
    """Successful answer of the request_key endpoint."""

    request_key: str
    refresh_key: str
    end_time: datetime
    start_time: Optional[str] = None
    expires_in: Optional[str] = None
    issued_to: Optional[str] = None
    scope: Optional[str] = None
    domain: Optional[str] = None
    href: Optional[str] = None
    request_count: Optional[str] = None
    status: Optional[str] = None

    @field_validator("end_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Sikka sometimes omits the offset; its clock is UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ApiErrorBody(SikkaRecord):
    """Error payload returned by the request_key endpoint."""

    DETAIL_KEYS: ClassVar[tuple[str, ...]] = ("error_description", "error", "message")

    error: Optional[str] = None
    error_description: Optional[str] = None
    message: Optional[str] = None

    def detail(self) -> Optional[str]:
        """Most specific human-readable message present."""
        return self.error_description or self.error or self.message

    @classmethod
    def parse(cls, content: bytes) -> "ApiErrorBody":
        """
        Read an error payload, keeping only the message fields that are strings.

        Sikka occasionally nests objects under these keys; such values are
        skipped so a usable sibling message still comes through.
        """
        try:
            data = json.loads(content)
        except ValueError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls(
            **{
                key: value
                for key, value in data.items()
                if key in cls.DETAIL_KEYS and isinstance(value, str)
            }
        )
