"""Shared response shapes for Sikka API resources"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict


class SikkaRecord(BaseModel):
    """
    Base for records returned by the API.

    Sikka serializes almost every value as a string. Fields that upstream adds
    later are kept (``extra="allow"``) and stray numbers are coerced to
    strings so a new field type never breaks decoding.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class Pagination(SikkaRecord):
    """Page links of a list response."""

    current: Optional[str] = None
    first: Optional[str] = None
    last: Optional[str] = None
    next: Optional[str] = None
    previous: Optional[str] = None


RecordT = TypeVar("RecordT", bound=BaseModel)


class PaginatedResponse(SikkaRecord, Generic[RecordT]):
    """
    Envelope wrapped around every list endpoint.

    Pagination is not followed by the client; callers pass ``offset`` and
    ``limit`` themselves.
    """

    items: list[RecordT] = []
    pagination: Optional[Pagination] = None
    total_count: Optional[str] = None
    limit: Optional[str] = None
    offset: Optional[str] = None
    execution_time: Optional[str] = None
