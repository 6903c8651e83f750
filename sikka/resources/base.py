"""Query-string mapping and list plumbing shared by the resource accessors"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

from sikka.dispatcher import RequestDispatcher
from sikka.models import PaginatedResponse

RecordT = TypeVar("RecordT", bound=BaseModel)
ParamsT = TypeVar("ParamsT", bound="ListParams")


class QueryKind(str, Enum):
    """How a parameter value is turned into a query-string value."""

    TEXT = "text"  # sent when non-empty
    NUMBER = "number"  # sent when non-zero, stringified
    FLAG = "flag"  # sent as "true" when set, never as "false"


@dataclass(frozen=True)
class QueryField:
    """One row of a resource's parameter-to-query table."""

    attr: str
    kind: QueryKind = QueryKind.TEXT
    key: Optional[str] = None

    @property
    def query_key(self) -> str:
        return self.key or self.attr

    def render(self, value: Any) -> Optional[str]:
        """Query value for ``value``, or None when it must be left out."""
        if self.kind is QueryKind.FLAG:
            return "true" if value is True else None
        if not value:
            return None
        return str(value)


PAGING_FIELDS = (
    QueryField("limit", QueryKind.NUMBER),
    QueryField("offset", QueryKind.NUMBER),
)


def build_query(params: BaseModel, fields: Sequence[QueryField]) -> dict[str, str]:
    """
    Build the query mapping for ``params`` from a field table.

    Args:
        params: Parameter object of the resource
        fields: Table rows, applied in order

    Returns:
        Flat mapping holding only the parameters the caller actually set
    """
    query: dict[str, str] = {}
    for field in fields:
        rendered = field.render(getattr(params, field.attr))
        if rendered is not None:
            query[field.query_key] = rendered
    return query


class ListParams(BaseModel):
    """Paging parameters accepted by every list endpoint."""

    model_config = ConfigDict(extra="forbid")

    limit: Optional[int] = None
    offset: Optional[int] = None


class ListResource(Generic[RecordT, ParamsT]):
    """
    Accessor for one paginated Sikka list endpoint.

    Subclasses name the endpoint, the record and parameter types and the
    query table; ``list`` then returns the items of a single page.
    """

    endpoint: str
    record_type: type[RecordT]
    params_type: type[ParamsT]
    query_fields: Sequence[QueryField]

    def __init__(self, dispatcher: RequestDispatcher):
        self._dispatcher = dispatcher

    async def list(self, params: Optional[ParamsT] = None, **filters: Any) -> list[RecordT]:
        """
        Fetch one page of records.

        Filters are passed either as a parameter object or as keyword
        arguments, e.g. ``await client.patients.list(firstname="John")``.
        """
        page = await self.list_page(params, **filters)
        return page.items

    async def list_page(
        self, params: Optional[ParamsT] = None, **filters: Any
    ) -> PaginatedResponse[RecordT]:
        """Fetch one page and return the whole envelope, pagination included."""
        params = self._coerce_params(params, filters)
        return await self._dispatcher.get(
            self.endpoint,
            build_query(params, self.query_fields),
            response_model=PaginatedResponse[self.record_type],
        )

    def _coerce_params(self, params: Optional[ParamsT], filters: dict[str, Any]) -> ParamsT:
        if params is not None and filters:
            raise TypeError("Pass either a params object or keyword filters, not both")
        if params is None:
            return self.params_type(**filters)
        return params
