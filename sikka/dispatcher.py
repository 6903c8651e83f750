"""Authenticated GET/POST primitive shared by every Sikka resource"""

import json
from typing import Any, Optional, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from sikka.auth.session import SessionManager
from sikka.errors import ApiRequestError, ResponseDecodeError
from sikka.logger import get_logger

ModelT = TypeVar("ModelT", bound=BaseModel)

# Returned in place of an empty list response body.
EMPTY_ENVELOPE: dict[str, Any] = {"items": []}


def raise_for_status(method: str, endpoint: str, response: httpx.Response) -> None:
    """Raise ApiRequestError unless the response is a 2xx."""
    if response.is_success:
        return
    body = response.text
    raise ApiRequestError(
        f"Sikka API {method} {endpoint} failed: "
        f"{response.status_code} {response.reason_phrase} - {body}",
        endpoint=endpoint,
        method=method,
        status_code=response.status_code,
        reason=response.reason_phrase,
        body=body,
    )


def decode_body(
    method: str,
    endpoint: str,
    text: str,
    response_model: Optional[type[ModelT]] = None,
) -> Union[ModelT, Any]:
    """
    Parse a success body as JSON, validated into ``response_model`` if given.

    Raises:
        ResponseDecodeError: If the body is not JSON or does not fit the model
    """
    try:
        if response_model is None:
            return json.loads(text)
        return response_model.model_validate_json(text)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ResponseDecodeError(
            f"Sikka API {method} {endpoint} returned an unexpected body: {exc}",
            endpoint,
            body=text,
        ) from exc


def decode_list_body(
    endpoint: str,
    text: str,
    response_model: Optional[type[ModelT]] = None,
) -> Union[ModelT, Any]:
    """
    Like :func:`decode_body` for GET list endpoints.

    Sikka answers some list queries with a 200 and no body at all; that is
    treated as an envelope without items.
    """
    if not text or not text.strip():
        if response_model is None:
            return dict(EMPTY_ENVELOPE, items=[])
        return response_model.model_validate(EMPTY_ENVELOPE)
    return decode_body("GET", endpoint, text, response_model)


class RequestDispatcher:
    """
    Sends single-attempt authenticated requests to the Sikka API.

    The request key travels both as the ``request_key`` query parameter and
    the ``Request-Key`` header. There is no retry, backoff or caching.
    """

    def __init__(
        self,
        session: SessionManager,
        http_client: httpx.AsyncClient,
        base_url: str,
    ):
        self._session = session
        self._http = http_client
        self._base_url = base_url

    async def get(
        self,
        endpoint: str,
        params: Optional[dict[str, str]] = None,
        response_model: Optional[type[ModelT]] = None,
    ) -> Any:
        """
        Authenticated GET.

        Args:
            endpoint: Path below the base URL, e.g. ``/v4/patients``
            params: Query parameters; they override ``request_key`` on clash
            response_model: Pydantic model to validate the JSON into

        Returns:
            Parsed JSON, or a ``response_model`` instance

        Raises:
            NotAuthenticatedError: If the client was never authenticated
            AuthenticationError: If an implicit refresh fails
            ApiRequestError: On a non-2xx status or transport failure
            ResponseDecodeError: If the body does not decode
        """
        log = get_logger()

        request_key = await self._authorize()
        query = {"request_key": request_key}
        if params:
            query.update(params)

        log.debug("Sikka API GET request", {"endpoint": endpoint, "params": params})

        response = await self._send(
            "GET", endpoint, params=query, headers=self._headers(request_key)
        )

        log.debug(
            "Sikka API GET response",
            {"endpoint": endpoint, "status": response.status_code},
        )

        raise_for_status("GET", endpoint, response)
        return decode_list_body(endpoint, response.text, response_model)

    async def post(
        self,
        endpoint: str,
        body: dict[str, Any],
        response_model: Optional[type[ModelT]] = None,
    ) -> Any:
        """
        Authenticated POST with a JSON body.

        Unlike GET, an empty success body is a decode error.

        Args:
            endpoint: Path below the base URL
            body: JSON-serializable request payload
            response_model: Pydantic model to validate the JSON into

        Returns:
            Parsed JSON, or a ``response_model`` instance
        """
        log = get_logger()

        request_key = await self._authorize()

        log.debug("Sikka API POST request", {"endpoint": endpoint, "body": body})

        response = await self._send(
            "POST",
            endpoint,
            params={"request_key": request_key},
            json=body,
            headers=self._headers(request_key),
        )

        log.debug(
            "Sikka API POST response",
            {"endpoint": endpoint, "status": response.status_code},
        )

        raise_for_status("POST", endpoint, response)
        return decode_body("POST", endpoint, response.text, response_model)

    async def _authorize(self) -> str:
        await self._session.ensure_authenticated()
        return self._session.get_request_key()

    @staticmethod
    def _headers(request_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Request-Key": request_key,
        }

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(
                method, f"{self._base_url}{endpoint}", **kwargs
            )
        except httpx.HTTPError as exc:
            raise ApiRequestError(
                f"Sikka API {method} {endpoint} failed: {exc}",
                endpoint=endpoint,
                method=method,
            ) from exc
