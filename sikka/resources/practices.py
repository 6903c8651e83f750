"""Authorized practices endpoint (application-level, no request key)"""

from typing import Optional

import httpx
from pydantic import SecretStr

from sikka.auth.credentials import SikkaAppCredentials
from sikka.config import DEFAULT_BASE_URL
from sikka.dispatcher import decode_list_body, raise_for_status
from sikka.errors import ApiRequestError
from sikka.logger import get_logger
from sikka.models import PaginatedResponse, SikkaRecord

AUTHORIZED_PRACTICES_ENDPOINT = "/v4/authorized_practices"


class AuthorizedPractice(SikkaRecord):
    """
    A practice that granted the application access.

    ``office_id`` and ``secret_key`` are the office credentials needed to
    build a :class:`~sikka.client.SikkaClient` for that practice.
    """

    office_id: Optional[str] = None
    secret_key: Optional[SecretStr] = None
    practice_id: Optional[str] = None
    practice_name: Optional[str] = None
    practice_management_system: Optional[str] = None
    practice_management_system_version: Optional[str] = None
    practice_management_system_refresh_date: Optional[str] = None
    data_insert_date: Optional[str] = None
    data_synchronization_date: Optional[str] = None
    domain: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    href: Optional[str] = None


async def list_authorized_practices(
    credentials: SikkaAppCredentials,
    base_url: str = DEFAULT_BASE_URL,
    http_client: Optional[httpx.AsyncClient] = None,
) -> list[AuthorizedPractice]:
    """
    List the practices that authorized this application.

    Authenticates with the ``App-Id``/``App-Key`` headers only, so it works
    before any office request key exists.

    Args:
        credentials: Application credentials
        base_url: Sikka API base URL
        http_client: Transport to use; a temporary one is created if omitted

    Returns:
        Authorized practices of the first page

    Raises:
        ApiRequestError: On a non-2xx status or transport failure
        ResponseDecodeError: If the body does not decode
    """
    log = get_logger()
    endpoint = AUTHORIZED_PRACTICES_ENDPOINT
    headers = {
        "App-Id": credentials.app_id,
        "App-Key": credentials.app_key.get_secret_value(),
        "Content-Type": "application/json",
    }

    log.debug("Sikka API GET request", {"endpoint": endpoint})

    client = http_client or httpx.AsyncClient(follow_redirects=True)
    try:
        response = await client.get(f"{base_url.rstrip('/')}{endpoint}", headers=headers)
    except httpx.HTTPError as exc:
        raise ApiRequestError(
            f"Sikka API GET {endpoint} failed: {exc}", endpoint=endpoint, method="GET"
        ) from exc
    finally:
        if http_client is None:
            await client.aclose()

    log.debug(
        "Sikka API GET response", {"endpoint": endpoint, "status": response.status_code}
    )

    raise_for_status("GET", endpoint, response)
    envelope = decode_list_body(
        endpoint, response.text, PaginatedResponse[AuthorizedPractice]
    )
    return envelope.items
