"""Sikka ONE API client for a single practice office"""

from datetime import datetime
from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel

from sikka.auth.credentials import SikkaClientCredentials
from sikka.auth.session import Clock, SessionManager, utc_now
from sikka.config import DEFAULT_BASE_URL, Settings, get_settings
from sikka.dispatcher import ModelT, RequestDispatcher
from sikka.resources.claim_payment import ClaimPaymentResource
from sikka.resources.claims import ClaimsResource
from sikka.resources.patients import PatientsResource
from sikka.resources.payment_types import PaymentTypesResource
from sikka.resources.transactions import TransactionsResource


class SikkaClient:
    """
    Authenticated access to the Sikka ONE API for one practice office.

    Each instance owns its own request-key session; instances never share
    state. ``authenticate()`` must be awaited before any resource call; keys
    that expire within the hour are then refreshed transparently.

    Example::

        credentials = SikkaClientCredentials(
            app_id="your-app-id",
            app_key="your-app-key",
            office_id="practice-office-id",
            secret_key="practice-secret-key",
        )
        async with SikkaClient(credentials) as client:
            await client.authenticate()
            patients = await client.patients.list(firstname="John")
    """

    def __init__(
        self,
        credentials: Union[SikkaClientCredentials, dict],
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize the client.

        Args:
            credentials: App and office credentials
            base_url: Override of the Sikka API base URL
            http_client: Transport to use; the client creates and owns one
                if omitted
            clock: Time source for expiry checks
        """
        if not isinstance(credentials, SikkaClientCredentials):
            credentials = SikkaClientCredentials.model_validate(credentials)

        self._credentials = credentials
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(follow_redirects=True)

        self._session = SessionManager(
            credentials, self._http, self._base_url, clock=clock
        )
        self._dispatcher = RequestDispatcher(self._session, self._http, self._base_url)

        self.patients = PatientsResource(self._dispatcher)
        self.claims = ClaimsResource(self._dispatcher)
        self.transactions = TransactionsResource(self._dispatcher)
        self.payment_types = PaymentTypesResource(self._dispatcher)
        self.claim_payment = ClaimPaymentResource(self._dispatcher)

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **kwargs: Any
    ) -> "SikkaClient":
        """
        Build a client from ``SIKKA_*`` settings.

        Raises:
            ValueError: If any of the four credentials is missing
        """
        settings = settings or get_settings()

        missing = [
            name
            for name, value in (
                ("SIKKA_APP_ID", settings.app_id),
                ("SIKKA_APP_KEY", settings.app_key.get_secret_value()),
                ("SIKKA_OFFICE_ID", settings.office_id),
                ("SIKKA_SECRET_KEY", settings.secret_key.get_secret_value()),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"Missing Sikka credentials: {', '.join(missing)}")

        credentials = SikkaClientCredentials(
            app_id=settings.app_id,
            app_key=settings.app_key,
            office_id=settings.office_id,
            secret_key=settings.secret_key,
        )
        kwargs.setdefault("base_url", settings.base_url)
        return cls(credentials, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def credentials(self) -> SikkaClientCredentials:
        return self._credentials

    @property
    def session(self) -> SessionManager:
        return self._session

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._session.expires_at

    # -- Session ---------------------------------------------------------

    async def authenticate(self) -> None:
        """Obtain a request key. Must be awaited before any API call."""
        await self._session.authenticate()

    async def refresh_authentication(self) -> None:
        """Replace the request key using the refresh key."""
        await self._session.refresh_authentication()

    async def ensure_authenticated(self) -> None:
        await self._session.ensure_authenticated()

    def is_authenticated(self) -> bool:
        return self._session.is_authenticated()

    def get_request_key(self) -> str:
        return self._session.get_request_key()

    def clear_auth(self) -> None:
        self._session.clear_auth()

    # -- Raw requests ----------------------------------------------------

    async def get(
        self,
        endpoint: str,
        params: Optional[dict[str, str]] = None,
        response_model: Optional[type[ModelT]] = None,
    ) -> Any:
        """Authenticated GET against any endpoint; see RequestDispatcher.get."""
        return await self._dispatcher.get(endpoint, params, response_model)

    async def post(
        self,
        endpoint: str,
        body: Union[BaseModel, dict[str, Any]],
        response_model: Optional[type[ModelT]] = None,
    ) -> Any:
        """Authenticated POST against any endpoint; see RequestDispatcher.post."""
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", exclude_none=True)
        return await self._dispatcher.post(endpoint, body, response_model)

    # -- Lifecycle -------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP transport if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "SikkaClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()


def create_sikka_client(
    credentials: Union[SikkaClientCredentials, dict],
    base_url: Optional[str] = None,
) -> SikkaClient:
    """
    Create a new Sikka client instance.

    Args:
        credentials: Office-level credentials
        base_url: Optional base URL override

    Returns:
        A new, not yet authenticated SikkaClient
    """
    return SikkaClient(credentials, base_url=base_url)
