"""Request-key lifecycle for one Sikka practice office"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from sikka.auth.credentials import (
    ApiErrorBody,
    RequestKeyRequest,
    RequestKeyResponse,
    SikkaClientCredentials,
)
from sikka.errors import AuthenticationError, NotAuthenticatedError, ResponseDecodeError
from sikka.logger import get_logger

REQUEST_KEY_ENDPOINT = "/v4/request_key"

# Keys expiring sooner than this are refreshed before the next request.
REFRESH_MARGIN = timedelta(hours=1)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _error_detail(response: httpx.Response) -> str:
    """Pick the most useful message out of a failed request_key response."""
    fallback = f"{response.status_code} {response.reason_phrase}"
    return ApiErrorBody.parse(response.content).detail() or fallback


class SessionManager:
    """
    Owns the request key, refresh key and expiry of a single client.

    The three values are always replaced together: a successful
    ``authenticate`` or ``refresh_authentication`` stores a complete new
    triple and ``clear_auth`` drops all of them. Refresh is lazy; it only
    happens inside ``ensure_authenticated``, which every API request calls.
    The end_time sent by Sikka is authoritative, ``expires_in`` is ignored.
    """

    def __init__(
        self,
        credentials: SikkaClientCredentials,
        http_client: httpx.AsyncClient,
        base_url: str,
        clock: Clock = utc_now,
    ):
        """
        Initialize the session manager.

        Args:
            credentials: App and office credentials
            http_client: Transport used for the request_key endpoint
            base_url: Sikka API base URL, without trailing slash
            clock: Returns the current time as an aware datetime
        """
        self._credentials = credentials
        self._http = http_client
        self._base_url = base_url
        self._clock = clock

        self._token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._expires_at: Optional[datetime] = None

        # asyncio.Lock binds to the loop it is first contended on.
        self._refresh_lock: Optional[asyncio.Lock] = None
        self._refresh_lock_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    async def authenticate(self) -> None:
        """
        Request a new key with the office credentials.

        Raises:
            AuthenticationError: If Sikka rejects the credentials
            ResponseDecodeError: If the key response is malformed
        """
        log = get_logger()
        log.debug(
            "Sikka API: Authenticating", {"office_id": self._credentials.office_id}
        )

        response = await self._request_new_key(
            RequestKeyRequest.new_key(self._credentials)
        )
        self._store(response)

        log.debug(
            "Sikka API: Authenticated successfully",
            {"expires_at": self._expires_at.isoformat()},
        )

    async def refresh_authentication(self) -> None:
        """
        Exchange the refresh key for a new key triple.

        Raises:
            AuthenticationError: If no refresh key is held or Sikka rejects it
            ResponseDecodeError: If the key response is malformed
        """
        if not self._refresh_token:
            raise AuthenticationError(
                "No refresh key available. Call authenticate() first."
            )

        log = get_logger()
        log.debug("Sikka API: Refreshing authentication")

        response = await self._request_new_key(
            RequestKeyRequest.refresh(self._credentials, self._refresh_token)
        )
        self._store(response)

        log.debug(
            "Sikka API: Authentication refreshed",
            {"expires_at": self._expires_at.isoformat()},
        )

    async def ensure_authenticated(self) -> None:
        """
        Guard for every API request; refreshes keys close to expiry.

        Concurrent callers share a single refresh: the expiry is checked
        again once the refresh lock is held.

        Raises:
            NotAuthenticatedError: If authenticate() was never called
            AuthenticationError: If the implicit refresh fails
        """
        if not self._token:
            raise NotAuthenticatedError()

        if not self._needs_refresh():
            return

        async with self._refresh_lock_for_loop():
            if self._needs_refresh():
                await self.refresh_authentication()

    def is_authenticated(self) -> bool:
        """Whether a key is held and has not expired yet (no look-ahead)."""
        if not self._token or not self._expires_at:
            return False
        return self._expires_at > self._clock()

    def get_request_key(self) -> str:
        """
        Return the current request key.

        Raises:
            NotAuthenticatedError: If no key is held
        """
        if not self._token:
            raise NotAuthenticatedError()
        return self._token

    def clear_auth(self) -> None:
        """Forget the key triple. Safe to call repeatedly."""
        self._token = None
        self._refresh_token = None
        self._expires_at = None

    def _needs_refresh(self) -> bool:
        if self._expires_at is None:
            return False
        return self._expires_at < self._clock() + REFRESH_MARGIN

    def _refresh_lock_for_loop(self) -> asyncio.Lock:
        """Refresh lock of the running event loop, replaced when the loop changes."""
        loop = asyncio.get_running_loop()
        if self._refresh_lock is None or self._refresh_lock_loop is not loop:
            self._refresh_lock = asyncio.Lock()
            self._refresh_lock_loop = loop
        return self._refresh_lock

    def _store(self, response: RequestKeyResponse) -> None:
        self._token = response.request_key
        self._refresh_token = response.refresh_key
        self._expires_at = response.end_time

    async def _request_new_key(self, request: RequestKeyRequest) -> RequestKeyResponse:
        url = f"{self._base_url}{REQUEST_KEY_ENDPOINT}"

        try:
            response = await self._http.post(
                url,
                json=request.to_body(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Sikka authentication failed: {exc}") from exc

        if not response.is_success:
            raise AuthenticationError(
                f"Sikka authentication failed: {_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            return RequestKeyResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseDecodeError(
                f"Sikka API POST {REQUEST_KEY_ENDPOINT} returned an unexpected body: {exc}",
                REQUEST_KEY_ENDPOINT,
                body=response.text,
            ) from exc
