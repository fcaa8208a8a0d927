"""
OAuth client-credentials token cache.

One ``OAuth`` instance owns one bearer token and its expiry. Callers ask for
the token before every authorized request; the cached value is returned
until the server-declared TTL runs out, after which exactly one request is
made to the authorization endpoint. Concurrent callers that find the cache
empty wait for that single request instead of sending their own.
"""

import threading
from concurrent.futures import Future
from datetime import UTC, datetime, timedelta
from typing import Callable, Optional

import requests
import structlog
from pydantic import ValidationError

from core.logging import BusinessEvents
from core.metrics import token_fetch_total
from payu.endpoints import AUTHORIZE_ENDPOINT, build_url
from payu.errors import AuthenticationError
from payu.schemas import AuthenticationErrorResponse, AuthenticationResponse

log = structlog.get_logger(__name__)

# A new or reset cache is already expired by this much
EXPIRED_OFFSET = timedelta(minutes=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _decode_error(response) -> Optional[AuthenticationErrorResponse]:
    """Parse an OAuth error body, or ``None`` when there is no usable one."""
    if response is None:
        return None
    try:
        return AuthenticationErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return None


class OAuth:
    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        client_id: int,
        client_secret: str,
        timeout: Optional[float] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Args:
            session: HTTP session used for the token request
            base_url: PayU host (sandbox or production)
            client_id: OAuth client id from the PayU panel
            client_secret: OAuth client secret from the PayU panel
            timeout: passed through to the transport, ``None`` waits forever
            clock: returns the current UTC time; replaced in tests
        """
        self.session = session
        self.base_url = base_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.clock = clock

        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._access_token = ""
        self._expiry = self.clock() - EXPIRED_OFFSET

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def expiry(self) -> datetime:
        return self._expiry

    def _is_valid(self) -> bool:
        # whole-second comparison, server TTL taken verbatim
        now = self.clock().replace(microsecond=0)
        return self._access_token != "" and now < self._expiry.replace(microsecond=0)

    def _reset(self):
        self._access_token = ""
        self._expiry = self.clock() - EXPIRED_OFFSET

    def _fetch_access_token(self) -> AuthenticationResponse:
        data = {
            "grant_type": "client_credentials",
            "client_id": str(self.client_id),
            "client_secret": self.client_secret,
        }

        log.info(BusinessEvents.TOKEN_FETCH, client_id=self.client_id)
        try:
            response = self.session.post(
                build_url(self.base_url, AUTHORIZE_ENDPOINT),
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return AuthenticationResponse.model_validate(response.json())
        except requests.HTTPError as e:
            with self._lock:
                self._reset()
            err = _decode_error(e.response)
            if err is None:
                token_fetch_total.labels(outcome="transport_error").inc()
                log.error(
                    BusinessEvents.TOKEN_FETCH_FAILED,
                    client_id=self.client_id,
                    error=str(e),
                )
                raise e
            token_fetch_total.labels(outcome="auth_error").inc()
            log.error(
                BusinessEvents.TOKEN_FETCH_FAILED,
                client_id=self.client_id,
                error=err.error,
                error_description=err.error_description,
            )
            raise AuthenticationError(err.error, err.error_description) from e
        except Exception as e:
            with self._lock:
                self._reset()
            token_fetch_total.labels(outcome="transport_error").inc()
            log.error(
                BusinessEvents.TOKEN_FETCH_FAILED,
                client_id=self.client_id,
                error=str(e),
            )
            raise

    def get_access_token(self) -> str:
        """
        Get access token from PayU service.

        Returns the cached token while it is valid. Otherwise fetches a new
        one; callers arriving while that fetch is in flight share its result.

        Raises:
            AuthenticationError: PayU rejected the client credentials
            requests.RequestException: the token request itself failed
        """
        with self._lock:
            if self._is_valid():
                return self._access_token
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = Future()

        if not owner:
            return pending.result()

        try:
            token = self._fetch_access_token()
        except BaseException as e:
            with self._lock:
                self._pending = None
            pending.set_exception(e)
            raise

        with self._lock:
            self._access_token = token.access_token
            self._expiry = self.clock() + timedelta(seconds=token.expires_in)
            self._pending = None
            expiry = self._expiry
        pending.set_result(token.access_token)

        token_fetch_total.labels(outcome="success").inc()
        log.info(
            BusinessEvents.TOKEN_REFRESHED,
            client_id=self.client_id,
            expires_in=token.expires_in,
            expires_at=expiry.isoformat(),
        )
        return token.access_token
