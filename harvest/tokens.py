import logging
import time
from typing import Awaitable, Callable, Optional, Tuple

import httpx

from .errors import TokenError

logger = logging.getLogger(__name__)

EBAY_SCOPE = "https://api.ebay.com/oauth/api_scope"

# A refresher returns (access_token, expires_in_seconds).
Refresher = Callable[[], Awaitable[Tuple[str, float]]]


class TokenCache:
    """
    Holds one bearer token and its expiry.

    Not lock-protected: two callers that see an expired token may both
    refresh, and whichever finishes last is kept. Tokens from the same app
    credentials are interchangeable, so this is harmless.
    """

    def __init__(self, refresher: Refresher, clock: Callable[[], float] = time.monotonic, skew: float = 60.0):
        self._refresher = refresher
        self._clock = clock
        self._skew = skew
        self._token: Optional[str] = None
        self._expires_at = 0.0

    @property
    def valid(self) -> bool:
        return self._token is not None and self._clock() < self._expires_at

    async def get(self) -> str:
        if self.valid:
            return self._token
        return await self.force_refresh()

    async def force_refresh(self) -> str:
        token, expires_in = await self._refresher()
        self._token = token
        self._expires_at = self._clock() + max(0.0, float(expires_in) - self._skew)
        logger.info("OAuth token refreshed, valid for %.0fs", self._expires_at - self._clock())
        return token


class EbayTokenRefresher:
    """Client-credentials grant against eBay's identity endpoint."""

    def __init__(self, client: httpx.AsyncClient, app_id: str, cert_id: str,
                 oauth_url: str = "https://api.ebay.com/identity/v1/oauth2/token", timeout: float = 10.0):
        self.client = client
        self.app_id = app_id
        self.cert_id = cert_id
        self.oauth_url = oauth_url
        self.timeout = timeout

    async def __call__(self) -> Tuple[str, float]:
        try:
            resp = await self.client.post(
                self.oauth_url,
                data={"grant_type": "client_credentials", "scope": EBAY_SCOPE},
                auth=(self.app_id, self.cert_id),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise TokenError(f"eBay OAuth request failed: {exc}") from exc
        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if resp.status_code >= 400 or not token:
            raise TokenError(f"eBay OAuth failed (HTTP {resp.status_code}): {resp.text[:200]}")
        return token, float(payload.get("expires_in", 7200))
