import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import quote

import httpx

from .errors import FetchBlocked, FetchError, FetchExhausted, FetchTimeout

logger = logging.getLogger(__name__)

UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
BROWSER_HEADERS = {
    "User-Agent": UA,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Cache-Control": "no-cache",
}


@dataclass(frozen=True)
class FetchResult:
    html: str
    final_url: str
    source: str
    via_proxy: bool


class PageSource:
    """One way of getting a page's HTML. Subclasses override build_url/parse."""

    name = "source"
    timeout = 10.0
    via_proxy = True
    headers = BROWSER_HEADERS

    def build_url(self, url: str) -> str:
        raise NotImplementedError

    def parse(self, response: httpx.Response, url: str) -> FetchResult:
        return FetchResult(response.text, url, self.name, self.via_proxy)

    async def fetch(self, client: httpx.AsyncClient, url: str) -> FetchResult:
        target = self.build_url(url)
        try:
            response = await client.get(target, headers=self.headers, timeout=self.timeout, follow_redirects=True)
        except httpx.TimeoutException as exc:
            raise FetchTimeout(f"{self.name} timed out after {self.timeout}s", source=self.name, url=url) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"{self.name} request failed: {exc}", source=self.name, url=url) from exc

        if response.status_code >= 400:
            raise FetchBlocked(
                f"{self.name} returned HTTP {response.status_code}",
                source=self.name, url=url, status_code=response.status_code,
            )
        return self.parse(response, url)


class DirectSource(PageSource):
    name = "direct"
    via_proxy = False

    def __init__(self, timeout: float = 8.0):
        self.timeout = timeout

    def build_url(self, url: str) -> str:
        return url

    def parse(self, response: httpx.Response, url: str) -> FetchResult:
        return FetchResult(response.text, str(response.url), self.name, False)


class AllOriginsRelay(PageSource):
    """Returns JSON: {"contents": "<html>", "status": {"url": ..., "http_code": ...}}."""

    name = "allorigins"
    timeout = 15.0
    endpoint = "https://api.allorigins.win/get?url="
    headers = {**BROWSER_HEADERS, "Accept": "application/json, text/html, */*"}

    def build_url(self, url: str) -> str:
        return self.endpoint + quote(url, safe="")

    def parse(self, response: httpx.Response, url: str) -> FetchResult:
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchBlocked("allorigins returned a non-JSON body", source=self.name, url=url) from exc
        if not isinstance(data, dict) or not isinstance(data.get("contents"), str):
            raise FetchBlocked("no content in allorigins response", source=self.name, url=url)
        status = data.get("status") or {}
        code = status.get("http_code")
        if isinstance(code, int) and code >= 400:
            raise FetchBlocked(f"target answered HTTP {code} via allorigins", source=self.name, url=url, status_code=code)
        final_url = status.get("url") if isinstance(status.get("url"), str) else url
        return FetchResult(data["contents"], final_url, self.name, True)


class CorsProxyRelay(PageSource):
    name = "corsproxy"
    timeout = 10.0
    endpoint = "https://corsproxy.io/?"

    def build_url(self, url: str) -> str:
        return self.endpoint + quote(url, safe="")


class CodeTabsRelay(PageSource):
    name = "codetabs"
    timeout = 10.0
    endpoint = "https://api.codetabs.com/v1/proxy?quest="

    def build_url(self, url: str) -> str:
        return self.endpoint + quote(url, safe="")


class ScraperApiRelay(PageSource):
    name = "scraperapi"
    timeout = 15.0
    endpoint = "https://api.scraperapi.com"

    def __init__(self, api_key: str):
        self.api_key = api_key

    def build_url(self, url: str) -> str:
        return (
            f"{self.endpoint}?api_key={quote(self.api_key, safe='')}"
            f"&url={quote(url, safe='')}&keep_headers=true&country=us"
        )


def default_sources(settings=None) -> List[PageSource]:
    direct_timeout = settings.direct_timeout if settings is not None else 8.0
    sources: List[PageSource] = [DirectSource(timeout=direct_timeout)]
    if settings is not None and settings.scraperapi_key:
        sources.append(ScraperApiRelay(settings.scraperapi_key))
    sources += [AllOriginsRelay(), CorsProxyRelay(), CodeTabsRelay()]
    return sources


class ContentFetcher:
    """
    Direct GET first, then each relay in order. The first body at least
    ``min_length`` characters long wins; several relays answer blocked
    requests with a near-empty shell page.
    """

    def __init__(self, client: httpx.AsyncClient, sources: Optional[Sequence[PageSource]] = None,
                 min_length: int = 1000):
        self.client = client
        self.sources = list(sources) if sources is not None else default_sources()
        self.min_length = min_length

    async def fetch(self, url: str) -> FetchResult:
        failures: List[FetchError] = []
        for source in self.sources:
            try:
                result = await source.fetch(self.client, url)
                if len(result.html or "") < self.min_length:
                    raise FetchBlocked(
                        f"{source.name} returned insufficient content ({len(result.html or '')} chars)",
                        source=source.name, url=url,
                    )
            except FetchError as exc:
                logger.warning("[FETCH] %s failed for %s: %s", source.name, url, exc)
                failures.append(exc)
                continue
            logger.info("[FETCH] %s fetched %d chars for %s", source.name, len(result.html), url)
            return result
        raise FetchExhausted(url, failures)
