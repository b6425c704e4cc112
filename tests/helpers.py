"""Canned pages and offline stand-ins for the network."""

import httpx

from harvest.fetcher import FetchResult

PADDING = "<!-- " + "x" * 1200 + " -->"


def page(body: str, head: str = "") -> str:
    """Wrap a fragment in a full HTML document long enough to pass the content threshold."""
    return f"<html><head>{head}</head><body>{body}{PADDING}</body></html>"


AMAZON_AIRPODS = page(
    '<span id="productTitle">Apple AirPods Pro</span>'
    '<span class="a-offscreen">$199.99</span>'
    '<span class="a-text-price"><span class="a-offscreen">$249.99</span></span>'
)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class StaticFetcher:
    """Stands in for ContentFetcher: returns a fixed result or raises a fixed error."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.result


def direct_result(html: str, url: str) -> FetchResult:
    return FetchResult(html, url, "direct", False)
