import logging
from typing import Any, Dict, Optional

import httpx

from .errors import HarvestError
from .stores import extract_ebay_item_id
from .tokens import TokenCache

logger = logging.getLogger(__name__)


def _money(obj: Any) -> Optional[str]:
    if isinstance(obj, dict) and obj.get("value") not in (None, ""):
        return str(obj["value"])
    return None


class EbayBrowseClient:
    """
    Authenticated item lookup through the Browse API, used ahead of page
    scraping for eBay item URLs when app credentials are configured.
    """

    def __init__(self, client: httpx.AsyncClient, tokens: TokenCache,
                 browse_url: str = "https://api.ebay.com/buy/browse/v1",
                 marketplace: str = "EBAY_US", timeout: float = 10.0):
        self.client = client
        self.tokens = tokens
        self.browse_url = browse_url.rstrip("/")
        self.marketplace = marketplace
        self.timeout = timeout

    async def _get_item(self, item_id: str, token: str) -> httpx.Response:
        return await self.client.get(
            f"{self.browse_url}/item/get_item_by_legacy_id",
            params={"legacy_item_id": item_id},
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "X-EBAY-C-MARKETPLACE-ID": self.marketplace,
            },
            timeout=self.timeout,
        )

    async def fetch_item(self, url: str) -> Optional[Dict[str, Optional[str]]]:
        item_id = extract_ebay_item_id(url)
        if not item_id:
            return None
        try:
            resp = await self._get_item(item_id, await self.tokens.get())
            if resp.status_code == 401:
                # token revoked or expired early; one retry with a fresh one
                resp = await self._get_item(item_id, await self.tokens.force_refresh())
            if resp.status_code >= 400:
                logger.warning("eBay Browse API returned HTTP %s for item %s", resp.status_code, item_id)
                return None
            return self.to_fields(resp.json(), item_id)
        except (HarvestError, httpx.HTTPError, ValueError) as exc:
            logger.warning("eBay Browse API lookup failed for %s: %s", url, exc)
        except (AttributeError, TypeError, KeyError, IndexError) as exc:
            logger.warning("Unexpected eBay Browse API item shape for %s: %s", url, exc)
        return None

    @staticmethod
    def to_fields(item: Dict[str, Any], item_id: str) -> Dict[str, Optional[str]]:
        image = (item.get("image") or {}).get("imageUrl")
        if not image:
            thumbs = item.get("additionalImages") or item.get("thumbnailImages") or []
            image = thumbs[0].get("imageUrl") if thumbs else None

        parts = [p for p in (
            item.get("shortDescription"),
            f"Condition: {item['condition']}" if item.get("condition") else None,
            f"Brand: {item['brand']}" if item.get("brand") else None,
            f"Sold by: {item['seller']['username']}" if (item.get("seller") or {}).get("username") else None,
        ) if p]

        category_path = item.get("categoryPath") or ""
        return {
            "name": item.get("title"),
            "price_text": _money(item.get("price")),
            "original_price_text": _money((item.get("marketingPrice") or {}).get("originalPrice")),
            "image_url": image,
            "description": " • ".join(parts) or None,
            "product_id": item_id,
            "category_hint": category_path.split("|")[0] if category_path else None,
        }
