from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from harvest.catalog import ProductFile
from harvest.config import Settings
from harvest.schema import Category, Store

from ..deps import get_app_settings, get_product_file

router = APIRouter()


def _discount(deal: Dict[str, Any]) -> int:
    return deal.get("discountPercent") or 0


def filter_deals(
    deals: List[Dict[str, Any]],
    category: Optional[str] = None,
    store: Optional[str] = None,
    q: Optional[str] = None,
    min_discount: Optional[int] = None,
    max_price: Optional[float] = None,
) -> List[Dict[str, Any]]:
    out = deals
    if category:
        out = [d for d in out if d.get("category") == category]
    if store:
        out = [d for d in out if d.get("store") == store]
    if q:
        needle = q.lower()
        out = [
            d for d in out
            if needle in (d.get("name") or "").lower() or needle in (d.get("description") or "").lower()
        ]
    if min_discount is not None:
        out = [d for d in out if _discount(d) >= min_discount]
    if max_price is not None:
        out = [d for d in out if (d.get("price") or 0) <= max_price]
    return out


def featured(deals: List[Dict[str, Any]], settings: Settings) -> List[Dict[str, Any]]:
    picks = [d for d in deals if _discount(d) >= settings.featured_min_discount]
    picks.sort(key=_discount, reverse=True)
    return picks[: settings.featured_limit]


@router.get("/deals")
def list_deals(
    category: Optional[Category] = None,
    store: Optional[Store] = None,
    q: Optional[str] = Query(default=None, min_length=1),
    min_discount: Optional[int] = Query(default=None, ge=0, le=100),
    max_price: Optional[float] = Query(default=None, gt=0),
    featured_only: bool = Query(default=False, alias="featured"),
    products: ProductFile = Depends(get_product_file),
    settings: Settings = Depends(get_app_settings),
):
    deals = filter_deals(
        products.load(),
        category=category.value if category else None,
        store=store.value if store else None,
        q=q,
        min_discount=min_discount,
        max_price=max_price,
    )
    if featured_only:
        deals = featured(deals, settings)
    return {"deals": deals, "count": len(deals)}


@router.get("/deals/featured")
def featured_deals(
    products: ProductFile = Depends(get_product_file),
    settings: Settings = Depends(get_app_settings),
):
    deals = featured(products.load(), settings)
    return {"deals": deals, "count": len(deals)}


@router.get("/deals/{deal_id}")
def get_deal(deal_id: str, products: ProductFile = Depends(get_product_file)):
    for deal in products.load():
        if deal.get("id") == deal_id:
            return deal
    raise HTTPException(status_code=404, detail="Deal not found")


@router.get("/categories")
def categories():
    return {"categories": [c.value for c in Category]}
