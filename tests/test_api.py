"""
Tests for the deals HTTP API.
"""

import orjson
import pytest
from fastapi.testclient import TestClient

from harvest.catalog import ProductFile
from harvest.config import load_settings
from harvest.pipeline import ProductPipeline
from harvest_api.deps import get_app_settings, get_pipeline, get_product_file
from harvest_api.main import app

from tests.helpers import AMAZON_AIRPODS, StaticFetcher, direct_result

AMAZON_URL = "https://www.amazon.com/dp/B0BDHWDR12"

DEALS = [
    {"id": "amazon.com-echo", "name": "Echo Dot", "description": "Smart speaker", "price": 29.99,
     "originalPrice": 49.99, "discountPercent": 40, "store": "amazon", "category": "electronics",
     "affiliateLink": "https://amzn.to/43KgV08"},
    {"id": "amazon.com-tree", "name": "Christmas Tree", "description": "Pre-lit tree", "price": 71.99,
     "originalPrice": 89.99, "discountPercent": 20, "store": "amazon", "category": "garden",
     "affiliateLink": "https://amzn.to/3WFDHTc"},
    {"id": "walmart.com-fryer", "name": "Air Fryer", "description": "Crispy food", "price": 89.0,
     "originalPrice": 179.0, "discountPercent": 50, "store": "walmart", "category": "kitchen",
     "affiliateLink": "https://www.walmart.com/ip/x/1"},
    {"id": "target.com-lamp", "name": "Table Lamp", "description": "Warm light", "price": 25.0,
     "originalPrice": None, "discountPercent": None, "store": "target", "category": "home",
     "affiliateLink": "https://www.target.com/p/lamp/-/A-1"},
]


@pytest.fixture
def client(tmp_path):
    path = tmp_path / "products.json"
    path.write_bytes(orjson.dumps(DEALS))
    pipeline = ProductPipeline(StaticFetcher(direct_result(AMAZON_AIRPODS, AMAZON_URL)))

    app.dependency_overrides[get_product_file] = lambda: ProductFile(path)
    app.dependency_overrides[get_app_settings] = lambda: load_settings({"FEATURED_LIMIT": "2"})
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


def ids(response):
    return [d["id"] for d in response.json()["deals"]]


class TestDeals:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_list_all(self, client):
        response = client.get("/api/deals")
        assert response.status_code == 200
        assert response.json()["count"] == 4

    def test_filters(self, client):
        assert ids(client.get("/api/deals", params={"category": "garden"})) == ["amazon.com-tree"]
        assert ids(client.get("/api/deals", params={"store": "walmart"})) == ["walmart.com-fryer"]
        assert ids(client.get("/api/deals", params={"q": "speaker"})) == ["amazon.com-echo"]
        assert ids(client.get("/api/deals", params={"min_discount": 40})) == ["amazon.com-echo", "walmart.com-fryer"]
        assert ids(client.get("/api/deals", params={"max_price": 30})) == ["amazon.com-echo", "target.com-lamp"]

    def test_bad_category(self, client):
        assert client.get("/api/deals", params={"category": "groceries"}).status_code == 422

    def test_featured(self, client):
        """Should return the biggest discounts above the threshold, capped by the limit."""
        assert ids(client.get("/api/deals/featured")) == ["walmart.com-fryer", "amazon.com-echo"]
        assert ids(client.get("/api/deals", params={"featured": "true"})) == ["walmart.com-fryer", "amazon.com-echo"]

    def test_get_deal(self, client):
        assert client.get("/api/deals/target.com-lamp").json()["name"] == "Table Lamp"
        assert client.get("/api/deals/missing").status_code == 404

    def test_categories(self, client):
        categories = client.get("/api/categories").json()["categories"]
        assert "sports-outdoors" in categories
        assert "other" in categories


class TestExtract:
    def test_extract(self, client):
        response = client.post("/api/products/extract", json={"url": AMAZON_URL})
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Apple AirPods Pro"
        assert body["discountPercent"] == 20
        assert body["qualityTag"] == "real-time-scrape"
        assert body["affiliateLink"] == AMAZON_URL
        # nothing persisted
        assert len(client.get("/api/deals").json()["deals"]) == 4

    def test_category_override(self, client):
        body = client.post("/api/products/extract", json={"url": AMAZON_URL, "category": "office"}).json()
        assert body["category"] == "office"

    def test_failure_is_422(self, client):
        response = client.post("/api/products/extract", json={"url": "not a url"})
        assert response.status_code == 422
        assert "Invalid URL format" in response.json()["detail"]
