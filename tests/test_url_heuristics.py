"""
Tests for URL-only product hints used on the degraded path.
"""

import pytest

from harvest.schema import Store
from harvest.url_heuristics import extract_from_url


class TestExtractFromUrl:
    def test_amazon_slug_and_asin(self):
        fields = extract_from_url(
            "https://www.amazon.com/Apple-AirPods-Pro-2nd-Generation/dp/B0BDHWDR12?th=1", Store.AMAZON)
        assert fields == {"name": "Apple AirPods Pro 2nd Generation", "asin": "B0BDHWDR12", "product_id": None}

    def test_amazon_bare_dp(self):
        """Should not mistake the host name for a slug."""
        fields = extract_from_url("https://www.amazon.com/dp/B0BDHWDR12", Store.AMAZON)
        assert fields["name"] is None
        assert fields["asin"] == "B0BDHWDR12"

    @pytest.mark.parametrize("url,store,name,product_id", [
        ("https://www.walmart.com/ip/Apple-AirPods-Pro/123456789", Store.WALMART, "Apple AirPods Pro", "123456789"),
        ("https://www.target.com/p/threshold-table-lamp/-/A-12345678", Store.TARGET, "Threshold Table Lamp", "12345678"),
        ("https://www.homedepot.com/p/DEWALT-20V-Cordless-Drill/310712345", Store.HOMEDEPOT,
         "DEWALT 20V Cordless Drill", "310712345"),
        ("https://www.ebay.com/itm/Vintage-Film-Camera/254987654321", Store.EBAY, "Vintage Film Camera", "254987654321"),
    ])
    def test_store_patterns(self, url, store, name, product_id):
        fields = extract_from_url(url, store)
        assert fields["name"] == name
        assert fields["product_id"] == product_id

    def test_ebay_id_only(self):
        fields = extract_from_url("https://www.ebay.com/itm/254987654321", Store.EBAY)
        assert fields["name"] is None
        assert fields["product_id"] == "254987654321"

    def test_unknown_store_generic_slug(self):
        fields = extract_from_url("https://example-shop.test/products/blue-widget-deluxe?ref=home", Store.UNKNOWN)
        assert fields["name"] == "Blue Widget Deluxe"

    def test_unknown_store_nothing_usable(self):
        assert extract_from_url("https://example-shop.test/item/123", Store.UNKNOWN)["name"] is None

    def test_known_store_skips_generic_slug(self):
        """Should not guess a name from arbitrary path segments on store pages."""
        assert extract_from_url("https://www.target.com/c/holiday-deals", Store.TARGET)["name"] is None
