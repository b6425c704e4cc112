"""
Tests for price, image and id normalization.
"""

import pytest

from harvest.config import load_settings
from harvest.normalizer import (
    affiliate_link,
    clean_price,
    compute_discount,
    format_price,
    humanize_slug,
    make_id,
    placeholder_image,
    resolve_image_url,
)
from harvest.schema import Store


class TestCleanPrice:
    @pytest.mark.parametrize("text,value", [
        ("$199.99", 199.99),
        ("$1,299.99", 1299.99),
        ("USD 24.50", 24.5),
        ("Price: $ 19", 19.0),
        (42, 42.0),
        (12.5, 12.5),
    ])
    def test_parses(self, text, value):
        assert clean_price(text) == value

    @pytest.mark.parametrize("text", [None, "", "Currently unavailable", "$0.00", 0, float("nan")])
    def test_rejects(self, text):
        assert clean_price(text) is None

    def test_format(self):
        assert format_price(1234.5) == "$1,234.50"
        assert format_price(None) == "n/a"


class TestDiscount:
    def test_rounds_percentage(self):
        assert compute_discount(199.99, 249.99) == 20
        assert compute_discount(71.99, 89.99) == 20
        assert compute_discount(29.99, 49.99) == 40

    @pytest.mark.parametrize("price,original", [
        (10.0, None),
        (10.0, 10.0),
        (10.0, 8.0),
        (0.0, 10.0),
        (None, 10.0),
    ])
    def test_null_without_higher_original(self, price, original):
        assert compute_discount(price, original) is None

    def test_in_range(self):
        for price, original in ((0.01, 10000.0), (9.99, 10.0), (50.0, 100.0)):
            assert 0 <= compute_discount(price, original) <= 100


class TestImages:
    def test_relative_url_resolved(self):
        assert resolve_image_url("/img/a.jpg", "https://shop.test/p/1") == "https://shop.test/img/a.jpg"

    def test_protocol_relative(self):
        assert resolve_image_url("//cdn.shop.test/a.jpg", "https://shop.test/p/1") == "https://cdn.shop.test/a.jpg"

    def test_data_uri_rejected(self):
        assert resolve_image_url("data:image/gif;base64,R0lGOD", "https://shop.test/") is None

    def test_placeholder_uses_asin(self):
        assert "B0BDHWDR12" in placeholder_image(Store.AMAZON, "B0BDHWDR12")

    def test_placeholder_label(self):
        assert placeholder_image(Store.HOMEDEPOT).endswith("text=Home+Depot+Product")


class TestIdsAndLinks:
    def test_make_id(self):
        assert make_id("https://www.amazon.com/dp/B0BDHWDR12", "Apple AirPods Pro") == "amazon.com-apple-airpods-pro"

    def test_humanize_slug(self):
        assert humanize_slug("apple-airpods_pro--2nd-gen") == "Apple Airpods Pro 2nd Gen"

    def test_affiliate_params_for_ebay(self):
        settings = load_settings({"EBAY_CAMPAIGN_ID": "5338", "EBAY_AFFILIATE_ID": "deals"})
        link = affiliate_link("https://www.ebay.com/itm/254987654321", Store.EBAY, settings)
        assert link.startswith("https://www.ebay.com/itm/254987654321?")
        assert "campid=5338" in link
        assert "customid=deals" in link
        assert "toolid=10001" in link

    def test_other_stores_untouched(self):
        settings = load_settings({"EBAY_CAMPAIGN_ID": "5338"})
        url = "https://www.amazon.com/dp/B0BDHWDR12"
        assert affiliate_link(url, Store.AMAZON, settings) == url

    def test_no_campaign_untouched(self, settings):
        url = "https://www.ebay.com/itm/254987654321"
        assert affiliate_link(url, Store.EBAY, settings) == url
