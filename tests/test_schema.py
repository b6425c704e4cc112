"""
Tests for the pipeline data model.
"""

import pytest
from pydantic import ValidationError

from harvest.schema import (
    Category,
    FinishedProduct,
    PipelineState,
    ProductCandidate,
    QualityTag,
    Store,
)


@pytest.fixture
def candidate():
    return ProductCandidate(source_url="https://www.amazon.com/dp/B0BDHWDR12")


def finished(**overrides):
    data = {
        "id": "amazon.com-apple-airpods-pro",
        "name": "Apple AirPods Pro",
        "price": 199.99,
        "image": "https://example.com/a.jpg",
        "store": Store.AMAZON,
        "quality_tag": QualityTag.REAL_TIME_SCRAPE,
        "url": "https://www.amazon.com/dp/B0BDHWDR12",
    }
    data.update(overrides)
    return FinishedProduct(**data)


class TestWriteOnceFields:
    """Tests for ProductCandidate.offer."""

    def test_first_value_wins(self, candidate):
        """Should keep the first non-empty value offered."""
        assert candidate.offer("name", "Apple AirPods Pro") is True
        assert candidate.offer("name", "Something Else") is False
        assert candidate.name == "Apple AirPods Pro"

    def test_empty_values_ignored(self, candidate):
        """Should not let None or blank strings claim a field."""
        assert candidate.offer("price_text", None) is False
        assert candidate.offer("price_text", "   ") is False
        assert candidate.offer("price_text", " $19.99 ") is True
        assert candidate.price_text == "$19.99"

    def test_unknown_field_rejected(self, candidate):
        """Should refuse fields that are not extractable."""
        with pytest.raises(KeyError):
            candidate.offer("quality_tag", "known-database")

    def test_offer_all_skips_extra_keys(self, candidate):
        """Should ignore keys outside the extractable set."""
        candidate.offer_all({"name": "Widget Pro", "category_hint": "Books"})
        assert candidate.name == "Widget Pro"


class TestQualityTag:
    """Tests for monotonic quality assignment."""

    def test_known_database_never_downgraded(self, candidate):
        """Should keep known-database once assigned."""
        candidate.assign_quality(QualityTag.KNOWN_DATABASE)
        assert candidate.assign_quality(QualityTag.URL_HEURISTIC) == QualityTag.KNOWN_DATABASE
        assert candidate.quality_tag == QualityTag.KNOWN_DATABASE

    def test_upgrade_allowed(self, candidate):
        """Should move to a more trusted tag."""
        candidate.assign_quality(QualityTag.BASIC_FALLBACK)
        candidate.assign_quality(QualityTag.PROXY_SCRAPE)
        assert candidate.quality_tag == QualityTag.PROXY_SCRAPE

    def test_rank_order(self):
        ranks = [t.rank for t in (
            QualityTag.KNOWN_DATABASE, QualityTag.REAL_TIME_SCRAPE, QualityTag.PROXY_SCRAPE,
            QualityTag.URL_HEURISTIC, QualityTag.BASIC_FALLBACK,
        )]
        assert ranks == sorted(ranks, reverse=True)


class TestStateMachine:
    """Tests for ProductCandidate.advance."""

    def test_forward_moves(self, candidate):
        for state in (PipelineState.DETECTING, PipelineState.FETCHING, PipelineState.DEGRADED,
                      PipelineState.NORMALIZING, PipelineState.CLASSIFYING, PipelineState.DONE):
            candidate.advance(state)
        assert candidate.state == PipelineState.DONE

    def test_backwards_move_rejected(self, candidate):
        """Should not allow returning to an earlier state."""
        candidate.advance(PipelineState.EXTRACTING)
        with pytest.raises(ValueError):
            candidate.advance(PipelineState.FETCHING)

    def test_terminal_state_is_final(self, candidate):
        """Should reject any move after Failed."""
        candidate.advance(PipelineState.FAILED)
        with pytest.raises(ValueError):
            candidate.advance(PipelineState.DONE)


class TestFinishedProduct:
    """Tests for the output record."""

    def test_record_uses_camel_case_keys(self):
        record = finished(original_price=249.99, discount_percent=20).to_record()
        assert record["originalPrice"] == 249.99
        assert record["discountPercent"] == 20
        assert record["qualityTag"] == "real-time-scrape"
        assert record["affiliateLink"] == "https://www.amazon.com/dp/B0BDHWDR12"
        assert record["store"] == "amazon"
        assert record["category"] == "other"

    def test_discount_requires_higher_original(self):
        """Should reject a discount when originalPrice is not above price."""
        with pytest.raises(ValidationError):
            finished(original_price=150.0, discount_percent=20)

    def test_discount_requires_original(self):
        with pytest.raises(ValidationError):
            finished(discount_percent=10)

    def test_accepts_aliases(self):
        product = FinishedProduct.model_validate({
            "id": "x-widget", "name": "Widget", "price": 5.0, "image": "https://e.com/i.png",
            "store": "unknown", "qualityTag": "basic-fallback", "affiliateLink": "https://e.com/w",
            "category": "home",
        })
        assert product.quality_tag == QualityTag.BASIC_FALLBACK
        assert product.category == Category.HOME

    def test_frozen(self):
        product = finished()
        with pytest.raises(ValidationError):
            product.price = 1.0
