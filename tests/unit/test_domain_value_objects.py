"""Tests for domain value objects: plans, durations, payer validation, list queries, metadata."""

from datetime import UTC, datetime, timedelta

import pytest

from doclibrary.domain.enums import AccessLevel, DocumentStatus, MobileMoneyProvider, SubscriptionTier
from doclibrary.domain.exceptions import ValidationException
from doclibrary.domain.value_objects import (
    DateRange,
    DocumentFilter,
    DocumentMetadata,
    DocumentSort,
    MobileMoneyPayer,
    Plan,
    compute_end_date,
    duration_for,
    merge_metadata,
)


class TestDurations:
    def test_one_day(self) -> None:
        assert duration_for("1 Day") == timedelta(days=1)

    def test_per_year(self) -> None:
        assert duration_for("Per Year") == timedelta(days=365)

    def test_other_labels_default_to_thirty_days(self) -> None:
        assert duration_for("Monthly") == timedelta(days=30)
        assert duration_for("") == timedelta(days=30)

    def test_end_date_adds_duration(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=UTC)
        assert compute_end_date(start, "per year") == datetime(2024, 12, 31, tzinfo=UTC)


class TestPlan:
    def test_slug_and_tier(self) -> None:
        plan = Plan(name=" Gold ", price=50.0, duration="Per Year")
        assert plan.slug == "gold"
        assert plan.tier is SubscriptionTier.GOLD

    def test_non_tier_plan_rejected_on_tier(self) -> None:
        with pytest.raises(ValidationException, match="does not map"):
            _ = Plan(name="Enterprise", price=1.0, duration="").tier

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationException):
            Plan(name="Gold", price=-1, duration="")

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationException):
            Plan(name="  ", price=1, duration="")


class TestMobileMoneyPayer:
    def test_valid(self) -> None:
        payer = MobileMoneyPayer.parse("0771234567", "MTN")
        assert payer.phone_number == "0771234567"
        assert payer.provider is MobileMoneyProvider.MTN

    @pytest.mark.parametrize("number", ["077123456", "07712345678", "07712345ab", ""])
    def test_number_must_be_ten_digits(self, number: str) -> None:
        with pytest.raises(ValidationException):
            MobileMoneyPayer.parse(number, "airtel")

    def test_provider_required(self) -> None:
        with pytest.raises(ValidationException, match="provide mobile number"):
            MobileMoneyPayer.parse("0771234567", None)

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValidationException, match="Unsupported"):
            MobileMoneyPayer.parse("0771234567", "mpesa")


class TestDocumentFilter:
    def test_keyword_matches_title_case_insensitively(self, document_factory) -> None:
        budget = document_factory(id="1", title="Budget Speech")
        finance = document_factory(id="2", title="Finance Bill", metadata={})
        docs = [budget, finance]
        assert [d for d in docs if DocumentFilter(keywords=("BUDGET",)).matches_keywords(d)] == [budget]
        assert [d for d in docs if DocumentFilter(keywords=("tax", "bill")).matches_keywords(d)] == [finance]

    def test_keywords_match_metadata_keywords(self, document_factory) -> None:
        doc = document_factory(title="Order Paper", metadata={"keywords": ["Appropriation"]})
        assert DocumentFilter(keywords=("appropriation",)).matches_keywords(doc)
        assert not DocumentFilter(keywords=("tax",)).matches_keywords(doc)

    def test_naive_date_range_bounds_are_utc(self) -> None:
        assert DateRange(start=datetime(2024, 3, 1)).start == datetime(2024, 3, 1, tzinfo=UTC)

    def test_blank_keywords_do_not_constrain(self) -> None:
        assert not DocumentFilter(keywords=("  ",)).has_keywords

    def test_inverted_date_range_rejected(self) -> None:
        with pytest.raises(ValidationException):
            DateRange(start=datetime(2024, 2, 1), end=datetime(2024, 1, 1))


class TestDocumentSort:
    def test_metadata_field(self) -> None:
        sort = DocumentSort(field="metadata.uploadDate", direction="asc")
        assert sort.is_metadata_field
        assert sort.metadata_key == "uploadDate"
        assert sort.ascending

    def test_unknown_column_rejected(self) -> None:
        with pytest.raises(ValidationException, match="unknown field"):
            DocumentSort(field="file_url")

    def test_bad_metadata_key_rejected(self) -> None:
        with pytest.raises(ValidationException):
            DocumentSort(field="metadata.a;drop")

    def test_bad_direction_rejected(self) -> None:
        with pytest.raises(ValidationException):
            DocumentSort(direction="up")  # type: ignore[arg-type]


class TestDocumentMetadata:
    def test_round_trip_keeps_unknown_keys(self) -> None:
        stored = {"status": "active", "accessLevel": "premium", "judge": "X", "custom": 1}
        meta = DocumentMetadata.from_dict(stored)
        assert meta.status is DocumentStatus.ACTIVE
        assert meta.access_level is AccessLevel.PREMIUM
        assert meta.to_dict() == stored

    def test_invalid_status_rejected(self) -> None:
        with pytest.raises(ValidationException, match="status"):
            DocumentMetadata.from_dict({"status": "deleted"})

    def test_missing_access_level_is_public(self) -> None:
        assert DocumentMetadata.from_dict({}).effective_access_level is AccessLevel.PUBLIC


def test_merge_metadata_keeps_unrelated_keys() -> None:
    stored = {"keywords": ["budget"], "status": "active", "extra": {"a": 1, "b": 2}}
    merged = merge_metadata(stored, {"status": "archived", "extra": {"b": 3}})
    assert merged == {"keywords": ["budget"], "status": "archived", "extra": {"a": 1, "b": 3}}
    assert stored["status"] == "active"
