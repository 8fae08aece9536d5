"""Tests for the subscription tier → access level policy."""

import pytest

from doclibrary.domain.access_policy import allowed_access_levels, has_access
from doclibrary.domain.enums import AccessLevel, SubscriptionTier


@pytest.mark.parametrize(
    ("tier", "level", "expected"),
    [
        ("bronze", "public", True),
        ("bronze", "basic", False),
        ("silver", "basic", True),
        ("silver", "premium", False),
        ("gold", "premium", True),
        ("gold", "exclusive", False),
        ("platinum", "exclusive", True),
        ("platinum", "public", True),
    ],
)
def test_tier_reaches_levels(tier: str, level: str, expected: bool) -> None:
    assert has_access(tier, level) is expected


def test_levels_are_cumulative() -> None:
    """Each tier reaches everything the tier below it reaches."""
    order = [
        SubscriptionTier.BRONZE,
        SubscriptionTier.SILVER,
        SubscriptionTier.GOLD,
        SubscriptionTier.PLATINUM,
    ]
    for lower, higher in zip(order, order[1:]):
        assert allowed_access_levels(lower) < allowed_access_levels(higher)


def test_absent_or_unknown_tier_is_denied() -> None:
    assert has_access(None, "public") is False
    assert has_access("diamond", "public") is False
    assert allowed_access_levels("diamond") == frozenset()


def test_unknown_or_missing_level_is_denied() -> None:
    assert has_access("platinum", "secret") is False
    assert has_access("platinum", None) is False


def test_accepts_enum_members() -> None:
    assert has_access(SubscriptionTier.GOLD, AccessLevel.BASIC) is True
