"""Subscription tier → document access level policy. Pure; no I/O."""

from doclibrary.domain.enums import AccessLevel, SubscriptionTier

# Cumulative: each tier reaches everything the tier before it reaches.
TIER_ACCESS: dict[SubscriptionTier, frozenset[AccessLevel]] = {
    SubscriptionTier.BRONZE: frozenset({AccessLevel.PUBLIC}),
    SubscriptionTier.SILVER: frozenset({AccessLevel.PUBLIC, AccessLevel.BASIC}),
    SubscriptionTier.GOLD: frozenset(
        {AccessLevel.PUBLIC, AccessLevel.BASIC, AccessLevel.PREMIUM}
    ),
    SubscriptionTier.PLATINUM: frozenset(
        {
            AccessLevel.PUBLIC,
            AccessLevel.BASIC,
            AccessLevel.PREMIUM,
            AccessLevel.EXCLUSIVE,
        }
    ),
}


def _coerce_tier(tier: str | SubscriptionTier | None) -> SubscriptionTier | None:
    if tier is None:
        return None
    try:
        return SubscriptionTier(tier)
    except ValueError:
        return None


def allowed_access_levels(tier: str | SubscriptionTier | None) -> frozenset[AccessLevel]:
    """Return the access levels reachable by tier; empty for absent or unknown tiers."""
    resolved = _coerce_tier(tier)
    if resolved is None:
        return frozenset()
    return TIER_ACCESS[resolved]


def has_access(
    tier: str | SubscriptionTier | None,
    access_level: str | AccessLevel | None,
) -> bool:
    """Return True if a subscriber on tier may reach a document at access_level.

    Unknown tiers, unknown access levels and an absent tier are all denied.
    """
    if access_level is None:
        return False
    try:
        level = AccessLevel(access_level)
    except ValueError:
        return False
    return level in allowed_access_levels(tier)
