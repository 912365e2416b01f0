"""Loyalty Rules - pure level, threshold and benefit computation.

Invariants:
    - LEVEL_THRESHOLDS is the single source of truth for tier cutoffs
    - level_for_points is monotonic in total points
    - All functions are PURE: no DB access, no mutation
"""

from freezefit.core.domain_types import LoyaltyLevel


LEVEL_THRESHOLDS: dict[LoyaltyLevel, int] = {
    LoyaltyLevel.BRONZE: 0,
    LoyaltyLevel.SILVER: 200,
    LoyaltyLevel.GOLD: 500,
    LoyaltyLevel.PLATINUM: 1000,
    LoyaltyLevel.DIAMOND: 2000,
}

_LEVEL_ORDER: list[LoyaltyLevel] = list(LEVEL_THRESHOLDS)

LEVEL_BENEFITS: dict[LoyaltyLevel, list[str]] = {
    LoyaltyLevel.BRONZE: [
        "נקודות על כל טיפול",
        "גישה למבצעים מיוחדים",
    ],
    LoyaltyLevel.SILVER: [
        "נקודות על כל טיפול",
        "הנחה של 5% על טיפולים",
        "גישה למבצעים מיוחדים",
        "עדיפות בתורים",
    ],
    LoyaltyLevel.GOLD: [
        "נקודות על כל טיפול",
        "הנחה של 10% על טיפולים",
        "גישה למבצעים בלעדיים",
        "עדיפות בהזמנת תורים",
        "נקודות בונוס על ביקורות",
    ],
    LoyaltyLevel.PLATINUM: [
        "נקודות על כל טיפול",
        "הנחה של 15% על טיפולים",
        "גישה למבצעים בלעדיים",
        "עדיפות בהזמנת תורים",
        "נקודות בונוס על ביקורות",
        "טיפול מתנה חודשי",
    ],
    LoyaltyLevel.DIAMOND: [
        "נקודות על כל טיפול",
        "הנחה של 20% על טיפולים",
        "גישה למבצעים בלעדיים",
        "עדיפות בהזמנת תורים",
        "נקודות בונוס על ביקורות",
        "טיפול מתנה חודשי",
        "יועץ אישי ייעודי",
    ],
}


def level_for_points(total_points: int) -> LoyaltyLevel:
    """Highest tier whose threshold total_points reaches."""
    level = LoyaltyLevel.BRONZE
    for candidate in _LEVEL_ORDER:
        if total_points >= LEVEL_THRESHOLDS[candidate]:
            level = candidate
    return level


def next_level_points(level: LoyaltyLevel | str) -> int:
    """Threshold of the tier above `level`. The top tier reports its own."""
    level = _coerce_level(level)
    index = _LEVEL_ORDER.index(level)
    if index + 1 >= len(_LEVEL_ORDER):
        return LEVEL_THRESHOLDS[level]
    return LEVEL_THRESHOLDS[_LEVEL_ORDER[index + 1]]


def benefits_for_level(level: LoyaltyLevel | str) -> list[str]:
    """Benefits for a tier; unknown tiers fall back to bronze."""
    return list(LEVEL_BENEFITS[_coerce_level(level)])


def build_summary(
    total_points: int, current_points: int, level: LoyaltyLevel | str,
) -> dict:
    """Loyalty summary as returned by the loyalty endpoints."""
    level = _coerce_level(level)
    return {
        "total_points": total_points,
        "current_points": current_points,
        "loyalty_level": level.value,
        "next_level_points": next_level_points(level),
        "benefits": benefits_for_level(level),
    }


def _coerce_level(level: LoyaltyLevel | str) -> LoyaltyLevel:
    try:
        return LoyaltyLevel(level)
    except ValueError:
        return LoyaltyLevel.BRONZE
