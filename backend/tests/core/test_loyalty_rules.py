"""Loyalty Rules - tier thresholds, next-tier targets, benefits.

Tests:
    - level_for_points at and around every threshold
    - next_level_points for each tier; top tier reports its own threshold
    - Unknown level strings fall back to bronze
"""

import pytest

from freezefit.core.domain_types import LoyaltyLevel
from freezefit.core.loyalty_rules import (
    LEVEL_BENEFITS, LEVEL_THRESHOLDS, benefits_for_level, build_summary,
    level_for_points, next_level_points,
)


@pytest.mark.parametrize("points, level", [
    (0, LoyaltyLevel.BRONZE),
    (199, LoyaltyLevel.BRONZE),
    (200, LoyaltyLevel.SILVER),
    (499, LoyaltyLevel.SILVER),
    (500, LoyaltyLevel.GOLD),
    (1000, LoyaltyLevel.PLATINUM),
    (1999, LoyaltyLevel.PLATINUM),
    (2000, LoyaltyLevel.DIAMOND),
    (10_000, LoyaltyLevel.DIAMOND),
])
def test_level_for_points(points, level):
    assert level_for_points(points) is level


def test_level_is_monotonic():
    levels = list(LoyaltyLevel)
    previous = 0
    for points in range(0, 2500, 25):
        index = levels.index(level_for_points(points))
        assert index >= previous
        previous = index


@pytest.mark.parametrize("level, expected", [
    (LoyaltyLevel.BRONZE, 200),
    (LoyaltyLevel.SILVER, 500),
    (LoyaltyLevel.GOLD, 1000),
    (LoyaltyLevel.PLATINUM, 2000),
    (LoyaltyLevel.DIAMOND, 2000),
])
def test_next_level_points(level, expected):
    assert next_level_points(level) == expected


def test_next_level_points_accepts_stored_value():
    assert next_level_points("כסף") == 500


def test_benefits_grow_with_tier():
    counts = [len(LEVEL_BENEFITS[level]) for level in LEVEL_THRESHOLDS]
    assert counts == sorted(counts)


def test_unknown_level_falls_back_to_bronze():
    assert benefits_for_level("no-such-tier") == LEVEL_BENEFITS[LoyaltyLevel.BRONZE]
    assert next_level_points("no-such-tier") == 200


def test_benefits_are_a_copy():
    benefits = benefits_for_level(LoyaltyLevel.GOLD)
    benefits.append("free car")
    assert "free car" not in LEVEL_BENEFITS[LoyaltyLevel.GOLD]


def test_build_summary():
    summary = build_summary(650, 120, "זהב")
    assert summary == {
        "total_points": 650,
        "current_points": 120,
        "loyalty_level": "זהב",
        "next_level_points": 1000,
        "benefits": LEVEL_BENEFITS[LoyaltyLevel.GOLD],
    }
