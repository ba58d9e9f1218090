"""Tests for failure-percentage classification and percent resolution."""
from __future__ import annotations

import pytest

from deliberation.services.classifier import (
    CATEGORY_GREEN,
    CATEGORY_GREEN_ZERO,
    CATEGORY_RED,
    CATEGORY_YELLOW,
    COLOR_RED,
    COLOR_YELLOW,
    Period,
    calc_percent,
    categorize,
    color_for_percent,
    most_severe,
    resolve_percent,
    resolve_zone,
    zone_for_percent,
    zone_from_category,
)


@pytest.mark.parametrize(
    ("pct", "expected"),
    [
        (0, CATEGORY_GREEN_ZERO),
        (0.01, CATEGORY_GREEN),
        (10, CATEGORY_GREEN),
        (10.01, CATEGORY_YELLOW),
        (40, CATEGORY_YELLOW),
        (40.01, CATEGORY_RED),
        (100, CATEGORY_RED),
        (150, CATEGORY_RED),
        (-5, CATEGORY_GREEN),
    ],
)
def test_categorize_boundaries(pct: float, expected: str) -> None:
    assert categorize(pct) == expected


def test_severity_never_decreases_as_percent_grows() -> None:
    severity = {"green": 0, "yellow": 1, "red": 2}
    values = [step / 4 for step in range(0, 401)]
    ranks = [severity[zone_for_percent(value)] for value in values]
    assert ranks == sorted(ranks)


def test_calc_percent_examples() -> None:
    assert round(calc_percent(18, 184), 2) == 9.78
    assert round(calc_percent(9, 307), 2) == 2.93
    assert calc_percent("16", "201") == pytest.approx(7.96, abs=0.01)


@pytest.mark.parametrize("enrolled", [0, None, "", "abc", -3, float("inf")])
def test_calc_percent_undefined_without_positive_enrollment(enrolled) -> None:
    assert calc_percent(5, enrolled) is None


def test_resolve_percent_prefers_computed_value() -> None:
    assert resolve_percent(50, 18, 184) == pytest.approx(9.7826, abs=1e-3)


def test_resolve_percent_falls_back_to_stored_value() -> None:
    assert resolve_percent(50, 5, 0) == 50
    assert categorize(resolve_percent(50, 5, 0)) == CATEGORY_RED
    assert resolve_percent("12.5", None, None) == 12.5
    assert resolve_percent(None, None, None) is None


def test_zone_from_category_uses_prefix() -> None:
    assert zone_from_category("GREEN (0%)") == "green"
    assert zone_from_category("yellow (10.01%-40%)") == "yellow"
    assert zone_from_category("RED") == "red"
    assert zone_from_category("N/A") is None
    assert zone_from_category(None) is None


def test_resolve_zone_uses_stored_category_when_percent_unknown() -> None:
    assert resolve_zone(None, 5, 0, "YELLOW (10.01%-40%)") == "yellow"
    assert resolve_zone(None, None, None, None) is None
    # A computable percent wins over a contradicting stored label.
    assert resolve_zone(None, 1, 100, "RED (40.01%-100%)") == "green"


def test_colors_follow_zone() -> None:
    assert color_for_percent(25) == COLOR_YELLOW
    assert color_for_percent(41) == COLOR_RED


def test_most_severe_ignores_missing_zones() -> None:
    assert most_severe(["green", None, "yellow"]) == "yellow"
    assert most_severe([None, None]) is None


def test_period_field_names() -> None:
    assert Period.P2.failed_field == "p2_failed"
    assert Period.P3.percent_field == "p3_percent"
    assert Period.P1.category_field == "p1_category"
