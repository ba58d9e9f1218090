"""Failure-percentage classification into GREEN/YELLOW/RED categories."""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Literal

Zone = Literal["green", "yellow", "red"]
ZONES: tuple[Zone, ...] = ("green", "yellow", "red")

CATEGORY_GREEN_ZERO = "GREEN (0%)"
CATEGORY_GREEN = "GREEN (0.01%-10%)"
CATEGORY_YELLOW = "YELLOW (10.01%-40%)"
CATEGORY_RED = "RED (40.01%-100%)"

GREEN_UPPER = 10.0
YELLOW_UPPER = 40.0

COLOR_GREEN = "#22c55e"
COLOR_YELLOW = "#facc15"
COLOR_RED = "#ef4444"

ZONE_COLORS: dict[Zone, str] = {
    "green": COLOR_GREEN,
    "yellow": COLOR_YELLOW,
    "red": COLOR_RED,
}

_SEVERITY: dict[Zone, int] = {"green": 0, "yellow": 1, "red": 2}


class Period(str, Enum):
    """Evaluation window within an academic term."""

    P1 = "P1"
    P2 = "P2"
    P3 = "P3"

    @property
    def failed_field(self) -> str:
        return f"{self.value.lower()}_failed"

    @property
    def percent_field(self) -> str:
        return f"{self.value.lower()}_percent"

    @property
    def category_field(self) -> str:
        return f"{self.value.lower()}_category"


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def categorize(pct: float) -> str:
    """Return the category label for a failure percentage."""

    if pct == 0:
        return CATEGORY_GREEN_ZERO
    if pct <= GREEN_UPPER:
        return CATEGORY_GREEN
    if pct <= YELLOW_UPPER:
        return CATEGORY_YELLOW
    return CATEGORY_RED


def calc_percent(failed: Any, enrolled: Any) -> float | None:
    """Compute ``failed / enrolled * 100``; ``None`` when it is undefined."""

    f = _to_number(failed)
    e = _to_number(enrolled)
    if f is None or e is None or e <= 0:
        return None
    return f / e * 100


def resolve_percent(stored_percent: Any, failed: Any, enrolled: Any) -> float | None:
    """Prefer the percent computed from raw counts, then the stored percent."""

    computed = calc_percent(failed, enrolled)
    if computed is not None:
        return computed
    return _to_number(stored_percent)


def zone_from_category(label: str | None) -> Zone | None:
    """Map a category label to its zone by prefix."""

    if not label:
        return None
    upper = label.strip().upper()
    if upper.startswith("GREEN"):
        return "green"
    if upper.startswith("YELLOW"):
        return "yellow"
    if upper.startswith("RED"):
        return "red"
    return None


def zone_for_percent(pct: float) -> Zone:
    zone = zone_from_category(categorize(pct))
    assert zone is not None
    return zone


def resolve_zone(
    stored_percent: Any,
    failed: Any,
    enrolled: Any,
    stored_category: str | None,
) -> Zone | None:
    """Bucket a period by resolved percent, falling back to the stored label.

    Returns ``None`` when neither source yields a zone, in which case the
    record is left out of category distributions.
    """

    pct = resolve_percent(stored_percent, failed, enrolled)
    if pct is not None:
        return zone_for_percent(pct)
    return zone_from_category(stored_category)


def color_for_percent(pct: float) -> str:
    return ZONE_COLORS[zone_for_percent(pct)]


def zone_color(zone: Zone) -> str:
    return ZONE_COLORS[zone]


def most_severe(zones: list[Zone | None]) -> Zone | None:
    """Return the most severe zone in ``zones`` ignoring ``None`` entries."""

    known = [zone for zone in zones if zone is not None]
    if not known:
        return None
    return max(known, key=_SEVERITY.__getitem__)


def period_values(record: Any, period: Period) -> tuple[Any, Any, Any, Any]:
    """Return ``(percent, failed, enrolled, category)`` for a record and period.

    ``record`` may be a mapping or an object exposing the teacher attributes.
    """

    def _get(name: str) -> Any:
        if isinstance(record, dict):
            return record.get(name)
        return getattr(record, name, None)

    return (
        _get(period.percent_field),
        _get(period.failed_field),
        _get("enrolled_students"),
        _get(period.category_field),
    )


__all__ = [
    "CATEGORY_GREEN",
    "CATEGORY_GREEN_ZERO",
    "CATEGORY_RED",
    "CATEGORY_YELLOW",
    "COLOR_GREEN",
    "COLOR_RED",
    "COLOR_YELLOW",
    "Period",
    "ZONES",
    "ZONE_COLORS",
    "Zone",
    "calc_percent",
    "categorize",
    "color_for_percent",
    "most_severe",
    "period_values",
    "resolve_percent",
    "resolve_zone",
    "zone_color",
    "zone_for_percent",
    "zone_from_category",
]
