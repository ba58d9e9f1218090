"""Reporting service aggregating teacher failure metrics per period."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, List, Sequence
import csv
import io

from deliberation.services.classifier import (
    ZONE_COLORS,
    Period,
    color_for_percent,
    period_values,
    resolve_percent,
    resolve_zone,
)
from deliberation.services.listing import full_name


def coerce_period(period: Period | str) -> Period:
    try:
        return Period(str(period.value if isinstance(period, Period) else period).upper())
    except ValueError as exc:
        raise ValueError(f"Unknown period {period!r}; expected P1, P2 or P3") from exc


def _count(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _get(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def top_failure_percent(
    records: Iterable[Any],
    period: Period | str,
    limit: int = 10,
) -> list[dict]:
    """Return the ``limit`` records with the highest resolved failure percent."""

    selected = coerce_period(period)
    rows: list[dict] = []
    for record in records:
        stored, failed, enrolled, _ = period_values(record, selected)
        pct = resolve_percent(stored, failed, enrolled)
        if pct is None:
            continue
        percent = round(pct, 2)
        rows.append(
            {
                "name": full_name(record),
                "teacher_id": _get(record, "teacher_id") or "",
                "percent": percent,
                "color": color_for_percent(percent),
            }
        )
    rows.sort(key=lambda row: row["percent"], reverse=True)
    return rows[:limit]


def enrollment_totals(records: Iterable[Any], period: Period | str) -> dict:
    """Sum enrolled and failed counts across all records for a period."""

    selected = coerce_period(period)
    prepared = list(records)
    return {
        "label": f"Totals {selected.value}",
        "enrolled": sum(_count(_get(record, "enrolled_students")) for record in prepared),
        "failed": sum(_count(_get(record, selected.failed_field)) for record in prepared),
    }


def category_distribution(records: Iterable[Any], period: Period | str) -> list[dict]:
    """Count GREEN/YELLOW/RED records for a period.

    Records without a resolvable percent are bucketed by their stored
    category label; records with neither are not counted.
    """

    selected = coerce_period(period)
    counts = {"green": 0, "yellow": 0, "red": 0}
    for record in records:
        zone = resolve_zone(*period_values(record, selected))
        if zone is not None:
            counts[zone] += 1
    return [
        {"name": zone.upper(), "value": value, "color": ZONE_COLORS[zone]}
        for zone, value in counts.items()
    ]


def period_report(
    records: Iterable[Any],
    period: Period | str,
    limit: int = 10,
) -> dict:
    """Bundle the top-N, totals and distribution series for one period."""

    selected = coerce_period(period)
    prepared = list(records)
    return {
        "period": selected.value,
        "generated_at": datetime.now(timezone.utc),
        "top_percent": top_failure_percent(prepared, selected, limit),
        "totals": enrollment_totals(prepared, selected),
        "distribution": category_distribution(prepared, selected),
    }


def _csv_from_rows(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def build_report_csv(report: dict) -> str:
    """Render a period report's top-N rows, totals and distribution as CSV."""

    csv_rows: List[List[str]] = [
        [str(rank), row["teacher_id"], row["name"], f"{row['percent']:.2f}"]
        for rank, row in enumerate(report["top_percent"], start=1)
    ]
    totals = report["totals"]
    csv_rows.append([])
    csv_rows.append([totals["label"], "Enrolled", str(totals["enrolled"]), ""])
    csv_rows.append([totals["label"], "Failed", str(totals["failed"]), ""])
    for slice_ in report["distribution"]:
        csv_rows.append(["Category", slice_["name"], str(slice_["value"]), ""])
    return _csv_from_rows(
        ["Rank", "FacultyNo", "FacultyName", f"{report['period']}_Percent"],
        csv_rows,
    )


__all__ = [
    "build_report_csv",
    "category_distribution",
    "coerce_period",
    "enrollment_totals",
    "period_report",
    "top_failure_percent",
]
