"""
planning_engine.py — Pre-calculation (voorcalculatie) planner.

Covers:
  - Labor hours per scope from generated quote lines
  - Project duration for a crew of given size, with a weather/unforeseen buffer
  - Display helpers for hours and days (Dutch)
"""
import math
from typing import Any, Dict, Iterable

from hovenier.models.quote import LineItem
from hovenier.services.rounding import round_money

DEFAULT_EFFECTIVE_HOURS_PER_DAY: float = 7.0
DEFAULT_BUFFER_PERCENT: float = 10.0


def hours_per_scope(lines: Iterable[LineItem]) -> Dict[str, Any]:
    """
    Sum labor hours per line scope. Only ``arbeid`` lines measured in ``uur``
    count; flat-priced labor rows carry no hours.
    """
    per_scope: Dict[str, float] = {}
    for line in lines:
        if line.kind != "arbeid" or line.unit != "uur":
            continue
        per_scope[line.scope] = per_scope.get(line.scope, 0.0) + line.quantity

    per_scope = {scope: round_money(h) for scope, h in per_scope.items()}
    return {
        "hours_per_scope": per_scope,
        "total_hours": round_money(sum(per_scope.values())),
    }


def estimate_project_duration(
    total_hours: float,
    team_size: int,
    effective_hours_per_day: float = DEFAULT_EFFECTIVE_HOURS_PER_DAY,
    buffer_percent: float = DEFAULT_BUFFER_PERCENT,
) -> Dict[str, Any]:
    """
    Working days for ``team_size`` people at ``effective_hours_per_day`` each,
    plus the same figure with ``buffer_percent`` added and rounded up.

    Raises ValueError for a non-positive team size or day length, or
    negative hours.
    """
    if team_size <= 0:
        raise ValueError(f"team_size must be positive, got {team_size}")
    if effective_hours_per_day <= 0:
        raise ValueError(
            f"effective_hours_per_day must be positive, got {effective_hours_per_day}"
        )
    if total_hours < 0:
        raise ValueError(f"total_hours cannot be negative, got {total_hours}")

    capacity_per_day = team_size * effective_hours_per_day
    days = math.ceil(total_hours / capacity_per_day)
    # Cent-round before ceil: 10 * 1.1 is 11.000000000000002 in floats
    days_with_buffer = math.ceil(round_money(days * (1 + buffer_percent / 100)))

    return {
        "total_hours": total_hours,
        "team_size": team_size,
        "effective_hours_per_day": effective_hours_per_day,
        "team_capacity_per_day": capacity_per_day,
        "estimated_days": days,
        "buffer_percent": buffer_percent,
        "estimated_days_with_buffer": days_with_buffer,
    }


def format_hours(hours: float) -> str:
    """3.5 → '3:30 uur', 3 → '3 uur'."""
    whole = math.floor(hours)
    minutes = math.floor((hours - whole) * 60 + 0.5)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if minutes == 0:
        return f"{whole} uur"
    return f"{whole}:{minutes:02d} uur"


def format_days(days: int) -> str:
    return "1 dag" if days == 1 else f"{days} dagen"
