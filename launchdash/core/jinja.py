"""Helper utilities for teaching Jinja2 how to format simulation numbers.

Templates are the presentation layer. Everything the pages show comes straight
from the upstream service as floats, so the filters below keep units and
precision consistent across the overview and settings pages.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def _as_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _fmt_num(value: Any, places: int = 1) -> str:
    """Fixed-precision number with thousands separators, blank when missing."""

    number = _as_float(value)
    if number is None:
        return ""
    return f"{number:,.{places}f}"


def _fmt_unit(value: Any, unit: str, places: int = 1) -> str:
    text = _fmt_num(value, places)
    return f"{text} {unit}" if text else ""


def _fmt_bearing(value: Any) -> str:
    """Wind direction in degrees plus the nearest compass point."""

    number = _as_float(value)
    if number is None:
        return ""
    points = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]
    label = points[int(((number % 360) + 22.5) // 45) % 8]
    return f"{number:.0f}° {label}"


def _fmt_forecast_time(value: Any, fmt: str = "%a %d %b %H:%M") -> str:
    if not isinstance(value, str) or not value:
        return ""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return dt.strftime(fmt)


def get_templates() -> Jinja2Templates:
    """Create a ``Jinja2Templates`` instance with our standard filters registered."""

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    env = templates.env
    env.filters["fmt_num"] = _fmt_num
    env.filters["fmt_unit"] = _fmt_unit
    env.filters["fmt_bearing"] = _fmt_bearing
    env.filters["fmt_forecast_time"] = _fmt_forecast_time
    return templates
