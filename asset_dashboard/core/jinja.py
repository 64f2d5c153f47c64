"""Template environment with the display filters the dashboard pages use.

Templates are the presentation layer: they receive ORM rows and call these
filters to turn raw columns into formatted money, dates and placeholders.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi.templating import Jinja2Templates

from .config import settings


def _local_tz() -> ZoneInfo | None:
    if not settings.TZ:
        return None
    try:
        return ZoneInfo(settings.TZ)
    except (ZoneInfoNotFoundError, ValueError):
        return None


_LOCAL_TZ = _local_tz()


def _to_date(value: Any) -> date | None:
    """Accept dates, datetimes or ISO strings; anything else is "no value"."""

    if isinstance(value, datetime):
        if value.tzinfo is not None and _LOCAL_TZ:
            value = value.astimezone(_LOCAL_TZ)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def _fmt_date(value: Any, fmt: str = "%Y-%m-%d", default: str = "N/A") -> str:
    d = _to_date(value)
    return d.strftime(fmt) if d else default


def _fmt_currency(value: Any, default: str = "N/A") -> str:
    """Prefix the configured currency symbol and group thousands."""

    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return f"{settings.CURRENCY_SYMBOL}{number:,.2f}"


def _display(value: Any, default: str = "N/A") -> str:
    """Null and empty strings both render as ``default``."""

    if value is None:
        return default
    text = str(value).strip()
    return text or default


@lru_cache(maxsize=1)
def get_templates() -> Jinja2Templates:
    """Create a ``Jinja2Templates`` instance with our standard filters registered."""

    templates = Jinja2Templates(directory=str(settings.templates_dir))
    env = templates.env
    env.filters["fmt_date"] = _fmt_date
    env.filters["fmt_currency"] = _fmt_currency
    env.filters["display"] = _display
    env.globals["app_name"] = settings.APP_NAME
    return templates
