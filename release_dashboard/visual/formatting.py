"""Display formatting for timestamps and attachment sizes."""

from __future__ import annotations

import pandas as pd
import pytz

from release_dashboard.core.config import TIMEZONE

EMPTY = "—"


def format_timestamp(value: str | None, tz_name: str = TIMEZONE) -> str:
    """Render a Jira ISO timestamp in the dashboard timezone.

    Unparseable values are returned as-is, missing ones as an em dash.
    """
    if not value:
        return EMPTY
    ts = pd.to_datetime(value, errors="coerce", utc=True)
    if ts is None or pd.isna(ts):
        return str(value)
    return ts.tz_convert(pytz.timezone(tz_name)).strftime("%Y-%m-%d %H:%M")


def format_size(size: int | float | None) -> str:
    if not isinstance(size, int | float) or isinstance(size, bool):
        return ""
    return f"{round(size / 1024)} KB"


def display_or_dash(value: str | None) -> str:
    return value if value else EMPTY
