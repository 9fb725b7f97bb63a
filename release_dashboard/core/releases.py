"""Parse Lithuanian release labels such as ``"2024 Sausis"`` into sortable months."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

MIN_RELEASE_YEAR = 2000
MAX_RELEASE_YEAR = 2100

# Lower-case month names, with ASCII-folded spellings for accented ones
LT_MONTHS = MappingProxyType(
    {
        "sausis": 1,
        "vasaris": 2,
        "kovas": 3,
        "balandis": 4,
        "gegužė": 5,
        "geguze": 5,
        "birželis": 6,
        "birzelis": 6,
        "liepa": 7,
        "rugpjūtis": 8,
        "rugpjutis": 8,
        "rugsėjis": 9,
        "rugsejis": 9,
        "spalis": 10,
        "lapkritis": 11,
        "gruodis": 12,
    }
)


@dataclass(slots=True, frozen=True)
class ReleaseMonth:
    year: int
    month: int

    @property
    def sort_key(self) -> int:
        return self.year * 100 + self.month


def _parse_year(token: str) -> int | None:
    if not (token.isascii() and token.isdigit()):
        return None
    year = int(token)
    if MIN_RELEASE_YEAR <= year <= MAX_RELEASE_YEAR:
        return year
    return None


def parse_release_name(name: str | None) -> ReleaseMonth | None:
    """Return the ``(year, month)`` of a fix version label, or ``None``.

    The label must start with a year in ``[2000, 2100]`` followed by a month
    name. The whole remainder is tried first (``"2024 Sausis"``), then just the
    second token (``"2024 sausis hotfix"``).
    """
    if not name:
        return None
    parts = name.split()
    if len(parts) < 2:
        return None
    year = _parse_year(parts[0])
    if year is None:
        return None
    month = LT_MONTHS.get(" ".join(parts[1:]).lower()) or LT_MONTHS.get(parts[1].lower())
    if not month:
        return None
    return ReleaseMonth(year=year, month=month)
