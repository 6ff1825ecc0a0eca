"""Elapsed-time breakdown and its human-readable rendering.

Durations are split into years, months, days, hours, minutes and seconds
using fixed unit lengths: a year is always 365 days and a month always 30
days. This is not calendar arithmetic; the fixed lengths keep the breakdown
a lossless base conversion, so the displayed sentence can always be turned
back into the exact number of seconds it came from.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Final

SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 3_600
SECONDS_PER_DAY: Final[int] = 86_400
SECONDS_PER_MONTH: Final[int] = 2_592_000  # 30 days
SECONDS_PER_YEAR: Final[int] = 31_536_000  # 365 days

# Largest unit first; order matters for the cascading remainders.
UNIT_SECONDS: Final[tuple[int, ...]] = (
    SECONDS_PER_YEAR,
    SECONDS_PER_MONTH,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    1,
)


@dataclass(frozen=True)
class UnitNames:
    """Singular and plural names for the six units of one language."""

    singular: tuple[str, str, str, str, str, str]
    plural: tuple[str, str, str, str, str, str]
    conjunction: str


LOCALES: Final[dict[str, UnitNames]] = {
    "de": UnitNames(
        singular=("Jahr", "Monat", "Tag", "Stunde", "Minute", "Sekunde"),
        plural=("Jahre", "Monate", "Tage", "Stunden", "Minuten", "Sekunden"),
        conjunction="und",
    ),
    "en": UnitNames(
        singular=("year", "month", "day", "hour", "minute", "second"),
        plural=("years", "months", "days", "hours", "minutes", "seconds"),
        conjunction="and",
    ),
}

DEFAULT_SEPARATOR: Final[str] = ", "


@dataclass(frozen=True)
class ElapsedTime:
    """A duration broken down into fixed-length units."""

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_seconds(cls, duration: int) -> ElapsedTime:
        """Break ``duration`` seconds down into years, months, days and so on.

        Args:
            duration: Non-negative number of seconds

        Returns:
            The breakdown whose :meth:`total_seconds` equals ``duration``

        Raises:
            ValueError: If ``duration`` is negative
        """
        if duration < 0:
            raise ValueError(f"Duration must be non-negative, got {duration}")

        values = []
        remainder = int(duration)
        for unit in UNIT_SECONDS:
            value, remainder = divmod(remainder, unit)
            values.append(value)
        return cls(*values)

    def total_seconds(self) -> int:
        """Rebuild the number of seconds this breakdown was made from."""
        return sum(value * unit for value, unit in zip(astuple(self), UNIT_SECONDS))


def get_unit_names(locale: str) -> UnitNames:
    """Return the unit names for ``locale`` or raise ``ValueError``."""
    try:
        return LOCALES[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale!r}") from None


def format_elapsed(
    elapsed: ElapsedTime,
    locale: str = "de",
    *,
    separator: str = DEFAULT_SEPARATOR,
    html: bool = False,
) -> str:
    """Render a breakdown as a single sentence.

    All six units are always rendered, zero values included. A value of
    exactly one uses the singular unit name, every other value the plural.
    The last unit is preceded by the locale's conjunction and the sentence
    ends with a period, e.g. ``"0 years, 0 months, 1 day, 2 hours, 0 minutes
    and 1 second."``.

    Args:
        elapsed: The breakdown to render
        locale: Language key into :data:`LOCALES`
        separator: Text placed between all but the last two units
        html: Join value and unit with ``&nbsp;`` so they never wrap apart

    Returns:
        The rendered sentence
    """
    names = get_unit_names(locale)
    space = "&nbsp;" if html else " "

    parts = [
        f"{value}{space}{names.singular[index] if value == 1 else names.plural[index]}"
        for index, value in enumerate(astuple(elapsed))
    ]
    head = separator.join(parts[:-1])
    return f"{head} {names.conjunction} {parts[-1]}."


def format_duration(duration: int, locale: str = "de", *, html: bool = False) -> str:
    """Shortcut for rendering a raw number of seconds."""
    return format_elapsed(ElapsedTime.from_seconds(duration), locale, html=html)
