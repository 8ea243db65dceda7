# =============================================================================
# core/dates.py  —  Date Expressions, Date-Range Filters, Country Codes
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The analytics tools accept loose, human phrasing ("last month", "YTD",
#   "2024-01-01 to 2024-01-31").  This module turns that phrasing into a
#   concrete [start, end] window and then into the two AND-ed filter groups
#   the platform needs for a range query:
#
#     created_at gteq "2024-01-01 00:00:00"
#     created_at lteq "2024-01-31 23:59:59"
#
#   It also maps country names ("The Netherlands", "uk") to ISO codes,
#   because orders store country_id as a two-letter code.
#
# WEEKS START ON MONDAY.
# =============================================================================

from datetime import date, datetime, time, timedelta
from typing import Optional

from core.errors import DateExpressionError
from core.models import DateRange, Filter, FilterGroup

MAGENTO_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def _from_date(value: date) -> datetime:
    return datetime.combine(value, time.min)


def parse_date_expression(expression: str, now: Optional[datetime] = None) -> DateRange:
    """Resolve a date expression to a concrete window.

    Supported:
      today, yesterday, this week, last week, this month, last month,
      ytd / this ytd / this year to date / year to date, last year,
      a single ISO date ("2024-03-05"),
      an ISO range ("2024-03-01 to 2024-03-31").

    Args:
        expression: The phrase to resolve (case and surrounding space ignored).
        now: Reference "current time"; defaults to ``datetime.now()``.

    Raises:
        DateExpressionError: the phrase is not recognised.
    """
    now = now or datetime.now()
    normalized = expression.strip().lower()

    if normalized == "today":
        return DateRange(start_of_day(now), end_of_day(now), "Today")

    if normalized == "yesterday":
        yesterday = now - timedelta(days=1)
        return DateRange(start_of_day(yesterday), end_of_day(yesterday), "Yesterday")

    week_start = start_of_day(now - timedelta(days=now.weekday()))

    if normalized == "this week":
        return DateRange(week_start, end_of_day(now), "This week")

    if normalized == "last week":
        last_week_start = week_start - timedelta(days=7)
        return DateRange(last_week_start, end_of_day(last_week_start + timedelta(days=6)), "Last week")

    month_start = start_of_day(now.replace(day=1))

    if normalized == "this month":
        return DateRange(month_start, end_of_day(now), "This month")

    if normalized == "last month":
        last_month_end = month_start - timedelta(days=1)
        return DateRange(start_of_day(last_month_end.replace(day=1)), end_of_day(last_month_end), "Last month")

    if normalized in ("ytd", "this ytd", "this year to date", "year to date"):
        return DateRange(start_of_day(now.replace(month=1, day=1)), end_of_day(now), "Year to date")

    if normalized == "last year":
        year = now.year - 1
        return DateRange(
            datetime(year, 1, 1),
            end_of_day(datetime(year, 12, 31)),
            "Last year",
        )

    single = _parse_iso_date(normalized)
    if single is not None:
        day = _from_date(single)
        return DateRange(day, end_of_day(day), single.isoformat())

    parts = normalized.split(" to ")
    if len(parts) == 2:
        first, last = _parse_iso_date(parts[0]), _parse_iso_date(parts[1])
        if first is not None and last is not None:
            return DateRange(
                _from_date(first),
                end_of_day(_from_date(last)),
                f"{first.isoformat()} to {last.isoformat()}",
            )

    raise DateExpressionError(f"Invalid date expression: {expression}")


def _parse_iso_date(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


def format_for_magento(value: datetime) -> str:
    return value.strftime(MAGENTO_DATETIME_FORMAT)


def date_range_groups(field: str, start: datetime, end: datetime) -> list[FilterGroup]:
    """Two AND-ed groups: ``field >= start`` and ``field <= end``."""
    return [
        FilterGroup([Filter(field, format_for_magento(start), "gteq")]),
        FilterGroup([Filter(field, format_for_magento(end), "lteq")]),
    ]


# -----------------------------------------------------------------------------
# Country normalization
# -----------------------------------------------------------------------------
_COUNTRY_CODES = {
    "netherlands": "NL", "the netherlands": "NL", "holland": "NL",
    "united states": "US", "usa": "US", "america": "US",
    "united kingdom": "GB", "uk": "GB", "great britain": "GB", "england": "GB",
    "canada": "CA",
    "australia": "AU",
    "germany": "DE",
    "france": "FR",
    "italy": "IT",
    "spain": "ES",
    "belgium": "BE",
    "sweden": "SE",
    "norway": "NO",
    "denmark": "DK",
    "finland": "FI",
    "ireland": "IE",
    "switzerland": "CH",
    "austria": "AT",
    "portugal": "PT",
    "greece": "GR",
    "poland": "PL",
    "japan": "JP",
    "china": "CN",
    "india": "IN",
    "brazil": "BR",
    "mexico": "MX",
    "south africa": "ZA",
}


def normalize_country(country: str) -> list[str]:
    """Map a country name or code to a one-element list of ISO codes.

    Unknown names are upper-cased and passed through, so two-letter codes
    work without being listed.
    """
    key = country.strip().lower()
    return [_COUNTRY_CODES.get(key, key.upper())]
