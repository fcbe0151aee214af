"""Date utilities for spent.

Every stored transaction date uses CANONICAL_FORMAT. Month filtering and
ordering work on plain string prefixes, so nothing else may reach the
database.
"""

from datetime import datetime

from spent.domain.models import Month, Timestamp

CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"
MONTH_FORMAT = "%Y-%m"

# Tried in order, first match wins. "03/04/2024" is read as March 4th
# because MM/DD/YYYY comes before DD/MM/YYYY.
IMPORT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%d-%m-%Y",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M",
)


def now_timestamp() -> Timestamp:
    """Current local time in canonical format."""
    return Timestamp(datetime.now().strftime(CANONICAL_FORMAT))


def current_month() -> Month:
    """Current local month (YYYY-MM)."""
    return Month(datetime.now().strftime(MONTH_FORMAT))


def normalize_date(raw_date: str) -> Timestamp:
    """Normalize an external date string to the canonical timestamp.

    Formats without a time component resolve to midnight.

    Args:
        raw_date: Date string as found in the import file.

    Returns:
        Timestamp in YYYY-MM-DD HH:MM:SS format.

    Raises:
        ValueError: If no known format matches.
    """
    value = raw_date.strip()
    for fmt in IMPORT_DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return Timestamp(parsed.strftime(CANONICAL_FORMAT))

    raise ValueError(f"Could not parse date '{raw_date}'")


def format_month_display(month: Month) -> str:
    """Human-readable month label (e.g., "January 2025").

    Raises:
        ValueError: If month is not YYYY-MM.
    """
    return datetime.strptime(month, MONTH_FORMAT).strftime("%B %Y")
