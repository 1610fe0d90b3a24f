"""Parse transaction dates typed on the command line."""

from datetime import date, timedelta
from dateutil import parser as date_parser

from troopfund.domain.errors import ValidationError

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _last_weekday(today: date, weekday: int) -> date:
    # Strictly before today: "last monday" on a Monday is a week ago
    days_back = (today.weekday() - weekday) % 7 or 7
    return today - timedelta(days=days_back)


def parse_date(date_str: str) -> date:
    """Parse a date such as ``2024-01-15``, ``Jan 15 2024`` or ``yesterday``.

    Relative forms: ``today``, ``yesterday``, ``tomorrow`` and
    ``last <weekday>``. Anything else is handed to dateutil.

    Raises:
        ValidationError: If the text is empty or not a recognizable date
    """
    text = " ".join((date_str or "").lower().split())
    if not text:
        raise ValidationError("Date is required")

    today = date.today()
    offsets = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if text in offsets:
        return today + timedelta(days=offsets[text])

    head, _, tail = text.partition(" ")
    if head == "last" and tail in WEEKDAYS:
        return _last_weekday(today, WEEKDAYS.index(tail))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str.strip()}': {e}")
