"""Calendar date helpers shared by the parser and the save file codec.

Tasks carry plain calendar dates with no time component. Both user input and
the save file use the ISO ``YYYY-MM-DD`` form; display uses a configurable
strftime pattern.
"""

import re
from datetime import date, datetime

ISO_DATE_FORMAT = "%Y-%m-%d"
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(date_str: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    Args:
        date_str: Text to parse; surrounding whitespace is ignored

    Returns:
        The parsed calendar date

    Raises:
        ValueError: If the text is not a zero-padded ISO calendar date
    """
    text = date_str.strip()
    if not ISO_DATE_RE.match(text):
        raise ValueError(f"not a YYYY-MM-DD date: {date_str!r}")
    return datetime.strptime(text, ISO_DATE_FORMAT).date()


def to_iso_string(value: date) -> str:
    """Render a date the way the save file stores it."""
    return value.strftime(ISO_DATE_FORMAT)
