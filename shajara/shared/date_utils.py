"""
GEDCOM date conversion to and from ISO-8601
"""

import re
from datetime import date, datetime


class GedcomDateParser:
    """Converts between GEDCOM dates ("15 JAN 1990") and ISO dates ("1990-01-15")"""

    MONTHS = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
              'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']
    MONTH_NUMBERS = {name: number for number, name in enumerate(MONTHS, 1)}

    # Leading modifiers; export never writes them and import drops them
    QUALIFIER_PATTERN = re.compile(r'^(?:ABT|BEF|AFT|EST|CAL|FROM|TO|BET|AND)\b\s*', re.IGNORECASE)
    FULL_DATE_PATTERN = re.compile(r'^(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})$')
    MONTH_YEAR_PATTERN = re.compile(r'^([A-Za-z]{3})\s+(\d{4})$')
    YEAR_PATTERN = re.compile(r'^(\d{4})$')

    @classmethod
    def strip_qualifiers(cls, gedcom_date: str) -> str:
        """Remove leading ABT/BEF/AFT/... tokens"""
        cleaned = gedcom_date.strip()
        while True:
            stripped = cls.QUALIFIER_PATTERN.sub('', cleaned, count=1)
            if stripped == cleaned:
                return cleaned
            cleaned = stripped.strip()

    @classmethod
    def to_iso(cls, gedcom_date: str | None) -> str | None:
        """
        Decode a GEDCOM date into YYYY-MM-DD.

        Partial dates are anchored to the first of the month/year. Free text
        and impossible calendar days return None; that is not an error.
        """
        if not gedcom_date:
            return None

        cleaned = cls.strip_qualifiers(gedcom_date)

        match = cls.FULL_DATE_PATTERN.match(cleaned)
        if match:
            day, month_name, year = match.groups()
            return cls._iso_or_none(year, month_name, int(day))

        match = cls.MONTH_YEAR_PATTERN.match(cleaned)
        if match:
            month_name, year = match.groups()
            return cls._iso_or_none(year, month_name, 1)

        match = cls.YEAR_PATTERN.match(cleaned)
        if match:
            return cls._iso_or_none(match.group(1), 'JAN', 1)

        return None

    @classmethod
    def from_iso(cls, value: date | datetime | str | None) -> str | None:
        """
        Encode a date as D MON YYYY.

        Accepts date/datetime objects or ISO strings (anything after the
        first ten characters, like a time part, is ignored). Unparseable
        input returns None so callers can simply omit the DATE line.
        """
        parsed = cls.parse_iso(value)
        if parsed is None:
            return None
        return f"{parsed.day} {cls.MONTHS[parsed.month - 1]} {parsed.year:04d}"

    @staticmethod
    def parse_iso(value: date | datetime | str | None) -> date | None:
        """Turn an ISO string/date/datetime into a date, or None"""
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value).strip()[:10])
        except ValueError:
            return None

    @classmethod
    def _iso_or_none(cls, year: str, month_name: str, day: int) -> str | None:
        month = cls.MONTH_NUMBERS.get(month_name.upper())
        if month is None:
            return None
        try:
            return date(int(year), month, day).isoformat()
        except ValueError:
            return None
