"""
Gregorian to Hijri (Umm al-Qura) conversion used to mirror event dates
"""

from dataclasses import dataclass
from datetime import date, datetime

from hijridate import Gregorian

from .date_utils import GedcomDateParser
from .logging_config import get_project_logger


logger = get_project_logger(__name__)

HIJRI_MONTHS_AR = [
    'محرم', 'صفر', 'ربيع الأول', 'ربيع الآخر', 'جمادى الأولى', 'جمادى الآخرة',
    'رجب', 'شعبان', 'رمضان', 'شوال', 'ذو القعدة', 'ذو الحجة',
]


@dataclass(frozen=True)
class DualDate:
    """A Gregorian date alongside its Hijri mirror; empty strings when unknown"""
    gregorian: str = ""
    hijri: str = ""
    hijri_display: str = ""


def gregorian_to_hijri(value: date | datetime | str | None) -> DualDate:
    """
    Convert an ISO date (or date object) to the Umm al-Qura calendar.

    The conversion table only covers 1343-1500 AH (1924-08-01 to 2077-11-16);
    dates outside it, and unparseable input, give an empty DualDate.
    """
    gregorian = GedcomDateParser.parse_iso(value)
    if gregorian is None:
        return DualDate()

    try:
        hijri = Gregorian(gregorian.year, gregorian.month, gregorian.day).to_hijri()
    except (OverflowError, ValueError) as e:
        logger.debug(f"No Hijri mirror for {gregorian.isoformat()}: {e}")
        return DualDate(gregorian=gregorian.isoformat())

    return DualDate(
        gregorian=gregorian.isoformat(),
        hijri=f"{hijri.year:04d}-{hijri.month:02d}-{hijri.day:02d}",
        hijri_display=f"{hijri.day} {HIJRI_MONTHS_AR[hijri.month - 1]} {hijri.year}",
    )
