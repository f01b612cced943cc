"""
Pure GEDCOM formatting without file I/O operations
"""

from collections import defaultdict
from datetime import datetime
from pathlib import Path

from .date_utils import GedcomDateParser
from .models import FEMALE, ExportOptions, FamilyGroup, Person


DEFAULT_SUBMITTER = 'Shajara User'


class GEDCOMFormatter:
    """Format Shajara persons and family groups as GEDCOM 5.5 lines"""

    NOTE_LINE_LENGTH = 248

    def __init__(self, options: ExportOptions = None):
        self.options = options or ExportOptions()
        self.person_numbers: dict[str, int] = {}
        self.family_numbers: dict[str, int] = {}

    def format_gedcom(self, persons: list[Person], families: list[FamilyGroup] = None) -> list[str]:
        """Format persons and grouped families into GEDCOM lines"""
        families = families or []
        self.person_numbers = {person.id: number for number, person in enumerate(persons, 1)}
        self.family_numbers = {family.key: number for number, family in enumerate(families, 1)}
        family_links = self._family_links(families)

        lines = []
        lines.extend(self._format_header())
        lines.extend(self._format_submitter())

        for person in persons:
            lines.extend(self._format_individual(person, family_links.get(person.id, [])))

        for family in families:
            lines.extend(self._format_family(family))

        lines.extend(self._format_trailer())
        return lines

    def _format_header(self) -> list[str]:
        """Format GEDCOM header"""
        return [
            "0 HEAD",
            "1 SOUR SHAJARA",
            "2 VERS 1.0",
            "2 NAME Shajara Arabic Family Tree",
            "2 CORP Shajara",
            "1 DEST STANDARD",
            "1 DATE " + GedcomDateParser.from_iso(datetime.now()),
            "1 SUBM @SUBM@",
            "1 GEDC",
            "2 VERS 5.5",
            "2 FORM LINEAGE-LINKED",
            "1 CHAR UTF-8",
            "1 LANG Arabic",
        ]

    def _format_submitter(self) -> list[str]:
        lines = [
            "0 @SUBM@ SUBM",
            f"1 NAME {self._clean(self.options.submitter_name) or DEFAULT_SUBMITTER}",
        ]
        if self.options.submitter_email:
            lines.append(f"1 EMAIL {self._clean(self.options.submitter_email)}")
        return lines

    def _format_trailer(self) -> list[str]:
        """Format GEDCOM trailer"""
        return ["0 TRLR"]

    def _family_links(self, families: list[FamilyGroup]) -> dict[str, list[str]]:
        """FAMS/FAMC back-references per person, in family order"""
        links = defaultdict(list)
        for family in families:
            pointer = f"@F{self.family_numbers[family.key]}@"
            for parent_id in (family.husband_id, family.wife_id):
                if parent_id:
                    links[parent_id].append(f"1 FAMS {pointer}")
            for child_id in family.child_ids:
                links[child_id].append(f"1 FAMC {pointer}")
        return links

    def _format_individual(self, person: Person, family_links: list[str]) -> list[str]:
        """Format an individual record"""
        lines = [f"0 @I{self.person_numbers[person.id]}@ INDI"]

        lines.extend(self._format_name(person))
        lines.append(f"1 SEX {'F' if person.gender == FEMALE else 'M'}")

        if person.birth_date or person.birth_place:
            lines.append("1 BIRT")
            lines.extend(self._format_event_details(person.birth_date, person.birth_date_hijri, person.birth_place))

        if not person.is_living:
            lines.append("1 DEAT Y")
            lines.extend(self._format_event_details(person.death_date, person.death_date_hijri, person.death_place))

        if person.tribe_id:
            lines.append(f"1 _TRIBE {self._clean(person.tribe_id)}")
        if person.tribal_branch:
            lines.append(f"1 _TRIBAL_BRANCH {self._clean(person.tribal_branch)}")

        if person.is_sayyid:
            lines.append("1 _SAYYID Y")
            if person.sayyid_verified:
                lines.append("2 _VERIFIED Y")
            if person.sayyid_lineage:
                lines.append(f"2 _LINEAGE {self._clean(person.sayyid_lineage)}")

        if self.options.include_notes and person.notes and person.notes.strip():
            note_lines = self._split_note(person.notes.strip())
            lines.append(self._join(1, 'NOTE', note_lines[0]))
            for line in note_lines[1:]:
                lines.append(self._join(2, 'CONT', line))

        if self.options.include_photos and person.photo_url:
            lines.append("1 OBJE")
            lines.append("2 FORM URL")
            lines.append(f"2 FILE {self._clean(person.photo_url)}")

        lines.extend(family_links)
        return lines

    def _format_name(self, person: Person) -> list[str]:
        """NAME with the surname in slashes, plus GIVN/SURN and the Arabic name parts"""
        given_name = self._clean(person.given_name)
        family_name = self._clean(person.family_name)

        if family_name:
            lines = [self._join(1, 'NAME', f"{given_name} /{family_name}/".strip())]
        else:
            lines = [self._join(1, 'NAME', self._clean(person.display_name))]

        if given_name:
            lines.append(f"2 GIVN {given_name}")
        if family_name:
            lines.append(f"2 SURN {family_name}")

        for tag, value in (('_KUNYA', person.kunya),
                           ('_LAQAB', person.laqab),
                           ('_NISBA', person.nisba),
                           ('_NASAB', person.patronymic_chain),
                           ('_NASAB_FULL', person.nasab_chain)):
            if value:
                lines.append(f"2 {tag} {self._clean(value)}")

        return lines

    def _format_event_details(self, event_date: str | None, hijri_date: str | None,
                              place: str | None) -> list[str]:
        """DATE / _DATE_HIJRI / PLAC lines under a BIRT or DEAT"""
        lines = []
        gedcom_date = GedcomDateParser.from_iso(event_date)
        if gedcom_date:
            lines.append(f"2 DATE {gedcom_date}")
            if self.options.include_hijri_dates and hijri_date:
                lines.append(f"2 _DATE_HIJRI {self._clean(hijri_date)}")
        if place:
            lines.append(f"2 PLAC {self._clean(place)}")
        return lines

    def _format_family(self, family: FamilyGroup) -> list[str]:
        """Format a family record"""
        lines = [f"0 @F{self.family_numbers[family.key]}@ FAM"]

        for tag, person_id in (('HUSB', family.husband_id), ('WIFE', family.wife_id)):
            number = self.person_numbers.get(person_id) if person_id else None
            if number:
                lines.append(f"1 {tag} @I{number}@")

        if family.marriage_date or family.marriage_place:
            lines.append("1 MARR")
            marriage_date = GedcomDateParser.from_iso(family.marriage_date)
            if marriage_date:
                lines.append(f"2 DATE {marriage_date}")
            if family.marriage_place:
                lines.append(f"2 PLAC {self._clean(family.marriage_place)}")

        if family.divorce_date:
            lines.append("1 DIV")
            divorce_date = GedcomDateParser.from_iso(family.divorce_date)
            if divorce_date:
                lines.append(f"2 DATE {divorce_date}")

        for child_id in family.child_ids:
            number = self.person_numbers.get(child_id)
            if number:
                lines.append(f"1 CHIL @I{number}@")

        return lines

    def _split_note(self, note: str) -> list[str]:
        """Split a note into lines of at most NOTE_LINE_LENGTH, breaking at the last space"""
        lines = []
        for paragraph in note.splitlines():
            remaining = paragraph.rstrip()
            if not remaining:
                lines.append("")
                continue

            while len(remaining) > self.NOTE_LINE_LENGTH:
                split_point = remaining.rfind(' ', 0, self.NOTE_LINE_LENGTH + 1)
                if split_point <= 0:
                    lines.append(remaining[:self.NOTE_LINE_LENGTH])
                    remaining = remaining[self.NOTE_LINE_LENGTH:]
                else:
                    lines.append(remaining[:split_point])
                    remaining = remaining[split_point + 1:]
            lines.append(remaining)

        return lines

    @staticmethod
    def _clean(value: str | None) -> str:
        """Collapse line breaks; a GEDCOM value must stay on its own line"""
        if not value:
            return ""
        return ' '.join(str(value).splitlines()).strip()

    @staticmethod
    def _join(level: int, tag: str, value: str) -> str:
        return f"{level} {tag} {value}" if value else f"{level} {tag}"


class GEDCOMFileWriter:
    """Handles GEDCOM file I/O operations"""

    @staticmethod
    def write_gedcom_file(content: str, output_file: str | Path) -> Path:
        """Write GEDCOM text to a UTF-8 file"""
        output_path = Path(output_file)
        output_path.write_text(content, encoding='utf-8')
        return output_path

    @staticmethod
    def read_gedcom_file(input_file: str | Path) -> str:
        """Read GEDCOM text; a UTF-8 byte order mark is dropped"""
        return Path(input_file).read_text(encoding='utf-8-sig')
