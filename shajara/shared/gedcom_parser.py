"""
GEDCOM parser for reading genealogy data from GEDCOM 5.5 text
"""

import re
import uuid
from enum import Enum

from .date_utils import GedcomDateParser
from .logging_config import get_project_logger
from .models import FEMALE, MALE, GedcomFamily, GedcomIndividual, GedcomLine, decode_bool


logger = get_project_logger(__name__)


class SubRecord(Enum):
    """
    Level-1 structures whose level-2 children the parsers understand.

    Only one enclosing tag is remembered, so anything nested at level 3 or
    deeper is outside what the parsers model.
    """
    NAME = 'NAME'
    BIRT = 'BIRT'
    DEAT = 'DEAT'
    NOTE = 'NOTE'
    SAYYID = '_SAYYID'
    OBJE = 'OBJE'
    MARR = 'MARR'
    DIV = 'DIV'
    OTHER = 'OTHER'

    @classmethod
    def for_tag(cls, tag: str) -> 'SubRecord':
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


# Level-2 custom name tags and the GedcomIndividual field each one fills
NAME_EXTENSION_TAGS = {
    '_KUNYA': 'kunya',
    '_LAQAB': 'laqab',
    '_NISBA': 'nisba',
    '_NASAB': 'patronymic_chain',
    '_NASAB_FULL': 'nasab_chain',
}


class GEDCOMParser:
    """Parse GEDCOM text into GedcomIndividual and GedcomFamily records"""

    LINE_PATTERN = re.compile(r'^\s*(\d+)\s+(?:@([^@\s]+)@\s+)?([A-Za-z0-9_]+)(?:\s+(.*))?$')

    def __init__(self):
        self.individuals: list[GedcomIndividual] = []
        self.families: list[GedcomFamily] = []
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.total_lines = 0

    def parse(self, content: str) -> dict:
        """
        Parse a whole GEDCOM document.

        Malformed lines are reported in 'errors' and skipped; they never
        abort the rest of the file.
        """
        if content.startswith('\ufeff'):
            content = content[1:]

        lines = self._tokenize(content)
        for record in self._split_into_records(lines):
            self._parse_record(record)

        logger.debug(
            f"Parsed {self.total_lines} lines: {len(self.individuals)} individuals, "
            f"{len(self.families)} families, {len(self.errors)} errors"
        )

        return {
            'individuals': self.individuals,
            'families': self.families,
            'errors': self.errors,
            'warnings': self.warnings,
            'total_lines': self.total_lines,
        }

    def _tokenize(self, content: str) -> list[GedcomLine]:
        """Tokenize every non-blank line, collecting syntax errors"""
        lines = []
        for line_number, raw_line in enumerate(content.splitlines(), 1):
            if not raw_line.strip():
                continue
            self.total_lines += 1

            line, error = self.parse_line(raw_line, line_number)
            if error:
                logger.debug(error)
                self.errors.append(error)
            else:
                lines.append(line)
        return lines

    @classmethod
    def parse_line(cls, line: str, line_number: int) -> tuple[GedcomLine | None, str | None]:
        """Parse 'LEVEL [@POINTER@] TAG [VALUE]' into a GedcomLine or an error message"""
        match = cls.LINE_PATTERN.match(line)
        if not match:
            return None, f"Line {line_number}: Invalid GEDCOM format: {line.strip()}"

        level, pointer, tag, value = match.groups()
        return GedcomLine(
            level=int(level),
            tag=tag.upper(),
            value=(value or '').strip(),
            pointer=pointer,
        ), None

    def _split_into_records(self, lines: list[GedcomLine]) -> list[list[GedcomLine]]:
        """Group lines into level-0 records"""
        records = []
        current_record = []

        for line in lines:
            if line.level == 0 and current_record:
                records.append(current_record)
                current_record = []
            current_record.append(line)

        if current_record:
            records.append(current_record)

        return records

    @staticmethod
    def _record_type(header: GedcomLine) -> str | None:
        """Classify a record by its level-0 tag, or by its value for '0 ID INDI' shapes"""
        for candidate in ('INDI', 'FAM'):
            if header.tag == candidate or header.value == candidate:
                return candidate
        return None

    def _parse_record(self, record: list[GedcomLine]) -> None:
        """Dispatch INDI and FAM records; HEAD, SUBM, TRLR and others carry nothing we model"""
        header = record[0]
        if header.level != 0:
            # Continuation lines before the first level-0 line have no owner
            self.warnings.append(f"Skipped {len(record)} line(s) outside any record")
            return

        record_type = self._record_type(header)
        if record_type is None:
            return

        if not header.pointer:
            self.warnings.append(f"Skipped {record_type} record without a cross-reference id")
            return

        if record_type == 'INDI':
            self.individuals.append(self._parse_individual(record))
        else:
            self.families.append(self._parse_family(record))

    def _parse_individual(self, record: list[GedcomLine]) -> GedcomIndividual:
        """Build a GedcomIndividual from an INDI record"""
        individual = GedcomIndividual(id=str(uuid.uuid4()), gedcom_id=record[0].pointer)
        current_sub_record = SubRecord.OTHER
        name_seen = False

        for line in record[1:]:
            if line.level == 1:
                current_sub_record = SubRecord.for_tag(line.tag)

                if line.tag == 'NAME':
                    if name_seen:
                        # Alternate names; the first NAME is the preferred one
                        current_sub_record = SubRecord.OTHER
                        continue
                    name_seen = True
                    self._apply_name(individual, line.value)
                elif line.tag == 'SEX':
                    individual.gender = FEMALE if line.value.upper() == 'F' else MALE
                elif line.tag == 'FAMC':
                    family_id = self._extract_id(line.value)
                    if individual.family_as_child and family_id:
                        self.warnings.append(
                            f"Individual {individual.gedcom_id} has more than one FAMC; "
                            f"ignoring {family_id}"
                        )
                    elif family_id:
                        individual.family_as_child = family_id
                elif line.tag == 'FAMS':
                    family_id = self._extract_id(line.value)
                    if family_id:
                        individual.families_as_spouse.append(family_id)
                elif line.tag == 'NOTE':
                    individual.notes = (individual.notes or '') + line.value
                elif line.tag == 'DEAT':
                    individual.is_living = False
                elif line.tag == '_TRIBE':
                    individual.tribe_id = line.value or None
                elif line.tag == '_TRIBAL_BRANCH':
                    individual.tribal_branch = line.value or None
                elif line.tag == '_SAYYID':
                    individual.is_sayyid = decode_bool(line.value or 'Y')

            elif line.level == 2:
                self._apply_detail(individual, current_sub_record, line)

        return individual

    def _apply_name(self, individual: GedcomIndividual, value: str) -> None:
        """Split 'Given /Surname/' into its parts"""
        individual.full_name = ' '.join(value.replace('/', ' ').split())

        if '/' in value:
            given, _, rest = value.partition('/')
            surname = rest.split('/', 1)[0]
            individual.given_name = ' '.join(given.split())
            individual.surname = ' '.join(surname.split())
        else:
            individual.given_name = individual.full_name
            individual.surname = ''

    def _apply_detail(self, individual: GedcomIndividual, context: SubRecord, line: GedcomLine) -> None:
        """Interpret a level-2 line inside its level-1 structure"""
        tag, value = line.tag, line.value

        if context == SubRecord.NAME:
            if tag == 'GIVN':
                individual.given_name = value
            elif tag == 'SURN':
                individual.surname = value
            elif tag in NAME_EXTENSION_TAGS:
                setattr(individual, NAME_EXTENSION_TAGS[tag], value or None)
        elif context in (SubRecord.BIRT, SubRecord.DEAT):
            prefix = 'birth' if context == SubRecord.BIRT else 'death'
            if tag == 'DATE':
                setattr(individual, f'{prefix}_date', GedcomDateParser.to_iso(value))
            elif tag == 'PLAC':
                setattr(individual, f'{prefix}_place', value or None)
            elif tag == '_DATE_HIJRI':
                setattr(individual, f'{prefix}_date_hijri', value or None)
        elif context == SubRecord.NOTE:
            if tag == 'CONT':
                individual.notes = (individual.notes or '') + '\n' + value
            elif tag == 'CONC':
                individual.notes = (individual.notes or '') + value
        elif context == SubRecord.SAYYID:
            if tag == '_VERIFIED':
                individual.sayyid_verified = decode_bool(value or 'Y')
            elif tag == '_LINEAGE':
                individual.sayyid_lineage = value or None
        elif context == SubRecord.OBJE:
            if tag == 'FILE' and value:
                individual.photo_url = value

    def _parse_family(self, record: list[GedcomLine]) -> GedcomFamily:
        """Build a GedcomFamily from a FAM record"""
        family = GedcomFamily(id=str(uuid.uuid4()), gedcom_id=record[0].pointer)
        current_sub_record = SubRecord.OTHER

        for line in record[1:]:
            if line.level == 1:
                current_sub_record = SubRecord.for_tag(line.tag)

                if line.tag == 'HUSB':
                    family.husband_id = self._extract_id(line.value)
                elif line.tag == 'WIFE':
                    family.wife_id = self._extract_id(line.value)
                elif line.tag == 'CHIL':
                    child_id = self._extract_id(line.value)
                    if child_id:
                        family.child_ids.append(child_id)

            elif line.level == 2:
                if current_sub_record == SubRecord.MARR:
                    if line.tag == 'DATE':
                        family.marriage_date = GedcomDateParser.to_iso(line.value)
                    elif line.tag == 'PLAC':
                        family.marriage_place = line.value or None
                elif current_sub_record == SubRecord.DIV:
                    if line.tag == 'DATE':
                        family.divorce_date = GedcomDateParser.to_iso(line.value)

        return family

    @staticmethod
    def _extract_id(value: str) -> str | None:
        """Strip the @ delimiters from a pointer value (e.g. '@I001@' -> 'I001')"""
        stripped = value.replace('@', '').strip()
        return stripped or None
