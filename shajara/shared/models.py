"""
Data models for GEDCOM interchange and the Shajara person/relationship graph
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar


MALE = 'male'
FEMALE = 'female'

PARENT = 'parent'
SPOUSE = 'spouse'
SIBLING = 'sibling'

_TRUE_STRINGS = {'1', 'true', 'y', 'yes'}


def encode_bool(value: Any) -> int:
    """Encode a boolean for the persistence layer's 0/1 columns"""
    return 1 if decode_bool(value) else 0


def decode_bool(value: Any) -> bool:
    """Decode a 0/1 (or bool/'true'/'Y') storage value into a bool"""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _known_fields(cls, data: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


@dataclass(frozen=True)
class GedcomLine:
    """One tokenized GEDCOM line: LEVEL [@POINTER@] TAG [VALUE]"""
    level: int
    tag: str
    value: str = ""
    pointer: str | None = None


@dataclass
class GedcomIndividual:
    """An INDI record as read from a GEDCOM file"""
    id: str
    gedcom_id: str
    given_name: str = ""
    surname: str = ""
    full_name: str = ""
    gender: str = MALE
    birth_date: str | None = None
    birth_place: str | None = None
    death_date: str | None = None
    death_place: str | None = None
    is_living: bool = True
    notes: str | None = None
    family_as_child: str | None = None
    families_as_spouse: list[str] = field(default_factory=list)

    # Shajara custom tags (_KUNYA, _TRIBE, ...)
    kunya: str | None = None
    laqab: str | None = None
    nisba: str | None = None
    patronymic_chain: str | None = None
    nasab_chain: str | None = None
    tribe_id: str | None = None
    tribal_branch: str | None = None
    is_sayyid: bool = False
    sayyid_verified: bool = False
    sayyid_lineage: str | None = None
    birth_date_hijri: str | None = None
    death_date_hijri: str | None = None
    photo_url: str | None = None


@dataclass
class GedcomFamily:
    """A FAM record as read from a GEDCOM file"""
    id: str
    gedcom_id: str
    husband_id: str | None = None
    wife_id: str | None = None
    child_ids: list[str] = field(default_factory=list)
    marriage_date: str | None = None
    marriage_place: str | None = None
    divorce_date: str | None = None


@dataclass
class Tree:
    """The family tree being exported (only its name is used here)"""
    id: str = ""
    name: str = ""
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Tree':
        return cls(**_known_fields(cls, data))


@dataclass
class Person:
    """A member of a Shajara family tree"""
    BOOLEAN_FIELDS: ClassVar[tuple[str, ...]] = ('is_living', 'is_sayyid', 'sayyid_verified')

    id: str
    tree_id: str = ""

    # Arabic name components
    given_name: str = ""
    patronymic_chain: str | None = None
    family_name: str | None = None
    full_name_ar: str | None = None
    full_name_en: str | None = None
    kunya: str | None = None  # e.g. أبو محمد
    laqab: str | None = None
    nisba: str | None = None  # e.g. الدمشقي

    gender: str = MALE

    # Life events
    birth_date: str | None = None
    birth_date_hijri: str | None = None
    birth_place: str | None = None
    death_date: str | None = None
    death_date_hijri: str | None = None
    death_place: str | None = None
    is_living: bool = True

    # Tribal and lineage information
    tribe_id: str | None = None
    tribal_branch: str | None = None
    nasab_chain: str | None = None
    nasab_chain_en: str | None = None
    is_sayyid: bool = False
    sayyid_verified: bool = False
    sayyid_lineage: str | None = None

    photo_url: str | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Person':
        """Build a Person from a stored row or JSON payload; requires 'id'"""
        values = _known_fields(cls, data)
        values['id'] = str(data['id'])
        for name in cls.BOOLEAN_FIELDS:
            if values.get(name) is not None:
                values[name] = decode_bool(values[name])
            else:
                values.pop(name, None)
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def display_name(self) -> str:
        """Arabic name first, then English, then given + family name"""
        if self.full_name_ar:
            return self.full_name_ar
        if self.full_name_en:
            return self.full_name_en
        return f"{self.given_name} {self.family_name or ''}".strip()


@dataclass
class Relationship:
    """
    A link between two persons.

    'parent' is directed (person1 is the parent of person2); 'spouse' is
    unordered but stored husband-first when genders are known.
    """
    id: str
    person1_id: str
    person2_id: str
    relationship_type: str
    tree_id: str = ""
    marriage_date: str | None = None
    marriage_date_hijri: str | None = None
    marriage_place: str | None = None
    divorce_date: str | None = None
    divorce_date_hijri: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Relationship':
        values = _known_fields(cls, data)
        for key in ('id', 'person1_id', 'person2_id', 'relationship_type'):
            values[key] = str(data[key])
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FamilyGroup:
    """Export-time nuclear family: up to two parents plus their children"""
    key: str
    husband_id: str | None = None
    wife_id: str | None = None
    child_ids: list[str] = field(default_factory=list)
    marriage_date: str | None = None
    marriage_place: str | None = None
    divorce_date: str | None = None

    def has_parent(self, person_id: str) -> bool:
        return person_id in (self.husband_id, self.wife_id)

    def add_child(self, child_id: str) -> None:
        if child_id not in self.child_ids:
            self.child_ids.append(child_id)


@dataclass
class ExportOptions:
    """Switches for optional GEDCOM export content"""
    include_notes: bool = False
    include_photos: bool = False
    include_hijri_dates: bool = False
    submitter_name: str | None = None
    submitter_email: str | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> 'ExportOptions':
        values = _known_fields(cls, data or {})
        for name in ('include_notes', 'include_photos', 'include_hijri_dates'):
            if name in values:
                values[name] = decode_bool(values[name])
        return cls(**values)


@dataclass
class GedcomParseResult:
    """Everything produced by one import run, including non-fatal problems"""
    individuals: list[GedcomIndividual] = field(default_factory=list)
    families: list[GedcomFamily] = field(default_factory=list)
    persons: list[Person] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'persons': [person.to_dict() for person in self.persons],
            'relationships': [rel.to_dict() for rel in self.relationships],
            'errors': list(self.errors),
            'warnings': list(self.warnings),
            'stats': dict(self.stats),
        }


@dataclass
class GedcomExportResult:
    content: str
    filename: str
    stats: dict = field(default_factory=dict)
