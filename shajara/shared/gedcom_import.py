"""
Map parsed GEDCOM records onto Shajara persons and relationships
"""

import uuid
from collections.abc import Callable

from .arabic_utils import ArabicNameParser
from .gedcom_parser import GEDCOMParser
from .hijri_calendar import DualDate, gregorian_to_hijri
from .logging_config import get_project_logger
from .models import (
    PARENT,
    SPOUSE,
    GedcomFamily,
    GedcomIndividual,
    GedcomParseResult,
    Person,
    Relationship,
)


logger = get_project_logger(__name__)

HijriConverter = Callable[[str], DualDate]


class GedcomImportMapper:
    """
    Resolve GEDCOM cross-references into UUIDs and build Person/Relationship objects.

    Pointers that never resolve (hand-edited files often have them) create no
    relationship; each one is reported in `warnings`.
    """

    def __init__(self, tree_id: str, hijri_converter: HijriConverter = gregorian_to_hijri):
        self.tree_id = tree_id
        self.hijri_converter = hijri_converter
        self.warnings: list[str] = []

    def map(self, individuals: list[GedcomIndividual],
            families: list[GedcomFamily]) -> tuple[list[Person], list[Relationship]]:
        uuid_by_gedcom_id = self._build_id_index(individuals)
        family_ids = {family.gedcom_id for family in families}

        persons = [self._to_person(individual) for individual in individuals]

        for individual in individuals:
            self._check_family_links(individual, family_ids)

        relationships = []
        for family in families:
            relationships.extend(self._family_relationships(family, uuid_by_gedcom_id))

        return persons, relationships

    def _build_id_index(self, individuals: list[GedcomIndividual]) -> dict[str, str]:
        """gedcom_id -> UUID, built once before any relationship is created"""
        index = {}
        for individual in individuals:
            if individual.gedcom_id in index:
                self.warnings.append(f"Duplicate individual id @{individual.gedcom_id}@; the last record wins")
            index[individual.gedcom_id] = individual.id
        return index

    def _hijri(self, iso_date: str | None) -> str | None:
        if not iso_date:
            return None
        return self.hijri_converter(iso_date).hijri or None

    def _to_person(self, individual: GedcomIndividual) -> Person:
        name = individual.full_name or individual.given_name
        is_arabic = ArabicNameParser.contains_arabic(name)

        person = Person(
            id=individual.id,
            tree_id=self.tree_id,
            given_name=individual.given_name or individual.full_name or 'Unknown',
            family_name=individual.surname or None,
            full_name_ar=name if is_arabic else None,
            full_name_en=None if is_arabic else (individual.full_name or None),
            gender=individual.gender,
            birth_date=individual.birth_date,
            birth_date_hijri=self._hijri(individual.birth_date) or individual.birth_date_hijri,
            birth_place=individual.birth_place,
            death_date=individual.death_date,
            death_date_hijri=self._hijri(individual.death_date) or individual.death_date_hijri,
            death_place=individual.death_place,
            is_living=individual.is_living,
            notes=individual.notes or None,
            laqab=individual.laqab,
            nasab_chain=individual.nasab_chain,
            tribe_id=individual.tribe_id,
            tribal_branch=individual.tribal_branch,
            is_sayyid=individual.is_sayyid,
            sayyid_verified=individual.sayyid_verified,
            sayyid_lineage=individual.sayyid_lineage,
            photo_url=individual.photo_url,
        )

        extracted = ArabicNameParser.extract_name_parts(name) if is_arabic else {}

        # Explicit custom tags win over what the heuristics find in the name
        person.kunya = individual.kunya or extracted.get('kunya')
        person.nisba = individual.nisba or extracted.get('nisba')
        person.patronymic_chain = individual.patronymic_chain or extracted.get('patronymic')

        return person

    def _check_family_links(self, individual: GedcomIndividual, family_ids: set[str]) -> None:
        if individual.family_as_child and individual.family_as_child not in family_ids:
            self.warnings.append(
                f"Individual @{individual.gedcom_id}@ references unknown family "
                f"@{individual.family_as_child}@ (FAMC)"
            )
        for family_id in individual.families_as_spouse:
            if family_id not in family_ids:
                self.warnings.append(
                    f"Individual @{individual.gedcom_id}@ references unknown family @{family_id}@ (FAMS)"
                )

    def _resolve(self, family: GedcomFamily, tag: str, gedcom_id: str | None,
                 uuid_by_gedcom_id: dict[str, str]) -> str | None:
        if not gedcom_id:
            return None
        resolved = uuid_by_gedcom_id.get(gedcom_id)
        if resolved is None:
            self.warnings.append(
                f"Family @{family.gedcom_id}@ references unknown individual @{gedcom_id}@ ({tag})"
            )
        return resolved

    def _family_relationships(self, family: GedcomFamily,
                              uuid_by_gedcom_id: dict[str, str]) -> list[Relationship]:
        relationships = []
        husband = self._resolve(family, 'HUSB', family.husband_id, uuid_by_gedcom_id)
        wife = self._resolve(family, 'WIFE', family.wife_id, uuid_by_gedcom_id)

        if husband and wife:
            relationships.append(Relationship(
                id=str(uuid.uuid4()),
                tree_id=self.tree_id,
                person1_id=husband,
                person2_id=wife,
                relationship_type=SPOUSE,
                marriage_date=family.marriage_date,
                marriage_date_hijri=self._hijri(family.marriage_date),
                marriage_place=family.marriage_place,
                divorce_date=family.divorce_date,
                divorce_date_hijri=self._hijri(family.divorce_date),
            ))

        for child_gedcom_id in family.child_ids:
            child = self._resolve(family, 'CHIL', child_gedcom_id, uuid_by_gedcom_id)
            if not child:
                continue
            for parent in (husband, wife):
                if parent:
                    relationships.append(Relationship(
                        id=str(uuid.uuid4()),
                        tree_id=self.tree_id,
                        person1_id=parent,
                        person2_id=child,
                        relationship_type=PARENT,
                    ))

        return relationships


def parse_gedcom(content: str, tree_id: str,
                 hijri_converter: HijriConverter = gregorian_to_hijri) -> GedcomParseResult:
    """
    Parse GEDCOM text into persons and relationships for a tree.

    Never raises on malformed input: syntax errors are collected in
    `errors` and unresolved references in `warnings`.
    """
    parser = GEDCOMParser()
    parsed = parser.parse(content)

    mapper = GedcomImportMapper(tree_id, hijri_converter)
    persons, relationships = mapper.map(parsed['individuals'], parsed['families'])

    result = GedcomParseResult(
        individuals=parsed['individuals'],
        families=parsed['families'],
        persons=persons,
        relationships=relationships,
        errors=parsed['errors'],
        warnings=parsed['warnings'] + mapper.warnings,
        stats={
            'total_lines': parsed['total_lines'],
            'individuals_found': len(parsed['individuals']),
            'families_found': len(parsed['families']),
            'persons_created': len(persons),
            'relationships_created': len(relationships),
        },
    )

    logger.info(
        f"GEDCOM import for tree {tree_id}: {len(persons)} persons, "
        f"{len(relationships)} relationships, {len(result.errors)} errors, "
        f"{len(result.warnings)} warnings"
    )
    for warning in result.warnings:
        logger.warning(warning)

    return result
