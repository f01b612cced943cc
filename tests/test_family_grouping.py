"""
Tests for grouping relationships into export families
"""

import pytest

from shajara.shared.family_grouping import group_relationships_into_families
from shajara.shared.models import FEMALE, MALE, PARENT, SPOUSE, Person, Relationship


def person(person_id, gender=MALE):
    return Person(id=person_id, given_name=person_id, gender=gender)


def rel(rel_id, person1_id, person2_id, relationship_type, **kwargs):
    return Relationship(id=rel_id, person1_id=person1_id, person2_id=person2_id,
                        relationship_type=relationship_type, **kwargs)


class TestGroupRelationshipsIntoFamilies:
    """Test the three grouping passes"""

    @pytest.fixture
    def persons(self):
        return [
            person('father'),
            person('mother', FEMALE),
            person('son'),
            person('daughter', FEMALE),
        ]

    def test_nuclear_family(self, persons):
        relationships = [
            rel('r1', 'mother', 'father', SPOUSE, marriage_date='1975-06-01', marriage_place='Aleppo'),
            rel('r2', 'father', 'son', PARENT),
            rel('r3', 'mother', 'son', PARENT),
            rel('r4', 'father', 'daughter', PARENT),
        ]

        families = group_relationships_into_families(relationships, persons)

        assert len(families) == 1
        family = families[0]
        assert family.key == 'father-mother'
        assert family.husband_id == 'father'
        assert family.wife_id == 'mother'
        assert family.child_ids == ['son', 'daughter']
        assert family.marriage_date == '1975-06-01'
        assert family.marriage_place == 'Aleppo'

    def test_spouse_with_unknown_person_is_skipped(self, persons):
        families = group_relationships_into_families([rel('r1', 'father', 'stranger', SPOUSE)], persons)
        assert families == []

    def test_single_parent_fallback(self, persons):
        families = group_relationships_into_families([rel('r1', 'mother', 'son', PARENT)], persons)

        assert len(families) == 1
        assert families[0].key == 'single-mother'
        assert families[0].wife_id == 'mother'
        assert families[0].husband_id is None
        assert families[0].child_ids == ['son']

    def test_unmarried_co_parents_stay_split(self, persons):
        """Two parents never linked as spouses each get a single-parent family"""
        relationships = [
            rel('r1', 'father', 'son', PARENT),
            rel('r2', 'mother', 'son', PARENT),
        ]

        families = group_relationships_into_families(relationships, persons)

        assert [family.key for family in families] == ['single-father', 'single-mother']
        assert all(family.child_ids == ['son'] for family in families)

    def test_parent_with_two_marriages_uses_first(self):
        persons = [person('father'), person('wife1', FEMALE), person('wife2', FEMALE), person('child')]
        relationships = [
            rel('r1', 'father', 'wife1', SPOUSE),
            rel('r2', 'father', 'wife2', SPOUSE),
            rel('r3', 'wife2', 'child', PARENT),
        ]

        families = group_relationships_into_families(relationships, persons)

        assert [family.child_ids for family in families] == [[], ['child']]

    def test_remarried_father_child_joins_only_the_matching_marriage(self):
        """A child of the second marriage is not also listed under the first wife"""
        persons = [person('father'), person('wife1', FEMALE), person('wife2', FEMALE), person('child')]
        relationships = [
            rel('r1', 'father', 'wife1', SPOUSE),
            rel('r2', 'father', 'wife2', SPOUSE),
            rel('r3', 'father', 'child', PARENT),
            rel('r4', 'wife2', 'child', PARENT),
        ]

        families = group_relationships_into_families(relationships, persons)

        assert [(family.key, family.child_ids) for family in families] == [
            ('father-wife1', []),
            ('father-wife2', ['child']),
        ]

    def test_each_child_is_in_one_family(self):
        persons = [person('father'), person('wife1', FEMALE), person('wife2', FEMALE),
                   person('son'), person('daughter', FEMALE)]
        relationships = [
            rel('r1', 'father', 'wife1', SPOUSE),
            rel('r2', 'father', 'wife2', SPOUSE),
            rel('r3', 'father', 'son', PARENT),
            rel('r4', 'wife1', 'son', PARENT),
            rel('r5', 'father', 'daughter', PARENT),
            rel('r6', 'wife2', 'daughter', PARENT),
        ]

        families = group_relationships_into_families(relationships, persons)
        child_ids = [child_id for family in families for child_id in family.child_ids]

        assert sorted(child_ids) == ['daughter', 'son']
        assert families[0].child_ids == ['son']
        assert families[1].child_ids == ['daughter']

    def test_unknown_parent_is_ignored(self, persons):
        assert group_relationships_into_families([rel('r1', 'ghost', 'son', PARENT)], persons) == []

    def test_sibling_relationships_are_ignored(self, persons):
        assert group_relationships_into_families([rel('r1', 'son', 'daughter', 'sibling')], persons) == []

    def test_grouping_is_deterministic(self, persons):
        relationships = [
            rel('r1', 'father', 'mother', SPOUSE),
            rel('r2', 'mother', 'daughter', PARENT),
            rel('r3', 'father', 'son', PARENT),
        ]

        first = group_relationships_into_families(relationships, persons)
        second = group_relationships_into_families(relationships, persons)

        assert first == second
        assert first[0].child_ids == ['daughter', 'son']
