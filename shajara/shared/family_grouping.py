"""
Group flat parent/spouse relationships into nuclear families for GEDCOM export
"""

from .models import FEMALE, MALE, PARENT, SPOUSE, FamilyGroup, Person, Relationship


def group_relationships_into_families(relationships: list[Relationship],
                                      persons: list[Person]) -> list[FamilyGroup]:
    """
    Cluster relationships into FamilyGroups in three passes.

    1. every spouse relationship becomes a "{husband}-{wife}" group
    2. each child joins the group whose husband and wife are both its
       parents, else the first group holding one of its parents
    3. children still without a group go to a "single-{parent}" group

    Two parents of one child who are never linked as spouses end up in two
    separate single-parent groups; the relationship data cannot tell us
    they belong together.
    """
    person_by_id = {person.id: person for person in persons}
    families: dict[str, FamilyGroup] = {}

    for rel in relationships:
        if rel.relationship_type != SPOUSE:
            continue
        person1 = person_by_id.get(rel.person1_id)
        person2 = person_by_id.get(rel.person2_id)
        if not person1 or not person2:
            continue

        husband_id = person1.id if person1.gender == MALE else person2.id
        wife_id = person1.id if person1.gender == FEMALE else person2.id
        key = f"{husband_id}-{wife_id}"

        if key not in families:
            families[key] = FamilyGroup(
                key=key,
                husband_id=husband_id,
                wife_id=wife_id,
                marriage_date=rel.marriage_date or None,
                marriage_place=rel.marriage_place or None,
                divorce_date=rel.divorce_date or None,
            )

    parent_links = [
        rel for rel in relationships
        if rel.relationship_type == PARENT and rel.person1_id in person_by_id
    ]

    parents_by_child: dict[str, set[str]] = {}
    for rel in parent_links:
        parents_by_child.setdefault(rel.person2_id, set()).add(rel.person1_id)

    # A remarried parent's child belongs only to the marriage with its other parent
    for child_id, parent_ids in parents_by_child.items():
        family = next(
            (family for family in families.values()
             if family.husband_id in parent_ids and family.wife_id in parent_ids),
            None,
        )
        if family is None:
            family = next(
                (family for family in families.values()
                 if any(family.has_parent(parent_id) for parent_id in parent_ids)),
                None,
            )
        if family is not None:
            family.add_child(child_id)

    # Membership after pass 2; unmarried co-parents each get a single-parent group
    grouped_children = {child_id for family in families.values() for child_id in family.child_ids}

    for rel in parent_links:
        parent_id, child_id = rel.person1_id, rel.person2_id
        if child_id in grouped_children:
            continue

        key = f"single-{parent_id}"
        family = families.get(key)
        if family is None:
            family = FamilyGroup(key=key)
            if person_by_id[parent_id].gender == MALE:
                family.husband_id = parent_id
            else:
                family.wife_id = parent_id
            families[key] = family
        family.add_child(child_id)

    return list(families.values())

