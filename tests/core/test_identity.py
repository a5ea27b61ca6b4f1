"""Tests for stable object references.

Critical Invariants:
- Refs are values: equal ids and kinds compare and hash equal
- Refs survive a dict round trip unchanged
- Store targets are limited to kinds with a capacity query
"""

import pytest

from creepcore.core.identity import STORE_KINDS, STRUCTURE_KINDS, ObjectKind, ObjectRef


def test_refs_are_hashable_values():
    """Two refs to the same object are interchangeable as dict keys."""
    a = ObjectRef("abc", ObjectKind.SOURCE)
    b = ObjectRef("abc", ObjectKind.SOURCE)

    assert a == b
    assert {a: 1}[b] == 1
    assert a != ObjectRef("abc", ObjectKind.SPAWN)


def test_ref_dict_round_trip():
    ref = ObjectRef("5bbcac4b", ObjectKind.EXTENSION)

    assert ref.to_dict() == {"id": "5bbcac4b", "kind": "extension"}
    assert ObjectRef.from_dict(ref.to_dict()) == ref


def test_unknown_kind_is_rejected():
    with pytest.raises(ValueError):
        ObjectRef.from_dict({"id": "x", "kind": "nuker"})


@pytest.mark.parametrize(
    "kind",
    [ObjectKind.SPAWN, ObjectKind.EXTENSION, ObjectKind.TOWER],
    ids=["spawn", "extension", "tower"],
)
def test_core_store_kinds_present(kind):
    """Spawns, extensions and towers are always store targets."""
    assert kind in STORE_KINDS


def test_sources_and_sites_are_not_structures():
    assert ObjectKind.SOURCE not in STRUCTURE_KINDS
    assert ObjectKind.CONSTRUCTION_SITE not in STRUCTURE_KINDS
    assert STORE_KINDS <= STRUCTURE_KINDS
