"""Tests for change_set module (ChangeSet and build_change_set)."""

import json

import pytest

from bigpagepdf.editor.change_set import ChangeSet, build_change_set
from bigpagepdf.editor.page_model import PageGeometry, PageSequence


@pytest.fixture
def sequence():
    return PageSequence.from_geometry(PageGeometry(i, 595, 842) for i in range(1, 6))


class TestBuildChangeSet:
    def test_no_edits(self, sequence):
        change_set = build_change_set(sequence)
        assert change_set.final_order == (1, 2, 3, 4, 5)
        assert change_set.rotations == {}
        assert change_set.deleted_identities == frozenset()

    def test_rotate_delete_move(self, sequence):
        sequence.rotate(3, 90)
        sequence.mark_deleted({2})
        sequence.move_before(5, 1)
        change_set = build_change_set(sequence)
        assert change_set.final_order == (5, 1, 3, 4)
        assert change_set.rotations == {3: 90}
        assert change_set.deleted_identities == frozenset({2})

    def test_deleted_page_keeps_rotation_entry(self, sequence):
        sequence.rotate(2, -90)
        sequence.mark_deleted({2})
        change_set = build_change_set(sequence)
        assert 2 not in change_set.final_order
        assert change_set.rotations == {2: 270}
        assert change_set.deleted_identities == frozenset({2})

    def test_full_turn_is_omitted(self, sequence):
        for _ in range(4):
            sequence.rotate(1, 90)
        assert build_change_set(sequence).rotations == {}

    def test_all_deleted_gives_empty_order(self, sequence):
        sequence.mark_deleted({1, 2, 3, 4, 5})
        change_set = build_change_set(sequence)
        assert change_set.final_order == ()
        assert change_set.is_empty

    def test_repeated_builds_are_identical(self, sequence):
        sequence.rotate(4, 180)
        sequence.mark_deleted({1})
        sequence.move_before(4, 2)
        first = build_change_set(sequence)
        second = build_change_set(sequence)
        assert first == second
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_does_not_mutate_sequence(self, sequence):
        sequence.rotate(1, 90)
        before = sequence.to_dict()
        build_change_set(sequence)
        assert sequence.to_dict() == before


class TestChangeSetSerialization:
    def test_to_dict(self):
        change_set = ChangeSet(
            final_order=(5, 1, 3, 4),
            rotations={3: 90},
            deleted_identities=frozenset({2}),
        )
        assert change_set.to_dict() == {
            "page_order": [5, 1, 3, 4],
            "rotations": {3: 90},
            "deleted_pages": [2],
        }

    def test_from_dict_after_json(self):
        change_set = ChangeSet(
            final_order=(2, 1),
            rotations={1: 180, 3: 270},
            deleted_identities=frozenset({3}),
        )
        restored = ChangeSet.from_dict(json.loads(json.dumps(change_set.to_dict())))
        assert restored == change_set

    def test_from_empty_dict(self):
        assert ChangeSet.from_dict({}) == ChangeSet()


class TestChangeSetValue:
    def test_equal_change_sets_hash_equal(self):
        first = ChangeSet(final_order=(2, 1), rotations={1: 90}, deleted_identities=frozenset({3}))
        second = ChangeSet(final_order=(2, 1), rotations={1: 90}, deleted_identities=frozenset({3}))
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_rotations_are_read_only(self):
        change_set = ChangeSet(final_order=(1,), rotations={1: 90})
        with pytest.raises(TypeError):
            change_set.rotations[1] = 180

    def test_rotations_copied_from_caller(self):
        rotations = {1: 90}
        change_set = ChangeSet(final_order=(1,), rotations=rotations)
        rotations[1] = 270
        assert change_set.rotations == {1: 90}
