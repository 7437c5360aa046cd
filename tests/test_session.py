"""Tests for session module (EditSession and PageView)."""

import pytest

from bigpagepdf.editor.page_model import PageGeometry
from bigpagepdf.editor.session import EditSession, PageView
from bigpagepdf.utils.exceptions import EmptyResultError, PageNotFoundError


def _session(count: int = 6, **kwargs) -> EditSession:
    geometries = [PageGeometry(i, 612, 792) for i in range(1, count + 1)]
    return EditSession.from_geometry("/test.pdf", geometries, **kwargs)


class TestSessionState:
    def test_initial_state(self):
        session = _session(3)
        assert session.source_path == "/test.pdf"
        assert session.active_count == 3
        assert session.deleted_count == 0
        assert session.selected_count == 0
        assert session.modified is False

    def test_mark_and_clear_modified(self):
        session = _session(1)
        session.mark_modified()
        assert session.modified is True
        session.clear_modifications()
        assert session.modified is False

    def test_snapshot(self):
        session = _session(3)
        session.rotate(2, 90)
        session.toggle_select(3)
        views = session.snapshot()
        assert views == (
            PageView(identity=1, position=0, width=612, height=792, rotation=0, selected=False),
            PageView(identity=2, position=1, width=612, height=792, rotation=90, selected=False),
            PageView(identity=3, position=2, width=612, height=792, rotation=0, selected=True),
        )
        assert views[1].display_size == (792, 612)

    def test_snapshot_is_immutable(self):
        view = _session(1).snapshot()[0]
        with pytest.raises(AttributeError):
            view.rotation = 90

    def test_snapshot_hides_deleted_pages(self):
        session = _session(3)
        session.delete(2)
        assert [v.identity for v in session.snapshot()] == [1, 3]
        assert [v.position for v in session.snapshot()] == [0, 1]


class TestSessionRotation:
    def test_rotate_right_and_left(self):
        session = _session(1)
        assert session.rotate_right(1) == 90
        assert session.rotate_left(1) == 0
        assert session.rotate_left(1) == 270
        assert session.modified is True

    def test_custom_rotation_step(self):
        session = _session(1, rotation_step=180)
        assert session.rotate_right(1) == 180

    def test_rotate_unknown_raises_without_marking_modified(self):
        session = _session(2)
        with pytest.raises(PageNotFoundError):
            session.rotate(5, 90)
        assert session.modified is False


class TestSessionDelete:
    def test_delete_selected_page_deletes_selection(self):
        session = _session(6)
        session.toggle_select(2)
        session.toggle_select(4)
        deleted = session.delete(4)
        assert deleted == frozenset({2, 4})
        assert session.selection == frozenset()
        assert session.build_change_set().final_order == (1, 3, 5, 6)

    def test_delete_unselected_page_keeps_selection(self):
        session = _session(6)
        session.toggle_select(2)
        session.toggle_select(4)
        deleted = session.delete(6)
        assert deleted == frozenset({6})
        assert session.selection == frozenset({2, 4})
        assert session.build_change_set().final_order == (1, 2, 3, 4, 5)

    def test_delete_without_selection(self):
        session = _session(3)
        assert session.delete(1) == frozenset({1})
        assert session.deleted_count == 1
        assert session.modified is True

    def test_delete_unknown_is_noop(self):
        session = _session(3)
        assert session.delete(42) == frozenset()
        assert session.modified is False

    def test_deleted_page_cannot_be_selected(self):
        session = _session(3)
        session.delete(2)
        with pytest.raises(PageNotFoundError):
            session.toggle_select(2)

    def test_check_saveable_rejects_empty(self):
        session = _session(2)
        session.delete(1)
        session.delete(2)
        with pytest.raises(EmptyResultError):
            session.check_saveable()

    def test_check_saveable_allows_empty_when_asked(self):
        session = _session(1)
        session.delete(1)
        assert session.check_saveable(allow_empty=True).final_order == ()


class TestSessionReorder:
    def test_move_before(self):
        session = _session(5)
        assert session.move_before(5, 1) is True
        assert session.build_change_set().final_order == (5, 1, 2, 3, 4)
        assert session.modified is True

    def test_move_page_forward_by_one(self):
        session = _session(4)
        session.move_page(2, 1)
        assert session.build_change_set().final_order == (1, 3, 2, 4)

    def test_move_page_backward_by_one(self):
        session = _session(4)
        session.move_page(3, -1)
        assert session.build_change_set().final_order == (1, 3, 2, 4)

    def test_move_page_to_last_visible(self):
        session = _session(4)
        session.move_page(1, 10)
        assert session.build_change_set().final_order == (2, 3, 4, 1)

    def test_move_page_skips_deleted_pages(self):
        session = _session(4)
        session.delete(2)
        session.move_page(1, 1)
        assert session.build_change_set().final_order == (3, 1, 4)

    def test_move_page_at_boundary_is_noop(self):
        session = _session(3)
        assert session.move_page(1, -1) is False
        assert session.modified is False

    def test_drag_and_drop(self):
        session = _session(5)
        session.begin_drag(5)
        assert session.modified is False
        assert session.drop(1) is True
        assert session.modified is True
        assert session.build_change_set().final_order == (5, 1, 2, 3, 4)

    def test_cancelled_drag(self):
        session = _session(3)
        session.begin_drag(3)
        session.cancel_drag()
        assert session.drag.dragging is False
        assert session.modified is False
        assert session.build_change_set().final_order == (1, 2, 3)


class TestSessionChangeSet:
    def test_example_edit_sequence(self):
        session = _session(5)
        session.rotate(3, 90)
        session.delete(2)
        session.move_before(5, 1)
        change_set = session.build_change_set()
        assert change_set.final_order == (5, 1, 3, 4)
        assert change_set.rotations == {3: 90}
        assert change_set.deleted_identities == frozenset({2})

    def test_build_does_not_clear_modified(self):
        session = _session(2)
        session.rotate(1, 90)
        session.build_change_set()
        assert session.modified is True

    def test_deleting_dragged_page_cancels_drag(self):
        session = _session(5)
        session.begin_drag(3)
        session.delete(3)
        assert session.drag.dragging is False
        assert session.drop(1) is False
        assert session.build_change_set().final_order == (1, 2, 4, 5)
        assert session.sequence.identities() == [1, 2, 3, 4, 5]

    def test_deleting_other_page_keeps_drag(self):
        session = _session(5)
        session.begin_drag(5)
        session.delete(2)
        assert session.drag.source == 5
        assert session.drop(1) is True
        assert session.build_change_set().final_order == (5, 1, 3, 4)

    def test_pages_cannot_be_edited_around_the_session(self):
        session = _session(2)
        with pytest.raises(AttributeError):
            session.sequence.get(1).rotation = 450
        assert session.build_change_set().rotations == {}
