"""
BigPagePdf - Edit Session

The single object that owns a document's page sequence and selection.
Every user action goes through one of its methods; presentation code
re-renders from the immutable snapshots it returns.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from bigpagepdf.config import ROTATION_STEP_DEGREES
from bigpagepdf.editor.change_set import ChangeSet, build_change_set
from bigpagepdf.editor.drag_reorder import DragReorderController
from bigpagepdf.editor.page_model import PageGeometry, PageSequence
from bigpagepdf.editor.selection import SelectionSet, resolve_delete_targets
from bigpagepdf.utils.exceptions import EmptyResultError, PageNotFoundError
from bigpagepdf.utils.logger import logger


@dataclass(frozen=True)
class PageView:
    """Read-only view of a visible page for rendering.

    Attributes:
        identity: Original page number (1-indexed)
        position: Position among the visible pages (0-indexed)
        width: Original page width in points
        height: Original page height in points
        rotation: Rotation angle in degrees (0, 90, 180, 270)
        selected: Whether the page is in the selection
    """

    identity: int
    position: int
    width: float
    height: float
    rotation: int
    selected: bool

    @property
    def display_size(self) -> tuple[float, float]:
        if self.rotation in (90, 270):
            return self.height, self.width
        return self.width, self.height


class EditSession:
    """Page-edit session for one loaded document."""

    def __init__(
        self,
        source_path: str,
        sequence: PageSequence,
        rotation_step: int = ROTATION_STEP_DEGREES,
    ) -> None:
        """Initialize the session.

        Args:
            source_path: Path of the document the pages came from
            sequence: Initial page sequence, owned by the session from now on
            rotation_step: Degrees applied by rotate_left / rotate_right
        """
        self._source_path = source_path
        self._sequence = sequence
        self._selection = SelectionSet()
        self._drag = DragReorderController(sequence)
        self._rotation_step = rotation_step
        self._modified = False

    @classmethod
    def from_geometry(
        cls,
        source_path: str,
        geometries: Iterable[PageGeometry],
        rotation_step: int = ROTATION_STEP_DEGREES,
    ) -> "EditSession":
        """Create a session from the page list reported by the loader."""
        sequence = PageSequence.from_geometry(geometries)
        logger.info(f"Editing {source_path} ({len(sequence)} pages)")
        return cls(source_path, sequence, rotation_step=rotation_step)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def source_path(self) -> str:
        return self._source_path

    @property
    def sequence(self) -> PageSequence:
        return self._sequence

    @property
    def selection(self) -> frozenset[int]:
        return self._selection.identities()

    @property
    def drag(self) -> DragReorderController:
        return self._drag

    @property
    def modified(self) -> bool:
        return self._modified

    @property
    def active_count(self) -> int:
        return len(self._sequence.active_view())

    @property
    def deleted_count(self) -> int:
        return len(self._sequence) - self.active_count

    @property
    def selected_count(self) -> int:
        return len(self._selection)

    def mark_modified(self) -> None:
        """Mark the session as having unsaved changes."""
        self._modified = True

    def clear_modifications(self) -> None:
        """Clear the modified flag."""
        self._modified = False

    def snapshot(self) -> tuple[PageView, ...]:
        """Get immutable views of the visible pages, in order."""
        return tuple(
            PageView(
                identity=record.identity,
                position=position,
                width=record.width,
                height=record.height,
                rotation=record.rotation,
                selected=record.identity in self._selection,
            )
            for position, record in enumerate(self._sequence.active_view())
        )

    def _require_visible(self, identity: int) -> None:
        if identity not in self._sequence or self._sequence.get(identity).deleted:
            raise PageNotFoundError(identity, "visible pages")

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def rotate(self, identity: int, degrees: int) -> int:
        """Rotate a page by degrees (a multiple of 90).

        Returns:
            The page's new rotation
        """
        rotation = self._sequence.rotate(identity, degrees)
        self.mark_modified()
        logger.info(f"Rotated page {identity} by {degrees}°")
        return rotation

    def rotate_left(self, identity: int) -> int:
        """Rotate a page one step counter-clockwise."""
        return self.rotate(identity, -self._rotation_step)

    def rotate_right(self, identity: int) -> int:
        """Rotate a page one step clockwise."""
        return self.rotate(identity, self._rotation_step)

    # ------------------------------------------------------------------
    # Selection and deletion
    # ------------------------------------------------------------------

    def toggle_select(self, identity: int) -> bool:
        """Toggle a visible page in or out of the selection.

        Returns:
            True if the page is selected afterwards

        Raises:
            PageNotFoundError: If the page is unknown or deleted
        """
        self._require_visible(identity)
        return self._selection.toggle(identity)

    def clear_selection(self) -> None:
        self._selection.clear()

    def delete(self, identity: int) -> frozenset[int]:
        """Delete the page a delete action was invoked on.

        If the page is part of the selection, every selected page is deleted
        and the selection is cleared. Otherwise only this page is deleted and
        the selection is kept. A drag of a deleted page is cancelled.

        Args:
            identity: Page the action was invoked on

        Returns:
            Identities that were marked deleted
        """
        targets = resolve_delete_targets(identity, self._selection)
        consumed_selection = identity in self._selection

        marked = self._sequence.mark_deleted(targets)
        if consumed_selection:
            self._selection.clear()
        if self._drag.source in marked:
            self._drag.cancel()

        if marked:
            self.mark_modified()
            logger.info(f"Deleted {len(marked)} page(s): {sorted(marked)}")
        return frozenset(marked)

    # ------------------------------------------------------------------
    # Reordering
    # ------------------------------------------------------------------

    def move_before(self, source: int, target: int) -> bool:
        """Move a page immediately before another page.

        Returns:
            True if the page order changed
        """
        moved = self._sequence.move_before(source, target)
        if moved:
            self.mark_modified()
            logger.info(f"Moved page {source} before page {target}")
        return moved

    def move_to_end(self, identity: int) -> bool:
        """Move a page after every other page."""
        moved = self._sequence.move_to_end(identity)
        if moved:
            self.mark_modified()
            logger.info(f"Moved page {identity} to the end")
        return moved

    def move_page(self, identity: int, offset: int) -> bool:
        """Move a visible page by offset slots among the visible pages.

        The move is clamped to the first and last visible positions.

        Args:
            identity: Page to move
            offset: Slots to move; negative moves towards the start

        Returns:
            True if the page order changed

        Raises:
            PageNotFoundError: If the page is unknown or deleted
        """
        self._require_visible(identity)
        visible = self._sequence.active_view().identities()
        current = visible.index(identity)
        new_index = max(0, min(current + offset, len(visible) - 1))

        if new_index == current:
            return False
        if new_index < current:
            return self.move_before(identity, visible[new_index])
        if new_index == len(visible) - 1:
            return self.move_to_end(identity)
        return self.move_before(identity, visible[new_index + 1])

    def begin_drag(self, source: int) -> None:
        self._drag.begin(source)

    def drop(self, target: int) -> bool:
        """Drop the dragged page before target.

        Returns:
            True if the page order changed
        """
        moved = self._drag.drop(target)
        if moved:
            self.mark_modified()
        return moved

    def cancel_drag(self) -> None:
        self._drag.cancel()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def build_change_set(self) -> ChangeSet:
        """Derive the save payload. The session is not modified."""
        return build_change_set(self._sequence)

    def check_saveable(self, allow_empty: bool = False) -> ChangeSet:
        """Build the change set and apply the empty-output policy.

        Args:
            allow_empty: Whether a document with no pages may be written

        Returns:
            The change set to hand to the rewriting backend

        Raises:
            EmptyResultError: If every page is deleted and allow_empty is False
        """
        change_set = self.build_change_set()
        if change_set.is_empty and not allow_empty:
            raise EmptyResultError(self._source_path)
        return change_set
