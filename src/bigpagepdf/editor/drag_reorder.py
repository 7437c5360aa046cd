"""
BigPagePdf - Drag Reorder Controller

Turns a drag-and-drop gesture over the visible pages into a single
reorder of the full page sequence.
"""

from bigpagepdf.editor.page_model import PageSequence
from bigpagepdf.utils.exceptions import PageNotFoundError
from bigpagepdf.utils.logger import logger


class DragReorderController:
    """Tracks one drag gesture at a time and applies it on drop.

    Deleted pages are hidden from the user, so they can be neither the
    source nor the target of a drag. Identities are handed straight to
    PageSequence.move_before, which positions by identity rather than by
    index, so no translation from visible to full-sequence positions is
    needed. The sequence is mutated exactly once, on drop.
    """

    def __init__(self, sequence: PageSequence) -> None:
        self._sequence = sequence
        self._source: int | None = None

    @property
    def source(self) -> int | None:
        """Identity of the page being dragged, if any."""
        return self._source

    @property
    def dragging(self) -> bool:
        return self._source is not None

    def _is_visible(self, identity: int) -> bool:
        return identity in self._sequence and not self._sequence.get(identity).deleted

    def _require_visible(self, identity: int) -> None:
        if not self._is_visible(identity):
            raise PageNotFoundError(identity, "visible pages")

    def begin(self, source: int) -> None:
        """Start dragging a page.

        Raises:
            PageNotFoundError: If the page is unknown or deleted
        """
        self._require_visible(source)
        self._source = source
        logger.debug(f"Drag started on page {source}")

    def hover(self, target: int) -> bool:
        """Report whether dropping on target would move the dragged page.

        Never changes the sequence.
        """
        if self._source is None or target == self._source:
            return False
        return self._is_visible(self._source) and self._is_visible(target)

    def drop(self, target: int) -> bool:
        """Finish the drag by moving the source page before the target page.

        The drag ends whether or not the drop succeeds.

        Args:
            target: Identity of the page the source was dropped on

        Returns:
            True if the page order changed

        Raises:
            PageNotFoundError: If the source or target is unknown or deleted
        """
        source = self._source
        self._source = None

        if source is None or source == target:
            return False

        self._require_visible(source)
        self._require_visible(target)
        moved = self._sequence.move_before(source, target)
        if moved:
            logger.info(f"Page {source} dropped before page {target}")
        return moved

    def cancel(self) -> None:
        """Abandon the drag without touching the sequence."""
        if self._source is not None:
            logger.debug(f"Drag of page {self._source} cancelled")
        self._source = None
