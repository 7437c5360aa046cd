"""
BigPagePdf - Page Editor Module

This module provides the in-memory model for editing the page structure
of a document: page rotation, soft deletion, selection and reordering,
and the change set handed to the PDF writer at save time.

Main Components:
- EditSession: Owns the pages and selection of one loaded document
- PageSequence: Ordered page records with identity-based operations
- SelectionSet: Selected pages scoping bulk deletes
- DragReorderController: Drag-and-drop gesture to page move
- ChangeSet: Final order, rotations and deleted pages for saving
"""

from bigpagepdf.editor.change_set import ChangeSet, build_change_set
from bigpagepdf.editor.drag_reorder import DragReorderController
from bigpagepdf.editor.page_model import (
    ActiveView,
    PageGeometry,
    PageRecord,
    PageSequence,
    normalize_rotation,
)
from bigpagepdf.editor.selection import SelectionSet, resolve_delete_targets
from bigpagepdf.editor.session import EditSession, PageView

__all__ = [
    "ActiveView",
    "ChangeSet",
    "DragReorderController",
    "EditSession",
    "PageGeometry",
    "PageRecord",
    "PageSequence",
    "PageView",
    "SelectionSet",
    "build_change_set",
    "normalize_rotation",
    "resolve_delete_targets",
]
