"""
BigPagePdf - Change Set

The save payload derived from a page sequence: final page order,
per-page rotation deltas and the deleted pages.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bigpagepdf.editor.page_model import PageSequence


@dataclass(frozen=True)
class ChangeSet:
    """Instructions for rewriting a document.

    Attributes:
        final_order: Identities of the surviving pages, in output order
        rotations: Non-zero rotation per identity, deleted pages included
        deleted_identities: Identities of the pages marked deleted
    """

    final_order: tuple[int, ...] = ()
    rotations: Mapping[int, int] = field(default_factory=dict)
    deleted_identities: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        """Freeze rotations into a read-only copy."""
        object.__setattr__(self, "rotations", MappingProxyType(dict(self.rotations)))

    def __hash__(self) -> int:
        rotations = frozenset(self.rotations.items())
        return hash((self.final_order, rotations, self.deleted_identities))

    @property
    def is_empty(self) -> bool:
        """Whether the output would have no pages."""
        return not self.final_order

    def to_dict(self) -> dict:
        """Convert to the dictionary handed to the rewriting backend.

        Returns:
            Dictionary with page_order, rotations and deleted_pages
        """
        return {
            "page_order": list(self.final_order),
            "rotations": dict(self.rotations),
            "deleted_pages": sorted(self.deleted_identities),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChangeSet":
        """Create ChangeSet from dictionary.

        Rotation keys may be strings, as they are after a JSON round trip.

        Args:
            data: Dictionary with change set data

        Returns:
            New ChangeSet instance
        """
        return cls(
            final_order=tuple(int(i) for i in data.get("page_order", [])),
            rotations={int(k): int(v) for k, v in data.get("rotations", {}).items()},
            deleted_identities=frozenset(int(i) for i in data.get("deleted_pages", [])),
        )


def build_change_set(sequence: PageSequence) -> ChangeSet:
    """Derive the save payload from the current page sequence.

    Rotations of deleted pages are kept; the backend ignores rotations
    of pages that are not in the final order. The result depends only on
    the sequence, so repeated calls without edits return equal change sets.

    Args:
        sequence: The page sequence to read (not modified)

    Returns:
        The ChangeSet describing the sequence
    """
    return ChangeSet(
        final_order=tuple(record.identity for record in sequence.active_view()),
        rotations={r.identity: r.rotation for r in sequence if r.rotation != 0},
        deleted_identities=frozenset(r.identity for r in sequence if r.deleted),
    )
