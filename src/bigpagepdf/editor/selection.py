"""
BigPagePdf - Page Selection

Selection state used to scope bulk page operations, and the rule that
decides which pages a delete action removes.
"""

from collections.abc import Iterable, Iterator


class SelectionSet:
    """Unordered set of selected page identities.

    No validation against the page sequence is done here; callers filter
    out stale identities before acting on them.
    """

    def __init__(self, identities: Iterable[int] = ()) -> None:
        self._identities: set[int] = set(identities)

    def __contains__(self, identity: object) -> bool:
        return identity in self._identities

    def __len__(self) -> int:
        return len(self._identities)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._identities))

    def __bool__(self) -> bool:
        return bool(self._identities)

    def __repr__(self) -> str:
        return f"SelectionSet({sorted(self._identities)!r})"

    def contains(self, identity: int) -> bool:
        return identity in self._identities

    def toggle(self, identity: int) -> bool:
        """Add the identity if absent, remove it if present.

        Returns:
            True if the identity is selected afterwards
        """
        if identity in self._identities:
            self._identities.discard(identity)
            return False
        self._identities.add(identity)
        return True

    def clear(self) -> None:
        self._identities.clear()

    def discard(self, identities: Iterable[int]) -> None:
        """Drop identities from the selection if present."""
        self._identities.difference_update(identities)

    def identities(self) -> frozenset[int]:
        """Get an immutable snapshot of the selection."""
        return frozenset(self._identities)


def resolve_delete_targets(target: int, selection: SelectionSet) -> frozenset[int]:
    """Decide which pages a delete action on one page removes.

    Deleting a page that belongs to a non-empty selection deletes the whole
    selection. Deleting a page outside the selection deletes only that page
    and leaves the selection alone.

    Args:
        target: Identity of the page the delete action was invoked on
        selection: Current selection

    Returns:
        Identities to delete
    """
    if selection and target in selection:
        return selection.identities()
    return frozenset({target})
