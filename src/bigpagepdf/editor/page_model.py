"""
BigPagePdf - Page Model

Data models for the pages of a document being edited: the immutable page
geometry reported by the loader, the per-page edit state, and the ordered
sequence that owns them.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from bigpagepdf.utils.exceptions import InvalidRotationError, PageNotFoundError
from bigpagepdf.utils.logger import logger


def normalize_rotation(degrees: int) -> int:
    """Reduce a rotation to the range [0, 360).

    Args:
        degrees: Rotation in degrees, positive clockwise

    Returns:
        The equivalent rotation in (0, 90, 180, 270)

    Raises:
        InvalidRotationError: If degrees is not a multiple of 90
    """
    if degrees % 90 != 0:
        raise InvalidRotationError(degrees)
    return degrees % 360


@dataclass(frozen=True)
class PageGeometry:
    """Immutable description of one page of the original document.

    Attributes:
        identity: Original page number (1-indexed)
        width: Page width in points
        height: Page height in points
    """

    identity: int
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate identity and dimensions."""
        if self.identity < 1:
            raise ValueError(f"Page identity must be >= 1, got {self.identity}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Page {self.identity} has invalid size {self.width}x{self.height}"
            )


class PageRecord:
    """Edit state of a single page.

    Identity and geometry never change once the record exists. Rotation
    and the soft-delete flag are read-only properties, changed only by
    rotate() and mark_deleted(), so rotation always stays in [0, 360).
    """

    __slots__ = ("_geometry", "_rotation", "_deleted")

    def __init__(self, geometry: PageGeometry, rotation: int = 0, deleted: bool = False) -> None:
        """Initialize the record.

        Args:
            geometry: Original identity and size of the page
            rotation: Initial rotation, a multiple of 90
            deleted: Whether page is marked for deletion (soft delete)

        Raises:
            InvalidRotationError: If rotation is not a multiple of 90
        """
        self._geometry = geometry
        self._rotation = normalize_rotation(rotation)
        self._deleted = bool(deleted)

    def __repr__(self) -> str:
        return (
            f"PageRecord(identity={self.identity}, rotation={self._rotation}, "
            f"deleted={self._deleted})"
        )

    @property
    def geometry(self) -> PageGeometry:
        return self._geometry

    @property
    def identity(self) -> int:
        return self._geometry.identity

    @property
    def width(self) -> float:
        return self._geometry.width

    @property
    def height(self) -> float:
        return self._geometry.height

    @property
    def rotation(self) -> int:
        """Rotation angle in degrees (0, 90, 180, 270)."""
        return self._rotation

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def display_size(self) -> tuple[float, float]:
        """Width and height as displayed, swapped for quarter turns."""
        if self._rotation in (90, 270):
            return self.height, self.width
        return self.width, self.height

    def rotate(self, degrees: int) -> None:
        """Rotate page by specified degrees."""
        self._rotation = (self._rotation + normalize_rotation(degrees)) % 360

    def mark_deleted(self) -> None:
        self._deleted = True

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the page record
        """
        return {
            "identity": self.identity,
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
            "deleted": self.deleted,
        }


class ActiveView:
    """Lazy, restartable view over the non-deleted records of a sequence.

    Each iteration walks the live sequence again, so the view always
    reflects the current state without copying it.
    """

    def __init__(self, records: list[PageRecord]) -> None:
        self._records = records

    def __iter__(self) -> Iterator[PageRecord]:
        return (record for record in self._records if not record.deleted)

    def __len__(self) -> int:
        return sum(1 for record in self._records if not record.deleted)

    def __bool__(self) -> bool:
        return any(not record.deleted for record in self._records)

    def identities(self) -> list[int]:
        """Get the identities of the visible pages, in order."""
        return [record.identity for record in self]


@dataclass
class PageSequence:
    """Ordered collection of page records for one loaded document.

    Order is significant: it is the order pages are shown and written.
    All mutation goes through the methods below so identities stay unique
    and stable across reordering.

    Attributes:
        records: Page records in current order, deleted ones included
    """

    records: list[PageRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Build the identity index and reject duplicate identities."""
        self._index: dict[int, PageRecord] = {}
        for record in self.records:
            if record.identity in self._index:
                raise ValueError(f"Duplicate page identity {record.identity}")
            self._index[record.identity] = record

    @classmethod
    def from_geometry(cls, geometries: Iterable[PageGeometry]) -> "PageSequence":
        """Create the initial sequence for a freshly loaded document.

        Args:
            geometries: Page geometry reported by the loader, in document order

        Returns:
            New PageSequence with every page unrotated and not deleted
        """
        return cls(records=[PageRecord(geometry=g) for g in geometries])

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PageRecord]:
        return iter(self.records)

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    def identities(self) -> list[int]:
        """Get all identities in sequence order, deleted pages included."""
        return [record.identity for record in self.records]

    def get(self, identity: int) -> PageRecord:
        """Get the record for a page identity.

        Raises:
            PageNotFoundError: If no record has this identity
        """
        try:
            return self._index[identity]
        except KeyError:
            raise PageNotFoundError(identity, "page sequence") from None

    def active_view(self) -> ActiveView:
        """Get the pages that are not marked as deleted, in sequence order."""
        return ActiveView(self.records)

    def rotate(self, identity: int, degrees: int) -> int:
        """Rotate one page.

        Deleted pages can be rotated too; the rotation is kept in case the
        page is restored before saving.

        Args:
            identity: Page identity
            degrees: Rotation delta, a multiple of 90 (negative is counter-clockwise)

        Returns:
            The page's new rotation

        Raises:
            PageNotFoundError: If identity is not in the sequence
            InvalidRotationError: If degrees is not a multiple of 90
        """
        record = self.get(identity)
        record.rotate(degrees)
        logger.debug(f"Page {identity} rotated by {degrees}° to {record.rotation}°")
        return record.rotation

    def mark_deleted(self, identities: Iterable[int]) -> set[int]:
        """Soft-delete pages.

        Records stay in place; identities that are not in the sequence are
        ignored.

        Args:
            identities: Identities of the pages to delete

        Returns:
            The identities that were found and marked
        """
        marked: set[int] = set()
        for identity in identities:
            record = self._index.get(identity)
            if record is None:
                logger.debug(f"Ignoring delete of unknown page {identity}")
                continue
            record.mark_deleted()
            marked.add(identity)
        return marked

    def move_before(self, source: int, target: int) -> bool:
        """Move a page so it sits immediately before another page.

        Positions are taken on the full sequence, deleted pages included.

        Args:
            source: Identity of the page to move
            target: Identity of the page to insert before

        Returns:
            True if the order changed

        Raises:
            PageNotFoundError: If either identity is not in the sequence
        """
        record = self.get(source)
        self.get(target)
        if source == target:
            return False

        old_order = self.identities()
        self.records.remove(record)
        target_pos = next(i for i, r in enumerate(self.records) if r.identity == target)
        self.records.insert(target_pos, record)
        changed = self.identities() != old_order
        if changed:
            logger.debug(f"Page {source} moved before page {target}")
        return changed

    def move_to_end(self, identity: int) -> bool:
        """Move a page after every other page.

        Returns:
            True if the order changed

        Raises:
            PageNotFoundError: If identity is not in the sequence
        """
        record = self.get(identity)
        if self.records[-1] is record:
            return False
        self.records.remove(record)
        self.records.append(record)
        logger.debug(f"Page {identity} moved to the end")
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the sequence
        """
        return {"pages": [r.to_dict() for r in self.records]}
