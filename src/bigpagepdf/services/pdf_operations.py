"""
BigPagePdf - PDF Operations Service

Pure-Python service for the PDF side of page editing.
No GUI dependencies - can be used from CLI, GUI, or scripts.

Supported operations:
  - Read page geometry to start an edit session
  - Apply a change set (order, rotations, deletions) to a new PDF
  - Merge multiple PDFs
  - Page count and metadata info
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

import pikepdf

from bigpagepdf.config import DEFAULT_PAGE_HEIGHT, DEFAULT_PAGE_WIDTH, ROTATION_STEP_DEGREES
from bigpagepdf.editor.change_set import ChangeSet
from bigpagepdf.editor.page_model import PageGeometry
from bigpagepdf.editor.session import EditSession
from bigpagepdf.utils.exceptions import InvalidPdfError
from bigpagepdf.utils.i18n import _

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error classification for PDF operations."""

    NONE = auto()
    FILE_NOT_FOUND = auto()
    PERMISSION_DENIED = auto()
    CORRUPT_PDF = auto()
    PASSWORD_PROTECTED = auto()
    DISK_FULL = auto()
    EMPTY_RESULT = auto()
    UNKNOWN = auto()


def _classify_error(e: Exception) -> ErrorCode:
    """Classify an exception into an ErrorCode."""
    if isinstance(e, FileNotFoundError):
        return ErrorCode.FILE_NOT_FOUND
    if isinstance(e, PermissionError):
        return ErrorCode.PERMISSION_DENIED
    if isinstance(e, pikepdf.PasswordError):
        return ErrorCode.PASSWORD_PROTECTED
    if isinstance(e, pikepdf.PdfError):
        return ErrorCode.CORRUPT_PDF
    if isinstance(e, OSError) and e.errno == 28:
        return ErrorCode.DISK_FULL
    return ErrorCode.UNKNOWN


def _friendly_error(e: Exception) -> str:
    """Map common exceptions to user-friendly messages."""
    if isinstance(e, FileNotFoundError):
        return _("Could not find the file. Was it moved or deleted?")
    if isinstance(e, PermissionError):
        return _("Cannot write to this folder. Choose a different location.")
    if isinstance(e, pikepdf.PasswordError):
        return _("This PDF is password-protected. Remove the password first.")
    if isinstance(e, pikepdf.PdfError):
        return _("The PDF file appears to be damaged or invalid: {error}").format(error=e)
    return str(e)


def _fail(e: Exception) -> "OperationResult":
    """Create a failed OperationResult from an exception."""
    return OperationResult(
        success=False,
        message=_friendly_error(e),
        error_code=_classify_error(e),
    )


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class PDFInfo:
    """Basic information about a PDF file."""

    path: str
    page_count: int
    file_size_bytes: int
    title: str = ""
    author: str = ""
    creator: str = ""
    encrypted: bool = False
    pdf_version: str = ""

    @property
    def file_size_mb(self) -> float:
        return self.file_size_bytes / (1024 * 1024)


@dataclass
class OperationResult:
    """Generic result for PDF operations."""

    success: bool
    message: str = ""
    output_path: str = ""
    pages_affected: int = 0
    error_code: ErrorCode = ErrorCode.NONE


# ---------------------------------------------------------------------------
# Info / Inspection
# ---------------------------------------------------------------------------


def get_pdf_info(pdf_path: str | Path) -> PDFInfo:
    """Get basic information about a PDF file.

    Args:
        pdf_path: Path to the PDF file.

    Returns:
        PDFInfo with metadata.

    Raises:
        FileNotFoundError: If the file does not exist.
        pikepdf.PdfError: If the file is not a valid PDF.
    """
    pdf_path = str(pdf_path)
    if not os.path.isfile(pdf_path):
        raise FileNotFoundError(f"File not found: {pdf_path}")

    file_size = os.path.getsize(pdf_path)

    with pikepdf.open(pdf_path) as pdf:
        info = PDFInfo(
            path=pdf_path,
            page_count=len(pdf.pages),
            file_size_bytes=file_size,
            pdf_version=str(pdf.pdf_version),
            encrypted=pdf.is_encrypted,
        )

        docinfo = pdf.docinfo
        if "/Title" in docinfo:
            info.title = str(docinfo["/Title"])
        if "/Author" in docinfo:
            info.author = str(docinfo["/Author"])
        if "/Creator" in docinfo:
            info.creator = str(docinfo["/Creator"])

    return info


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


def _inherited_value(page: pikepdf.Page, key: str):
    """Look up a page attribute, following /Parent for inherited values."""
    node = page.obj
    while node is not None:
        if key in node:
            return node[key]
        node = node.get("/Parent")
    return None


def _page_size(page: pikepdf.Page) -> tuple[float, float]:
    """Get page width and height from its MediaBox, A4 if unusable."""
    box = _inherited_value(page, "/MediaBox")
    try:
        if box is not None and len(box) >= 4:
            x0, y0, x1, y1 = (float(v) for v in list(box)[:4])
            width, height = abs(x1 - x0), abs(y1 - y0)
            if width > 0 and height > 0:
                return width, height
    except (TypeError, ValueError):
        pass
    return DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT


def read_page_geometry(pdf_path: str | Path) -> list[PageGeometry]:
    """Read the identity and size of every page of a PDF.

    Args:
        pdf_path: Path to the PDF file.

    Returns:
        One PageGeometry per page, identities numbered from 1.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidPdfError: If the file cannot be opened as a PDF.
    """
    pdf_path = str(pdf_path)
    if not os.path.isfile(pdf_path):
        raise FileNotFoundError(f"File not found: {pdf_path}")

    try:
        with pikepdf.open(pdf_path) as pdf:
            geometries = []
            for number, page in enumerate(pdf.pages, start=1):
                width, height = _page_size(page)
                geometries.append(PageGeometry(identity=number, width=width, height=height))
    except pikepdf.PdfError as e:
        raise InvalidPdfError(pdf_path, _friendly_error(e)) from e

    logger.info("Read %d pages from %s", len(geometries), pdf_path)
    return geometries


def open_session(
    pdf_path: str | Path, rotation_step: int = ROTATION_STEP_DEGREES
) -> EditSession:
    """Load a PDF and start an edit session on it.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidPdfError: If the file cannot be opened as a PDF.
    """
    geometries = read_page_geometry(pdf_path)
    return EditSession.from_geometry(str(pdf_path), geometries, rotation_step=rotation_step)


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------


def _resolve_source_rotation(src_page: pikepdf.Page) -> int:
    """Resolve the effective /Rotate from a page, including inherited values."""
    value = _inherited_value(src_page, "/Rotate")
    try:
        return int(value) % 360 if value is not None else 0
    except (TypeError, ValueError):
        return 0


def _copy_docinfo(src: pikepdf.Pdf, dst: pikepdf.Pdf) -> None:
    """Carry the document info dictionary (title, author...) over."""
    if "/Info" in src.trailer:
        dst.docinfo = dst.copy_foreign(src.docinfo)


def apply_change_set(
    pdf_path: str | Path,
    output_path: str | Path,
    change_set: ChangeSet,
    *,
    allow_empty: bool = False,
) -> OperationResult:
    """Write a new PDF with the pages of a change set.

    Pages are written in change_set.final_order. Each page's /Rotate
    becomes its source rotation plus the change set's rotation delta.
    Rotations for pages not in the final order are ignored.

    The output is written to a temporary file and moved into place, so
    output_path may be the same as pdf_path.

    Args:
        pdf_path: Source PDF path.
        output_path: Output PDF path.
        change_set: Order, rotations and deletions to apply.
        allow_empty: Whether to write a PDF with no pages.

    Returns:
        OperationResult.
    """
    pdf_path = Path(pdf_path)
    output_path = Path(output_path)

    if change_set.is_empty and not allow_empty:
        return OperationResult(
            success=False,
            message=_("Every page was deleted. Keep at least one page to save."),
            error_code=ErrorCode.EMPTY_RESULT,
        )

    tmp_path: str | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            suffix=".pdf", prefix=".bigpagepdf_", dir=str(output_path.parent)
        )
        os.close(fd)

        written = 0
        with pikepdf.open(pdf_path) as src, pikepdf.Pdf.new() as dst:
            total = len(src.pages)
            _copy_docinfo(src, dst)

            for identity in change_set.final_order:
                if identity in change_set.deleted_identities:
                    continue
                if not 1 <= identity <= total:
                    logger.warning("Skipping page %d (document has %d pages)", identity, total)
                    continue

                src_page = src.pages[identity - 1]
                source_rotation = _resolve_source_rotation(src_page)

                dst.pages.append(src_page)
                new_page = dst.pages[-1]

                delta = change_set.rotations.get(identity, 0)
                final_rotation = (source_rotation + delta) % 360
                if final_rotation != 0:
                    new_page.Rotate = final_rotation
                elif "/Rotate" in new_page:
                    del new_page["/Rotate"]

                if delta:
                    logger.debug(
                        "Page %d rotation: source=%d + editor=%d = %d",
                        identity,
                        source_rotation,
                        delta,
                        final_rotation,
                    )
                written += 1

            dst.save(tmp_path)

        os.replace(tmp_path, output_path)
        tmp_path = None

        logger.info("Saved %d pages → %s", written, output_path)
        return OperationResult(
            success=True,
            message=f"Saved {written} pages",
            output_path=str(output_path),
            pages_affected=written,
        )
    except (OSError, pikepdf.PdfError, ValueError) as e:
        logger.error("Save failed: %s", e)
        return _fail(e)
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)


def save_session(
    session: EditSession,
    output_path: str | Path,
    *,
    allow_empty: bool = False,
) -> OperationResult:
    """Save an edit session's changes to output_path.

    The session's pages are not modified; its modified flag is cleared
    when the save succeeds.
    """
    result = apply_change_set(
        session.source_path,
        output_path,
        session.build_change_set(),
        allow_empty=allow_empty,
    )
    if result.success:
        session.clear_modifications()
    return result


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------


def merge_pdfs(
    input_paths: list[str | Path],
    output_path: str | Path,
) -> OperationResult:
    """Merge multiple PDF files into one.

    Args:
        input_paths: List of PDF file paths to merge (in order).
        output_path: Path for the merged output PDF.

    Returns:
        OperationResult.
    """
    if not input_paths:
        return OperationResult(success=False, message=_("No input files provided."))

    output_path = Path(output_path)

    dst = pikepdf.Pdf.new()
    total_pages = 0
    merged_files = 0
    open_sources: list[pikepdf.Pdf] = []

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        for path in input_paths:
            path = Path(path)
            if not path.is_file():
                logger.warning("Skipping missing file: %s", path)
                continue

            src = pikepdf.open(path)
            open_sources.append(src)
            count = len(src.pages)
            for page in src.pages:
                dst.pages.append(page)
            total_pages += count
            merged_files += 1
            logger.info("Merged %d pages from %s", count, path.name)

        if merged_files == 0:
            return OperationResult(
                success=False,
                message=_("None of the input files exist."),
                error_code=ErrorCode.FILE_NOT_FOUND,
            )

        dst.save(str(output_path))
        logger.info("Merged PDF saved: %s (%d pages)", output_path, total_pages)

        return OperationResult(
            success=True,
            message=f"Merged {merged_files} files → {total_pages} pages",
            output_path=str(output_path),
            pages_affected=total_pages,
        )
    except (OSError, pikepdf.PdfError, ValueError) as e:
        logger.error("Merge failed: %s", e)
        return _fail(e)
    finally:
        for src in open_sources:
            src.close()
        dst.close()
