"""
BigPagePdf - Services Package

Service modules for reading and writing PDF files.
"""

from bigpagepdf.services.pdf_operations import (
    ErrorCode,
    OperationResult,
    PDFInfo,
    apply_change_set,
    get_pdf_info,
    merge_pdfs,
    open_session,
    read_page_geometry,
    save_session,
)

__all__ = [
    "ErrorCode",
    "OperationResult",
    "PDFInfo",
    "apply_change_set",
    "get_pdf_info",
    "merge_pdfs",
    "open_session",
    "read_page_geometry",
    "save_session",
]
