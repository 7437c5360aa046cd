"""Pytest configuration for bigpagepdf tests.

Provides a factory for small PDFs built with pikepdf, so tests that touch
the PDF layer never depend on files outside the temporary directory.
"""

import pikepdf
import pytest


def create_test_pdf(
    path: str,
    num_pages: int = 3,
    sizes: list[tuple[float, float]] | None = None,
    rotations: dict[int, int] | None = None,
    title: str | None = None,
) -> str:
    """Create a PDF whose page N shows the text 'Page N'.

    Args:
        path: Where to save the PDF
        num_pages: Number of pages
        sizes: Optional (width, height) per page, default US Letter
        rotations: Optional /Rotate value per 1-indexed page
        title: Optional document title

    Returns:
        The path that was written
    """
    pdf = pikepdf.Pdf.new()
    for i in range(num_pages):
        width, height = sizes[i] if sizes else (612, 792)
        page = pikepdf.Page(
            pikepdf.Dictionary(
                Type=pikepdf.Name.Page,
                MediaBox=[0, 0, width, height],
                Contents=pdf.make_stream(f"BT /F1 12 Tf 100 700 Td (Page {i + 1}) Tj ET".encode()),
            )
        )
        pdf.pages.append(page)
        if rotations and (i + 1) in rotations:
            pdf.pages[-1].Rotate = rotations[i + 1]
    if title:
        pdf.docinfo["/Title"] = title
    pdf.save(path)
    pdf.close()
    return path


def page_labels(path) -> list[str]:
    """Read back the 'Page N' label of every page, in order."""
    labels = []
    with pikepdf.open(path) as pdf:
        for page in pdf.pages:
            content = page.Contents.read_bytes().decode()
            start = content.index("(") + 1
            labels.append(content[start : content.index(")")])
    return labels


@pytest.fixture
def make_pdf(tmp_path):
    """Factory fixture: make_pdf(num_pages=3, name="input.pdf", **kwargs) -> path."""

    def _make(num_pages: int = 3, name: str = "input.pdf", **kwargs) -> str:
        return create_test_pdf(str(tmp_path / name), num_pages, **kwargs)

    return _make


@pytest.fixture
def config_path(tmp_path):
    """Path for an isolated settings file."""
    return str(tmp_path / "config" / "settings.json")


@pytest.fixture
def labels_of():
    """Function reading back the 'Page N' labels of a PDF."""
    return page_labels
