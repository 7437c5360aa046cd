"""
BigPagePdf - Python package for editing the page structure of PDF files

This package provides the page-edit session model (rotate, delete and
reorder pages) and the PDF reading and writing around it.
"""

__version__ = "1.0.0"
__author__ = "BigLinux Team"
__license__ = "GPL-3.0"


def main() -> int:
    """Main entry point for the application.

    Returns:
        The application exit code.
    """
    from bigpagepdf.cli import main as cli_main

    return cli_main()


__all__ = ["main", "__version__", "__author__", "__license__"]
