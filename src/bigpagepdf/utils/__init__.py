"""
BigPagePdf - Utils Package

Utility modules for the application.
"""

from bigpagepdf.utils.i18n import _
from bigpagepdf.utils.logger import logger

__all__ = [
    "logger",
    "_",
]
