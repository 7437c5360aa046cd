#!/usr/bin/env python3
"""
BigPagePdf - Internationalization Module

This module initializes gettext for internationalization support.
"""

import gettext
import locale
import os
import sys
from collections.abc import Callable


def _dummy_translate(text: str) -> str:
    """Fallback translation function that returns the original text.

    Args:
        text: The text to translate.

    Returns:
        The original text unchanged.
    """
    return text


# Initialize _ with the fallback function
_: Callable[[str], str] = _dummy_translate

# Configure gettext
try:
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        locale.setlocale(locale.LC_ALL, "C")

    # Check multiple locations where translation files might be
    locale_dirs = [
        "/usr/share/locale",
        os.path.join(sys.prefix, "share", "locale"),
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "locale"),
    ]

    for locale_dir in locale_dirs:
        if os.path.exists(locale_dir):
            gettext.bindtextdomain("bigpagepdf", locale_dir)

    gettext.textdomain("bigpagepdf")

    _ = gettext.gettext

except locale.Error:
    # Keep using the dummy function if the locale cannot be configured
    pass

