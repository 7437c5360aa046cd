#!/usr/bin/env python3
"""
BigPagePdf - Configuration Module

This module contains all configuration constants and paths used by the application.
"""

import logging
import os
from typing import Final

from bigpagepdf.utils.i18n import _

# ============================================================================
# Application Constants
# ============================================================================

APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = _("Reorder, rotate and delete the pages of your PDF documents")


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/bigpagepdf")
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "BigPagePdf"


# ============================================================================
# Page Editing Constants
# ============================================================================

# Rotation applied by a single rotate-left / rotate-right action
ROTATION_STEP_DEGREES: Final[int] = 90

# Page size reported when a page has no usable MediaBox (A4 in points)
DEFAULT_PAGE_WIDTH: Final[float] = 595.0
DEFAULT_PAGE_HEIGHT: Final[float] = 842.0

# Suffix appended to the input file name when no output path is given
DEFAULT_OUTPUT_SUFFIX: Final[str] = "edited"
