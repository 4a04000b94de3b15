"""Runtime configuration and logging setup."""

import logging
import os
from typing import Optional

from doi2bib import __version__

# ═══════════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════════

# External API base URLs
DOI_RESOLVER_URL = "https://doi.org"
SEMANTIC_SCHOLAR_API_URL = "https://api.semanticscholar.org/graph/v1/paper"

# Contact address sent to Crossref so requests land in the polite pool
CROSSREF_MAILTO = os.environ.get("DOI2BIB_MAILTO", "")

USER_AGENT = f"doi2bib/{__version__}"

REQUEST_TIMEOUT = float(os.environ.get("DOI2BIB_TIMEOUT", "10"))

# Retry configuration for abstract lookups (exponential backoff)
MAX_RETRIES = int(os.environ.get("DOI2BIB_MAX_RETRIES", "3"))
RETRY_DELAY = 1.0
BACKOFF_FACTOR = 2.0

# UI timers, in seconds
COOLDOWN_SECONDS = 10
COPY_REVERT_SECONDS = 2

# localStorage key holding the theme preference
THEME_KEY = "theme"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; level defaults to $DOI2BIB_LOG_LEVEL or INFO."""
    level = (level or os.environ.get("DOI2BIB_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
