"""
Page state for the DOI lookup form.

FetchController owns what the page shows apart from the theme and the copy
button: the raw BibTeX, the parsed article summary, the error line and the
trigger button. The cooldown is a deadline on an injectable clock, so the
page only has to re-render while it is running.
"""

import logging
import math
import time
from enum import Enum
from typing import Callable, Optional

from doi2bib import config
from doi2bib.bibtex_parser import ArticleSummary
from doi2bib.errors import InputError, NetworkError
from doi2bib.pipeline import LookupResult, lookup_doi, resolve_input

logger = logging.getLogger(__name__)

DEFAULT_BUTTON_LABEL = "Get BibTeX"
FETCHING_LABEL = "Fetching..."


class FetchState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SUCCESS = "success"
    ERROR = "error"


class FetchController:
    def __init__(
        self,
        lookup: Callable[[str], LookupResult] = lookup_doi,
        resolve: Callable[[str], str] = resolve_input,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lookup = lookup
        self._resolve = resolve
        self._clock = clock

        self.state = FetchState.IDLE
        self.error = ""
        self.bibtex = ""
        self.summary = ArticleSummary()
        self.abstract_text = ""
        self.info_visible = False

        self._cooldown_until: Optional[float] = None

    # ── Fetch ────────────────────────────────────────────────

    def clear(self) -> None:
        self.error = ""
        self.bibtex = ""
        self.summary = ArticleSummary()
        self.abstract_text = ""
        self.info_visible = False

    def submit(self, text: str) -> Optional[str]:
        """Clear the page and resolve the input to a DOI.
        Returns None (with `error` set) when the input holds no DOI."""
        self.clear()
        try:
            doi = self._resolve(text)
        except InputError as exc:
            self.error = str(exc)
            self.state = FetchState.ERROR
            return None
        self.state = FetchState.FETCHING
        return doi

    def complete(self, doi: str) -> None:
        try:
            result = self._lookup(doi)
        except (InputError, NetworkError) as exc:
            logger.info("Lookup for %s failed: %s", doi, exc)
            self.error = str(exc)
            self.state = FetchState.ERROR
            self._cooldown_until = None
            return

        self.bibtex = result.bibtex
        self.summary = result.summary
        self.abstract_text = result.abstract_text
        self.info_visible = True
        self.state = FetchState.SUCCESS
        self.start_cooldown()

    def fetch(self, text: str) -> None:
        doi = self.submit(text)
        if doi is not None:
            self.complete(doi)

    # ── Cooldown ─────────────────────────────────────────────

    def start_cooldown(self, seconds: Optional[int] = None) -> None:
        seconds = config.COOLDOWN_SECONDS if seconds is None else seconds
        self._cooldown_until = self._clock() + seconds

    @property
    def cooldown_remaining(self) -> int:
        """Whole seconds left on the cooldown, rounded up; 0 when not cooling down."""
        if self._cooldown_until is None:
            return 0
        remaining = self._cooldown_until - self._clock()
        if remaining <= 0:
            self._cooldown_until = None
            return 0
        return math.ceil(remaining)

    @property
    def button_label(self) -> str:
        if self.state is FetchState.FETCHING:
            return FETCHING_LABEL
        remaining = self.cooldown_remaining
        if remaining:
            return f"Wait {remaining}s"
        return DEFAULT_BUTTON_LABEL

    @property
    def button_disabled(self) -> bool:
        return self.state is FetchState.FETCHING or self.cooldown_remaining > 0

    @property
    def in_cooldown(self) -> bool:
        return self.cooldown_remaining > 0
