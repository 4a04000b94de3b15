"""
Light/dark theme preference.

A stored preference pins the theme. Without one the theme follows the
environment's reported color scheme, and that choice is never written to
the store, so later environment changes keep applying. The store is
anything with get/set/remove; the page uses the browser's localStorage
(see doi2bib.browser_store) so each visitor keeps their own preference.
"""

import logging
from typing import Callable, Optional

from doi2bib import config

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


class ThemeManager:
    def __init__(self, store, system_prefers_dark: Callable[[], bool]):
        self.store = store
        self._system_prefers_dark = system_prefers_dark
        self.theme = LIGHT

    def stored_theme(self) -> Optional[str]:
        stored = self.store.get(config.THEME_KEY)
        return stored if stored in THEMES else None

    def init(self) -> str:
        """Apply the stored theme, or the environment's without persisting it."""
        return self.sync()

    def sync(self) -> str:
        """Re-apply the stored theme, falling back to the environment's.
        Safe to call on every page run, since the store may fill in late."""
        if self.store.get(config.THEME_KEY) is not None and not self.stored_theme():
            # drop anything unrecognised so the environment keeps driving the theme
            self.store.remove(config.THEME_KEY)
        stored = self.stored_theme()
        if stored:
            self.set_theme(stored, persist=False)
        else:
            self.on_system_change(self._system_prefers_dark())
        return self.theme

    def set_theme(self, theme: str, persist: bool = True) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self.theme = theme
        if persist:
            self.store.set(config.THEME_KEY, theme)
            logger.debug("Theme preference saved: %s", theme)

    def toggle(self) -> str:
        self.set_theme(LIGHT if self.is_dark else DARK)
        return self.theme

    def on_system_change(self, prefers_dark: bool) -> None:
        """Follow an environment color-scheme change unless the user picked a theme."""
        if self.stored_theme():
            return
        self.set_theme(DARK if prefers_dark else LIGHT, persist=False)

    @property
    def is_dark(self) -> bool:
        return self.theme == DARK

    @property
    def icon(self) -> str:
        # the button shows the theme you would switch to
        return "☀️" if self.is_dark else "🌙"
