"""
Preference store backed by the visitor's browser localStorage.

Values live in the browser, so every visitor keeps their own preferences.
The page reads them through a JS-eval component whose answer only arrives
on a later run: until then `get` returns None and `loaded` is False.
Writes are applied to the local snapshot at once and queued for the
browser; `flush` renders the queued writes and must be called from the
page body, not from a widget callback.
"""

import json
import logging
from typing import Dict, Iterable, List, Optional

from streamlit_js_eval import streamlit_js_eval

from doi2bib import config

logger = logging.getLogger(__name__)


class LocalStorageStore:
    def __init__(self, keys: Iterable[str] = (config.THEME_KEY,), component_key: str = "local_storage"):
        self.keys = tuple(keys)
        self.component_key = component_key
        self._values: Dict[str, Optional[str]] = {}
        self._pending: List[str] = []
        self._writes = 0
        self.loaded = False

    def load(self) -> bool:
        """Read the tracked keys from the browser once per session.
        Returns True when the browser's values are available."""
        if self.loaded:
            return True
        # stringify so a missing key still produces an answer (null would
        # look the same as "not answered yet")
        expression = (
            "JSON.stringify(Object.fromEntries("
            f"{json.dumps(list(self.keys))}.map(k => [k, localStorage.getItem(k)])))"
        )
        raw = streamlit_js_eval(js_expressions=expression, key=f"{self.component_key}_read")
        if raw is None:
            return False

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable localStorage payload: %r", raw)
            data = {}
        if not isinstance(data, dict):
            data = {}

        for key in self.keys:
            # a write made before the read arrived is newer than the browser's value
            if key not in self._values:
                value = data.get(key)
                self._values[key] = value if isinstance(value, str) else None
        self.loaded = True
        logger.debug("Loaded browser preferences: %s", self._values)
        return True

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._pending.append(f"localStorage.setItem({json.dumps(key)}, {json.dumps(value)})")

    def remove(self, key: str) -> None:
        self._values[key] = None
        self._pending.append(f"localStorage.removeItem({json.dumps(key)})")

    @property
    def pending(self) -> List[str]:
        return list(self._pending)

    def flush(self) -> None:
        """Send queued writes to the browser, one component per write."""
        while self._pending:
            expression = self._pending.pop(0)
            self._writes += 1
            streamlit_js_eval(js_expressions=expression, key=f"{self.component_key}_write_{self._writes}")
