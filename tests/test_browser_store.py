"""Tests for the localStorage-backed preference store."""

import json
from unittest.mock import patch

import pytest

from doi2bib import config
from doi2bib.browser_store import LocalStorageStore
from doi2bib.theme import DARK, LIGHT, ThemeManager


class FakeBrowser:
    """Stands in for one browser's localStorage behind the JS-eval component.

    The read component answers None on its first render and the stored
    values from then on, the way the real component does across reruns.
    """

    def __init__(self, **storage):
        self.storage = dict(storage)
        self.rendered = []
        self.answered = False

    def __call__(self, js_expressions, key=None):
        self.rendered.append(key)
        if key.endswith("_read"):
            if not self.answered:
                self.answered = True
                return None
            return json.dumps({k: self.storage.get(k) for k in [config.THEME_KEY]})
        if js_expressions.startswith("localStorage.setItem("):
            args = json.loads("[" + js_expressions[len("localStorage.setItem("):-1] + "]")
            self.storage[args[0]] = args[1]
        elif js_expressions.startswith("localStorage.removeItem("):
            args = json.loads("[" + js_expressions[len("localStorage.removeItem("):-1] + "]")
            self.storage.pop(args[0], None)
        return None


@pytest.fixture
def browser():
    fake = FakeBrowser()
    with patch("doi2bib.browser_store.streamlit_js_eval", side_effect=fake):
        yield fake


def test_values_unavailable_until_browser_answers(browser):
    browser.storage[config.THEME_KEY] = DARK
    store = LocalStorageStore()
    assert store.load() is False
    assert store.get(config.THEME_KEY) is None
    assert store.load() is True
    assert store.get(config.THEME_KEY) == DARK


def test_load_reads_once(browser):
    store = LocalStorageStore()
    store.load()
    store.load()
    store.load()
    assert browser.rendered == ["local_storage_read", "local_storage_read"]


def test_missing_key_loads_as_none(browser):
    store = LocalStorageStore()
    store.load()
    assert store.load() is True
    assert store.get(config.THEME_KEY) is None


def test_writes_are_queued_until_flush(browser):
    store = LocalStorageStore()
    store.set(config.THEME_KEY, LIGHT)
    assert store.get(config.THEME_KEY) == LIGHT
    assert browser.storage == {}
    assert store.pending == ['localStorage.setItem("theme", "light")']

    store.flush()
    assert browser.storage == {config.THEME_KEY: LIGHT}
    assert store.pending == []

    store.remove(config.THEME_KEY)
    store.flush()
    assert browser.storage == {}
    assert browser.rendered == ["local_storage_write_1", "local_storage_write_2"]


def test_write_before_load_wins_over_stale_read(browser):
    browser.storage[config.THEME_KEY] = DARK
    store = LocalStorageStore()
    store.load()
    store.set(config.THEME_KEY, LIGHT)
    store.load()
    assert store.get(config.THEME_KEY) == LIGHT


def test_unreadable_payload_is_ignored():
    with patch("doi2bib.browser_store.streamlit_js_eval", return_value="{not json"):
        store = LocalStorageStore()
        assert store.load() is True
    assert store.get(config.THEME_KEY) is None


def test_non_string_values_are_ignored():
    payload = json.dumps({config.THEME_KEY: 42})
    with patch("doi2bib.browser_store.streamlit_js_eval", return_value=payload):
        store = LocalStorageStore()
        store.load()
    assert store.get(config.THEME_KEY) is None


def test_two_browsers_keep_separate_preferences():
    first, second = FakeBrowser(), FakeBrowser()

    with patch("doi2bib.browser_store.streamlit_js_eval", side_effect=first):
        store_a = LocalStorageStore()
        store_a.load()
        store_a.load()
        theme_a = ThemeManager(store_a, lambda: True)
        theme_a.init()
        theme_a.toggle()
        store_a.flush()
    assert first.storage == {config.THEME_KEY: LIGHT}

    with patch("doi2bib.browser_store.streamlit_js_eval", side_effect=second):
        store_b = LocalStorageStore()
        store_b.load()
        store_b.load()
        theme_b = ThemeManager(store_b, lambda: True)
        assert theme_b.init() == DARK
        theme_b.on_system_change(True)
        assert theme_b.theme == DARK
    assert second.storage == {}
