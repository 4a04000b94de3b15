"""Tests for the copy button component."""

import json

import pytest

from doi2bib import clipboard, config
from doi2bib.clipboard import copy_button_html, js_string

from conftest import SAMPLE_BIBTEX


def _script(markup):
    return markup.split("<script>", 1)[1].split("</script>", 1)[0]


def test_write_happens_inside_click_handler():
    markup = copy_button_html(SAMPLE_BIBTEX)
    assert 'onclick="copyBibtex()"' in markup
    script = _script(markup)
    handler = script.split("async function copyBibtex()", 1)[1]
    assert "navigator.clipboard.writeText(bibtex)" in handler
    # nothing is written when the component loads
    assert "writeText" not in script.split("async function copyBibtex()", 1)[0]


def test_output_text_is_embedded_as_js_string():
    markup = copy_button_html(SAMPLE_BIBTEX)
    assert f"const bibtex = {js_string(SAMPLE_BIBTEX)};" in markup


def test_empty_output_reports_nothing_to_copy():
    markup = copy_button_html("")
    assert 'const bibtex = "";' in markup
    assert "if (!bibtex)" in markup
    assert json.dumps("Nothing to copy") in markup


def test_success_shows_copied_then_reverts():
    script = _script(copy_button_html(SAMPLE_BIBTEX))
    success = script.split("try {", 1)[1].split("} catch", 1)[0]
    assert json.dumps("Copied!") in success
    assert json.dumps("BibTeX copied to clipboard") in success
    assert json.dumps("Copied to clipboard") in success
    # a second click restarts the revert timer
    assert success.index("clearTimeout(revertTimer)") < success.index("setTimeout(")
    assert f"{int(config.COPY_REVERT_SECONDS * 1000)});" in success
    assert json.dumps("Copy") in success


def test_rejected_write_shows_failed():
    script = _script(copy_button_html(SAMPLE_BIBTEX))
    failure = script.split("} catch (e) {", 1)[1]
    assert json.dumps("Failed") in failure
    assert json.dumps("Failed to copy to clipboard") in failure
    assert "setTimeout" not in failure


def test_revert_delay_follows_config(monkeypatch):
    monkeypatch.setattr(config, "COPY_REVERT_SECONDS", 3)
    assert ", 3000);" in copy_button_html("x")


@pytest.mark.parametrize("text", [
    "@misc{x, note = {</script><script>alert(1)</script>}}",
    "title = {A & B <i>tags</i>}",
])
def test_markup_in_output_cannot_close_the_script(text):
    markup = copy_button_html(text)
    assert markup.count("</script>") == 1
    assert markup.count("<script>") == 1
    assert json.loads(js_string(text)) == text


def test_dark_palette():
    assert clipboard._COLORS[True]["bg"] in copy_button_html("x", dark=True)
    assert clipboard._COLORS[False]["bg"] in copy_button_html("x", dark=False)
