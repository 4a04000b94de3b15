"""
BibTeX field extraction and display formatting.

Only a fixed set of fields is recognised. No structural validation of the
entry (brace balance, entry type, citation key) is attempted.
"""

import re
from dataclasses import dataclass
from typing import List

KNOWN_FIELDS = ("title", "author", "journal", "year", "month", "volume", "number", "pages")

# key = {value}  or  key = "value"
FIELD_RE = re.compile(r'(\w+)\s*=\s*(?:\{([^}]*)\}|"([^"]*)")')


@dataclass
class BibFields:
    title: str = ""
    author: str = ""
    journal: str = ""
    year: str = ""
    month: str = ""
    volume: str = ""
    number: str = ""
    pages: str = ""


@dataclass
class ArticleSummary:
    """Display strings built from BibFields; empty when the source field is absent."""
    title: str = ""
    authors: str = ""
    journal: str = ""
    date: str = ""


def parse_bibtex(bibtex: str) -> BibFields:
    """Extract the recognised fields from raw BibTeX text.
    A key that appears more than once keeps its last value."""
    result = BibFields()
    if not bibtex:
        return result
    for match in FIELD_RE.finditer(bibtex):
        key = match.group(1).lower()
        if key not in KNOWN_FIELDS:
            continue
        value = match.group(2) if match.group(2) is not None else match.group(3)
        setattr(result, key, value)
    return result


def strip_braces(text: str) -> str:
    return text.replace("{}", "") if text else ""


def format_authors(raw: str) -> str:
    """Turn "Last, First and Last, First" into "First Last, First Last"."""
    if not raw:
        return ""
    formatted: List[str] = []
    for segment in strip_braces(raw).split(" and "):
        segment = segment.strip()
        last, sep, first = segment.partition(",")
        if sep:
            formatted.append(f"{first.strip()} {last.strip()}")
        else:
            formatted.append(segment)
    return ", ".join(formatted)


def format_journal(fields: BibFields) -> str:
    if not fields.journal:
        return ""
    line = strip_braces(fields.journal)
    if fields.volume:
        line += f", vol. {fields.volume}"
    if fields.number:
        line += f", no. {fields.number}"
    if fields.pages:
        line += f", pp. {fields.pages}"
    return line


def format_date(fields: BibFields) -> str:
    return " ".join(part for part in (fields.month, fields.year) if part)


def summarize(fields: BibFields) -> ArticleSummary:
    return ArticleSummary(
        title=strip_braces(fields.title),
        authors=format_authors(fields.author),
        journal=format_journal(fields),
        date=format_date(fields),
    )
