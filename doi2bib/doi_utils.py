"""DOI extraction and URL encoding."""

import re
from typing import Optional
from urllib.parse import quote

# 10.<registrant>/<suffix>, registrant is 4-9 digits
DOI_PATTERN = r"(10\.\d{4,9}/[-._;()/:A-Z0-9]+)"

_DOI_RE = re.compile(DOI_PATTERN, re.IGNORECASE)
_DOI_FULL_RE = re.compile(r"^10\.\d{4,9}/[-._;()/:A-Z0-9]+$", re.IGNORECASE)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def extract_doi(text: str) -> Optional[str]:
    """Return the first DOI found anywhere in `text`, or None.

    The match is returned exactly as it appears in the input; trailing
    punctuation that the suffix class allows (e.g. a closing parenthesis)
    is kept.
    """
    if not text:
        return None
    match = _DOI_RE.search(text)
    return match.group(1) if match else None


def validate_doi(doi: str) -> bool:
    if not doi or not isinstance(doi, str):
        return False
    return bool(_DOI_FULL_RE.match(doi))


def quote_doi(doi: str) -> str:
    """Percent-encode a DOI as a single URL path segment ("/" becomes "%2F")."""
    return quote(doi, safe=_URI_COMPONENT_SAFE)
