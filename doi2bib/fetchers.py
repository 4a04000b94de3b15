"""
Network fetchers for the BibTeX record and the abstract.

The BibTeX fetch is authoritative: any failure raises NetworkError. The two
abstract fetchers are fail-soft and return None for every kind of failure,
so the caller can fall through to the next source.
"""

import logging
import time
from typing import Callable, Optional, Tuple

import requests
from bs4 import BeautifulSoup
from habanero import Crossref

from doi2bib import config
from doi2bib.doi_utils import quote_doi
from doi2bib.errors import NetworkError

logger = logging.getLogger(__name__)

AbstractFetcher = Callable[[str], Optional[str]]

# ═══════════════════════════════════════════════════════════
# RETRIES FOR ABSTRACT SOURCES
# ═══════════════════════════════════════════════════════════

def retry_with_backoff(func, *args, max_attempts: Optional[int] = None, **kwargs):
    """Call an abstract source that is allowed to fail.

    Transport errors (timeouts, resets, DNS) get up to `max_attempts` tries,
    sleeping RETRY_DELAY before the second and BACKOFF_FACTOR times longer
    before each one after that. Any other exception means the response was
    unusable and is not retried. Every failure ends in None.
    """
    attempts = max_attempts or config.MAX_RETRIES
    name = getattr(func, "__name__", repr(func))
    delay = config.RETRY_DELAY
    attempt = 0
    while True:
        attempt += 1
        try:
            return func(*args, **kwargs)
        except requests.RequestException as exc:
            if attempt >= attempts:
                logger.info("%s unreachable after %d attempt(s): %s", name, attempt, exc)
                return None
            logger.debug("%s attempt %d failed (%s), retrying in %.1fs", name, attempt, exc, delay)
        except Exception as exc:
            logger.warning("%s gave an unusable response: %s", name, exc)
            return None
        time.sleep(delay)
        delay *= config.BACKOFF_FACTOR


def clean_abstract(abstract: str) -> str:
    """Strip JATS/HTML markup and collapse whitespace.
    Crossref wraps abstracts in tags like <jats:p> and <jats:title>."""
    if not abstract:
        return ""
    text = BeautifulSoup(abstract, "html.parser").get_text(" ")
    return " ".join(text.split())

# ═══════════════════════════════════════════════════════════
# BIBTEX
# ═══════════════════════════════════════════════════════════

def fetch_bibtex(doi: str, session: Optional[requests.Session] = None) -> str:
    """Fetch the BibTeX record for `doi` through doi.org content negotiation."""
    http = session or requests
    url = f"{config.DOI_RESOLVER_URL}/{quote_doi(doi)}"
    logger.info("Fetching BibTeX for %s", doi)
    try:
        resp = http.get(
            url,
            headers={"Accept": "application/x-bibtex", "User-Agent": config.USER_AGENT},
            timeout=config.REQUEST_TIMEOUT,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        logger.warning("BibTeX request for %s failed: %s", doi, exc)
        raise NetworkError(f"Failed to fetch BibTeX: {exc}") from exc

    if not resp.ok:
        logger.warning("BibTeX request for %s returned %s", doi, resp.status_code)
        raise NetworkError(f"Failed to fetch BibTeX: {resp.status_code}", status_code=resp.status_code)
    return resp.text

# ═══════════════════════════════════════════════════════════
# ABSTRACT SOURCES
# ═══════════════════════════════════════════════════════════

def fetch_abstract_semantic_scholar(doi: str, session: Optional[requests.Session] = None) -> Optional[str]:
    """Primary abstract source: the Semantic Scholar Graph API."""
    http = session or requests

    def fetch():
        resp = http.get(
            f"{config.SEMANTIC_SCHOLAR_API_URL}/DOI:{quote_doi(doi)}",
            params={"fields": "abstract"},
            headers={"Accept": "application/json", "User-Agent": config.USER_AGENT},
            timeout=config.REQUEST_TIMEOUT,
        )
        if not resp.ok:
            logger.debug("Semantic Scholar returned %s for %s", resp.status_code, doi)
            return None
        try:
            data = resp.json()
        except ValueError:
            return None
        abstract = data.get("abstract") if isinstance(data, dict) else None
        return abstract if isinstance(abstract, str) and abstract else None

    return retry_with_backoff(fetch)


def _crossref_abstract(message: dict) -> Optional[str]:
    items = message.get("items")
    if items:
        first = items[0] if isinstance(items[0], dict) else {}
        return first.get("abstract")
    # single-work responses carry the record directly under "message"
    return message.get("abstract")


def fetch_abstract_crossref(doi: str) -> Optional[str]:
    """Fallback abstract source: the Crossref works API via habanero."""

    def fetch():
        cr = Crossref(mailto=config.CROSSREF_MAILTO or None, ua_string=config.USER_AGENT)
        try:
            result = cr.works(ids=doi)
        except requests.HTTPError as exc:
            logger.debug("Crossref returned an error for %s: %s", doi, exc)
            return None
        message = result.get("message") if isinstance(result, dict) else None
        if not isinstance(message, dict):
            return None
        abstract = _crossref_abstract(message)
        if not isinstance(abstract, str):
            return None
        return clean_abstract(abstract) or None

    return retry_with_backoff(fetch)

# ═══════════════════════════════════════════════════════════
# FALLBACK COMPOSITION
# ═══════════════════════════════════════════════════════════

def first_available(doi: str, *fetchers: Tuple[str, AbstractFetcher]) -> Tuple[Optional[str], Optional[str]]:
    """Try each (name, fetcher) in order and return the first non-empty
    result as (abstract, name). Returns (None, None) if none yields one."""
    for name, fetcher in fetchers:
        abstract = fetcher(doi)
        if abstract:
            logger.info("Abstract for %s found on %s", doi, name)
            return abstract, name
        logger.debug("No abstract for %s on %s", doi, name)
    return None, None

