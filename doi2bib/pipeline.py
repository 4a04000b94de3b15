"""Input resolution and the DOI lookup pipeline."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

import requests

from doi2bib.bibtex_parser import ArticleSummary, BibFields, parse_bibtex, summarize
from doi2bib.doi_utils import extract_doi, validate_doi
from doi2bib.errors import InputError
from doi2bib.fetchers import (
    AbstractFetcher,
    fetch_abstract_crossref,
    fetch_abstract_semantic_scholar,
    fetch_bibtex,
    first_available,
)

logger = logging.getLogger(__name__)

ABSTRACT_PLACEHOLDER = "Abstract couldn't be found on Semantic Scholar or Crossref"


@dataclass
class LookupResult:
    doi: str
    bibtex: str
    fields: BibFields = field(default_factory=BibFields)
    summary: ArticleSummary = field(default_factory=ArticleSummary)
    abstract: Optional[str] = None
    abstract_source: Optional[str] = None

    @property
    def abstract_text(self) -> str:
        return self.abstract or ABSTRACT_PLACEHOLDER


def resolve_input(text: str) -> str:
    """Return the DOI contained in the user's input.
    Raises InputError for empty input or input with no DOI."""
    text = (text or "").strip()
    if not text:
        raise InputError("Please enter a DOI")
    doi = extract_doi(text)
    if not doi:
        raise InputError("No valid DOI found in input")
    return doi


def default_abstract_fetchers(session: Optional[requests.Session] = None) -> Sequence[Tuple[str, AbstractFetcher]]:
    return (
        ("semantic_scholar", lambda doi: fetch_abstract_semantic_scholar(doi, session=session)),
        ("crossref", fetch_abstract_crossref),
    )


def lookup_doi(
    doi: str,
    session: Optional[requests.Session] = None,
    abstract_fetchers: Optional[Sequence[Tuple[str, AbstractFetcher]]] = None,
    bibtex_fetcher: Optional[Callable[[str], str]] = None,
) -> LookupResult:
    """Fetch and parse the BibTeX record for `doi`, then look up its abstract.

    NetworkError from the BibTeX fetch propagates; abstract failures only
    leave `abstract` as None. `bibtex_fetcher` replaces the network fetch,
    e.g. with a cached one; `session` is then not used for the record.
    """
    if not validate_doi(doi):
        raise InputError("No valid DOI found in input")

    if bibtex_fetcher is not None:
        bibtex = bibtex_fetcher(doi)
    else:
        bibtex = fetch_bibtex(doi, session=session)
    fields = parse_bibtex(bibtex)

    fetchers = abstract_fetchers if abstract_fetchers is not None else default_abstract_fetchers(session)
    abstract, source = first_available(doi, *fetchers)
    if not abstract:
        logger.info("No abstract available for %s", doi)

    return LookupResult(
        doi=doi,
        bibtex=bibtex,
        fields=fields,
        summary=summarize(fields),
        abstract=abstract,
        abstract_source=source,
    )
