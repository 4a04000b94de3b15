"""
doi2bib - DOI to BibTeX lookup.
Fetches the BibTeX record for a DOI from doi.org plus an abstract from
Semantic Scholar or Crossref, and renders a readable summary.
"""

__version__ = "1.0.0"
