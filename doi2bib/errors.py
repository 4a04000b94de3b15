"""Exception types raised by the lookup pipeline and the page controller."""

from typing import Optional


class Doi2BibError(Exception):
    """Base class for errors shown to the user."""


class InputError(Doi2BibError):
    """Input was empty or contained no DOI. Raised before any request is made."""


class NetworkError(Doi2BibError):
    """The BibTeX record could not be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
