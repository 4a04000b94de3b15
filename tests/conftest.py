"""Shared fixtures for the doi2bib tests."""

from unittest.mock import MagicMock

import pytest

SAMPLE_DOI = "10.1038/nature12373"

SAMPLE_BIBTEX = """@article{Kucsko_2013,
  title={Nanometre-scale thermometry in a living cell},
  volume={500},
  ISSN={1476-4687},
  url={http://dx.doi.org/10.1038/nature12373},
  DOI={10.1038/nature12373},
  number={7460},
  journal={Nature},
  publisher={Springer Science and Business Media LLC},
  author={Kucsko, G. and Maurer, P. C. and Yao, N. Y.},
  year={2013},
  month=jul,
  pages={54--58}
}"""


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def make_response(status_code=200, text="", json_data=None, json_error=None):
    """Stand-in for requests.Response with the attributes the fetchers read."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.text = text
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = json_data
    return resp
