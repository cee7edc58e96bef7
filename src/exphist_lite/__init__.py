"""Sliding-window approximate counting with exponential histograms.

Public API:
    Config: epsilon and window size, with the derived bucket multiplicity l
    ExpHist: immutable windowed counter (step / add / inc / with_window)
    canonical: the l-canonical bucket-count arithmetic ExpHist is built on
"""

from exphist_lite import canonical
from exphist_lite.config import Config
from exphist_lite.histogram import ExpHist

__all__ = [
    "Config",
    "ExpHist",
    "canonical",
]
