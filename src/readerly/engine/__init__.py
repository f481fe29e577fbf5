"""Extraction engine."""

from .processor import Processor
from .scoring import Candidate, CandidateMap, class_weight, link_density
from .selector import Selection
from .title import resolve_title

__all__ = [
    "Processor",
    "Candidate",
    "CandidateMap",
    "Selection",
    "class_weight",
    "link_density",
    "resolve_title",
]
