"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import BestMatch


@dataclass
class FullMatchResult:
    """Outcome of the exact (case-sensitive) matching pass."""

    single: Dict[str, int]
    multiple: Dict[str, List[int]]
    remaining: List[str]


@dataclass
class BestMatchResult:
    """Outcome of the similarity pass; ``matches`` is sorted by score."""

    matches: Dict[str, BestMatch]
    no_match: List[str]


@dataclass
class MatchResult:
    """
    The four groupings handed to the writer.

    ``best_matches`` and ``no_matches`` are None when the similarity pass
    was skipped (onlyFullMatches).
    """

    full_matches: Dict[str, int]
    multiple_full_matches: Dict[str, List[int]]
    best_matches: Optional[Dict[str, BestMatch]] = None
    no_matches: Optional[List[str]] = None

    @property
    def similarity_ran(self) -> bool:
        return self.best_matches is not None
