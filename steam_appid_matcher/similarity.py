"""
Bigram (Dice coefficient) string similarity.

score(A, B) = 2 * |bigrams(A) & bigrams(B)| / (|bigrams(A)| + |bigrams(B)|)

Bigrams are counted as multisets, so a repeated pair only matches as many
times as it occurs in both strings. Whitespace is removed before the
bigrams are taken; strings that are equal after that score 1.0, and any
other string shorter than two characters scores 0.0.

Matching is case-sensitive here; callers lower-case both sides first.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class BigramProfile:
    """Whitespace-stripped text plus its bigram counts, computed once."""

    text: str
    bigrams: Counter
    size: int


def bigram_profile(text: str) -> BigramProfile:
    stripped = _WHITESPACE_RE.sub("", text)
    grams = Counter(stripped[i:i + 2] for i in range(len(stripped) - 1))
    return BigramProfile(text=stripped, bigrams=grams, size=max(len(stripped) - 1, 0))


def compare_profiles(a: BigramProfile, b: BigramProfile) -> float:
    if a.text == b.text:
        return 1.0
    if a.size < 1 or b.size < 1:
        return 0.0
    overlap = sum((a.bigrams & b.bigrams).values())
    return (2.0 * overlap) / (a.size + b.size)


def compare_two_strings(first: str, second: str) -> float:
    """Similarity of two strings in [0, 1]; symmetric."""
    return compare_profiles(bigram_profile(first), bigram_profile(second))


@dataclass
class BestCandidate:
    index: int
    score: float


class BigramMatcher:
    """
    Scores a query against a fixed list of candidate strings.

    Candidate profiles are built once, so scoring many queries against the
    same catalog does not recount the catalog bigrams each time.
    """

    def __init__(self, candidates: Sequence[str]):
        self._profiles: List[BigramProfile] = [bigram_profile(c) for c in candidates]

    def __len__(self) -> int:
        return len(self._profiles)

    def scores(self, query: str) -> np.ndarray:
        q = bigram_profile(query)
        return np.fromiter(
            (compare_profiles(q, p) for p in self._profiles),
            dtype=np.float64,
            count=len(self._profiles),
        )

    def best(self, query: str) -> Optional[BestCandidate]:
        """
        Highest scoring candidate; ties go to the earliest candidate.
        Returns None when there are no candidates.
        """
        if not self._profiles:
            return None
        ratings = self.scores(query)
        # argmax returns the first index among equal maxima
        idx = int(np.argmax(ratings))
        return BestCandidate(index=idx, score=float(ratings[idx]))
