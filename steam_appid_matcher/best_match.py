from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd
from loguru import logger
from tqdm import tqdm

from .config import DEFAULT_PARTIAL_MATCH_THRESHOLD, BestMatch
from .pipeline_types import BestMatchResult
from .similarity import BigramMatcher


def sort_by_similarity(matches: Dict[str, BestMatch]) -> Dict[str, BestMatch]:
    """Highest similarity first; equal scores keep their insertion order."""
    ordered = sorted(matches.items(), key=lambda kv: kv[1].similarity, reverse=True)
    return dict(ordered)


def find_best_matches(
    game_names: Sequence[str],
    catalog_df: pd.DataFrame,
    threshold: float = DEFAULT_PARTIAL_MATCH_THRESHOLD,
    show_progress: bool = True,
) -> BestMatchResult:
    """
    Find the most similar catalog entry for each game name.

    Both sides are lower-cased before scoring, so names that differ only in
    case score 1.0 here even though the exact pass did not match them.
    A best score >= threshold is accepted; the reported steamName keeps the
    catalog's original casing.
    """
    logger.info(
        "Searching for partial matches with a similarity score >={} for the remaining {} games...",
        threshold,
        len(game_names),
    )

    app_ids: List[int] = [int(a) for a in catalog_df["appid"].tolist()]
    app_names: List[str] = catalog_df["name"].tolist()
    matcher = BigramMatcher([n.lower() for n in app_names])

    matches: Dict[str, BestMatch] = {}
    no_match: List[str] = []

    progress = tqdm(
        game_names,
        total=len(game_names),
        unit="game",
        desc="Partial matching",
        disable=not show_progress,
    )
    for name in progress:
        best = matcher.best(name.lower())
        if best is not None and best.score >= threshold:
            matches[name] = BestMatch(
                app_id=app_ids[best.index],
                similarity=best.score,
                steam_name=app_names[best.index],
            )
        else:
            no_match.append(name)

    matches = sort_by_similarity(matches)
    logger.info(
        "Found partial matches with a similarity score >={} for {} games.",
        threshold,
        len(matches),
    )
    return BestMatchResult(matches=matches, no_match=no_match)
