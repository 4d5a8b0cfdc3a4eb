from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd
from loguru import logger

from .pipeline_types import FullMatchResult


def build_name_index(catalog_df: pd.DataFrame) -> Dict[str, List[int]]:
    """Map each exact catalog name to its appids, in catalog order."""
    index: Dict[str, List[int]] = {}
    for appid, name in catalog_df[["appid", "name"]].itertuples(index=False, name=None):
        index.setdefault(name, []).append(int(appid))
    return index


def find_full_matches(game_names: Sequence[str], catalog_df: pd.DataFrame) -> FullMatchResult:
    """
    Partition game names by case-sensitive exact match against the catalog.

    - one catalog entry with that name  -> single[name] = appid
    - several entries with that name    -> multiple[name] = [appids]
    - none                              -> name appended to remaining

    Every occurrence is processed; a name listed twice simply writes the
    same key twice.
    """
    logger.info("Searching for full matches...")

    index = build_name_index(catalog_df)

    single: Dict[str, int] = {}
    multiple: Dict[str, List[int]] = {}
    remaining: List[str] = []

    for name in game_names:
        hits = index.get(name)
        if not hits:
            remaining.append(name)
        elif len(hits) == 1:
            single[name] = hits[0]
        else:
            multiple[name] = list(hits)

    n_full = len(single) + len(multiple)
    if multiple:
        logger.info(
            "Found full matches for {} games, of which {} games had more than one match.",
            n_full,
            len(multiple),
        )
    else:
        logger.info("Found full matches for {} games.", n_full)

    return FullMatchResult(single=single, multiple=multiple, remaining=remaining)
