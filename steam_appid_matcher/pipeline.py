"""
End-to-end matching run.

match_game_names() is the pure part: names + catalog in, MatchResult out.
run() wires it to the catalog source, the input file and the writer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pandas as pd
from loguru import logger

from .best_match import find_best_matches
from .catalog_fetch import fetch_steam_apps, load_catalog_snapshot, save_catalog_snapshot
from .config import DEFAULT_PARTIAL_MATCH_THRESHOLD, OUTPUT_DIR, MatcherConfig
from .exact_match import find_full_matches
from .input_reader import read_game_names
from .pipeline_types import MatchResult
from .writer import write_results


def match_game_names(
    game_names: Sequence[str],
    catalog_df: pd.DataFrame,
    only_full_matches: bool = False,
    threshold: float = DEFAULT_PARTIAL_MATCH_THRESHOLD,
    show_progress: bool = True,
) -> MatchResult:
    full = find_full_matches(game_names, catalog_df)
    result = MatchResult(
        full_matches=full.single,
        multiple_full_matches=full.multiple,
    )

    if only_full_matches:
        logger.info("Only full matches requested; skipping partial matching for {} games", len(full.remaining))
        return result

    best = find_best_matches(
        full.remaining,
        catalog_df,
        threshold=threshold,
        show_progress=show_progress,
    )
    result.best_matches = best.matches
    result.no_matches = best.no_match
    return result


def load_catalog(catalog_path: Optional[Path] = None) -> pd.DataFrame:
    if catalog_path is not None:
        return load_catalog_snapshot(catalog_path)
    return fetch_steam_apps()


def run(
    cfg: MatcherConfig,
    input_dir: Optional[Path] = None,
    output_dir: Path = OUTPUT_DIR,
    catalog_path: Optional[Path] = None,
    save_catalog_path: Optional[Path] = None,
    show_progress: bool = True,
) -> MatchResult:
    """
    Fetch catalog -> read names -> match -> write.

    Errors from any step propagate as MatcherError subclasses; nothing is
    retried and nothing is written if the catalog or input cannot be loaded.
    """
    catalog_df = load_catalog(catalog_path)
    if save_catalog_path is not None:
        save_catalog_snapshot(catalog_df, save_catalog_path)

    game_names = read_game_names(cfg.input_file, base_dir=input_dir)

    result = match_game_names(
        game_names,
        catalog_df,
        only_full_matches=cfg.only_full_matches,
        threshold=cfg.partial_match_threshold,
        show_progress=show_progress,
    )
    write_results(result, output_dir)
    return result
