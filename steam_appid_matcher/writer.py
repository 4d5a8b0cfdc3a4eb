from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

from .config import (
    BEST_MATCH_FILE,
    FULL_MATCHES_FILE,
    MULTIPLE_FULL_MATCHES_FILE,
    NO_MATCH_FILE,
)
from .pipeline_types import MatchResult


def _write_json(obj: Any, path: Path) -> None:
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")


def result_to_output(result: MatchResult) -> Dict[str, Any]:
    """
    Plain JSON-ready view of a MatchResult, keyed by output file name.

    Groups that are not written (empty exact groups, empty no-match list,
    or everything from the skipped similarity pass) are left out.
    """
    out: Dict[str, Any] = {}
    if result.full_matches:
        out[FULL_MATCHES_FILE] = dict(result.full_matches)
    if result.multiple_full_matches:
        out[MULTIPLE_FULL_MATCHES_FILE] = {k: list(v) for k, v in result.multiple_full_matches.items()}
    if result.similarity_ran:
        out[BEST_MATCH_FILE] = {name: m.to_output() for name, m in result.best_matches.items()}
        if result.no_matches:
            out[NO_MATCH_FILE] = list(result.no_matches)
    return out


def write_results(result: MatchResult, output_dir: Path) -> List[Path]:
    """Write the result groups as JSON files; returns the paths written."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for file_name, payload in result_to_output(result).items():
        path = output_dir / file_name
        logger.info("Writing {} entries to {}", len(payload), path)
        _write_json(payload, path)
        written.append(path)
    return written
