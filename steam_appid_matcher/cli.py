from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import LOG_FILE, OUTPUT_DIR, apply_overrides, load_config
from .errors import MatcherError
from .pipeline import run


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="steam-appid-matcher",
        description="Match game names to their Steam App IDs.",
    )
    ap.add_argument("--config", type=Path, default=None,
                    help="Path to the configuration file (default: config.json, then config.default.json)")
    ap.add_argument("--input-dir", type=Path, default=None,
                    help="Directory holding the input file (default: current directory)")
    ap.add_argument("--output-dir", type=Path, default=OUTPUT_DIR,
                    help="Directory the result files are written to")
    ap.add_argument("--catalog-file", type=Path, default=None,
                    help="Read the Steam app list from a local snapshot instead of the API")
    ap.add_argument("--save-catalog", type=Path, default=None,
                    help="Also write the loaded app list to this snapshot file")
    ap.add_argument("--only-full-matches", action="store_true", default=None,
                    help="Skip partial matching (overrides the config file)")
    ap.add_argument("--threshold", type=float, default=None,
                    help="Minimum similarity score for partial matches (overrides the config file)")
    ap.add_argument("--no-progress", action="store_true",
                    help="Hide the progress bar")
    ap.add_argument("--log-file", type=Path, default=LOG_FILE,
                    help="Log file written next to the console output")
    return ap


def _setup_logging(log_file: Optional[Path]) -> Optional[int]:
    if log_file is None:
        return None
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return logger.add(log_file, rotation="5 MB", retention=5, level="INFO")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    sink_id = _setup_logging(args.log_file)
    try:
        return _run(args)
    finally:
        if sink_id is not None:
            logger.remove(sink_id)


def _run(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
        updates = {}
        if args.only_full_matches:
            updates["only_full_matches"] = True
        if args.threshold is not None:
            updates["partial_match_threshold"] = args.threshold
        cfg = apply_overrides(cfg, **updates)

        result = run(
            cfg,
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            catalog_path=args.catalog_file,
            save_catalog_path=args.save_catalog,
            show_progress=not args.no_progress,
        )
    except MatcherError as e:
        logger.error("{}", e)
        return 1

    logger.info(
        "Done: {} full, {} multiple, {} partial, {} without match",
        len(result.full_matches),
        len(result.multiple_full_matches),
        len(result.best_matches or {}),
        len(result.no_matches or []),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
