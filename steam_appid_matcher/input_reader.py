from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import SUPPORTED_INPUT_TYPES, InputFileConfig
from .errors import InputFileError


def resolve_input_path(input_file: InputFileConfig, base_dir: Optional[Path] = None) -> Path:
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return base / input_file.path_name


def split_game_names(text: str, delimiter: str) -> List[str]:
    """
    Split raw file content on the delimiter.

    Items are returned as-is: no trimming, empty items are kept.
    """
    return text.split(delimiter)


def read_game_names(input_file: InputFileConfig, base_dir: Optional[Path] = None) -> List[str]:
    """
    Read the game names listed in ``<fileName>.<fileType>``.

    Only csv and txt files are supported; anything else, or a file that
    cannot be read, raises InputFileError.
    """
    if input_file.file_type not in SUPPORTED_INPUT_TYPES:
        raise InputFileError(f"Input file type not supported: {input_file.file_type}")

    path = resolve_input_path(input_file, base_dir)
    try:
        # no newline translation: "\r\n" stays in the names
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Could not read input file {path}: {e}") from e

    names = split_game_names(text, input_file.delimiter)
    logger.info("The input file ({}) contained {} game names.", path, len(names))
    return names
