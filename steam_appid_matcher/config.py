from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError


# ---------------------------
# Paths
# ---------------------------

# Config, output and logs are resolved against the directory the tool is run from.
WORK_DIR = Path.cwd()

CONFIG_PATH = WORK_DIR / "config.json"
DEFAULT_CONFIG_PATH = WORK_DIR / "config.default.json"

OUTPUT_DIR = WORK_DIR / "output"
DATA_DIR = WORK_DIR / "data"
CATALOG_SNAPSHOT_PATH = DATA_DIR / "steam_apps.json"


# ---------------------------
# Steam catalog endpoint
# ---------------------------

STEAM_APP_LIST_URL = "https://api.steampowered.com/ISteamApps/GetAppList/v2/"


# ---------------------------
# HTTP hardening
# ---------------------------

HTTP_CONNECT_TIMEOUT = 10.0
HTTP_READ_TIMEOUT = 120.0  # the app list is a single large payload

HTTP_USER_AGENT = "steam-appid-matcher/1.0"


# ---------------------------
# Input / output
# ---------------------------

SUPPORTED_INPUT_TYPES = ("csv", "txt")

FULL_MATCHES_FILE = "steamAppIds_fullMatches.json"
MULTIPLE_FULL_MATCHES_FILE = "steamAppIds_multipleFullMatches.json"
BEST_MATCH_FILE = "steamAppIds_bestMatch.json"
NO_MATCH_FILE = "steamAppIds_noMatch.json"


# ---------------------------
# Matching defaults
# ---------------------------

DEFAULT_PARTIAL_MATCH_THRESHOLD = 0.0


# ---------------------------
# Logging / observability
# ---------------------------

LOG_DIR = WORK_DIR / "logs"
LOG_FILE = LOG_DIR / "steam_appid_matcher.log"


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class InputFileConfig(BaseModel):
    """
    Location and format of the file holding the game names.
    The file read is ``<fileName>.<fileType>``.
    """

    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName", min_length=1)
    file_type: str = Field(alias="fileType")
    delimiter: str = Field(min_length=1)

    @property
    def path_name(self) -> str:
        return f"{self.file_name}.{self.file_type}"


class MatcherConfig(BaseModel):
    """
    User-facing configuration, read from config.json.
    Keys are camelCase to stay compatible with existing config files.
    """

    model_config = ConfigDict(populate_by_name=True)

    input_file: InputFileConfig = Field(alias="inputFile")
    only_full_matches: bool = Field(default=False, alias="onlyFullMatches")
    partial_match_threshold: float = Field(
        default=DEFAULT_PARTIAL_MATCH_THRESHOLD,
        alias="partialMatchThreshold",
        ge=0.0,
        le=1.0,
    )

    @field_validator("partial_match_threshold", mode="before")
    @classmethod
    def _null_threshold_is_default(cls, v):
        # an explicit null means "no threshold"
        return DEFAULT_PARTIAL_MATCH_THRESHOLD if v is None else v


class BestMatch(BaseModel):
    """
    Best partial match for a single game name.
    Serialized with the camelCase keys of the output files.
    """

    model_config = ConfigDict(populate_by_name=True)

    app_id: int = Field(alias="appId")
    similarity: float = Field(ge=0.0, le=1.0)
    steam_name: str = Field(alias="steamName")

    def to_output(self) -> dict:
        return self.model_dump(by_alias=True)


def _resolve_config_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    raise ConfigError(
        f"No configuration file found. Expected {CONFIG_PATH.name} or "
        f"{DEFAULT_CONFIG_PATH.name} in {WORK_DIR}."
    )


def load_config(path: Optional[Path] = None) -> MatcherConfig:
    """
    Load and validate the matcher configuration.

    Without an explicit path, config.json is used when present and
    config.default.json otherwise.
    """
    cfg_path = _resolve_config_path(path)
    if cfg_path.name == DEFAULT_CONFIG_PATH.name and path is None:
        logger.warning("No custom configuration file found, loading {}", cfg_path)
    else:
        logger.info("Loading configuration file {}", cfg_path)

    try:
        raw = json.loads(cfg_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {cfg_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error loading configuration file {cfg_path}: {e}") from e

    logger.info("Validating configuration file...")
    try:
        return MatcherConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Error validating configuration file {cfg_path}: {e}") from e


def apply_overrides(cfg: MatcherConfig, **updates) -> MatcherConfig:
    """Return a copy of cfg with updated fields, validated like the file."""
    if not updates:
        return cfg
    try:
        return MatcherConfig.model_validate({**cfg.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration override: {e}") from e
