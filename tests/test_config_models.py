import json

import pytest

from steam_appid_matcher import config
from steam_appid_matcher.config import BestMatch, MatcherConfig, apply_overrides, load_config
from steam_appid_matcher.errors import ConfigError

VALID = {
    "inputFile": {"fileName": "games", "fileType": "txt", "delimiter": "\n"},
    "onlyFullMatches": False,
    "partialMatchThreshold": 0.7,
}


def _write(tmp_path, obj, name="config.json"):
    path = tmp_path / name
    path.write_text(json.dumps(obj) if not isinstance(obj, str) else obj, encoding="utf-8")
    return path


def test_load_config_valid(tmp_path):
    cfg = load_config(_write(tmp_path, VALID))
    assert cfg.input_file.file_name == "games"
    assert cfg.input_file.path_name == "games.txt"
    assert cfg.partial_match_threshold == 0.7
    assert cfg.only_full_matches is False


def test_defaults_when_options_absent(tmp_path):
    cfg = load_config(_write(tmp_path, {"inputFile": VALID["inputFile"]}))
    assert cfg.only_full_matches is False
    assert cfg.partial_match_threshold == 0.0


def test_null_threshold_means_zero(tmp_path):
    cfg = load_config(_write(tmp_path, {**VALID, "partialMatchThreshold": None}))
    assert cfg.partial_match_threshold == 0.0


@pytest.mark.parametrize("threshold", [-0.1, 1.5, "high"])
def test_threshold_out_of_range(tmp_path, threshold):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, {**VALID, "partialMatchThreshold": threshold}))


def test_missing_input_file_section(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, {"onlyFullMatches": True}))


def test_empty_delimiter_rejected(tmp_path):
    bad = {**VALID, "inputFile": {**VALID["inputFile"], "delimiter": ""}}
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, bad))


def test_invalid_json(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "{not json"))


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.json")


def test_falls_back_to_default_config(tmp_path, monkeypatch):
    default = _write(tmp_path, VALID, name="config.default.json")
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.json")
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", default)
    assert load_config().input_file.file_name == "games"


def test_custom_config_wins_over_default(tmp_path, monkeypatch):
    custom = _write(tmp_path, {**VALID, "onlyFullMatches": True})
    default = _write(tmp_path, VALID, name="config.default.json")
    monkeypatch.setattr(config, "CONFIG_PATH", custom)
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", default)
    assert load_config().only_full_matches is True


def test_no_config_at_all(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.json")
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", tmp_path / "config.default.json")
    with pytest.raises(ConfigError):
        load_config()


def test_apply_overrides_validates():
    cfg = MatcherConfig.model_validate(VALID)
    updated = apply_overrides(cfg, only_full_matches=True, partial_match_threshold=0.9)
    assert updated.only_full_matches is True
    assert updated.partial_match_threshold == 0.9
    assert updated.input_file == cfg.input_file
    assert apply_overrides(cfg) is cfg
    with pytest.raises(ConfigError):
        apply_overrides(cfg, partial_match_threshold=2.0)


def test_best_match_serialization():
    m = BestMatch(app_id=620, similarity=0.93, steam_name="Portal 2")
    assert m.to_output() == {"appId": 620, "similarity": 0.93, "steamName": "Portal 2"}


def test_default_paths_follow_working_directory():
    from pathlib import Path

    assert config.WORK_DIR == Path.cwd()
    assert config.CONFIG_PATH == config.WORK_DIR / "config.json"
    assert config.DEFAULT_CONFIG_PATH == config.WORK_DIR / "config.default.json"
    assert config.OUTPUT_DIR == config.WORK_DIR / "output"
    assert config.LOG_DIR == config.WORK_DIR / "logs"
