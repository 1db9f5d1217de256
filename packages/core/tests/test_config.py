"""Tests for runtime configuration loading."""

import pytest

from discussions_core.config import load_config
from discussions_core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("GITHUB_TOKEN", "DEBUG", "GH_DISCUSSIONS_API_URL"):
        monkeypatch.delenv(var, raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["max_retries"] == 3
    assert config["comment_limit"] == 100
    assert config["output_format"] == "table"
    assert config["default_repo"] is None
    assert config["debug"] is False


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("default_repo: octo/repo\nmax_retries: 5\n")
    config = load_config(config_path=str(cfg))
    assert config["default_repo"] == "octo/repo"
    assert config["max_retries"] == 5


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("output_format: json\n")
    config = load_config(config_path=str(cfg), cli_overrides={"output_format": "markdown"})
    assert config["output_format"] == "markdown"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("output_format: json\n")
    config = load_config(config_path=str(cfg), cli_overrides={"output_format": None})
    assert config["output_format"] == "json"


def test_env_vars_loaded(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("DEBUG", "1")
    monkeypatch.setenv("GH_DISCUSSIONS_API_URL", "https://ghe.example/api/graphql")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-token"
    assert config["debug"] is True
    assert config["api_url"] == "https://ghe.example/api/graphql"


def test_invalid_yaml_is_configuration_error(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("default_repo: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_config(config_path=str(cfg))


def test_non_mapping_is_configuration_error(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_config(config_path=str(cfg))
