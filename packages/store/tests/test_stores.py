"""Tests for discussions-store implementations."""

from __future__ import annotations

import os
import stat

import pytest
import requests
import yaml
from github import BadCredentialsException, GithubException

from discussions_core.config import load_config
from discussions_core.errors import ConfigurationError, NetworkError
from discussions_store.base import is_valid_repo
from discussions_store.file import FileConfigStore, FileCredentialStore
from discussions_store.memory import MemoryConfigStore, MemoryCredentialStore
from discussions_store.validation import validate_github_token

# ---------------------------------------------------------------------------
# Credential stores
# ---------------------------------------------------------------------------


class TestFileCredentialStore:
    def test_missing_token_returns_none(self, tmp_path):
        assert FileCredentialStore(tmp_path).get_token() is None

    def test_set_and_get(self, tmp_path):
        store = FileCredentialStore(tmp_path / "cfg")
        store.set_token("ghp_abc")
        assert store.get_token() == "ghp_abc"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_token_file_is_private(self, tmp_path):
        store = FileCredentialStore(tmp_path)
        store.set_token("ghp_abc")
        mode = stat.S_IMODE((tmp_path / "token").stat().st_mode)
        assert mode == 0o600

    def test_set_replaces_previous(self, tmp_path):
        store = FileCredentialStore(tmp_path)
        store.set_token("a-much-longer-first-token")
        store.set_token("short")
        assert store.get_token() == "short"

    def test_clear(self, tmp_path):
        store = FileCredentialStore(tmp_path)
        store.set_token("ghp_abc")
        store.clear_token()
        assert store.get_token() is None

    def test_clear_without_token_is_noop(self, tmp_path):
        FileCredentialStore(tmp_path).clear_token()

    def test_unwritable_dir_is_configuration_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ConfigurationError):
            FileCredentialStore(blocker / "cfg").set_token("x")


class TestMemoryCredentialStore:
    def test_roundtrip(self):
        store = MemoryCredentialStore()
        assert store.get_token() is None
        store.set_token("t")
        assert store.get_token() == "t"
        store.clear_token()
        assert store.get_token() is None


# ---------------------------------------------------------------------------
# Config stores
# ---------------------------------------------------------------------------


class TestFileConfigStore:
    def test_defaults_when_missing(self, tmp_path):
        assert FileConfigStore(tmp_path / "config.yml").get_config() == {"output_format": "table"}

    def test_update_merges_shallowly(self, tmp_path):
        store = FileConfigStore(tmp_path / "config.yml")
        store.update_config({"default_repo": "octo/repo"})
        store.update_config({"output_format": "json"})
        assert store.get_config() == {"output_format": "json", "default_repo": "octo/repo"}

    def test_later_write_wins(self, tmp_path):
        store = FileConfigStore(tmp_path / "config.yml")
        store.set_default_repo("octo/one")
        store.set_default_repo("octo/two")
        assert store.get_default_repo() == "octo/two"

    def test_none_removes_key(self, tmp_path):
        store = FileConfigStore(tmp_path / "config.yml")
        store.set_default_repo("octo/repo")
        store.update_config({"default_repo": None})
        assert store.get_default_repo() is None

    def test_creates_parent_directory(self, tmp_path):
        store = FileConfigStore(tmp_path / "nested" / "config.yml")
        store.update_config({"output_format": "markdown"})
        assert store.path.exists()

    def test_invalid_values_dropped_on_read(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("default_repo: not-a-repo\noutput_format: xml\nunknown: 1\n")
        assert FileConfigStore(path).get_config() == {"output_format": "table"}

    def test_update_keeps_runtime_settings(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GH_DISCUSSIONS_API_URL", raising=False)
        path = tmp_path / "config.yml"
        path.write_text("max_retries: 7\napi_url: https://ghe.example/api/graphql\ncomment_limit: 50\n")

        FileConfigStore(path).set_default_repo("octo/repo")

        config = load_config(config_path=str(path))
        assert config["max_retries"] == 7
        assert config["api_url"] == "https://ghe.example/api/graphql"
        assert config["comment_limit"] == 50
        assert config["default_repo"] == "octo/repo"

    def test_clearing_preferences_keeps_runtime_settings(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("max_retries: 7\ndefault_repo: octo/repo\noutput_format: json\n")

        FileConfigStore(path).update_config({"default_repo": None, "output_format": "table"})

        assert yaml.safe_load(path.read_text()) == {"max_retries": 7, "output_format": "table"}

    def test_update_on_invalid_yaml_leaves_file_alone(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("default_repo: [unclosed\n")
        with pytest.raises(ConfigurationError):
            FileConfigStore(path).set_default_repo("octo/repo")
        assert path.read_text() == "default_repo: [unclosed\n"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("default_repo: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            FileConfigStore(path).get_config()

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("just a string\n")
        with pytest.raises(ConfigurationError):
            FileConfigStore(path).get_config()


class TestMemoryConfigStore:
    def test_seeded_from_loaded_config(self):
        store = MemoryConfigStore({"default_repo": "octo/repo", "max_retries": 3})
        assert store.get_config() == {"output_format": "table", "default_repo": "octo/repo"}

    def test_get_config_returns_copy(self):
        store = MemoryConfigStore()
        store.get_config()["output_format"] = "json"
        assert store.get_config()["output_format"] == "table"

    def test_update(self):
        store = MemoryConfigStore()
        store.update_config({"output_format": "json"})
        store.update_config({"default_repo": "octo/repo"})
        assert store.get_config() == {"output_format": "json", "default_repo": "octo/repo"}


@pytest.mark.parametrize(
    "repo, valid",
    [
        ("octo/repo", True),
        ("my.org/my_repo-2", True),
        ("octo", False),
        ("octo/", False),
        ("a/b/c", False),
        ("octo/re po", False),
    ],
)
def test_is_valid_repo(repo, valid):
    assert is_valid_repo(repo) is valid


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


class TestValidateGithubToken:
    def test_empty_token_not_checked(self, mocker):
        gh_cls = mocker.patch("discussions_store.validation.Github")
        assert validate_github_token("  ") is False
        gh_cls.assert_not_called()

    def test_valid_token(self, mocker):
        gh_cls = mocker.patch("discussions_store.validation.Github")
        gh_cls.return_value.get_user.return_value.login = "octocat"
        assert validate_github_token("ghp_abc") is True
        gh_cls.return_value.close.assert_called_once()

    def test_bad_credentials(self, mocker):
        gh_cls = mocker.patch("discussions_store.validation.Github")
        gh_cls.return_value.get_user.side_effect = BadCredentialsException(401, {"message": "Bad credentials"}, {})
        assert validate_github_token("ghp_bad") is False

    def test_forbidden(self, mocker):
        gh_cls = mocker.patch("discussions_store.validation.Github")
        gh_cls.return_value.get_user.side_effect = GithubException(403, {"message": "Forbidden"}, {})
        assert validate_github_token("ghp_bad") is False

    def test_server_error_is_network_error(self, mocker):
        gh_cls = mocker.patch("discussions_store.validation.Github")
        gh_cls.return_value.get_user.side_effect = GithubException(502, {"message": "Bad Gateway"}, {})
        with pytest.raises(NetworkError):
            validate_github_token("ghp_abc")

    def test_connection_failure_is_network_error(self, mocker):
        gh_cls = mocker.patch("discussions_store.validation.Github")
        gh_cls.return_value.get_user.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(NetworkError):
            validate_github_token("ghp_abc")
        gh_cls.return_value.close.assert_called_once()

    def test_store_delegates_to_validation(self, mocker):
        validate = mocker.patch("discussions_store.validation.validate_github_token", return_value=True)
        assert MemoryCredentialStore().validate_token("ghp_abc") is True
        validate.assert_called_once_with("ghp_abc")
