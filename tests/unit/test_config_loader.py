"""Unit tests for loading Synergy configuration files."""

from __future__ import annotations

import typing as typ

import pytest

from synergy.config import SynergyConfigError, load_config_tree, read_config
from synergy.config.loader import substitute_env

if typ.TYPE_CHECKING:
    from pathlib import Path

_GITLAB_YAML = """\
app:
  title: Developer portal
synergy:
  repoTag: inner-source
  provider:
    type: gitlab
    gitlab:
      apiBaseUrl: https://gitlab.example.com/api
      token: ${GITLAB_TOKEN}
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "app-config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_loads_and_substitutes_environment(tmp_path: Path) -> None:
    """Token references are resolved from the supplied environment."""
    path = _write(tmp_path, _GITLAB_YAML)

    tree = load_config_tree(path, environ={"GITLAB_TOKEN": "glpat-123"})
    config = read_config(tree)

    assert config.provider == "gitlab"
    assert config.token == "glpat-123"
    assert tree.get_string("app.title") == "Developer portal"


def test_unset_environment_reference_is_an_error(tmp_path: Path) -> None:
    """References to unset variables fail loudly."""
    path = _write(tmp_path, _GITLAB_YAML)

    with pytest.raises(SynergyConfigError, match=r"\$\{GITLAB_TOKEN\}"):
        load_config_tree(path, environ={})


def test_duplicate_keys_are_rejected(tmp_path: Path) -> None:
    """Duplicate mapping keys make the file invalid."""
    path = _write(tmp_path, "synergy:\n  repoTag: a\n  repoTag: b\n")

    with pytest.raises(SynergyConfigError, match="Failed to load configuration"):
        load_config_tree(path, environ={})


def test_unknown_provider_type_fails_validation(tmp_path: Path) -> None:
    """Provider types outside github and gitlab fail schema validation."""
    text = _GITLAB_YAML.replace("type: gitlab", "type: bitbucket")
    path = _write(tmp_path, text)

    with pytest.raises(SynergyConfigError, match="schema validation failed"):
        load_config_tree(path, environ={"GITLAB_TOKEN": "x"})


def test_missing_file_is_reported(tmp_path: Path) -> None:
    """An unreadable path surfaces as a configuration error."""
    with pytest.raises(SynergyConfigError, match="missing.yaml"):
        load_config_tree(tmp_path / "missing.yaml", environ={})


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    """The document root must be a mapping."""
    path = _write(tmp_path, "- just\n- a list\n")

    with pytest.raises(SynergyConfigError, match="expected a mapping"):
        load_config_tree(path, environ={})


def test_substitute_env_walks_nested_values() -> None:
    """Substitution reaches strings inside lists and mappings only."""
    value = {"a": ["${X}-suffix", 3], "b": {"c": "${X}"}, "d": True}

    assert substitute_env(value, {"X": "v"}) == {
        "a": ["v-suffix", 3],
        "b": {"c": "v"},
        "d": True,
    }
