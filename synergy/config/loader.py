"""YAML loader for Synergy configuration files."""

from __future__ import annotations

import collections.abc as cabc
import os
import re
import typing as typ
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import SynergyConfigError
from .schema import SynergyConfigDocument
from .tree import ConfigTree

YAML_VERSION = (1, 2)

_ENV_REFERENCE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_env(value: object, environ: cabc.Mapping[str, str]) -> object:
    """Replace ``${NAME}`` references in string leaves of ``value``.

    Raises
    ------
    SynergyConfigError
        If a referenced variable is not set.

    """
    if isinstance(value, str):

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in environ:
                raise SynergyConfigError.missing_key(f"${{{name}}}")
            return environ[name]

        return _ENV_REFERENCE.sub(_replace, value)
    if isinstance(value, cabc.Mapping):
        return {str(key): substitute_env(item, environ) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env(item, environ) for item in value]
    return value


def validate_config_tree(data: cabc.Mapping[str, typ.Any]) -> SynergyConfigDocument:
    """Check ``data`` against the configuration schema.

    Raises
    ------
    SynergyConfigError
        If the document does not match :class:`SynergyConfigDocument`.

    """
    try:
        return msgspec.convert(data, type=SynergyConfigDocument)
    except msgspec.ValidationError as exc:
        raise SynergyConfigError(f"schema validation failed: {exc}") from exc


def load_config_tree(
    path: Path | str,
    *,
    environ: cabc.Mapping[str, str] | None = None,
) -> ConfigTree:
    """Parse, substitute and validate a YAML configuration file."""
    path_obj = Path(path)
    try:
        loaded = _yaml().load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise SynergyConfigError.invalid_file(str(path_obj), str(exc)) from exc

    if not isinstance(loaded, cabc.Mapping):
        raise SynergyConfigError.invalid_file(str(path_obj), "expected a mapping")

    resolved = substitute_env(loaded, os.environ if environ is None else environ)
    data = typ.cast("dict[str, typ.Any]", resolved)
    validate_config_tree(data)
    return ConfigTree(data)


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
