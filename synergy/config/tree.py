"""Read-only accessor over a nested configuration mapping.

``ConfigTree`` mirrors the accessor surface the developer portal exposes to
backend plugins: dotted keys, required and optional string reads, and
sub-tree access. Each read validates the value type so a malformed tree is
reported against the full key path rather than failing later.

Example:
-------
>>> tree = ConfigTree({"synergy": {"repoTag": "inner-source"}})
>>> tree.get_string("synergy.repoTag")
'inner-source'
>>> tree.get_config("synergy").has("provider")
False

"""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ

from .errors import SynergyConfigError

_MISSING = object()


class ConfigTree:
    """Immutable view over one node of a configuration document."""

    __slots__ = ("_data", "_prefix")

    def __init__(
        self,
        data: cabc.Mapping[str, typ.Any] | None = None,
        *,
        prefix: str = "",
    ) -> None:
        """Wrap ``data``; ``prefix`` is the key path of this node."""
        self._data: cabc.Mapping[str, typ.Any] = types.MappingProxyType(
            dict(data or {})
        )
        self._prefix = prefix

    def __repr__(self) -> str:
        """Return a debug representation naming the node path."""
        return f"ConfigTree(prefix={self._prefix!r}, keys={sorted(self._data)!r})"

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}.{key}" if self._prefix else key

    def _lookup(self, key: str) -> object:
        node: object = self._data
        for part in key.split("."):
            if not isinstance(node, cabc.Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def has(self, key: str) -> bool:
        """Return ``True`` when ``key`` resolves to a non-null value."""
        value = self._lookup(key)
        return value is not _MISSING and value is not None

    def get_optional_string(self, key: str) -> str | None:
        """Return the string at ``key`` or ``None`` when absent."""
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return None
        if not isinstance(value, str):
            raise SynergyConfigError.wrong_type(self._full_key(key), "string")
        return value

    def get_string(self, key: str) -> str:
        """Return the non-empty string at ``key``.

        Raises
        ------
        SynergyConfigError
            If the key is absent, empty, or holds a non-string value.

        """
        value = self.get_optional_string(key)
        if value is None or not value.strip():
            raise SynergyConfigError.missing_key(self._full_key(key))
        return value

    def get_optional_bool(self, key: str) -> bool | None:
        """Return the boolean at ``key`` or ``None`` when absent."""
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return None
        if not isinstance(value, bool):
            raise SynergyConfigError.wrong_type(self._full_key(key), "boolean")
        return value

    def get_optional_config(self, key: str) -> ConfigTree | None:
        """Return the sub-tree at ``key`` or ``None`` when absent."""
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return None
        if not isinstance(value, cabc.Mapping):
            raise SynergyConfigError.wrong_type(self._full_key(key), "object")
        return ConfigTree(value, prefix=self._full_key(key))

    def get_config(self, key: str) -> ConfigTree:
        """Return the sub-tree at ``key``, raising when it is absent."""
        tree = self.get_optional_config(key)
        if tree is None:
            raise SynergyConfigError.missing_key(self._full_key(key))
        return tree
