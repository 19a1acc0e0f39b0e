"""Configuration tree access, file loading and provider config reading."""

from __future__ import annotations

from .errors import SynergyConfigError
from .loader import load_config_tree, validate_config_tree
from .reader import DEFAULT_PROVIDER, DataProviderConfig, ProviderType, read_config
from .tree import ConfigTree

__all__ = [
    "DEFAULT_PROVIDER",
    "ConfigTree",
    "DataProviderConfig",
    "ProviderType",
    "SynergyConfigError",
    "load_config_tree",
    "read_config",
    "validate_config_tree",
]
