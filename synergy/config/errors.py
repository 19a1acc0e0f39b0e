"""Configuration errors."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class SynergyConfigError(Exception):
    """Raised when Synergy configuration is missing or malformed.

    Configuration errors are fatal and surface before any network call is
    attempted.
    """

    @classmethod
    def missing_key(cls, key: str) -> SynergyConfigError:
        """Return an error for a required key that is absent."""
        return cls(f"Missing required config value at '{key}'")

    @classmethod
    def wrong_type(cls, key: str, expected: str) -> SynergyConfigError:
        """Return an error for a value whose type does not match."""
        return cls(f"Invalid type in config for key '{key}', expected {expected}")

    @classmethod
    def missing_provider_section(cls, provider: str) -> SynergyConfigError:
        """Return an error when ``synergy.provider.<provider>`` is absent."""
        return cls(
            f"Provider '{provider}' not found in synergy.provider configuration"
        )

    @classmethod
    def invalid_provider(
        cls, provider: str, valid_providers: cabc.Iterable[str]
    ) -> SynergyConfigError:
        """Return an error for a provider type Synergy does not support."""
        valid = ", ".join(f"'{name}'" for name in sorted(valid_providers))
        return cls(f"Invalid provider type '{provider}'. Valid options are: {valid}")

    @classmethod
    def invalid_file(cls, path: str, detail: str) -> SynergyConfigError:
        """Return an error for a configuration file that cannot be loaded."""
        return cls(f"Failed to load configuration from {path}: {detail}")
