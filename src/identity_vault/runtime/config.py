"""
Vault configuration.

Holds the tunables shared by keys and vaults, and the process-wide default
used when a factory is called without an explicit config.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# Raw Ed25519 public key length; the fingerprint is a prefix of it.
MAX_FINGERPRINT_LENGTH = 32


@dataclass(frozen=True)
class VaultConfig:
    """Configuration for key fingerprints and vault exports."""
    fingerprint_length: int = 16
    json_separators: Tuple[str, str] = (",", ":")

    def __post_init__(self):
        if not 1 <= self.fingerprint_length <= MAX_FINGERPRINT_LENGTH:
            raise ValueError(
                f"fingerprint_length must be between 1 and {MAX_FINGERPRINT_LENGTH}, "
                f"got {self.fingerprint_length}"
            )


_default_config = VaultConfig()


def get_default_config() -> VaultConfig:
    """Get the process-wide default configuration."""
    return _default_config


def set_default_config(config: Optional[VaultConfig]) -> VaultConfig:
    """
    Replace the process-wide default configuration.

    Args:
        config: New default, or None to restore the built-in defaults

    Returns:
        The configuration now in effect
    """
    global _default_config
    _default_config = config or VaultConfig()
    logger.debug(f"Default vault config set to {_default_config}")
    return _default_config


def resolve_config(config: Optional[VaultConfig]) -> VaultConfig:
    """Return config, or the process default when None."""
    return config if config is not None else _default_config


__all__ = [
    "VaultConfig",
    "MAX_FINGERPRINT_LENGTH",
    "get_default_config",
    "set_default_config",
    "resolve_config",
]
