"""
Identity Vault

Hierarchical identity-and-key vault: a primary identity with optional
secondary identities, Ed25519 signing keys, and nested vaults, with
full-fidelity and redacted export views.
"""

from .runtime.errors import *
from .runtime.config import VaultConfig, get_default_config, set_default_config
from .identity import Identity
from .crypto import SigningKey
from .keys import (
    KeyKind,
    Key,
    SigningKeyEntry,
    register_key_kind,
    key_from_dict,
    redact_keys,
    Vault,
    VaultStore,
    MemoryVaultStore,
    FileVaultStore,
)

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "ErrorCode",
    "VaultError",
    "InvalidEncodingError",
    "InvalidKeyError",
    "NoSecretKeyError",
    "VaultFormatError",
    "VaultCycleError",
    "VaultStoreError",
    "VaultConfig",
    "get_default_config",
    "set_default_config",
    "Identity",
    "SigningKey",
    "KeyKind",
    "Key",
    "SigningKeyEntry",
    "register_key_kind",
    "key_from_dict",
    "redact_keys",
    "Vault",
    "VaultStore",
    "MemoryVaultStore",
    "FileVaultStore",
]
