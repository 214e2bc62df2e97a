"""
Key and vault management for the identity vault.

Provides the Key tagged union, the Vault aggregate and vault storage.
"""

from .key import (
    KeyKind,
    Key,
    SigningKeyEntry,
    register_key_kind,
    registered_key_kinds,
    key_class_for,
    key_from_dict,
    redact_keys,
)
from .vault import Vault
from .store import VaultStore, MemoryVaultStore, FileVaultStore

__all__ = [
    "KeyKind",
    "Key",
    "SigningKeyEntry",
    "register_key_kind",
    "registered_key_kinds",
    "key_class_for",
    "key_from_dict",
    "redact_keys",
    "Vault",
    "VaultStore",
    "MemoryVaultStore",
    "FileVaultStore",
]
