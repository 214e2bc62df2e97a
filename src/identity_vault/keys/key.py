"""
Vault key kinds.

A Key is a tagged union over key kinds. Each kind registers a stable wire tag,
and documents encode a key as a single-entry object keyed by that tag:

    {"Signing": {"pk": "...", "sk": "...", "fingerprint": "..."}}

New kinds are added by registering a new tag, so documents written before the
addition keep decoding.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Type
import logging

from ..crypto.signing_key import SigningKey
from ..runtime.config import VaultConfig
from ..runtime.errors import VaultFormatError

logger = logging.getLogger(__name__)


class KeyKind(str, Enum):
    """Key kinds and their wire tags. Tags must never change."""
    SIGNING = "Signing"


_KEY_REGISTRY: Dict[str, Type["Key"]] = {}


def register_key_kind(kind: KeyKind) -> Callable[[Type["Key"]], Type["Key"]]:
    """
    Class decorator registering a Key implementation under its wire tag.

    Args:
        kind: Key kind handled by the decorated class

    Raises:
        ValueError: If the tag is already registered
    """
    def decorator(cls: Type[Key]) -> Type[Key]:
        if kind.value in _KEY_REGISTRY:
            raise ValueError(f"Key kind already registered: {kind.value}")
        cls.kind = kind
        _KEY_REGISTRY[kind.value] = cls
        return cls
    return decorator


def registered_key_kinds() -> List[KeyKind]:
    """List the key kinds that can be decoded."""
    return [KeyKind(tag) for tag in _KEY_REGISTRY]


def key_class_for(kind: KeyKind) -> Type["Key"]:
    """
    Look up the Key implementation for a kind.

    Raises:
        VaultFormatError: If no implementation is registered
    """
    tag = kind.value if isinstance(kind, KeyKind) else str(kind)
    key_cls = _KEY_REGISTRY.get(tag)
    if key_cls is None:
        raise VaultFormatError(f"Unknown key kind: {kind}")
    return key_cls


class Key(ABC):
    """
    Abstract vault key.

    Subclasses hold one kind of key material and know how to redact and
    serialize it.
    """

    kind: ClassVar[KeyKind]

    @classmethod
    @abstractmethod
    def generate(cls, rng=None, config: Optional[VaultConfig] = None) -> Key:
        """Create a key of this kind with fresh material."""
        pass

    @abstractmethod
    def to_public_view(self) -> Key:
        """Return the same key with all secret material removed."""
        pass

    @abstractmethod
    def get_fingerprint(self) -> str:
        pass

    @abstractmethod
    def has_secret_material(self) -> bool:
        pass

    @abstractmethod
    def payload_to_dict(self) -> Dict[str, Any]:
        """Serialize the untagged key material."""
        pass

    @classmethod
    @abstractmethod
    def payload_from_dict(cls, data: Any, config: Optional[VaultConfig] = None) -> Key:
        """Deserialize untagged key material."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the tagged dictionary representation."""
        return {self.kind.value: self.payload_to_dict()}


@register_key_kind(KeyKind.SIGNING)
class SigningKeyEntry(Key):
    """The Signing variant: wraps one SigningKey."""

    def __init__(self, signing_key: SigningKey):
        self.signing_key = signing_key

    @classmethod
    def generate(cls, rng=None, config: Optional[VaultConfig] = None) -> SigningKeyEntry:
        """Generate a fresh signing key entry."""
        return cls(SigningKey.generate(rng=rng, config=config))

    def to_public_view(self) -> SigningKeyEntry:
        return SigningKeyEntry(self.signing_key.get_redacted_key())

    def get_fingerprint(self) -> str:
        return self.signing_key.get_fingerprint()

    def has_secret_material(self) -> bool:
        return self.signing_key.has_secret_key()

    def payload_to_dict(self) -> Dict[str, Any]:
        return self.signing_key.to_dict()

    @classmethod
    def payload_from_dict(cls, data: Any, config: Optional[VaultConfig] = None) -> SigningKeyEntry:
        return cls(SigningKey.from_dict(data, config))

    def __eq__(self, other) -> bool:
        if not isinstance(other, SigningKeyEntry):
            return False
        return self.signing_key == other.signing_key

    def __hash__(self) -> int:
        return hash((self.kind, self.signing_key))

    def __repr__(self) -> str:
        return f"SigningKeyEntry({self.signing_key!r})"


def key_from_dict(data: Any, config: Optional[VaultConfig] = None) -> Key:
    """
    Decode a tagged key.

    Args:
        data: Single-entry object mapping a wire tag to key material

    Returns:
        Key of the registered kind

    Raises:
        VaultFormatError: If the entry is not a single tagged object or the tag is unknown
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise VaultFormatError("Key entry must be an object with exactly one kind tag")

    tag, payload = next(iter(data.items()))
    key_cls = _KEY_REGISTRY.get(tag)
    if key_cls is None:
        raise VaultFormatError(f"Unknown key kind: {tag}", details={"known": sorted(_KEY_REGISTRY)})
    return key_cls.payload_from_dict(payload, config)


def redact_keys(keys: Iterable[Key]) -> List[Key]:
    """Map each key to its public view, preserving order and length."""
    return [key.to_public_view() for key in keys]


__all__ = [
    "KeyKind",
    "Key",
    "SigningKeyEntry",
    "register_key_kind",
    "registered_key_kinds",
    "key_class_for",
    "key_from_dict",
    "redact_keys",
]
