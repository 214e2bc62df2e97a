"""
Vault aggregate for the identity vault.

A Vault owns one primary identity, optional secondary identities, an ordered
list of keys and an ordered list of nested vaults. Nested vaults are held by
value: attaching a vault stores an independent copy, so the containment
relation is always a tree.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Optional
import copy
import json
import logging

from ..identity import Identity
from ..runtime.config import VaultConfig, resolve_config
from ..runtime.errors import VaultCycleError, VaultFormatError
from .key import Key, KeyKind, key_class_for, key_from_dict, redact_keys

logger = logging.getLogger(__name__)

_VAULT_FIELDS = ("primary_identity", "secondary_identities", "vault_keys", "external_vaults")

# Deepest external_vaults nesting accepted when loading a document
MAX_VAULT_DEPTH = 100


class Vault:
    """
    Identity and key vault.

    The only mutations after construction are add_secondary_identity and
    add_external_vault. Concurrent mutation of one instance must be
    serialized by the caller.
    """

    def __init__(
        self,
        primary_identity: Identity,
        secondary_identities: Optional[Iterable[Identity]] = None,
        keys: Optional[Iterable[Key]] = None,
        config: Optional[VaultConfig] = None,
    ):
        """
        Initialize vault.

        No keys are generated here; pass keys created beforehand, or use
        Vault.create.

        Args:
            primary_identity: Owner identity
            secondary_identities: Additional identities (an empty iterable counts as absent)
            keys: Vault keys, in the order they should be kept
            config: Configuration used for exports
        """
        if not isinstance(primary_identity, Identity):
            raise TypeError(f"primary_identity must be an Identity, got {type(primary_identity).__name__}")

        self._primary_identity = primary_identity
        secondary = list(secondary_identities) if secondary_identities is not None else []
        for identity in secondary:
            if not isinstance(identity, Identity):
                raise TypeError(f"secondary identities must be Identity, got {type(identity).__name__}")
        vault_keys = list(keys) if keys is not None else []
        for key in vault_keys:
            if not isinstance(key, Key):
                raise TypeError(f"keys must be Key instances, got {type(key).__name__}")

        self._secondary_identities: Optional[List[Identity]] = secondary or None
        self._vault_keys: List[Key] = vault_keys
        self._external_vaults: List[Vault] = []
        self._config = resolve_config(config)

    @classmethod
    def create(
        cls,
        primary_identity: Identity,
        key_kinds: Iterable[KeyKind] = (KeyKind.SIGNING,),
        rng=None,
        config: Optional[VaultConfig] = None,
    ) -> Vault:
        """
        Create a vault with one freshly generated key per requested kind.

        Args:
            primary_identity: Owner identity
            key_kinds: Kinds of keys to generate, in order
            rng: Optional randomness source passed to key generation
            config: Optional configuration

        Returns:
            New vault
        """
        keys = [key_class_for(kind).generate(rng=rng, config=config) for kind in key_kinds]
        vault = cls(primary_identity, keys=keys, config=config)
        logger.debug(f"Created vault for {primary_identity.email} with {len(keys)} keys")
        return vault

    def get_primary_identity(self) -> Identity:
        return self._primary_identity

    def get_secondary_identities(self) -> Optional[List[Identity]]:
        """Get secondary identities, or None if none were ever added."""
        if self._secondary_identities is None:
            return None
        return list(self._secondary_identities)

    def add_secondary_identity(self, identity: Identity):
        """
        Append a secondary identity.

        The list is created on first use and then grows in insertion order.
        """
        if not isinstance(identity, Identity):
            raise TypeError(f"identity must be an Identity, got {type(identity).__name__}")
        if self._secondary_identities is None:
            self._secondary_identities = []
        self._secondary_identities.append(identity)

    def get_secret_keys(self) -> List[Key]:
        """
        Get the full key list with secrets.

        For trusted local use only.
        """
        return list(self._vault_keys)

    def get_public_keys(self) -> List[Key]:
        """Get every key with secret material removed, in the same order."""
        return redact_keys(self._vault_keys)

    def find_key(self, fingerprint: str) -> Optional[Key]:
        """
        Find a key of this vault by fingerprint.

        Nested vaults are not searched.

        Args:
            fingerprint: Hex fingerprint

        Returns:
            First matching key, if any
        """
        for key in self._vault_keys:
            if key.get_fingerprint() == fingerprint:
                return key
        return None

    def get_external_vaults(self) -> List[Vault]:
        return list(self._external_vaults)

    def add_external_vault(self, vault: Vault) -> Vault:
        """
        Attach a nested vault by value.

        Args:
            vault: Vault to nest

        Returns:
            The stored copy

        Raises:
            VaultCycleError: If vault is this vault or contains it
        """
        if not isinstance(vault, Vault):
            raise TypeError(f"vault must be a Vault, got {type(vault).__name__}")
        if any(nested is self for nested in vault.iter_vaults()):
            raise VaultCycleError(details={"primary_identity": self._primary_identity.email})

        nested = copy.deepcopy(vault)
        self._external_vaults.append(nested)
        logger.debug(
            f"Attached external vault {vault._primary_identity.email} "
            f"to {self._primary_identity.email}"
        )
        return nested

    def iter_vaults(self) -> Iterator[Vault]:
        """Walk this vault and every nested vault, depth-first pre-order."""
        yield self
        for nested in self._external_vaults:
            yield from nested.iter_vaults()

    def redacted(self) -> Vault:
        """
        Return the public view of this vault.

        Every vault in the tree keeps its identities and has its keys
        replaced by their public views.
        """
        result = Vault(
            self._primary_identity,
            self._secondary_identities,
            self.get_public_keys(),
            self._config,
        )
        result._external_vaults = [nested.redacted() for nested in self._external_vaults]
        return result

    def to_dict(self, include_secrets: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary representation.

        Args:
            include_secrets: When False, keys at every depth are redacted

        Returns:
            Vault document; "secondary_identities" is omitted when never populated
        """
        result: Dict[str, Any] = {"primary_identity": self._primary_identity.to_dict()}
        if self._secondary_identities is not None:
            result["secondary_identities"] = [i.to_dict() for i in self._secondary_identities]
        keys = self._vault_keys if include_secrets else self.get_public_keys()
        result["vault_keys"] = [key.to_dict() for key in keys]
        result["external_vaults"] = [v.to_dict(include_secrets) for v in self._external_vaults]
        return result

    def export_with_secrets(self) -> str:
        """
        Serialize the entire tree, secrets included.

        Only for local persistence that is already protected.
        """
        return self._dumps(self.to_dict(include_secrets=True))

    def export_without_secrets(self) -> str:
        """Serialize the entire tree with every key redacted, recursively."""
        return self._dumps(self.to_dict(include_secrets=False))

    def _dumps(self, document: Dict[str, Any]) -> str:
        return json.dumps(document, separators=self._config.json_separators, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any, config: Optional[VaultConfig] = None) -> Vault:
        """
        Create from dictionary representation.

        Raises:
            VaultFormatError: If the document structure is invalid or nests deeper
                than MAX_VAULT_DEPTH
            InvalidEncodingError: If key material is not valid base64
            InvalidKeyError: If key material is inconsistent
        """
        return cls._from_dict(data, config, depth=0)

    @classmethod
    def _from_dict(cls, data: Any, config: Optional[VaultConfig], depth: int) -> Vault:
        if depth > MAX_VAULT_DEPTH:
            raise VaultFormatError(f"Vault document nests deeper than {MAX_VAULT_DEPTH} external vaults")
        if not isinstance(data, dict):
            raise VaultFormatError(f"Vault must be an object, got {type(data).__name__}")
        unknown = set(data) - set(_VAULT_FIELDS)
        if unknown:
            raise VaultFormatError(f"Unknown vault fields: {sorted(unknown)}")
        for field in ("primary_identity", "vault_keys", "external_vaults"):
            if field not in data:
                raise VaultFormatError(f"Vault is missing '{field}'")

        primary = Identity.from_dict(data["primary_identity"])

        secondary = None
        if "secondary_identities" in data:
            entries = data["secondary_identities"]
            if not isinstance(entries, list):
                raise VaultFormatError("'secondary_identities' must be a list")
            secondary = [Identity.from_dict(entry) for entry in entries]

        if not isinstance(data["vault_keys"], list):
            raise VaultFormatError("'vault_keys' must be a list")
        keys = [key_from_dict(entry, config) for entry in data["vault_keys"]]

        if not isinstance(data["external_vaults"], list):
            raise VaultFormatError("'external_vaults' must be a list")
        nested = [cls._from_dict(entry, config, depth + 1) for entry in data["external_vaults"]]

        vault = cls(primary, secondary, keys, config)
        vault._external_vaults = nested
        return vault

    @classmethod
    def from_json(cls, text: str, config: Optional[VaultConfig] = None) -> Vault:
        """
        Parse an exported vault document.

        Raises:
            VaultFormatError: If text is not JSON or not a vault document
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise VaultFormatError("Vault document is not valid JSON", cause=e)
        except RecursionError as e:
            raise VaultFormatError("Vault document is nested too deeply", cause=e)
        return cls.from_dict(data, config)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vault):
            return False
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __str__(self) -> str:
        return f"Vault({self._primary_identity}, {len(self._vault_keys)} keys)"

    def __repr__(self) -> str:
        return (
            f"Vault(primary='{self._primary_identity.email}', keys={len(self._vault_keys)}, "
            f"external_vaults={len(self._external_vaults)})"
        )


__all__ = ["MAX_VAULT_DEPTH", "Vault"]
