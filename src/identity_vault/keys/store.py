"""
Vault storage interface.

Persists exported vault documents. Stores only move the JSON produced by
Vault.export_with_secrets / export_without_secrets; keeping stored secrets
confidential is the caller's responsibility.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union
import logging
from pathlib import Path

from ..runtime.config import VaultConfig
from ..runtime.errors import VaultError, VaultStoreError
from .vault import Vault

logger = logging.getLogger(__name__)


class VaultStore(ABC):
    """
    Abstract vault store interface.

    Defines storage and retrieval of serialized vaults by id.
    """

    def __init__(self, config: Optional[VaultConfig] = None):
        self.config = config

    @abstractmethod
    def _write(self, vault_id: str, document: str, has_secrets: bool):
        pass

    @abstractmethod
    def _read(self, vault_id: str) -> Optional[str]:
        pass

    @abstractmethod
    def list_vaults(self) -> List[str]:
        """
        List stored vault ids.

        Returns:
            Vault ids in sorted order
        """
        pass

    @abstractmethod
    def delete_vault(self, vault_id: str) -> bool:
        """
        Delete a vault.

        Args:
            vault_id: Vault identifier

        Returns:
            True if vault was deleted
        """
        pass

    def has_vault(self, vault_id: str) -> bool:
        """Check if a vault exists."""
        return vault_id in self.list_vaults()

    def store_vault(self, vault_id: str, vault: Vault, include_secrets: bool = True) -> str:
        """
        Store a vault.

        Args:
            vault_id: Unique identifier for the vault
            vault: Vault to store
            include_secrets: Store the full export instead of the redacted one

        Returns:
            The stored document

        Raises:
            VaultStoreError: If the id is invalid or already used
        """
        if not vault_id:
            raise VaultStoreError("Vault id cannot be empty")
        if self.has_vault(vault_id):
            raise VaultStoreError(f"Vault already exists: {vault_id}")

        if include_secrets:
            document = vault.export_with_secrets()
        else:
            document = vault.export_without_secrets()
        self._write(vault_id, document, include_secrets)

        logger.debug(f"Stored vault {vault_id} in {self}")
        return document

    def get_vault(self, vault_id: str) -> Optional[Vault]:
        """
        Retrieve a vault by id.

        Args:
            vault_id: Vault identifier

        Returns:
            Vault if found, None otherwise

        Raises:
            VaultStoreError: If the stored document cannot be decoded
        """
        document = self._read(vault_id)
        if document is None:
            return None
        try:
            return Vault.from_json(document, self.config)
        except VaultError as e:
            raise VaultStoreError(f"Failed to load vault {vault_id}", cause=e)

    def find_vault_by_fingerprint(self, fingerprint: str) -> Optional[str]:
        """
        Find the vault holding a key with the given fingerprint.

        Only each stored vault's own keys are searched, not nested vaults.

        Args:
            fingerprint: Hex key fingerprint

        Returns:
            Vault id if found
        """
        for vault_id in self.list_vaults():
            vault = self.get_vault(vault_id)
            if vault is not None and vault.find_key(fingerprint) is not None:
                return vault_id
        return None

    def get_vault_count(self) -> int:
        """Get the number of stored vaults."""
        return len(self.list_vaults())

    def clear_all_vaults(self) -> int:
        """
        Clear all stored vaults.

        Returns:
            Number of vaults that were deleted
        """
        deleted_count = 0
        for vault_id in self.list_vaults():
            if self.delete_vault(vault_id):
                deleted_count += 1
        return deleted_count


class MemoryVaultStore(VaultStore):
    """
    In-memory vault store implementation.

    Stores documents in memory with no persistence.
    """

    def __init__(self, config: Optional[VaultConfig] = None):
        super().__init__(config)
        self._documents: Dict[str, str] = {}

    def _write(self, vault_id: str, document: str, has_secrets: bool):
        self._documents[vault_id] = document

    def _read(self, vault_id: str) -> Optional[str]:
        return self._documents.get(vault_id)

    def list_vaults(self) -> List[str]:
        return sorted(self._documents)

    def delete_vault(self, vault_id: str) -> bool:
        if vault_id in self._documents:
            del self._documents[vault_id]
            logger.debug(f"Deleted vault {vault_id} from memory vault store")
            return True
        return False

    def has_vault(self, vault_id: str) -> bool:
        return vault_id in self._documents

    def __str__(self) -> str:
        return f"MemoryVaultStore({len(self._documents)} vaults)"

    def __repr__(self) -> str:
        return f"MemoryVaultStore(count={len(self._documents)})"


class FileVaultStore(VaultStore):
    """
    File-based vault store implementation.

    Stores one JSON document per vault in a directory. Documents are written
    unencrypted.
    """

    SUFFIX = ".vault.json"

    def __init__(self, store_path: Union[str, Path], config: Optional[VaultConfig] = None):
        """
        Initialize file vault store.

        Args:
            store_path: Directory path for vault storage
            config: Configuration used when loading vaults
        """
        super().__init__(config)
        self.store_path = Path(store_path)
        self.store_path.mkdir(parents=True, exist_ok=True)

    def _get_vault_file_path(self, vault_id: str) -> Path:
        """Get the file path for a vault."""
        safe_vault_id = vault_id.replace("/", "_").replace("\\", "_")
        return self.store_path / f"{safe_vault_id}{self.SUFFIX}"

    def _write(self, vault_id: str, document: str, has_secrets: bool):
        vault_file = self._get_vault_file_path(vault_id)
        if has_secrets:
            logger.warning(f"Writing secret key material to {vault_file}; protect it at rest")
        vault_file.write_text(document, encoding="utf-8")

    def _read(self, vault_id: str) -> Optional[str]:
        vault_file = self._get_vault_file_path(vault_id)
        if not vault_file.exists():
            return None
        return vault_file.read_text(encoding="utf-8")

    def list_vaults(self) -> List[str]:
        return sorted(
            path.name[:-len(self.SUFFIX)] for path in self.store_path.glob(f"*{self.SUFFIX}")
        )

    def delete_vault(self, vault_id: str) -> bool:
        vault_file = self._get_vault_file_path(vault_id)
        if vault_file.exists():
            vault_file.unlink()
            logger.debug(f"Deleted vault {vault_id} from file store")
            return True
        return False

    def has_vault(self, vault_id: str) -> bool:
        return self._get_vault_file_path(vault_id).exists()

    def __str__(self) -> str:
        return f"FileVaultStore({self.store_path})"

    def __repr__(self) -> str:
        return f"FileVaultStore(path='{self.store_path}')"


__all__ = [
    "VaultStore",
    "MemoryVaultStore",
    "FileVaultStore",
]
