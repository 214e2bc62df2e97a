"""
Vault store tests.

Tests in-memory and file-backed stores: add/get/remove, listing,
fingerprint lookup and error handling.
"""

import json
import logging

import pytest

from identity_vault.keys.store import FileVaultStore, MemoryVaultStore
from identity_vault.keys.vault import Vault
from identity_vault.runtime.config import VaultConfig
from identity_vault.runtime.errors import VaultStoreError

from helpers import mk_identity, mk_nested_vault_json, mk_seeded_rng, mk_vault


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    """Provide each vault store implementation."""
    if request.param == "memory":
        return MemoryVaultStore()
    return FileVaultStore(tmp_path / "vaults")


class TestVaultStore:
    """Behaviour shared by all stores."""

    def test_empty_store(self, store):
        assert store.list_vaults() == []
        assert store.get_vault("missing") is None
        assert not store.has_vault("missing")

    def test_store_and_get(self, store, vault):
        document = store.store_vault("alice", vault)

        assert document == vault.export_with_secrets()
        assert store.has_vault("alice")
        assert store.get_vault("alice").export_with_secrets() == document

    def test_store_without_secrets(self, store, vault):
        store.store_vault("alice", vault, include_secrets=False)
        loaded = store.get_vault("alice")

        assert loaded.export_with_secrets() == vault.export_without_secrets()

    def test_duplicate_id_rejected(self, store, vault):
        store.store_vault("alice", vault)
        with pytest.raises(VaultStoreError):
            store.store_vault("alice", vault)

    def test_empty_id_rejected(self, store, vault):
        with pytest.raises(VaultStoreError):
            store.store_vault("", vault)

    def test_list_and_delete(self, store):
        store.store_vault("bob", mk_vault("Bob", key_seeds=(2,)))
        store.store_vault("alice", mk_vault("Alice", key_seeds=(1,)))

        assert store.list_vaults() == ["alice", "bob"]
        assert store.get_vault_count() == 2
        assert store.delete_vault("bob")
        assert not store.delete_vault("bob")
        assert store.list_vaults() == ["alice"]

    def test_clear_all(self, store):
        store.store_vault("a", mk_vault("Alice", key_seeds=(1,)))
        store.store_vault("b", mk_vault("Bob", key_seeds=(2,)))

        assert store.clear_all_vaults() == 2
        assert store.list_vaults() == []

    def test_find_by_fingerprint(self, store):
        bob = mk_vault("Bob", key_seeds=(2, 3))
        store.store_vault("alice", mk_vault("Alice", key_seeds=(1,)))
        store.store_vault("bob", bob)

        fingerprint = bob.get_secret_keys()[1].get_fingerprint()
        assert store.find_vault_by_fingerprint(fingerprint) == "bob"
        assert store.find_vault_by_fingerprint("00" * 16) is None

    def test_get_vault_with_short_fingerprints(self, store):
        vault = Vault.create(mk_identity(), rng=mk_seeded_rng(5),
                             config=VaultConfig(fingerprint_length=8))
        document = store.store_vault("alice", vault)

        assert store.get_vault("alice").export_with_secrets() == document
        fingerprint = vault.get_secret_keys()[0].get_fingerprint()
        assert store.find_vault_by_fingerprint(fingerprint) == "alice"

    def test_deeply_nested_document_raises_store_error(self, store):
        store._write("deep", mk_nested_vault_json(1200), False)
        with pytest.raises(VaultStoreError):
            store.get_vault("deep")


class TestFileVaultStore:
    """File-store specifics."""

    def test_creates_directory_and_files(self, tmp_path, vault):
        store = FileVaultStore(tmp_path / "nested" / "dir")
        store.store_vault("alice", vault)

        vault_file = tmp_path / "nested" / "dir" / "alice.vault.json"
        assert vault_file.exists()
        assert json.loads(vault_file.read_text(encoding="utf-8")) == vault.to_dict()

    def test_persists_across_instances(self, tmp_path, vault):
        FileVaultStore(tmp_path).store_vault("alice", vault)
        reopened = FileVaultStore(tmp_path)

        assert reopened.list_vaults() == ["alice"]
        assert reopened.get_vault("alice") == vault

    def test_warns_when_writing_secrets(self, tmp_path, vault, caplog):
        store = FileVaultStore(tmp_path)
        with caplog.at_level(logging.WARNING, logger="identity_vault.keys.store"):
            store.store_vault("public", vault, include_secrets=False)
            assert not caplog.records
            store.store_vault("secret", vault)
        assert any("secret key material" in r.getMessage() for r in caplog.records)

    def test_corrupt_file_raises(self, tmp_path):
        store = FileVaultStore(tmp_path)
        (tmp_path / "broken.vault.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(VaultStoreError):
            store.get_vault("broken")
