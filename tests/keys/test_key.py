"""
Key tagged union tests.

Tests the Signing variant, its tagged encoding, redaction and the kind registry.
"""

import pytest

from identity_vault.keys.key import (
    KeyKind,
    SigningKeyEntry,
    key_class_for,
    key_from_dict,
    redact_keys,
    register_key_kind,
    registered_key_kinds,
)
from identity_vault.runtime.errors import VaultFormatError

from helpers import mk_signing_key


class TestSigningKeyEntry:
    """Test the Signing variant."""

    def test_kind_tag_is_stable(self):
        assert KeyKind.SIGNING.value == "Signing"
        assert SigningKeyEntry.kind is KeyKind.SIGNING

    def test_to_dict_is_externally_tagged(self, signing_key):
        data = SigningKeyEntry(signing_key).to_dict()

        assert list(data) == ["Signing"]
        assert data["Signing"] == signing_key.to_dict()

    def test_to_public_view_strips_secret(self, signing_key):
        entry = SigningKeyEntry(signing_key)
        public = entry.to_public_view()

        assert isinstance(public, SigningKeyEntry)
        assert not public.has_secret_material()
        assert entry.has_secret_material()
        assert public.get_fingerprint() == entry.get_fingerprint()
        assert "sk" not in public.to_dict()["Signing"]

    def test_generate(self, seeded_rng):
        entry = SigningKeyEntry.generate(rng=seeded_rng)
        assert entry.has_secret_material()

    def test_equality(self, signing_key):
        assert SigningKeyEntry(signing_key) == SigningKeyEntry(signing_key)
        assert SigningKeyEntry(signing_key) != SigningKeyEntry(signing_key.get_redacted_key())


class TestKeyDecoding:
    """Test decoding tagged keys."""

    def test_key_from_dict(self, signing_key):
        entry = SigningKeyEntry(signing_key)
        decoded = key_from_dict(entry.to_dict())

        assert decoded == entry

    def test_unknown_tag(self, signing_key):
        with pytest.raises(VaultFormatError):
            key_from_dict({"Encryption": signing_key.to_dict()})

    @pytest.mark.parametrize("data", [
        None,
        [],
        {},
        {"Signing": {}, "Other": {}},
    ])
    def test_malformed_entries(self, data):
        with pytest.raises(VaultFormatError):
            key_from_dict(data)

    def test_registry(self):
        assert KeyKind.SIGNING in registered_key_kinds()
        assert key_class_for(KeyKind.SIGNING) is SigningKeyEntry
        assert key_class_for("Signing") is SigningKeyEntry

    def test_registry_unknown_kind(self):
        with pytest.raises(VaultFormatError):
            key_class_for("Encryption")

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError):
            @register_key_kind(KeyKind.SIGNING)
            class DuplicateSigning(SigningKeyEntry):
                pass


class TestRedactKeys:
    """Test list redaction."""

    def test_order_and_length_preserved(self):
        entries = [SigningKeyEntry(mk_signing_key(seed)) for seed in (1, 2, 3)]
        public = redact_keys(entries)

        assert len(public) == 3
        assert [k.get_fingerprint() for k in public] == [k.get_fingerprint() for k in entries]
        assert not any(k.has_secret_material() for k in public)

    def test_empty(self):
        assert redact_keys([]) == []
