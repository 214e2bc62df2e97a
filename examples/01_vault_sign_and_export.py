#!/usr/bin/env python3

"""Create a vault, sign with its key, nest a contact vault and export both views"""

import json
import logging

from identity_vault import Identity, SigningKey, Vault, NoSecretKeyError


def main():
    """Main example function"""
    logging.basicConfig(level=logging.DEBUG)
    print("=== Identity Vault: sign, redact, export ===")

    owner = Identity("Alice", "Smith", "alice@example.com", "personal")
    vault = Vault.create(owner)
    vault.add_secondary_identity(Identity("Alice", "Smith", "alice@work.example.com"))

    signing_key = vault.get_secret_keys()[0].signing_key
    signature = signing_key.sign(b"hello")
    print(f"Key fingerprint: {signing_key.get_fingerprint()}")
    print(f"Signature valid: {signing_key.verify(b'hello', signature)}")
    print(f"Tampered message valid: {signing_key.verify(b'hello!', signature)}")

    public_key = SigningKey.from_public_key(signing_key.get_public_key())
    print(f"Public-only key verifies: {public_key.verify(b'hello', signature)}")
    try:
        public_key.sign(b"hello")
    except NoSecretKeyError as e:
        print(f"Public-only key cannot sign: {e}")

    # Keep a redacted copy of a contact's vault inside ours
    contact = Vault.create(Identity("Bob", "Johnson", "bob@example.com"))
    vault.add_external_vault(contact.redacted())

    print("\nPublic export:")
    print(json.dumps(json.loads(vault.export_without_secrets()), indent=2))

    restored = Vault.from_json(vault.export_with_secrets())
    print(f"\nRound-trip identical: {restored.export_with_secrets() == vault.export_with_secrets()}")


if __name__ == "__main__":
    main()
