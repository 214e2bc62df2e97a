"""
Cryptographic primitives for the identity vault.

Provides the Ed25519 SigningKey wrapper used by vault keys.
"""

from .signing_key import SigningKey, RandomSource, PUBLIC_KEY_LENGTH, SECRET_KEY_LENGTH, SIGNATURE_LENGTH

__all__ = [
    "SigningKey",
    "RandomSource",
    "PUBLIC_KEY_LENGTH",
    "SECRET_KEY_LENGTH",
    "SIGNATURE_LENGTH",
]
