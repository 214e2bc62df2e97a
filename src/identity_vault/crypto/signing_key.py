"""
Signing key wrapper for the identity vault.

A SigningKey owns one Ed25519 keypair: the public key, an optional secret key
and a fingerprint derived from the public key. Keys created by generate()
carry their secret; keys restored from a public key alone are "redacted" and
can verify but never sign.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Optional
import logging
import secrets

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..runtime.config import MAX_FINGERPRINT_LENGTH, VaultConfig, resolve_config
from ..runtime.encoding import b64decode, b64encode, hex_prefix
from ..runtime.errors import (
    InvalidEncodingError,
    InvalidKeyError,
    NoSecretKeyError,
    VaultFormatError,
)

logger = logging.getLogger(__name__)

PUBLIC_KEY_LENGTH = 32
SECRET_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

# Randomness capability: called with a byte count, returns that many bytes.
RandomSource = Callable[[int], bytes]


def _public_bytes(public_key: CryptoEd25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _secret_bytes(secret_key: CryptoEd25519PrivateKey) -> bytes:
    return secret_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _load_public_key(key_bytes: bytes) -> CryptoEd25519PublicKey:
    if len(key_bytes) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyError(
            f"Ed25519 public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key_bytes)}"
        )
    try:
        return CryptoEd25519PublicKey.from_public_bytes(key_bytes)
    except ValueError as e:
        raise InvalidKeyError("Invalid Ed25519 public key", cause=e)


def _load_secret_key(key_bytes: bytes) -> CryptoEd25519PrivateKey:
    if len(key_bytes) != SECRET_KEY_LENGTH:
        raise InvalidKeyError(
            f"Ed25519 secret key must be {SECRET_KEY_LENGTH} bytes, got {len(key_bytes)}"
        )
    try:
        return CryptoEd25519PrivateKey.from_private_bytes(key_bytes)
    except ValueError as e:
        raise InvalidKeyError("Invalid Ed25519 secret key", cause=e)


def _is_fingerprint_of(fingerprint: str, public_key_bytes: bytes) -> bool:
    """True if fingerprint is lowercase hex of a 1-32 byte prefix of the key."""
    length, odd = divmod(len(fingerprint), 2)
    if odd or not 1 <= length <= MAX_FINGERPRINT_LENGTH:
        return False
    return fingerprint == hex_prefix(public_key_bytes, length)


class SigningKey:
    """
    Ed25519 signing keypair with a derived fingerprint.

    Instances are immutable. The secret key is present only for keys that
    were generated (or restored from a stored secret); it is never derived
    from a public key.
    """

    def __init__(
        self,
        public_key: CryptoEd25519PublicKey,
        secret_key: Optional[CryptoEd25519PrivateKey] = None,
        config: Optional[VaultConfig] = None,
    ):
        """
        Initialize from loaded key objects.

        Prefer the generate/from_* factories, which validate their input.

        Args:
            public_key: Ed25519 public key
            secret_key: Matching Ed25519 private key, or None for a public-only key
            config: Configuration used to derive the fingerprint
        """
        self._public_key = public_key
        self._public_key_bytes = _public_bytes(public_key)
        self._secret_key = secret_key
        self._fingerprint = hex_prefix(
            self._public_key_bytes, resolve_config(config).fingerprint_length
        )

    @classmethod
    def generate(cls, rng: Optional[RandomSource] = None,
                 config: Optional[VaultConfig] = None) -> SigningKey:
        """
        Generate a fresh keypair.

        Args:
            rng: Randomness source for the private seed (defaults to secrets.token_bytes)
            config: Optional configuration

        Returns:
            Secret-bearing signing key
        """
        seed = (rng or secrets.token_bytes)(SECRET_KEY_LENGTH)
        if len(seed) != SECRET_KEY_LENGTH:
            raise ValueError(f"Random source returned {len(seed)} bytes, expected {SECRET_KEY_LENGTH}")

        secret_key = CryptoEd25519PrivateKey.from_private_bytes(seed)
        key = cls(secret_key.public_key(), secret_key, config)
        logger.debug(f"Generated signing key {key.get_fingerprint()}")
        return key

    @classmethod
    def from_public_key(cls, encoded_public_key: str,
                        config: Optional[VaultConfig] = None) -> SigningKey:
        """
        Create a public-only key from its base64 encoding.

        Args:
            encoded_public_key: Standard base64 of the raw public key

        Returns:
            Signing key without a secret

        Raises:
            InvalidEncodingError: If the text is not valid base64
            InvalidKeyError: If the decoded bytes are not an Ed25519 public key
        """
        public_key = _load_public_key(b64decode(encoded_public_key))
        return cls(public_key, None, config)

    @classmethod
    def from_secret_key(cls, encoded_secret_key: str,
                        encoded_public_key: Optional[str] = None,
                        config: Optional[VaultConfig] = None) -> SigningKey:
        """
        Restore a secret-bearing key from stored material.

        Args:
            encoded_secret_key: Standard base64 of the raw private seed
            encoded_public_key: Stored public key to check against the secret

        Raises:
            InvalidEncodingError: If either text is not valid base64
            InvalidKeyError: If the keys are malformed or do not belong together
        """
        secret_key = _load_secret_key(b64decode(encoded_secret_key))
        derived = secret_key.public_key()
        if encoded_public_key is not None:
            stored = _load_public_key(b64decode(encoded_public_key))
            if _public_bytes(stored) != _public_bytes(derived):
                raise InvalidKeyError("Public key does not match secret key")
        return cls(derived, secret_key, config)

    def sign(self, message: bytes) -> str:
        """
        Create a detached signature.

        Args:
            message: Message to sign

        Returns:
            Base64 signature

        Raises:
            NoSecretKeyError: If this key has no secret
        """
        if self._secret_key is None:
            raise NoSecretKeyError(details={"fingerprint": self._fingerprint})
        return b64encode(self._secret_key.sign(message))

    def verify(self, message: bytes, signature: str) -> bool:
        """
        Verify a detached signature against this key.

        None of these raise; each returns False:
        - a message that is not bytes-like
        - malformed base64 or a wrongly sized signature
        - a signature that does not validate

        Args:
            message: Message that was signed
            signature: Base64 signature

        Returns:
            True if signature is valid
        """
        if not isinstance(message, (bytes, bytearray, memoryview)):
            return False

        try:
            signature_bytes = b64decode(signature)
        except InvalidEncodingError:
            return False

        if len(signature_bytes) != SIGNATURE_LENGTH:
            return False

        try:
            self._public_key.verify(signature_bytes, message)
            return True
        except InvalidSignature:
            return False

    def get_redacted_key(self) -> SigningKey:
        """Return a copy of this key with the secret removed."""
        redacted = object.__new__(SigningKey)
        redacted._public_key = self._public_key
        redacted._public_key_bytes = self._public_key_bytes
        redacted._secret_key = None
        redacted._fingerprint = self._fingerprint
        return redacted

    def get_public_key(self) -> str:
        """Get the public key as standard base64."""
        return b64encode(self._public_key_bytes)

    def get_secret_key(self) -> Optional[str]:
        """Get the secret key as standard base64, or None if absent."""
        if self._secret_key is None:
            return None
        return b64encode(_secret_bytes(self._secret_key))

    def get_fingerprint(self) -> str:
        return self._fingerprint

    def has_secret_key(self) -> bool:
        return self._secret_key is not None

    def public_key_bytes(self) -> bytes:
        """Get the 32-byte raw public key."""
        return self._public_key_bytes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation; "sk" is omitted when absent."""
        result: Dict[str, Any] = {"pk": self.get_public_key()}
        secret = self.get_secret_key()
        if secret is not None:
            result["sk"] = secret
        result["fingerprint"] = self._fingerprint
        return result

    @classmethod
    def from_dict(cls, data: Any, config: Optional[VaultConfig] = None) -> SigningKey:
        """
        Create from dictionary representation.

        Raises:
            VaultFormatError: If required fields are missing or mistyped
            InvalidEncodingError: If key material is not valid base64
            InvalidKeyError: If key material or fingerprint is inconsistent
        """
        if not isinstance(data, dict):
            raise VaultFormatError(f"Signing key must be an object, got {type(data).__name__}")
        unknown = set(data) - {"pk", "sk", "fingerprint"}
        if unknown:
            raise VaultFormatError(f"Unknown signing key fields: {sorted(unknown)}")
        if not isinstance(data.get("pk"), str) or not isinstance(data.get("fingerprint"), str):
            raise VaultFormatError("Signing key requires string 'pk' and 'fingerprint'")

        if "sk" in data:
            if not isinstance(data["sk"], str):
                raise VaultFormatError("Signing key 'sk' must be a string")
            key = cls.from_secret_key(data["sk"], data["pk"], config)
        else:
            key = cls.from_public_key(data["pk"], config)

        fingerprint = data["fingerprint"]
        if not _is_fingerprint_of(fingerprint, key._public_key_bytes):
            raise InvalidKeyError(
                "Fingerprint does not match public key",
                details={"expected": key.get_fingerprint(), "found": fingerprint},
            )
        # Keep the stored length so documents re-export unchanged under any config
        key._fingerprint = fingerprint
        return key

    def __copy__(self) -> SigningKey:
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> SigningKey:
        return self

    def __eq__(self, other) -> bool:
        """Keys are equal when public key and secret material match."""
        if not isinstance(other, SigningKey):
            return False
        return (self._public_key_bytes == other._public_key_bytes
                and self.get_secret_key() == other.get_secret_key())

    def __hash__(self) -> int:
        return hash((self._public_key_bytes, self.has_secret_key()))

    def __str__(self) -> str:
        return f"SigningKey({self._fingerprint})"

    def __repr__(self) -> str:
        kind = "secret" if self.has_secret_key() else "public"
        return f"SigningKey(fingerprint='{self._fingerprint}', {kind})"


__all__ = [
    "SigningKey",
    "RandomSource",
    "PUBLIC_KEY_LENGTH",
    "SECRET_KEY_LENGTH",
    "SIGNATURE_LENGTH",
]
