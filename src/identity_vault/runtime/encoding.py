"""
Text encodings used in vault documents.

Key material and signatures travel as standard (padded, non-URL) base64;
fingerprints as lowercase hex.
"""

from __future__ import annotations
import base64
import binascii

from .errors import InvalidEncodingError


def b64encode(data: bytes) -> str:
    """Encode bytes as standard padded base64 text."""
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str) -> bytes:
    """
    Decode standard padded base64 text.

    Args:
        text: Base64 text

    Returns:
        Decoded bytes

    Raises:
        InvalidEncodingError: If text is not strict standard base64
    """
    if not isinstance(text, str):
        raise InvalidEncodingError(f"Expected base64 text, got {type(text).__name__}")
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise InvalidEncodingError(cause=e)


def hex_prefix(data: bytes, length: int) -> str:
    """Lowercase hex of the first length bytes of data."""
    return data[:length].hex()


__all__ = [
    "b64encode",
    "b64decode",
    "hex_prefix",
]
