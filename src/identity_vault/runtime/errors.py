"""
Identity Vault Error Model

This module provides the error handling framework for the identity vault.
Every failure raised by the package derives from VaultError and carries a
stable ErrorCode, so callers can reject untrusted input without crashing.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Vault error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    INVALID_ENCODING = 100
    INVALID_DOCUMENT = 101

    # Key errors (700-799)
    INVALID_KEY = 700
    NO_SECRET_KEY = 701

    # Vault errors (800-899)
    VAULT_CYCLE = 800
    STORE_ERROR = 801


class VaultError(Exception):
    """
    Base class for all vault errors.

    Provides structured error information: a message, an error code,
    optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a vault error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidEncodingError(VaultError):
    """Text is not valid standard base64."""

    def __init__(self, message: str = "Invalid base64 encoding",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ENCODING, details, cause)


class InvalidKeyError(VaultError):
    """Decoded bytes are not a structurally valid key."""

    def __init__(self, message: str = "Invalid key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class NoSecretKeyError(VaultError):
    """Signing requested on a public-only key."""

    def __init__(self, message: str = "No secret key available",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NO_SECRET_KEY, details, cause)


class VaultFormatError(VaultError):
    """Serialized vault document is malformed."""

    def __init__(self, message: str = "Malformed vault document",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_DOCUMENT, details, cause)


class VaultCycleError(VaultError):
    """Attaching a vault would make it contain itself."""

    def __init__(self, message: str = "Vault cannot contain itself",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.VAULT_CYCLE, details, cause)


class VaultStoreError(VaultError):
    """Vault store specific errors."""

    def __init__(self, message: str,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.STORE_ERROR, details, cause)


# Re-export error types for convenience
__all__ = [
    "ErrorCode",
    "VaultError",
    "InvalidEncodingError",
    "InvalidKeyError",
    "NoSecretKeyError",
    "VaultFormatError",
    "VaultCycleError",
    "VaultStoreError",
]
