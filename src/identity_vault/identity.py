"""
Identity record for the vault.

An Identity is a passive contact record: first name, last name, email and an
optional free-text comment. It never carries secret material.
"""

from __future__ import annotations
from typing import Optional, Any, Dict
from pydantic import BaseModel, Field, ValidationError

from .runtime.errors import VaultFormatError


class Identity(BaseModel):
    """
    Immutable identity value.

    Equality and hashing cover all four fields.
    """
    first_name: str = Field(description="Given name")
    last_name: str = Field(description="Family name")
    email: str = Field(description="Contact email address")
    comment: Optional[str] = Field(default=None, description="Free-text comment")

    model_config = {"frozen": True, "extra": "forbid"}

    def __init__(self, first_name: str, last_name: str, email: str,
                 comment: Optional[str] = None, **data: Any):
        super().__init__(first_name=first_name, last_name=last_name,
                         email=email, comment=comment, **data)

    def get_first_name(self) -> str:
        return self.first_name

    def get_last_name(self) -> str:
        return self.last_name

    def get_email(self) -> str:
        return self.email

    def get_comment(self) -> Optional[str]:
        return self.comment

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (comment is null when absent)."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Any) -> Identity:
        """
        Create from dictionary representation.

        Raises:
            VaultFormatError: If data is not a well-formed identity record
        """
        if not isinstance(data, dict):
            raise VaultFormatError(f"Identity must be an object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise VaultFormatError(f"Invalid identity record: {e.error_count()} error(s)", cause=e)
        except TypeError as e:
            # custom __init__ is called with the record's fields as keywords
            raise VaultFormatError("Invalid identity record", cause=e)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} <{self.email}>"


__all__ = ["Identity"]
