"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``) and use camelCase
names on the wire (``documentNumber``, ``createdAt``).

- ``CustomerInputDTO``: input for customer creation and full update.
- ``CustomerOutputDTO``: output returned by every customer use-case.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from modules.customers.models import Customer


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CustomerInputDTO(BaseModel):
    """Immutable DTO for customer create (POST) and update (PUT) requests.

    Validates:
    - ``name`` and ``document_number`` are present and not blank
      (surrounding whitespace is stripped).
    - ``email`` is a well-formed address (Pydantic ``EmailStr``).
    - ``phone`` is optional; ``None`` is normalised to ``""``.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str = Field(max_length=255)
    email: EmailStr
    phone: str = Field(default="", max_length=20)
    document_number: str = Field(max_length=20)

    @field_validator("name", "document_number")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def normalise_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class CustomerOutputDTO(BaseModel):
    """Immutable DTO for customer API responses."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
    email: str
    phone: str
    document_number: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        """Build an output DTO from a Customer model instance."""
        return cls(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            document_number=customer.document_number,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )
