"""Customer model.

Business rules implemented:
- Email must be unique in the system (unique index).
- Document number must be unique in the system (unique index).
- Sensitive data (document number) masked in ``__str__``.

The service layer pre-checks both uniqueness rules to report which field
collided; the unique indexes remain the source of truth under concurrency.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    """Customer referenced (not owned) by orders."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    document_number = models.CharField(max_length=20, unique=True)

    class Meta:
        db_table = "customers"
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["name"], name="customers_name_idx"),
        ]

    def __str__(self) -> str:
        suffix = self.document_number[-4:] if self.document_number else "????"
        return f"{self.name} (doc: ***{suffix})"
