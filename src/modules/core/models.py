"""Base abstract model for the OrderFlow entities.

Provides ``BaseModel``: numeric surrogate PK + created_at / updated_at
timestamps.

Design decisions:
- Both timestamps are taken from a single ``timezone.now()`` call on the
  first save, so a freshly created row has ``created_at == updated_at``.
- ``save()`` guard ensures ``updated_at`` is included when ``update_fields``
  is specified (otherwise a partial save would leave it stale).
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with BigAutoField PK and timestamp bookkeeping."""

    id = models.BigAutoField(primary_key=True)
    created_at = models.DateTimeField(editable=False)
    updated_at = models.DateTimeField(editable=False)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Stamp timestamps and refresh ``updated_at`` on partial saves."""
        now = timezone.now()
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now

        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
