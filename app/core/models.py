"""
Abstract base model shared by the domain apps.

Base Classes:
    BaseModel: Abstract model with created_at / updated_at timestamps

Usage:
    from core.models import BaseModel

    class Thread(BaseModel):
        ...
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Abstract model adding creation and modification timestamps.

    Fields:
        created_at: Set once when the row is inserted
        updated_at: Refreshed on every save() that includes it

    Note:
        QuerySet.update() bypasses auto_now. Code that must leave
        updated_at untouched (read-marking) relies on that.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.pk})"
