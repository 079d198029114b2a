"""Abstract model shared by catalog and order tables.

``BaseModel`` gives every row an application-generated UUIDv7 key and
UTC ``created_at`` / ``updated_at`` timestamps.  UUIDv7 keys sort by
creation time, which the order listings rely on to break ties between
rows created within the same timestamp.
"""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """UUIDv7 primary key plus creation/modification timestamps."""

    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        # auto_now fields are skipped by partial saves unless listed.
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = {*update_fields, "updated_at"}
        super().save(*args, **kwargs)
