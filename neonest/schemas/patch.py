"""Base schema for PATCH payloads."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel


class PartialUpdate(BaseModel):
    """
    Fields left out of the payload are not touched. An explicit null is
    ignored too, except for the optional fields named in clearable_fields,
    where it clears the stored value.
    """

    clearable_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k in self.clearable_fields
        }
