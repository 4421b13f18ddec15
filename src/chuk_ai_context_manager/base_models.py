# chuk_ai_context_manager/base_models.py
"""Base model for report types consumed by UI code as plain mappings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class DictCompatModel(BaseModel):
    """Report model that also answers dict-style lookups.

    ``usage["total"]``, ``"total" in usage`` and ``usage.get("total")`` behave
    as they would on the dict a chat widget expects, and a report compares
    equal to a dict holding the same dumped values.
    """

    def __getitem__(self, key: str) -> Any:
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return key in type(self).model_fields
        return False

    def get(self, key: str, default: Any = None) -> Any:
        if key in self:
            return getattr(self, key)
        return default

    def __eq__(self, other: object) -> bool:
        if isinstance(other, dict):
            return self.model_dump() == other
        return super().__eq__(other)
