"""
Diary Notes Client — Data Models
=================================

What:  Client-side shapes: a received Note and the editable FormDraft.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, model_validator


class Note(BaseModel):
    """
    A note as received from the API.

    Servers that expose only the document-store key send `_id`; it is used as
    `id` when `id` is absent.
    """
    id: str
    title: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def fall_back_to_document_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id") and data.get("_id"):
            data = {**data, "id": str(data["_id"])}
        return data

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against title OR content."""
        needle = term.lower()
        return needle in self.title.lower() or needle in self.content.lower()


class FormDraft(BaseModel):
    """
    The note being created (id is None) or edited (id set).

    One draft is shared by both flows.
    """
    id: Optional[str] = None
    title: str = ""
    content: str = ""

    model_config = {"validate_assignment": True}

    def is_blank(self) -> bool:
        return not self.title.strip() or not self.content.strip()
