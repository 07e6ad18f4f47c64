from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

ARRAY_FIELDS: tuple[str, ...] = ("attendees", "discussion_points", "action_items")
TEXT_FIELDS: tuple[str, ...] = ("general_notes", "summary", "transcribed_text", "ai_enhanced_notes")

_NON_NULLABLE: frozenset[str] = frozenset({"title", "date", *ARRAY_FIELDS})


def _require_title(value: str) -> str:
    if not value:
        raise ValueError("Title is required")
    return value


class CreateMeetingInput(BaseModel):
    title: str
    date: datetime
    attendees: list[str] = Field(default_factory=list)
    general_notes: str | None = None
    discussion_points: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)
    summary: str | None = None
    transcribed_text: str | None = None
    ai_enhanced_notes: str | None = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return _require_title(value)

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class UpdateMeetingInput(BaseModel):
    """Partial update: only fields present in ``model_fields_set`` are written."""

    id: int
    title: str | None = None
    date: datetime | None = None
    attendees: list[str] | None = None
    general_notes: str | None = None
    discussion_points: list[str] | None = None
    action_items: list[str] | None = None
    summary: str | None = None
    transcribed_text: str | None = None
    ai_enhanced_notes: str | None = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str | None) -> str | None:
        return value if value is None else _require_title(value)

    @model_validator(mode="after")
    def _reject_null_required(self) -> "UpdateMeetingInput":
        for name in _NON_NULLABLE & self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"Field '{name}' cannot be cleared")
        return self

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set if name != "id"}
