from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class MeetingRecord:
    id: int
    title: str
    date: datetime
    created_at: datetime
    updated_at: datetime
    attendees: list[str] = field(default_factory=list)
    general_notes: str | None = None
    discussion_points: list[str] = field(default_factory=list)
    action_items: list[str] = field(default_factory=list)
    summary: str | None = None
    transcribed_text: str | None = None
    ai_enhanced_notes: str | None = None
