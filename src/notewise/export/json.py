from __future__ import annotations

import json
from typing import Any

from notewise.enhance.base import EnhancementResult
from notewise.storage.models import MeetingRecord


def build_payload(meeting: MeetingRecord) -> dict[str, Any]:
    return {
        "id": meeting.id,
        "title": meeting.title,
        "date": meeting.date.isoformat(),
        "attendees": list(meeting.attendees),
        "general_notes": meeting.general_notes,
        "discussion_points": list(meeting.discussion_points),
        "action_items": list(meeting.action_items),
        "summary": meeting.summary,
        "transcribed_text": meeting.transcribed_text,
        "ai_enhanced_notes": meeting.ai_enhanced_notes,
        "created_at": meeting.created_at.isoformat(),
        "updated_at": meeting.updated_at.isoformat(),
    }


def build_result_payload(result: EnhancementResult) -> dict[str, Any]:
    return {
        "enhanced_notes": result.enhanced_notes,
        "generated_summary": result.generated_summary,
        "extracted_action_items": list(result.extracted_action_items),
        "meeting_id": result.meeting_id,
    }


def dumps_payload(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)
