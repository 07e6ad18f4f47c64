from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from notewise.config import Settings
from notewise.enhance.base import EnhancementRequest, EnhancementResult
from notewise.errors import EmptyContentError, MeetingNotFoundError, UnsupportedModeError
from notewise.schemas import CreateMeetingInput
from notewise.services import MeetingService
from notewise.storage.db import NotesDB


@pytest.fixture()
def service(tmp_path) -> MeetingService:
    return MeetingService(Settings(data_dir=tmp_path))


def _create(service: MeetingService, **overrides):
    fields = {
        "title": "Test Meeting",
        "date": datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
        "general_notes": "We discussed the project timeline and budget.",
        "action_items": ["Review proposal"],
        "transcribed_text": "Hello everyone, we need to review the proposal and schedule follow-up meeting.",
    }
    fields.update(overrides)
    return service.create_meeting(CreateMeetingInput(**fields))


def test_service_uses_settings_db_path(tmp_path) -> None:
    service = MeetingService(Settings(data_dir=tmp_path / "nested"))
    assert service.db.db_path == tmp_path / "nested" / "notewise.db"
    assert service.db.db_path.exists()


def test_service_accepts_injected_db(tmp_path) -> None:
    db = NotesDB(tmp_path / "other.db")
    service = MeetingService(Settings(data_dir=tmp_path / "unused"), db=db)

    assert service.db is db
    assert not (tmp_path / "unused").exists()


def test_get_missing_meeting_raises(service: MeetingService) -> None:
    with pytest.raises(MeetingNotFoundError, match="Meeting with ID 42 not found"):
        service.get_meeting(42)


def test_enhance_missing_meeting_raises_and_logs(service: MeetingService, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="notewise.services"):
        with pytest.raises(MeetingNotFoundError):
            service.enhance_notes(EnhancementRequest(42, "summary"))
    assert "AI enhancement failed for meeting 42" in caplog.text


def test_enhance_uses_stored_text(service: MeetingService) -> None:
    meeting = _create(service, transcribed_text="A. B. C. D.", general_notes=None)
    result = service.enhance_notes(EnhancementRequest(meeting.id, "summary"))

    assert result.generated_summary == "Summary: A. B. C."
    assert result.meeting_id == meeting.id


def test_enhance_does_not_modify_record(service: MeetingService) -> None:
    meeting = _create(service)
    service.enhance_notes(EnhancementRequest(meeting.id, "full_enhancement"))

    assert service.get_meeting(meeting.id) == meeting


def test_enhance_empty_meeting(service: MeetingService) -> None:
    meeting = _create(service, general_notes=None, transcribed_text=None)
    with pytest.raises(EmptyContentError):
        service.enhance_notes(EnhancementRequest(meeting.id, "grammar"))


def test_enhance_unknown_mode(service: MeetingService) -> None:
    meeting = _create(service)
    with pytest.raises(UnsupportedModeError):
        service.enhance_notes(EnhancementRequest(meeting.id, "poetry"))


def test_apply_appends_action_items(service: MeetingService) -> None:
    meeting = _create(service)
    result, updated = service.enhance_and_apply(
        EnhancementRequest(
            meeting.id,
            "action_items",
            transcribed_text="- Prepare slides\nWe must review the budget.",
        )
    )

    assert updated.action_items == ["Review proposal", *result.extracted_action_items]
    assert updated.summary is None
    assert updated.ai_enhanced_notes is None


def test_apply_full_enhancement_overwrites_text_fields(service: MeetingService) -> None:
    meeting = _create(service, summary="Old summary")
    result, updated = service.enhance_and_apply(EnhancementRequest(meeting.id, "full_enhancement"))

    assert updated.summary == result.generated_summary
    assert updated.ai_enhanced_notes == result.enhanced_notes
    assert updated.action_items == [
        "Review proposal",
        "Complete assigned tasks",
        "Prepare for next meeting",
        "Share meeting summary",
    ]
    assert updated.updated_at >= meeting.updated_at


def test_apply_empty_result_leaves_meeting_untouched(service: MeetingService) -> None:
    meeting = _create(service)
    result = EnhancementResult(
        meeting_id=meeting.id,
        enhanced_notes=None,
        generated_summary="",
        extracted_action_items=[],
    )

    assert service.apply_enhancement(result) == meeting


def test_delete_meeting(service: MeetingService) -> None:
    meeting = _create(service)
    assert service.delete_meeting(meeting.id) is True
    assert service.list_meetings() == []
