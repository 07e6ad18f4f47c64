from __future__ import annotations

import logging
from typing import Mapping

from notewise.config import Settings, get_settings
from notewise.enhance.base import EnhanceType, EnhancementRequest, EnhancementResult, TextEnhancer
from notewise.enhance.pipeline import enhance
from notewise.errors import MeetingNotFoundError, NotewiseError
from notewise.schemas import CreateMeetingInput, UpdateMeetingInput
from notewise.storage.db import NotesDB
from notewise.storage.models import MeetingRecord

logger = logging.getLogger(__name__)


class MeetingService:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        db: NotesDB | None = None,
        enhancers: Mapping[EnhanceType, TextEnhancer] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if db is None:
            self.settings.ensure_dirs()
            db = NotesDB(self.settings.db_path)
        self.db = db
        self.db.initialize()
        self.enhancers = enhancers

    def create_meeting(self, data: CreateMeetingInput) -> MeetingRecord:
        meeting = self.db.create_meeting(data)
        logger.info("Created meeting %s (%s)", meeting.id, meeting.title)
        return meeting

    def list_meetings(self) -> list[MeetingRecord]:
        return self.db.list_meetings()

    def get_meeting(self, meeting_id: int) -> MeetingRecord:
        meeting = self.db.get_meeting(meeting_id)
        if meeting is None:
            raise MeetingNotFoundError(meeting_id)
        return meeting

    def update_meeting(self, data: UpdateMeetingInput) -> MeetingRecord:
        try:
            meeting = self.db.update_meeting(data)
        except MeetingNotFoundError:
            logger.warning("Meeting update failed: meeting %s not found", data.id)
            raise
        logger.info("Updated meeting %s fields: %s", meeting.id, ", ".join(sorted(data.changes())) or "-")
        return meeting

    def delete_meeting(self, meeting_id: int) -> bool:
        deleted = self.db.delete_meeting(meeting_id)
        if deleted:
            logger.info("Deleted meeting %s", meeting_id)
        else:
            logger.debug("Nothing to delete for meeting %s", meeting_id)
        return deleted

    def enhance_notes(self, request: EnhancementRequest) -> EnhancementResult:
        try:
            meeting = self.get_meeting(request.meeting_id)
            result = enhance(request, meeting, enhancers=self.enhancers)
        except NotewiseError as exc:
            logger.error("AI enhancement failed for meeting %s: %s", request.meeting_id, exc)
            raise
        logger.debug(
            "Enhanced meeting %s with mode %s",
            request.meeting_id,
            EnhanceType.parse(request.enhance_type).value,
        )
        return result

    def apply_enhancement(self, result: EnhancementResult) -> MeetingRecord:
        """Merge an enhancement result into its meeting and persist it.

        Enhanced notes and summary overwrite the stored values, extracted action
        items are appended after the existing ones. Empty outputs leave the
        record untouched.
        """

        meeting = self.get_meeting(result.meeting_id)
        changes: dict[str, object] = {}
        if result.enhanced_notes:
            changes["ai_enhanced_notes"] = result.enhanced_notes
        if result.generated_summary:
            changes["summary"] = result.generated_summary
        if result.extracted_action_items:
            changes["action_items"] = [*meeting.action_items, *result.extracted_action_items]
        if not changes:
            return meeting
        return self.update_meeting(UpdateMeetingInput(id=meeting.id, **changes))

    def enhance_and_apply(self, request: EnhancementRequest) -> tuple[EnhancementResult, MeetingRecord]:
        result = self.enhance_notes(request)
        return result, self.apply_enhancement(result)
