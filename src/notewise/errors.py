from __future__ import annotations

from typing import Iterable


class NotewiseError(Exception):
    """Base class for failures reported to callers of the service layer."""


class MeetingNotFoundError(NotewiseError, LookupError):
    """Raised when a meeting id does not resolve to a stored record."""

    def __init__(self, meeting_id: int) -> None:
        super().__init__(f"Meeting with ID {meeting_id} not found")
        self.meeting_id = meeting_id


class EmptyContentError(NotewiseError, ValueError):
    """Raised when neither transcript nor notes leave any text to enhance."""

    def __init__(self) -> None:
        super().__init__(
            "No content available to enhance. Please provide transcribed_text or user_notes."
        )


class UnsupportedModeError(NotewiseError, ValueError):
    """Raised for an enhancement mode outside the supported set."""

    def __init__(self, mode: object, allowed: Iterable[str]) -> None:
        super().__init__(f"Unsupported enhancement type '{mode}'. Allowed: {', '.join(allowed)}")
        self.mode = mode
