from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from notewise.errors import UnsupportedModeError


class EnhanceType(str, Enum):
    GRAMMAR = "grammar"
    SUMMARY = "summary"
    ACTION_ITEMS = "action_items"
    FULL_ENHANCEMENT = "full_enhancement"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: "EnhanceType | str") -> "EnhanceType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise UnsupportedModeError(value, cls.values()) from exc


@dataclass(slots=True)
class Enhancement:
    """Output of a single enhancer; fields it does not produce stay unset."""

    enhanced_notes: str | None = None
    generated_summary: str | None = None
    extracted_action_items: list[str] = field(default_factory=list)


@dataclass(slots=True)
class EnhancementRequest:
    meeting_id: int
    enhance_type: EnhanceType | str
    transcribed_text: str | None = None
    user_notes: str | None = None


@dataclass(slots=True)
class EnhancementResult:
    meeting_id: int
    enhanced_notes: str | None
    generated_summary: str | None
    extracted_action_items: list[str]


class TextEnhancer(Protocol):
    def enhance(self, content: str) -> Enhancement:
        """Transform combined meeting content into an enhancement."""
