from __future__ import annotations

import re

from notewise.enhance.base import Enhancement

MIN_ITEM_LENGTH = 6
MAX_ITEM_LENGTH = 99
MAX_ITEMS = 5

FALLBACK_ACTION_ITEMS: tuple[str, ...] = ("Review meeting notes", "Schedule follow-up")

# Keyword phrases are scanned before bullet lines; first-seen order follows that.
ACTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(?:action|todo|task|follow.?up|need to|should|must|will)\s+(.+?)(?:[.!?]|\Z)",
        re.IGNORECASE,
    ),
    re.compile(r"^[-*•]\s*(.+?)(?:[.!?]|$)", re.MULTILINE),
)


class ActionExtractor:
    """Pulls likely action items out of free text with fixed patterns."""

    def __init__(self, patterns: tuple[re.Pattern[str], ...] = ACTION_PATTERNS) -> None:
        self.patterns = patterns

    def extract(self, text: str) -> list[str]:
        found: dict[str, None] = {}
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                action = match.group(1).strip()
                if MIN_ITEM_LENGTH <= len(action) <= MAX_ITEM_LENGTH:
                    found.setdefault(action, None)
        items = list(found)[:MAX_ITEMS]
        return items or list(FALLBACK_ACTION_ITEMS)

    def enhance(self, content: str) -> Enhancement:
        return Enhancement(extracted_action_items=self.extract(content))
