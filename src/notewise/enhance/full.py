from __future__ import annotations

import re

from notewise.enhance.base import Enhancement

ENHANCED_PREFIX = "Enhanced notes: "

# Placeholder outputs; they do not depend on the content.
CANNED_SUMMARY = (
    "Full summary: Key discussion points covered important topics with multiple attendees participating."
)
CANNED_ACTION_ITEMS: tuple[str, ...] = (
    "Complete assigned tasks",
    "Prepare for next meeting",
    "Share meeting summary",
)

_WHITESPACE = re.compile(r"\s+")


class FullEnhancer:
    def enhance(self, content: str) -> Enhancement:
        collapsed = _WHITESPACE.sub(" ", content).strip()
        return Enhancement(
            enhanced_notes=f"{ENHANCED_PREFIX}{collapsed}",
            generated_summary=CANNED_SUMMARY,
            extracted_action_items=list(CANNED_ACTION_ITEMS),
        )
