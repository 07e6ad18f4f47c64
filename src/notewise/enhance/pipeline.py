"""Note enhancement pipeline.

``enhance`` is a pure function of the request and the stored meeting fields: it
resolves the text to work on, picks the enhancer for the requested mode and
returns the result. Merging the result back into the record is left to the
caller.
"""

from __future__ import annotations

from typing import Mapping

from notewise.enhance.action_items import ActionExtractor
from notewise.enhance.base import EnhanceType, EnhancementRequest, EnhancementResult, TextEnhancer
from notewise.enhance.full import FullEnhancer
from notewise.enhance.grammar import GrammarFixer
from notewise.enhance.summary import Summarizer
from notewise.errors import EmptyContentError, UnsupportedModeError
from notewise.storage.models import MeetingRecord

CONTENT_SEPARATOR = "\n\n"


def default_enhancers() -> dict[EnhanceType, TextEnhancer]:
    return {
        EnhanceType.GRAMMAR: GrammarFixer(),
        EnhanceType.SUMMARY: Summarizer(),
        EnhanceType.ACTION_ITEMS: ActionExtractor(),
        EnhanceType.FULL_ENHANCEMENT: FullEnhancer(),
    }


DEFAULT_ENHANCERS: Mapping[EnhanceType, TextEnhancer] = default_enhancers()


def resolve_content(request: EnhancementRequest, meeting: MeetingRecord) -> str:
    """Combine override or stored transcript with override or stored notes."""

    transcript = request.transcribed_text or meeting.transcribed_text or ""
    notes = request.user_notes or meeting.general_notes or ""
    return CONTENT_SEPARATOR.join(part for part in (transcript, notes) if part)


def enhance(
    request: EnhancementRequest,
    meeting: MeetingRecord,
    *,
    enhancers: Mapping[EnhanceType, TextEnhancer] | None = None,
) -> EnhancementResult:
    enhance_type = EnhanceType.parse(request.enhance_type)
    content = resolve_content(request, meeting)
    if not content.strip():
        raise EmptyContentError()

    table = DEFAULT_ENHANCERS if enhancers is None else enhancers
    if enhance_type not in table:
        raise UnsupportedModeError(enhance_type.value, [mode.value for mode in table])
    outcome = table[enhance_type].enhance(content)

    return EnhancementResult(
        meeting_id=request.meeting_id,
        enhanced_notes=outcome.enhanced_notes,
        generated_summary=outcome.generated_summary,
        extracted_action_items=list(outcome.extracted_action_items),
    )
