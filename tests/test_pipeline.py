from __future__ import annotations

from datetime import datetime, timezone

import pytest

from notewise.enhance.base import Enhancement, EnhanceType, EnhancementRequest
from notewise.enhance.pipeline import DEFAULT_ENHANCERS, enhance, resolve_content
from notewise.errors import EmptyContentError, UnsupportedModeError
from notewise.storage.models import MeetingRecord

NOW = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


def _meeting(transcribed_text: str | None = None, general_notes: str | None = None) -> MeetingRecord:
    return MeetingRecord(
        id=7,
        title="Weekly sync",
        date=NOW,
        created_at=NOW,
        updated_at=NOW,
        general_notes=general_notes,
        transcribed_text=transcribed_text,
    )


def test_every_mode_has_an_enhancer() -> None:
    assert set(DEFAULT_ENHANCERS) == set(EnhanceType)


def test_parse_accepts_values_and_members() -> None:
    assert EnhanceType.parse("summary") is EnhanceType.SUMMARY
    assert EnhanceType.parse(EnhanceType.GRAMMAR) is EnhanceType.GRAMMAR


def test_resolve_content_prefers_overrides() -> None:
    meeting = _meeting(transcribed_text="stored transcript", general_notes="stored notes")

    request = EnhancementRequest(7, "grammar", transcribed_text="new transcript", user_notes="new notes")
    assert resolve_content(request, meeting) == "new transcript\n\nnew notes"

    request = EnhancementRequest(7, "grammar", transcribed_text="", user_notes=None)
    assert resolve_content(request, meeting) == "stored transcript\n\nstored notes"


def test_resolve_content_omits_empty_side() -> None:
    request = EnhancementRequest(7, "grammar")
    assert resolve_content(request, _meeting(transcribed_text="only transcript")) == "only transcript"
    assert resolve_content(request, _meeting(general_notes="only notes")) == "only notes"
    assert resolve_content(request, _meeting()) == ""


@pytest.mark.parametrize("mode", EnhanceType.values())
def test_empty_content_fails_for_every_mode(mode: str) -> None:
    request = EnhancementRequest(7, mode, transcribed_text="   ", user_notes="\n")
    with pytest.raises(EmptyContentError):
        enhance(request, _meeting(general_notes=""))


@pytest.mark.parametrize("mode", EnhanceType.values())
def test_meeting_without_text_fails_for_every_mode(mode: str) -> None:
    with pytest.raises(EmptyContentError, match="No content available"):
        enhance(EnhancementRequest(7, mode), _meeting())


def test_unknown_mode_fails() -> None:
    request = EnhancementRequest(7, "translate", transcribed_text="Some text.")
    with pytest.raises(UnsupportedModeError, match="translate") as info:
        enhance(request, _meeting())
    assert info.value.mode == "translate"


def test_grammar_mode_result_shape() -> None:
    request = EnhancementRequest(7, "grammar", transcribed_text="Teh team will recieve feedback.")
    result = enhance(request, _meeting(general_notes="stored notes"))

    assert result.meeting_id == 7
    assert result.enhanced_notes is not None
    assert "the team will receive feedback." in result.enhanced_notes
    assert result.enhanced_notes.endswith("stored notes")
    assert result.generated_summary is None
    assert result.extracted_action_items == []


def test_summary_mode_uses_combined_content() -> None:
    request = EnhancementRequest(7, EnhanceType.SUMMARY, transcribed_text="A. B. C. D.")
    result = enhance(request, _meeting())

    assert result.generated_summary == "Summary: A. B. C."
    assert result.enhanced_notes is None


def test_action_items_mode() -> None:
    request = EnhancementRequest(
        7, "action_items", transcribed_text="- Prepare slides\nWe must review the budget."
    )
    result = enhance(request, _meeting())

    assert "Prepare slides" in result.extracted_action_items
    assert "review the budget" in result.extracted_action_items


def test_full_enhancement_populates_everything() -> None:
    result = enhance(EnhancementRequest(7, "full_enhancement"), _meeting(general_notes="a\n b"))

    assert result.enhanced_notes == "Enhanced notes: a b"
    assert result.generated_summary is not None
    assert len(result.extracted_action_items) == 3


def test_custom_enhancer_can_be_substituted() -> None:
    class UpperSummarizer:
        def enhance(self, content: str) -> Enhancement:
            return Enhancement(generated_summary=content.upper())

    enhancers = dict(DEFAULT_ENHANCERS)
    enhancers[EnhanceType.SUMMARY] = UpperSummarizer()
    result = enhance(
        EnhancementRequest(7, "summary", transcribed_text="quick note"),
        _meeting(),
        enhancers=enhancers,
    )

    assert result.generated_summary == "QUICK NOTE"


def test_missing_enhancer_reports_unsupported_mode() -> None:
    enhancers = {
        mode: enhancer for mode, enhancer in DEFAULT_ENHANCERS.items() if mode is not EnhanceType.GRAMMAR
    }
    request = EnhancementRequest(7, "grammar", transcribed_text="Some text.")

    with pytest.raises(UnsupportedModeError, match="grammar") as info:
        enhance(request, _meeting(), enhancers=enhancers)
    assert info.value.mode == "grammar"
