from __future__ import annotations

import re

from notewise.enhance.base import Enhancement

SUMMARY_LABEL = "Summary: "

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    parts = _SENTENCE_SPLIT.split(text)
    return [item.strip() for item in parts if item.strip()]


class Summarizer:
    """Naive summary: the leading sentences of the content, in order."""

    def __init__(self, max_sentences: int = 3) -> None:
        self.max_sentences = max_sentences

    def summarize(self, text: str) -> str:
        key_points = split_sentences(text)[: self.max_sentences]
        return f"{SUMMARY_LABEL}{'. '.join(key_points)}."

    def enhance(self, content: str) -> Enhancement:
        return Enhancement(generated_summary=self.summarize(content))
