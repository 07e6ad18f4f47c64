from __future__ import annotations

import re

from notewise.enhance.base import Enhancement

GRAMMAR_PREFIX = "Grammar-enhanced version: "

CORRECTIONS: dict[str, str] = {
    "teh": "the",
    "recieve": "receive",
    "seperate": "separate",
}


class GrammarFixer:
    """Replaces a fixed set of common misspellings, matched as whole words in any case."""

    def __init__(self, corrections: dict[str, str] | None = None) -> None:
        self.corrections = {key.lower(): value for key, value in (corrections or CORRECTIONS).items()}
        alternation = "|".join(re.escape(word) for word in self.corrections)
        self._pattern = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)

    def _replace(self, match: re.Match[str]) -> str:
        word = match.group(0)
        return self.corrections.get(word.lower(), word)

    def fix(self, text: str) -> str:
        return self._pattern.sub(self._replace, text)

    def enhance(self, content: str) -> Enhancement:
        return Enhancement(enhanced_notes=f"{GRAMMAR_PREFIX}{self.fix(content)}")
