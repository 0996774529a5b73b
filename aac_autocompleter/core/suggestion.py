# aac_autocompleter/core/suggestion.py
# the one record type shared by the prefix index, the ranker and the facade

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class SuggestionKind(str, Enum):
    WORD = "word"
    PHRASE = "phrase"


@dataclass(frozen=True)
class Suggestion:
    """
    A single candidate.
    text: the completion as shown to the user
    frequency: corpus count (or synthetic count for word lists)
    kind: word or phrase
    """

    text: str
    frequency: float
    kind: SuggestionKind = SuggestionKind.WORD

    @classmethod
    def word(cls, text: str, frequency: float) -> "Suggestion":
        return cls(text, frequency, SuggestionKind.WORD)

    @classmethod
    def phrase(cls, text: str, frequency: float) -> "Suggestion":
        return cls(text, frequency, SuggestionKind.PHRASE)

    def with_frequency(self, frequency: float) -> "Suggestion":
        return Suggestion(self.text, frequency, self.kind)

    def sort_key(self) -> Tuple[float, int, str]:
        # frequency desc, shorter first, then lexicographic for determinism
        return (-self.frequency, len(self.text), self.text)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "frequency": self.frequency, "type": self.kind.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Suggestion":
        return cls(
            str(data["text"]),
            data.get("frequency", 0),
            SuggestionKind(data.get("type", SuggestionKind.WORD.value)),
        )
