# autocompleter.py
"""
Autocompleter - completion facade.

Owns the FrequencyTrainer, the PrefixIndex and the SuggestionRanker and
exposes a small API for the service/CLI/tests:
    train(corpus), add_text(text), train_word_list(words), add_word_list(words)
    get_completions(input), get_all_suggestions(input)
    get_next_words(sequence), get_next_phrases(sequence)
    get_stats(), reset(), save_state()/load_state()

The prefix index is rebuilt wholesale after every training call; queries
are read-only.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from aac_autocompleter.context.normalizer import ends_with_space, normalize_text, normalize_word
from aac_autocompleter.context.tokenizer import simple_tokenize
from aac_autocompleter.core.errors import NotTrainedError
from aac_autocompleter.core.frequency_trainer import FrequencyTrainer, TrainerConfig
from aac_autocompleter.core.protocols import CorpusStats
from aac_autocompleter.core.suggestion import Suggestion, SuggestionKind
from aac_autocompleter.core.suggestion_ranker import DEFAULT_MAX_SUGGESTIONS, SuggestionRanker
from aac_autocompleter.core.trie import PrefixIndex

logger = logging.getLogger(__name__)


class Autocompleter:
    """Word, phrase and next-word suggestions from a trained corpus."""

    def __init__(self,
                 config: Optional[TrainerConfig] = None,
                 max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
                 min_prefix_length: int = 1):
        self.trainer = FrequencyTrainer(config)
        self.cfg = self.trainer.cfg
        self.index = PrefixIndex(min_prefix_length, ignore_case=not self.cfg.case_sensitive)
        self.ranker = SuggestionRanker(max_suggestions, self.cfg.min_word_length)

    # Training ---------------------------------------------------------------
    def train(self, corpus: str) -> None:
        self.trainer.train(corpus)
        self._reindex()

    def add_text(self, text: str) -> None:
        self.trainer.add_text(text)
        self._reindex()

    def train_word_list(self, words: Iterable[str]) -> None:
        self.trainer.train_word_list(words)
        self._reindex()

    def add_word_list(self, words: Iterable[str]) -> None:
        self.trainer.add_word_list(words)
        self._reindex()

    def reset(self) -> None:
        self.trainer.reset()
        self.index.clear()

    def _reindex(self) -> None:
        items = [Suggestion.word(w, c) for w, c in self.trainer.word_frequency.items()]
        items.extend(Suggestion.phrase(p, c) for p, c in self.trainer.phrase_frequency.items())
        self.index.index(items)

    def is_ready(self) -> bool:
        return self.trainer.is_ready()

    def _require_trained(self) -> None:
        if not self.trainer.is_ready():
            raise NotTrainedError("autocompleter")

    # Queries ----------------------------------------------------------------
    def _normalize_query(self, text) -> str:
        if not isinstance(text, str):
            return ""
        return normalize_text(text, lowercase=not self.cfg.case_sensitive)

    def _split_query(self, text: str) -> Tuple[List[str], str]:
        """
        (complete words, partial last word). The partial word is not length
        filtered, a single typed letter still has to complete.
        """
        raw = simple_tokenize(text)
        if not raw:
            return [], ""
        if ends_with_space(text):
            return self.trainer.tokens(text), ""
        partial = normalize_word(raw[-1], lowercase=not self.cfg.case_sensitive)
        return self.trainer.tokens(" ".join(raw[:-1])), partial

    def _search(self, prefix: str, kind: SuggestionKind) -> List[Suggestion]:
        return [s for s in self.index.search(prefix) if s.kind is kind]

    def get_completions(self, input: str) -> List[str]:
        """Known words starting with `input`, best first."""
        self._require_trained()
        q = self._normalize_query(input)
        if not q:
            return []
        return SuggestionRanker.texts(self.ranker.rank(self._search(q, SuggestionKind.WORD)))

    def get_all_suggestions(self, input: str, limit: Optional[int] = None) -> List[Suggestion]:
        """
        Word and phrase prefix matches merged into one ranked list.
        Words complete the last partial token; phrases are matched against
        the whole normalized input ("i want pi" -> "want pizza ...").
        """
        self._require_trained()
        if not isinstance(input, str) or not input.strip():
            return []
        lowered = input.lower() if not self.cfg.case_sensitive else input
        complete, partial = self._split_query(lowered)

        words: List[Suggestion] = []
        if partial:
            words = self._search(partial, SuggestionKind.WORD)

        if partial:
            phrase_prefix = " ".join(complete + [partial])
        elif complete:
            phrase_prefix = " ".join(complete) + " "
        else:
            phrase_prefix = ""
        phrases = self._search(phrase_prefix, SuggestionKind.PHRASE) if phrase_prefix else []

        return self.ranker.rank(words + phrases, limit=limit)

    def _next(self, sequence: str, kind: SuggestionKind) -> List[Suggestion]:
        self._require_trained()
        if not isinstance(sequence, str) or not sequence.strip():
            return []
        hit = self.trainer.lookup_context(self.trainer.tokens(sequence))
        if hit is None:
            return []
        _, entry = hit
        table = entry.next_words if kind is SuggestionKind.WORD else entry.next_phrases
        return self.ranker.rank(Suggestion(t, c, kind) for t, c in table.items())

    def get_next_words(self, sequence: str) -> List[str]:
        """Most likely words after `sequence` (longest known trailing context)."""
        return SuggestionRanker.texts(self._next(sequence, SuggestionKind.WORD))

    def get_next_phrases(self, sequence: str) -> List[str]:
        return SuggestionRanker.texts(self._next(sequence, SuggestionKind.PHRASE))

    def get_stats(self) -> CorpusStats:
        return self.trainer.stats()

    # Persistence ------------------------------------------------------------
    def save_state(self) -> dict:
        return self.trainer.save_state()

    def load_state(self, data: dict) -> None:
        self.trainer.load_state(data)
        self._reindex()
        logger.info("autocompleter restored with %d index entries", len(self.index))
