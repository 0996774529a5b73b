# frequency_trainer.py
# word, phrase and bounded-order n-gram frequency tables built from a corpus.

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from aac_autocompleter.context.tokenizer import normalized_tokens, sentence_tokens
from aac_autocompleter.context.normalizer import normalize_word
from aac_autocompleter.core.errors import InvalidCorpusError, NotTrainedError
from aac_autocompleter.core.protocols import CorpusStats
from aac_autocompleter.utils.logger_utils import Log

logger = logging.getLogger(__name__)

Word = str
Context = Tuple[Word, ...]

# word lists carry no counts; rank i gets max(1, SYNTHETIC_BASE - i)
SYNTHETIC_BASE = 1000


def synthetic_frequency(index: int) -> int:
    return max(1, SYNTHETIC_BASE - index)


@dataclass(frozen=True)
class TrainerConfig:
    """
    Knobs for tokenisation and table sizes.
    max_order: longest preceding word sequence kept as an n-gram context
    min_word_length: normalized tokens shorter than this are dropped
    """
    max_order: int = 4
    min_word_length: int = 2
    case_sensitive: bool = False
    phrase_prediction: bool = True
    min_phrase_words: int = 2
    max_phrase_words: int = 3

    def __post_init__(self) -> None:
        if self.max_order < 1:
            raise ValueError("max_order must be >= 1")
        if self.min_word_length < 1:
            raise ValueError("min_word_length must be >= 1")
        if not 2 <= self.min_phrase_words <= self.max_phrase_words:
            raise ValueError("phrase bounds must satisfy 2 <= min <= max")


@dataclass
class NGramEntry:
    """Next-word and next-phrase counts local to one preceding sequence."""
    next_words: Counter = field(default_factory=Counter)
    next_phrases: Counter = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.next_words.values())


class FrequencyTrainer:
    """
    Builds three tables from sentences:
      - word frequency (normalized word -> count)
      - phrase frequency (2-3 word phrase -> count)
      - n-gram table (context tuple of 1..max_order words -> NGramEntry)

    train() is a full retrain; add_text()/add_word_list() fold more data in
    without clearing what is already there.
    """

    def __init__(self, config: Optional[TrainerConfig] = None) -> None:
        self.cfg = config or TrainerConfig()
        self._words: Counter = Counter()
        self._phrases: Counter = Counter()
        self._ngrams: Dict[Context, NGramEntry] = {}
        self._trained = False

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def train(self, corpus: str) -> None:
        """Replace all tables with the ones built from `corpus`."""
        self._check_corpus(corpus)
        self.reset()
        with Log.time_block("trainer.train"):
            n = self._fold(corpus)
        self._trained = True
        logger.info(
            "trained on %d sentences: %d words, %d phrases, %d contexts",
            n, len(self._words), len(self._phrases), len(self._ngrams),
        )

    def add_text(self, text: str) -> None:
        """Additive training: counts from `text` are added to the current tables."""
        self._check_corpus(text)
        n = self._fold(text)
        self._trained = True
        logger.debug("added %d sentences", n)

    def train_word_list(self, words: Iterable[str]) -> None:
        self.reset()
        self.add_word_list(words)

    def add_word_list(self, words: Iterable[str]) -> None:
        """
        Fold an ordered word list (earlier = more frequent) into the word table.
        Duplicates keep their first (highest) rank.
        """
        if words is None or isinstance(words, (str, bytes)):
            raise InvalidCorpusError("word list must be an iterable of words")

        ranked: List[Word] = []
        seen = set()
        for raw in words:
            if not isinstance(raw, str):
                continue
            w = normalize_word(raw.strip(), lowercase=not self.cfg.case_sensitive)
            if len(w) < self.cfg.min_word_length or w in seen:
                continue
            seen.add(w)
            ranked.append(w)

        if not ranked:
            raise InvalidCorpusError("word list contains no usable words")

        for idx, w in enumerate(ranked):
            self._words[w] += synthetic_frequency(idx)
        self._trained = True
        logger.info("loaded word list with %d entries", len(ranked))

    def reset(self) -> None:
        self._words = Counter()
        self._phrases = Counter()
        self._ngrams = {}
        self._trained = False

    def _check_corpus(self, corpus) -> None:
        if not isinstance(corpus, str) or not corpus.strip():
            raise InvalidCorpusError("corpus must be a non-empty string")

    def _fold(self, text: str) -> int:
        count = 0
        for toks in sentence_tokens(text, self.cfg.min_word_length, not self.cfg.case_sensitive):
            self._process_sentence(toks)
            count += 1
        return count

    def _process_sentence(self, toks: List[Word]) -> None:
        self._words.update(toks)

        for i in range(len(toks) - 1):
            nxt = toks[i + 1]
            phrases = self._phrases_after(toks, i) if self.cfg.phrase_prediction else []
            self._phrases.update(phrases)

            for n in range(1, min(self.cfg.max_order, i + 1) + 1):
                key = tuple(toks[i - n + 1:i + 1])
                entry = self._ngrams.get(key)
                if entry is None:
                    entry = self._ngrams[key] = NGramEntry()
                entry.next_words[nxt] += 1
                entry.next_phrases.update(phrases)

    def _phrases_after(self, toks: List[Word], i: int) -> List[str]:
        out = []
        for length in range(self.cfg.min_phrase_words, self.cfg.max_phrase_words + 1):
            end = i + 1 + length
            if end > len(toks):
                break
            out.append(" ".join(toks[i + 1:end]))
        return out

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def is_ready(self) -> bool:
        return self._trained

    def _require_trained(self) -> None:
        if not self._trained:
            raise NotTrainedError("trainer")

    @property
    def word_frequency(self) -> Dict[Word, int]:
        return dict(self._words)

    @property
    def phrase_frequency(self) -> Dict[str, int]:
        return dict(self._phrases)

    def tokens(self, text: str) -> List[Word]:
        """Normalize free text exactly the way training does."""
        return normalized_tokens(text or "", self.cfg.min_word_length, not self.cfg.case_sensitive)

    def ngram(self, sequence: Union[str, Sequence[Word]]) -> Optional[NGramEntry]:
        """Entry for an exact sequence, or None."""
        toks = self.tokens(sequence) if isinstance(sequence, str) else list(sequence)
        if not toks:
            return None
        return self._ngrams.get(tuple(toks))

    def lookup_context(self, toks: Sequence[Word]) -> Optional[Tuple[Context, NGramEntry]]:
        """
        Longest trailing context of `toks` that was seen in training,
        backing off from max_order down to a single word.
        """
        self._require_trained()
        for n in range(min(self.cfg.max_order, len(toks)), 0, -1):
            key = tuple(toks[-n:])
            entry = self._ngrams.get(key)
            if entry is not None:
                return key, entry
        return None

    def contexts(self) -> List[Context]:
        return list(self._ngrams.keys())

    def stats(self) -> CorpusStats:
        self._require_trained()
        total_words = len(self._words)
        freq_sum = sum(self._words.values())
        return {
            "total_words": total_words,
            "total_phrases": len(self._phrases),
            "total_ngrams": len(self._ngrams),
            "average_word_frequency": freq_sum / total_words if total_words else 0.0,
        }

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save_state(self) -> dict:
        return {
            "words": dict(self._words),
            "phrases": dict(self._phrases),
            "ngrams": {
                " ".join(k): {
                    "next_words": dict(e.next_words),
                    "next_phrases": dict(e.next_phrases),
                }
                for k, e in self._ngrams.items()
            },
            "trained": self._trained,
            "config": asdict(self.cfg),
        }

    def load_state(self, data: dict) -> None:
        """Restore tables produced by save_state(); the config is not replaced."""
        try:
            words = Counter(data.get("words", {}))
            phrases = Counter(data.get("phrases", {}))
            ngrams = {
                tuple(k.split()): NGramEntry(
                    Counter(v.get("next_words", {})), Counter(v.get("next_phrases", {}))
                )
                for k, v in data.get("ngrams", {}).items()
            }
        except (AttributeError, TypeError) as e:
            raise InvalidCorpusError(f"malformed trainer state: {e}") from e
        self._words, self._phrases, self._ngrams = words, phrases, ngrams
        self._trained = bool(data.get("trained", bool(words)))
