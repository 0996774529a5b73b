# markov_chain.py
# order-N Markov language model for next-word prediction and word completion.

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from aac_autocompleter.context.normalizer import ends_with_space, normalize_word
from aac_autocompleter.context.tokenizer import sentence_tokens, simple_tokenize
from aac_autocompleter.core.errors import InvalidCorpusError, NotTrainedError

logger = logging.getLogger(__name__)

Word = str
Context = Tuple[Word, ...]

# unconditional word frequency lives under the empty context
EMPTY: Context = ()

_last_sentence_re = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class MarkovConfig:
    """
    order: number of preceding words used as context (fixed for the chain's lifetime)
    min_word_length: shorter normalized tokens are ignored while training
    topn: default suggestion count
    """
    order: int = 1
    min_word_length: int = 1
    lowercase: bool = True
    topn: int = 5


@dataclass
class MarkovNode:
    transitions: Counter = field(default_factory=Counter)
    total: int = 0

    def add(self, word: Word, n: int = 1) -> None:
        self.transitions[word] += n
        self.total += n


def _rank_key(item: Tuple[Word, float]) -> Tuple[float, int, Word]:
    w, score = item
    return (-score, len(w), w)


class MarkovChain:
    """
    Incrementally trained Markov chain.

    Contexts of every length 1..order are stored, plus the empty context
    which counts every token and serves as the global fallback.

    Built explicitly and handed to whoever needs prediction; there is no
    shared module-level instance.
    """

    def __init__(self, config: Optional[MarkovConfig] = None) -> None:
        self.cfg = config or MarkovConfig()
        if self.cfg.order < 1:
            raise ValueError("order must be >= 1")
        self._chain: Dict[Context, MarkovNode] = {}

    @property
    def order(self) -> int:
        return self.cfg.order

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def add_text(self, text: str) -> None:
        """
        Fold the sentences of `text` into the transition tables.
        Additive: adding the same text twice doubles its counts.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidCorpusError("text must be a non-empty string")
        for toks in sentence_tokens(text, self.cfg.min_word_length, self.cfg.lowercase):
            self._add_tokens(toks)

    def add_lines(self, lines: Iterable[str]) -> int:
        """Fold many records, skipping blank ones. Returns how many were used."""
        used = 0
        for line in lines:
            if isinstance(line, str) and line.strip():
                self.add_text(line)
                used += 1
        logger.debug("markov chain: folded %d lines, %d contexts", used, len(self._chain))
        return used

    def _node(self, key: Context) -> MarkovNode:
        node = self._chain.get(key)
        if node is None:
            node = self._chain[key] = MarkovNode()
        return node

    def _add_tokens(self, toks: List[Word]) -> None:
        root = self._node(EMPTY)
        for w in toks:
            root.add(w)

        for i in range(len(toks) - 1):
            nxt = toks[i + 1]
            for n in range(1, min(self.cfg.order, i + 1) + 1):
                self._node(tuple(toks[i - n + 1:i + 1])).add(nxt)

    def reset(self) -> None:
        self._chain = {}

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def is_ready(self) -> bool:
        return bool(self._chain)

    def get_suggestions(self, prefix: str, count: Optional[int] = None) -> List[Word]:
        """
        Next word when `prefix` ends in whitespace, otherwise completions of
        its last (partial) word.
        """
        if not self.is_ready():
            raise NotTrainedError("markov chain")
        if not isinstance(prefix, str) or not prefix:
            return []
        n = self.cfg.topn if count is None else count
        if n <= 0:
            return []

        text = prefix.lower() if self.cfg.lowercase else prefix
        raw = simple_tokenize(self.last_sentence(text))

        if ends_with_space(text):
            key = tuple(self._context_words(raw)[-self.cfg.order:])
            return self._next_words(key, n)

        if not raw:
            return []
        last = normalize_word(raw[-1], self.cfg.lowercase)
        if not last:
            return []

        previous = tuple(self._context_words(raw[:-1])[-self.cfg.order:])
        if previous:
            node = self._chain.get(previous)
            if node is not None:
                hits = self._rank(node, n, lambda w: w.startswith(last))
                if hits:
                    return hits
        return self._prefix_matches(last, n)

    def most_common(self, count: Optional[int] = None) -> List[Word]:
        """Unconditional ranking (the empty context)."""
        if not self.is_ready():
            raise NotTrainedError("markov chain")
        return self._next_words(EMPTY, self.cfg.topn if count is None else count)

    @staticmethod
    def last_sentence(text: str) -> str:
        """Trailing sentence of `text`; context never crosses a sentence boundary."""
        return _last_sentence_re.split(text)[-1]

    def context_tokens(self, text: str) -> List[Word]:
        """Normalized words of the last sentence, as used to build a lookup key."""
        if not isinstance(text, str):
            return []
        return self._context_words(simple_tokenize(self.last_sentence(text)))

    def _context_words(self, raw: List[str]) -> List[Word]:
        out = []
        for tok in raw:
            w = normalize_word(tok, self.cfg.lowercase)
            if w and len(w) >= self.cfg.min_word_length:
                out.append(w)
        return out

    def _next_words(self, key: Context, n: int) -> List[Word]:
        node = self._chain.get(key)
        if node is None:
            node = self._chain.get(EMPTY)
            if node is None:
                return []
        return self._rank(node, n)

    @staticmethod
    def _rank(node: MarkovNode, n: int,
              keep: Optional[Callable[[Word], bool]] = None) -> List[Word]:
        if node.total <= 0:
            return []
        scored = [
            (w, c / node.total)
            for w, c in node.transitions.items()
            if keep is None or keep(w)
        ]
        scored.sort(key=_rank_key)
        return [w for w, _ in scored[:n]]

    def _prefix_matches(self, prefix: Word, n: int) -> List[Word]:
        """Aggregate counts for words starting with `prefix` across every context."""
        if not prefix:
            return []
        matches: Counter = Counter()
        for node in self._chain.values():
            for w, c in node.transitions.items():
                if w.startswith(prefix):
                    matches[w] += c
        ranked = sorted(matches.items(), key=_rank_key)
        return [w for w, _ in ranked[:n]]

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def vocabulary_size(self) -> int:
        root = self._chain.get(EMPTY)
        return len(root.transitions) if root else 0

    def contexts(self) -> List[Context]:
        return list(self._chain.keys())

    def transitions(self, context: Context) -> Dict[Word, int]:
        node = self._chain.get(tuple(context))
        return dict(node.transitions) if node else {}

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save_state(self) -> dict:
        return {
            "chain": {" ".join(k): dict(v.transitions) for k, v in self._chain.items()},
            "config": asdict(self.cfg),
        }

    def load_state(self, data: dict) -> None:
        order = data.get("config", {}).get("order", self.cfg.order)
        if order != self.cfg.order:
            raise ValueError(f"state has order {order}, chain has order {self.cfg.order}")
        chain: Dict[Context, MarkovNode] = {}
        try:
            for k, trans in data.get("chain", {}).items():
                counts = Counter({w: int(c) for w, c in trans.items()})
                chain[tuple(k.split())] = MarkovNode(counts, sum(counts.values()))
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidCorpusError(f"malformed markov state: {e}") from e
        self._chain = chain
