# aac_autocompleter/core/suggestion_ranker.py
"""
SuggestionRanker - merges, dedupes, orders and truncates candidates.

One rule for every suggestion-returning path:
 - frequency descending
 - text length ascending (shorter completions first at equal frequency)
 - text ascending, so equal (frequency, length) pairs come out in a
   deterministic order for tests

Candidates from different models (word index, phrase index, n-gram table)
all arrive as Suggestion records, so merging heterogeneous sources is
one loop over one type.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from aac_autocompleter.core.suggestion import Suggestion

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUGGESTIONS = 10


class SuggestionRanker:
    """
    max_suggestions: default truncation limit
    min_word_length: candidates with shorter text are never returned
    """

    def __init__(self,
                 max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
                 min_word_length: int = 2):
        if max_suggestions < 1:
            raise ValueError("max_suggestions must be >= 1")
        self.max_suggestions = int(max_suggestions)
        self.min_word_length = max(1, int(min_word_length))

    def rank(self, candidates: Iterable[Suggestion], limit: Optional[int] = None) -> List[Suggestion]:
        """
        Dedupe by text (highest frequency wins), drop short texts,
        sort and truncate to `limit` (default max_suggestions).
        """
        best: Dict[str, Suggestion] = {}
        for cand in candidates:
            if len(cand.text) < self.min_word_length:
                continue
            cur = best.get(cand.text)
            if cur is None or cand.frequency > cur.frequency:
                best[cand.text] = cand

        ranked = sorted(best.values(), key=Suggestion.sort_key)
        n = self.max_suggestions if limit is None else max(0, int(limit))
        return ranked[:n]

    def merge(self,
              *sources: Iterable[Suggestion],
              weight_by_source: bool = False,
              limit: Optional[int] = None) -> List[Suggestion]:
        """
        Merge several candidate lists. Frequencies of the same text are summed;
        with weight_by_source the k-th source counts 1/(k+1).
        The kind of the first occurrence is kept.
        """
        merged: Dict[str, Suggestion] = {}
        for idx, source in enumerate(sources):
            weight = 1.0 / (idx + 1) if weight_by_source else 1.0
            for cand in source:
                add = cand.frequency * weight
                cur = merged.get(cand.text)
                merged[cand.text] = cand.with_frequency(add) if cur is None \
                    else cur.with_frequency(cur.frequency + add)
        logger.debug("merged %d sources into %d candidates", len(sources), len(merged))
        return self.rank(merged.values(), limit=limit)

    @staticmethod
    def texts(ranked: Iterable[Suggestion]) -> List[str]:
        return [s.text for s in ranked]
