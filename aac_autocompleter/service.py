# aac_autocompleter/service.py
"""
SuggestionService - what the editor/keyboard calls on every (debounced) keystroke.

 - initialize(): one corpus load + training pass, shared by concurrent callers
 - suggest(): synchronous serving path, never raises for bad input or an
   untrained engine, returns [] instead
 - get_suggestions(): awaits initialization, then suggest()

Models are injected (or built from Config) and owned by the service; nothing
here is module-global.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import List, Optional, Sequence

from aac_autocompleter.context.normalizer import ends_with_space
from aac_autocompleter.core.autocompleter import Autocompleter
from aac_autocompleter.core.corpus_loader import CorpusLoader
from aac_autocompleter.core.errors import InvalidCorpusError, InvalidInputError, NotTrainedError
from aac_autocompleter.core.markov_chain import MarkovChain
from aac_autocompleter.core.protocols import ServiceStats
from aac_autocompleter.utils.config_manager import Config
from aac_autocompleter.utils.logger_utils import Log

logger = logging.getLogger(__name__)

_trailing_punct_re = re.compile(r"[.!?\s]+$")


class SuggestionService:
    def __init__(self,
                 loader: Optional[CorpusLoader] = None,
                 autocompleter: Optional[Autocompleter] = None,
                 markov: Optional[MarkovChain] = None,
                 config: Optional[Config] = None,
                 user_corpus: str = ""):
        self.config = config or Config()
        self.loader = loader or CorpusLoader(min_word_length=int(self.config.get("min_word_length", 2)))
        self.autocompleter = autocompleter or Autocompleter(
            self.config.trainer_config(), max_suggestions=self.config.max_suggestions
        )
        self.markov = markov if markov is not None else MarkovChain(self.config.markov_config())
        self.user_corpus = user_corpus or ""

        self._initialized = False
        self._init_task: Optional[asyncio.Future] = None

    # Initialization -------------------------------------------------------
    async def initialize(self) -> None:
        """
        Load corpora and train once. Concurrent callers await the same task;
        if that task crashes the memo is dropped so a later call retries.
        """
        if self._initialized:
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._load_data())
        task = self._init_task
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            raise
        except Exception:
            if self._init_task is task:
                self._init_task = None
            raise

    async def reload(self, user_corpus: Optional[str] = None) -> None:
        """Retrain from scratch, e.g. after the corpus or user corpus changed."""
        if user_corpus is not None:
            self.user_corpus = user_corpus
        if self._init_task is not None and not self._init_task.done():
            await asyncio.shield(self._init_task)
        self._initialized = False
        self._init_task = None
        await self.initialize()

    async def _load_data(self) -> None:
        with Log.time_block("service.initialize"):
            phrases, words = await asyncio.gather(
                self.loader.load_phrase_corpus(self.config.phrase_corpus),
                self.loader.load_word_list(self.config.word_list),
            )
            self._train(phrases, words)
        self._initialized = True
        logger.info(
            "suggestion service initialized: %d records, %d list words, %d index entries",
            len(phrases), len(words), len(self.autocompleter.index),
        )

    def _train(self, phrases: Sequence[str], words: Sequence[str]) -> None:
        records = list(phrases)
        if self.user_corpus.strip():
            records.append(self.user_corpus)

        # every record ends its own sentence
        corpus = ".\n".join(records)
        ac = self.autocompleter
        if corpus.strip():
            ac.train(corpus)
        else:
            ac.reset()
        if words:
            try:
                ac.add_word_list(words)
            except InvalidCorpusError as e:
                logger.warning("word list skipped: %s", e)

        # full retrain: the chain is rebuilt, never double counted
        self.markov.reset()
        self.markov.add_lines(records)

        if not ac.is_ready() and not self.markov.is_ready():
            logger.warning("no corpus data loaded; suggestions will be empty")

    # Serving --------------------------------------------------------------
    def is_ready(self) -> bool:
        return self._initialized

    def suggest(self,
                current_text: str,
                context_history: Optional[Sequence[str]] = None,
                limit: Optional[int] = None) -> List[str]:
        if not isinstance(current_text, str):
            return []
        if len(current_text.strip()) < self.config.min_query_length:
            return []
        n = self.config.max_suggestions if limit is None else limit
        if n <= 0:
            return []
        try:
            if ends_with_space(current_text):
                return self._next_word(self._with_history(current_text, context_history), n)
            return self._complete(current_text, n)
        except (NotTrainedError, InvalidInputError) as e:
            logger.debug("suggest(%r) -> []: %s", current_text, e)
            return []

    async def get_suggestions(self,
                              current_text: str,
                              context_history: Optional[Sequence[str]] = None,
                              limit: Optional[int] = None) -> List[str]:
        try:
            await self.initialize()
        except Exception:
            logger.exception("suggestion service failed to initialize")
            return []
        return self.suggest(current_text, context_history, limit)

    def _with_history(self, text: str, history: Optional[Sequence[str]]) -> str:
        """
        Prefix the last history message when the current sentence has fewer
        usable words than the markov order. Trailing sentence punctuation is
        dropped so the message reads as preceding context.
        """
        if not history:
            return text
        last = history[-1]
        if not isinstance(last, str) or not last.strip():
            return text
        if len(self.markov.context_tokens(text)) >= self.markov.order:
            return text
        return _trailing_punct_re.sub("", last) + " " + self.markov.last_sentence(text).lstrip()

    def _next_word(self, text: str, n: int) -> List[str]:
        if self.markov.is_ready():
            hits = self.markov.get_suggestions(text, n)
            if hits:
                return hits
        if self.autocompleter.is_ready():
            return self.autocompleter.get_next_words(text)[:n]
        raise NotTrainedError("suggestion service")

    def _complete(self, text: str, n: int) -> List[str]:
        if self.autocompleter.is_ready():
            hits = self.autocompleter.get_all_suggestions(text, limit=n)
            if hits:
                return [s.text for s in hits]
        if self.markov.is_ready():
            return self.markov.get_suggestions(text, n)
        raise NotTrainedError("suggestion service")

    def get_stats(self) -> ServiceStats:
        return {"initialized": self._initialized, "item_count": len(self.autocompleter.index)}
