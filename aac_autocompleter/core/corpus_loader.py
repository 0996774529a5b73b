# corpus_loader.py
# reads raw corpora through a host-supplied fetcher and turns them into
# sentences (phrase corpus) or an ordered word list.

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Union

from aac_autocompleter.context.normalizer import normalize_word
from aac_autocompleter.core.protocols import Fetcher

logger = logging.getLogger(__name__)


async def read_file(source: Union[str, Path]) -> bytes:
    """Default fetcher: read a local file without blocking the event loop."""
    return await asyncio.to_thread(Path(source).read_bytes)


def decode_text(raw: Union[bytes, str]) -> str:
    """
    UTF-8 decode (BOM stripped, bad bytes replaced) and normalize newlines.
    """
    if isinstance(raw, bytes):
        text = raw.decode("utf-8-sig", errors="replace")
    elif isinstance(raw, str):
        text = raw[1:] if raw.startswith("\ufeff") else raw
    else:
        raise TypeError(f"expected bytes or str, got {type(raw).__name__}")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_phrase_corpus(text: str) -> List[str]:
    """One record per line; CSV quoting around a record is removed."""
    out = []
    for line in text.split("\n"):
        line = line.strip()
        if len(line) >= 2 and line[0] == '"' and line[-1] == '"':
            line = line[1:-1].replace('""', '"').strip()
        if line:
            out.append(line)
    return out


def parse_word_list(text: str, min_word_length: int = 2) -> List[str]:
    """
    Ordered word list, most frequent first. Only the first CSV column of
    each line is used, normalized the way the trainer normalizes words.
    Duplicates keep their first position.
    """
    out = []
    seen = set()
    for line in text.split("\n"):
        word = normalize_word(line.split(",", 1)[0].strip())
        if len(word) < min_word_length or word in seen:
            continue
        seen.add(word)
        out.append(word)
    return out


class CorpusLoader:
    """
    Fetch + parse corpora. Failures never propagate: a source that cannot
    be fetched or decoded yields [] and a warning, so the engine trains on
    whatever did load.
    """

    def __init__(self, fetch: Fetcher = read_file, min_word_length: int = 2):
        self.fetch = fetch
        self.min_word_length = min_word_length

    async def _fetch_text(self, source: str) -> str:
        raw = await self.fetch(source)
        return decode_text(raw)

    async def load_phrase_corpus(self, source: str) -> List[str]:
        try:
            text = await self._fetch_text(source)
        except Exception as e:
            logger.warning("failed to load phrase corpus %r: %s", source, e)
            return []
        lines = parse_phrase_corpus(text)
        logger.info("loaded %d corpus records from %s", len(lines), source)
        return lines

    async def load_word_list(self, source: str) -> List[str]:
        try:
            text = await self._fetch_text(source)
        except Exception as e:
            logger.warning("failed to load word list %r: %s", source, e)
            return []
        words = parse_word_list(text, self.min_word_length)
        logger.info("loaded %d words from %s", len(words), source)
        return words
