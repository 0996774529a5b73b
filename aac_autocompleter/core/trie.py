# trie.py
# Prefix index (trie) over known words and phrases.
# Every rebuild produces a fresh immutable snapshot which is swapped in by
# reference, so readers never observe a half-built tree.

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from aac_autocompleter.core.errors import InvalidInputError
from aac_autocompleter.core.suggestion import Suggestion

logger = logging.getLogger(__name__)


class TrieNode:
    """
    A single node in the trie.
    children: char -> TrieNode
    key: the indexed key ending at this node, None for inner nodes
    """

    __slots__ = ("children", "key")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = defaultdict(TrieNode)
        self.key: Optional[str] = None


class _Snapshot:
    """Root node plus key -> entry map. Never mutated once built."""

    __slots__ = ("root", "entries")

    def __init__(self, entries: Dict[str, Suggestion]) -> None:
        self.entries = entries
        self.root = TrieNode()
        for key in entries:
            node = self.root
            for ch in key:
                node = node.children[ch]
            node.key = key


class PrefixIndex:
    """
    Candidate lookup by character prefix, used by the Autocompleter for:
     - word completions
     - phrase completions
    No ranking happens here; search() returns candidates and the
    SuggestionRanker orders them.
    """

    def __init__(self, min_prefix_length: int = 1, ignore_case: bool = True) -> None:
        self.min_prefix_length = max(1, int(min_prefix_length))
        self.ignore_case = ignore_case
        self._snap = _Snapshot({})

    def _key(self, text: str) -> str:
        return text.lower() if self.ignore_case else text

    def _merged(self, base: Dict[str, Suggestion], items: Iterable[Suggestion]) -> Dict[str, Suggestion]:
        entries = dict(base)
        for item in items:
            if not item.text:
                continue
            # latest frequency wins, duplicates never accumulate
            entries[self._key(item.text)] = item
        return entries

    # building ------------------------------------------------------------
    def index(self, items: Iterable[Suggestion]) -> None:
        """Clear and rebuild from `items`."""
        self._snap = _Snapshot(self._merged({}, items))
        logger.debug("prefix index rebuilt with %d entries", len(self._snap.entries))

    def add(self, items: Iterable[Suggestion]) -> None:
        """Merge `items` into the current entries (copy-on-write)."""
        self._snap = _Snapshot(self._merged(self._snap.entries, items))

    def clear(self) -> None:
        self._snap = _Snapshot({})

    # search/traversal ----------------------------------------------------
    def search(self, prefix: str) -> List[Suggestion]:
        """
        Return every entry whose text starts with `prefix`.
        Prefixes shorter than min_prefix_length return [].
        """
        if prefix is not None and not isinstance(prefix, str):
            raise InvalidInputError(f"prefix must be a string, got {type(prefix).__name__}")
        if not prefix or len(prefix) < self.min_prefix_length:
            return []

        snap = self._snap  # one snapshot for the whole walk
        node = snap.root
        for ch in self._key(prefix):
            nxt = node.children.get(ch)
            if nxt is None:
                return []
            node = nxt

        out: List[Suggestion] = []
        self._collect(node, snap.entries, out)
        return out

    def _collect(self, node: TrieNode, entries: Dict[str, Suggestion], results: List[Suggestion]) -> None:
        """DFS collecting entries under a prefix node."""
        stack = [node]
        while stack:
            cur = stack.pop()
            if cur.key is not None:
                results.append(entries[cur.key])
            stack.extend(cur.children.values())

    # convenience ----------------------------------------------------------
    def get(self, text: str) -> Optional[Suggestion]:
        return self._snap.entries.get(self._key(text))

    def entries(self) -> List[Suggestion]:
        return list(self._snap.entries.values())

    def __len__(self) -> int:
        return len(self._snap.entries)

    def __contains__(self, text: str) -> bool:
        return self._key(text) in self._snap.entries
