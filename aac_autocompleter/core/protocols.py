# aac_autocompleter/core/protocols.py
"""
Protocol interfaces and typed structures shared by the engine.

Kept small: the service and the loader depend on these rather than on
concrete collaborators, so tests can pass plain async functions and
fakes in place of the host environment.
"""

from __future__ import annotations

from typing import Awaitable, Protocol, Union, runtime_checkable
from typing_extensions import TypedDict


# Typed structures ------------------------------------------------------------

class CorpusStats(TypedDict):
    """Summary of a trained Autocompleter."""
    total_words: int
    total_phrases: int
    total_ngrams: int
    average_word_frequency: float


class ServiceStats(TypedDict):
    initialized: bool
    item_count: int


# Protocols -------------------------------------------------------------------

@runtime_checkable
class Fetcher(Protocol):
    """
    Byte retrieval supplied by the host (fetch-like).
    Given a source (path, URL, storage key) return its raw contents.
    """

    def __call__(self, source: str) -> Awaitable[Union[bytes, str]]:
        ...

