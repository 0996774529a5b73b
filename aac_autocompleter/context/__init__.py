# aac_autocompleter/context/__init__.py
# text normalization and tokenization helpers

from .normalizer import (
    normalize_text,
    normalize_word,
    normalize_phrase,
    split_sentences,
    ends_with_space,
)
from .tokenizer import simple_tokenize, normalized_tokens, sentence_tokens

__all__ = [
    "normalize_text",
    "normalize_word",
    "normalize_phrase",
    "split_sentences",
    "ends_with_space",
    "simple_tokenize",
    "normalized_tokens",
    "sentence_tokens",
]
