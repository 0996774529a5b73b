# aac_autocompleter/context/normalizer.py
# text normalization shared by the trainer, the markov chain and the query path

import re

_word_strip_re = re.compile(r"[^\w]")  # everything that is not a word char
_phrase_strip_re = re.compile(r"[^\w\s]")
_sentence_split_re = re.compile(r"[.!?]+")
_ws_re = re.compile(r"\s+")


def normalize_text(s: str, lowercase: bool = True) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not s:
        return ""
    s = _ws_re.sub(" ", s).strip()
    return s.lower() if lowercase else s


def normalize_word(word: str, lowercase: bool = True) -> str:
    """
    Strip punctuation from a single token.
    Returns '' when nothing word-like is left ("--", "!!").
    """
    if not word:
        return ""
    w = _word_strip_re.sub("", word)
    return w.lower() if lowercase else w


def normalize_phrase(phrase: str, lowercase: bool = True) -> str:
    # punctuation becomes a space so "peanut,butter" still yields two words
    if not phrase:
        return ""
    p = _phrase_strip_re.sub(" ", phrase)
    return normalize_text(p, lowercase=lowercase)


def split_sentences(text: str):
    """
    Split on runs of sentence-terminal punctuation (. ! ?).
    Sentences are trimmed, empty ones dropped.
    """
    if not text:
        return []
    out = []
    for chunk in _sentence_split_re.split(text):
        chunk = chunk.strip()
        if chunk:
            out.append(chunk)
    return out


def ends_with_space(s: str) -> bool:
    return bool(s) and s[-1].isspace()
