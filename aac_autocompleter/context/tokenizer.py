# aac_autocompleter/context/tokenizer.py
# whitespace tokenizer + normalized token streams used for training

from typing import Iterable, List

from .normalizer import normalize_word, split_sentences


def simple_tokenize(s: str) -> List[str]:
    """
    Return list of whitespace-delimited tokens, empty tokens dropped.
    No normalization here, see normalized_tokens().
    """
    if not s:
        return []
    return [t for t in s.split() if t]


def normalized_tokens(sentence: str,
                      min_word_length: int = 1,
                      lowercase: bool = True) -> List[str]:
    """
    Tokenize a sentence and normalize every token.
    Tokens that end up shorter than `min_word_length` (after stripping
    punctuation) are dropped, so "a" never reaches a table when the
    minimum is 2.
    """
    out = []
    for tok in simple_tokenize(sentence):
        w = normalize_word(tok, lowercase=lowercase)
        if w and len(w) >= min_word_length:
            out.append(w)
    return out


def sentence_tokens(text: str,
                    min_word_length: int = 1,
                    lowercase: bool = True) -> Iterable[List[str]]:
    """Yield one normalized token list per non-empty sentence of `text`."""
    for sentence in split_sentences(text):
        toks = normalized_tokens(sentence, min_word_length, lowercase)
        if toks:
            yield toks
