# tests/test_corpus_loader.py
import asyncio
import logging

import pytest

from aac_autocompleter.core.corpus_loader import (
    CorpusLoader,
    decode_text,
    parse_phrase_corpus,
    parse_word_list,
)
from aac_autocompleter.core.protocols import Fetcher


def test_decode_text_strips_bom_and_normalizes_newlines():
    assert decode_text(b"\xef\xbb\xbfhello\r\nworld\rbye") == "hello\nworld\nbye"
    assert decode_text("\ufeffhi\r\n") == "hi\n"


def test_decode_text_replaces_bad_bytes():
    assert "\ufffd" in decode_text(b"bad \xff byte")


def test_decode_text_rejects_other_types():
    with pytest.raises(TypeError):
        decode_text(123)


def test_parse_phrase_corpus():
    text = '"I want, to go"\n\n   hello  \n"say ""hi"""\n""'
    assert parse_phrase_corpus(text) == ["I want, to go", "hello", 'say "hi"']


def test_parse_word_list():
    text = "The,100\nof\na\n  and ,7\nthe,5\n\n"
    assert parse_word_list(text) == ["the", "of", "and"]
    assert parse_word_list(text, min_word_length=1) == ["the", "of", "a", "and"]


def test_parse_word_list_drops_punctuation_only_lines():
    assert parse_word_list("--\n''\n\"Hello!\",3\nhello\n") == ["hello"]


def test_load_from_files(tmp_path):
    corpus = tmp_path / "corpus.csv"
    corpus.write_text("I want water\n\"Help me\"\n", encoding="utf-8")
    words = tmp_path / "ngsl.csv"
    words.write_bytes(b"\xef\xbb\xbfthe\r\nof\r\n")

    loader = CorpusLoader()

    async def run():
        return await asyncio.gather(
            loader.load_phrase_corpus(str(corpus)),
            loader.load_word_list(str(words)),
        )

    phrases, wl = asyncio.run(run())
    assert phrases == ["I want water", "Help me"]
    assert wl == ["the", "of"]


def test_custom_fetcher_is_used():
    seen = []

    async def fetch(source):
        seen.append(source)
        return "hello there\nbye"

    assert isinstance(fetch, Fetcher)
    loader = CorpusLoader(fetch=fetch)
    assert asyncio.run(loader.load_phrase_corpus("mem://corpus")) == ["hello there", "bye"]
    assert seen == ["mem://corpus"]


def test_failures_degrade_to_empty(tmp_path, caplog):
    async def broken(source):
        raise ConnectionError("offline")

    loader = CorpusLoader(fetch=broken)
    with caplog.at_level(logging.WARNING, logger="aac_autocompleter"):
        assert asyncio.run(loader.load_phrase_corpus("corpus.csv")) == []
        assert asyncio.run(loader.load_word_list("ngsl.csv")) == []
    assert "offline" in caplog.text

    missing = CorpusLoader()
    assert asyncio.run(missing.load_word_list(str(tmp_path / "nope.csv"))) == []
