# tests/test_trie.py
import pytest

from aac_autocompleter.core.errors import InvalidInputError
from aac_autocompleter.core.suggestion import Suggestion, SuggestionKind
from aac_autocompleter.core.trie import PrefixIndex

ITEMS = [
    Suggestion.word("water", 5),
    Suggestion.word("want", 9),
    Suggestion.word("wash", 2),
    Suggestion.phrase("want to go", 3),
    Suggestion.word("home", 4),
]


def texts(results):
    return sorted(s.text for s in results)


def test_search_returns_prefix_matches():
    idx = PrefixIndex()
    idx.index(ITEMS)
    assert texts(idx.search("wa")) == ["want", "want to go", "wash", "water"]
    assert texts(idx.search("want ")) == ["want to go"]
    assert idx.search("x") == []
    assert idx.search("") == []


def test_search_is_case_insensitive_by_default():
    idx = PrefixIndex()
    idx.index([Suggestion.word("Pizza", 1)])
    assert texts(idx.search("PIZ")) == ["Pizza"]
    assert "pizza" in idx


def test_case_sensitive_index():
    idx = PrefixIndex(ignore_case=False)
    idx.index([Suggestion.word("Pizza", 1), Suggestion.word("pie", 1)])
    assert texts(idx.search("p")) == ["pie"]
    assert texts(idx.search("P")) == ["Pizza"]


def test_min_prefix_length():
    idx = PrefixIndex(min_prefix_length=2)
    idx.index(ITEMS)
    assert idx.search("w") == []
    assert texts(idx.search("wat")) == ["water"]


def test_reindex_is_idempotent():
    idx = PrefixIndex()
    idx.index(ITEMS)
    first = texts(idx.search("w"))
    idx.index(ITEMS)
    assert texts(idx.search("w")) == first
    assert len(idx) == len(ITEMS)


def test_duplicates_keep_latest_frequency():
    idx = PrefixIndex()
    idx.index([Suggestion.word("go", 1), Suggestion.word("go", 7)])
    assert len(idx) == 1
    assert idx.get("go").frequency == 7

    idx.add([Suggestion.word("go", 3), Suggestion.word("gone", 1)])
    assert idx.get("go").frequency == 3
    assert texts(idx.search("go")) == ["go", "gone"]


def test_index_replaces_previous_entries():
    idx = PrefixIndex()
    idx.index(ITEMS)
    idx.index([Suggestion.word("hello", 1)])
    assert idx.search("wa") == []
    assert [s.text for s in idx.entries()] == ["hello"]


def test_snapshot_held_by_reader_is_unaffected_by_rebuild():
    idx = PrefixIndex()
    idx.index(ITEMS)
    snap = idx._snap
    idx.clear()
    assert len(idx) == 0
    assert len(snap.entries) == len(ITEMS)


def test_kind_is_preserved():
    idx = PrefixIndex()
    idx.index(ITEMS)
    kinds = {s.text: s.kind for s in idx.search("want")}
    assert kinds == {"want": SuggestionKind.WORD, "want to go": SuggestionKind.PHRASE}


def test_non_text_prefix_rejected():
    idx = PrefixIndex()
    idx.index(ITEMS)
    with pytest.raises(InvalidInputError):
        idx.search(12)
    assert idx.search(None) == []
