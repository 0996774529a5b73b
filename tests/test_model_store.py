# tests/test_model_store.py
import json

import pytest

from aac_autocompleter.core.autocompleter import Autocompleter
from aac_autocompleter.core.markov_chain import MarkovChain, MarkovConfig
from aac_autocompleter.utils.model_store import (
    load_autocompleter,
    load_json,
    load_markov,
    save_autocompleter,
    save_json,
    save_markov,
)


def test_json_helpers(tmp_path):
    path = tmp_path / "nested" / "state.json"
    save_json(path, {"a": 1})
    assert load_json(path) == {"a": 1}
    assert not (tmp_path / "nested" / "state.json.tmp").exists()
    assert load_json(tmp_path / "missing.json") is None

    bad = tmp_path / "list.json"
    bad.write_text(json.dumps([1, 2]))
    with pytest.raises(ValueError):
        load_json(bad)


def test_markov_snapshot(tmp_path, happy_chain):
    path = tmp_path / "markov.json"
    save_markov(happy_chain, path)

    restored = MarkovChain(MarkovConfig(order=2))
    assert load_markov(restored, path) is True
    assert restored.get_suggestions("I am ", 3) == ["happy", "sad"]
    assert load_markov(MarkovChain(), tmp_path / "none.json") is False


def test_autocompleter_snapshot(tmp_path, trained_ac):
    path = tmp_path / "ac.json"
    save_autocompleter(trained_ac, path)

    restored = Autocompleter()
    assert load_autocompleter(restored, path) is True
    assert restored.get_next_words("I want") == trained_ac.get_next_words("I want")
    assert restored.get_completions("wa") == ["want", "water"]
    assert load_autocompleter(Autocompleter(), tmp_path / "none.json") is False
