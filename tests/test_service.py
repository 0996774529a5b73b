# tests/test_service.py
import asyncio
from unittest.mock import AsyncMock

import pytest

from aac_autocompleter.core.corpus_loader import CorpusLoader
from aac_autocompleter.service import SuggestionService
from aac_autocompleter.utils.config_manager import Config

CORPUS = (
    "I want to go home\n"
    '"I want to eat pizza"\n'
    "I want water\n"
    "\n"
    "Can you help me\n"
    "Thank you very much\n"
)
WORDS = "the,1000\nof,900\nand,800\nwant,700\n"


class CountingFetch:
    def __init__(self):
        self.calls = []

    async def __call__(self, source):
        self.calls.append(source)
        await asyncio.sleep(0)
        return {"corpus.csv": CORPUS.encode("utf-8"), "ngsl.csv": WORDS}[source]


@pytest.fixture
def fetch():
    return CountingFetch()


@pytest.fixture
def service(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))
    asyncio.run(svc.initialize())
    return svc


def test_initialize_is_single_flight(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))

    async def run():
        await asyncio.gather(*(svc.initialize() for _ in range(5)))
        await svc.initialize()

    asyncio.run(run())
    assert sorted(fetch.calls) == ["corpus.csv", "ngsl.csv"]
    assert svc.is_ready()


def test_completion(service):
    assert service.suggest("wa") == ["want", "water"]
    assert service.suggest("to e") == ["eat", "to eat", "to eat pizza"]


def test_next_word(service):
    assert service.suggest("I want ") == ["to", "water"]
    assert service.suggest("I want ", limit=1) == ["to"]
    assert service.suggest("I want ", limit=0) == []
    assert service.suggest("wa", limit=0) == []


def test_history_primes_short_context(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch), config=Config(markov_order=2))
    asyncio.run(svc.initialize())
    assert svc.suggest("you ") == ["help", "very"]
    assert svc.suggest("you ", ["Can!"]) == ["help"]
    # only the last sentence counts towards the context
    assert svc.suggest("Ok. you ", ["Can!"]) == ["help"]
    # "i" is too short to be a context word
    assert svc.suggest("I you ", ["Can!"]) == ["help"]
    assert svc.suggest("can you ", ["Thank."]) == ["help"]


@pytest.mark.parametrize("text", ["", None, "a", "  w  ", 42])
def test_short_or_invalid_input(service, text):
    assert service.suggest(text) == []


def test_untrained_service_returns_empty(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))
    assert not svc.is_ready()
    assert svc.suggest("wa") == []
    assert svc.suggest("I want ") == []


def test_reset_models_returns_empty(service):
    service.autocompleter.reset()
    service.markov.reset()
    assert service.suggest("wa") == []


def test_get_suggestions_initializes(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))
    assert asyncio.run(svc.get_suggestions("wa")) == ["want", "water"]
    assert svc.is_ready()


def test_missing_data_degrades():
    async def broken(source):
        raise FileNotFoundError(source)

    svc = SuggestionService(loader=CorpusLoader(fetch=broken))
    asyncio.run(svc.initialize())
    assert svc.is_ready()
    assert svc.suggest("wa") == []
    assert svc.get_stats() == {"initialized": True, "item_count": 0}


def test_word_list_only():
    async def fetch(source):
        if source == "ngsl.csv":
            return WORDS
        raise FileNotFoundError(source)

    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))
    asyncio.run(svc.initialize())
    assert svc.suggest("th") == ["the"]


def test_crashed_initialization_can_retry():
    loader = CorpusLoader()
    loader.load_phrase_corpus = AsyncMock(side_effect=[RuntimeError("boom"), ["hello world"]])
    loader.load_word_list = AsyncMock(return_value=[])
    svc = SuggestionService(loader=loader)

    with pytest.raises(RuntimeError):
        asyncio.run(svc.initialize())
    assert not svc.is_ready()
    assert asyncio.run(svc.get_suggestions("wo")) == ["world"]
    assert loader.load_phrase_corpus.await_count == 2


def test_get_suggestions_swallows_init_failure():
    loader = CorpusLoader()
    loader.load_phrase_corpus = AsyncMock(side_effect=RuntimeError("boom"))
    loader.load_word_list = AsyncMock(return_value=[])
    svc = SuggestionService(loader=loader)
    assert asyncio.run(svc.get_suggestions("wa")) == []


def test_user_corpus_and_reload(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch), user_corpus="My dog Rex barks")
    asyncio.run(svc.initialize())
    assert svc.suggest("Re") == ["rex", "rex barks"]

    asyncio.run(svc.reload(user_corpus="My cat Tom sleeps"))
    assert svc.suggest("Re") == []
    assert svc.suggest("To") == ["to", "tom", "to go", "to eat", "to go home", "tom sleeps", "to eat pizza"]
    # markov is rebuilt, not double counted
    assert svc.markov.transitions(())["want"] == 3


def test_stats(service):
    stats = service.get_stats()
    assert stats["initialized"] is True
    assert stats["item_count"] == len(service.autocompleter.index) > 0


def test_unusable_word_list_keeps_corpus():
    calls = []

    async def fetch(source):
        calls.append(source)
        return {"corpus.csv": CORPUS, "ngsl.csv": "--\n''\n"}[source]

    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))
    assert asyncio.run(svc.get_suggestions("wa")) == ["want", "water"]
    assert asyncio.run(svc.get_suggestions("wa")) == ["want", "water"]
    assert svc.is_ready()
    assert sorted(calls) == ["corpus.csv", "ngsl.csv"]


def test_word_list_without_usable_words_is_skipped(fetch):
    svc = SuggestionService(loader=CorpusLoader(fetch=fetch))
    svc.loader.load_word_list = AsyncMock(return_value=["--", "!!"])
    asyncio.run(svc.initialize())
    assert svc.is_ready()
    assert svc.suggest("wa") == ["want", "water"]
