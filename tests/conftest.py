# tests/conftest.py - shared fixtures
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from aac_autocompleter.core.autocompleter import Autocompleter  # noqa: E402
from aac_autocompleter.core.markov_chain import MarkovChain, MarkovConfig  # noqa: E402

SAMPLE_CORPUS = (
    "I want to go home. I want to eat pizza. I want water please.\n"
    "Can you help me? Can you call my mom? Thank you very much!\n"
    "I need help. I need to go to the bathroom."
)

WORD_LIST = ["the", "of", "and", "to", "in", "is", "you", "that", "it", "he"]


@pytest.fixture
def sample_corpus():
    return SAMPLE_CORPUS


@pytest.fixture
def word_list():
    return list(WORD_LIST)


@pytest.fixture
def trained_ac(sample_corpus):
    ac = Autocompleter()
    ac.train(sample_corpus)
    return ac


@pytest.fixture
def happy_chain():
    chain = MarkovChain(MarkovConfig(order=2))
    chain.add_text("I am happy. I am sad. I am happy today.")
    return chain
