"""
aac_autocompleter.core

The prediction engine:
 - corpus loading (CorpusLoader)
 - word/phrase/n-gram frequency tables (FrequencyTrainer)
 - prefix index over words and phrases (PrefixIndex)
 - incremental context predictor (MarkovChain)
 - candidate ranking (SuggestionRanker)
 - the completion facade tying them together (Autocompleter)
"""

from .errors import AutocompleteError, NotTrainedError, InvalidCorpusError, InvalidInputError
from .suggestion import Suggestion, SuggestionKind
from .frequency_trainer import FrequencyTrainer, TrainerConfig, NGramEntry
from .trie import PrefixIndex
from .markov_chain import MarkovChain, MarkovConfig
from .suggestion_ranker import SuggestionRanker
from .autocompleter import Autocompleter
from .corpus_loader import CorpusLoader, read_file

__all__ = [
    "AutocompleteError",
    "NotTrainedError",
    "InvalidCorpusError",
    "InvalidInputError",
    "Suggestion",
    "SuggestionKind",
    "FrequencyTrainer",
    "TrainerConfig",
    "NGramEntry",
    "PrefixIndex",
    "MarkovChain",
    "MarkovConfig",
    "SuggestionRanker",
    "Autocompleter",
    "CorpusLoader",
    "read_file",
]
