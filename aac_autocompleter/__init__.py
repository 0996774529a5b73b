"""
aac_autocompleter - predictive text completion for augmentative communication.

    from aac_autocompleter import Autocompleter
    ac = Autocompleter()
    ac.train("I am happy. I am sad. I am happy today.")
    ac.get_next_words("I am")   # ['happy', 'sad', ...]
"""

from .core import (
    Autocompleter,
    CorpusLoader,
    FrequencyTrainer,
    InvalidCorpusError,
    InvalidInputError,
    MarkovChain,
    MarkovConfig,
    NotTrainedError,
    PrefixIndex,
    Suggestion,
    SuggestionKind,
    SuggestionRanker,
    TrainerConfig,
)
from .service import SuggestionService

__all__ = [
    "Autocompleter",
    "CorpusLoader",
    "FrequencyTrainer",
    "InvalidCorpusError",
    "InvalidInputError",
    "MarkovChain",
    "MarkovConfig",
    "NotTrainedError",
    "PrefixIndex",
    "Suggestion",
    "SuggestionKind",
    "SuggestionRanker",
    "SuggestionService",
    "TrainerConfig",
]

__version__ = "0.1.0"
