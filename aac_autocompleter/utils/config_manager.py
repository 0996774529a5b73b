# config_manager.py - JSON config manager

import json
import logging
import os
from typing import Any, Dict, Optional

from aac_autocompleter.core.frequency_trainer import TrainerConfig
from aac_autocompleter.core.markov_chain import MarkovConfig

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "max_order": 4,  # longest n-gram context
    "min_word_length": 2,
    "case_sensitive": False,
    "phrase_prediction": True,
    "markov_order": 1,
    "max_suggestions": 10,
    "min_query_length": 2,
    "phrase_corpus": "corpus.csv",
    "word_list": "ngsl.csv",
}


class Config:
    """
    Defaults updated from an optional JSON file.
    Unknown keys in the file are kept but ignored by the typed views.
    """

    def __init__(self, path: Optional[str] = None, **overrides):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        if path:
            self._load()
        for k, v in overrides.items():
            self.set(k, v, persist=False)

    def _load(self):
        if not os.path.exists(self.path):
            logger.debug("config %s not found, using defaults", self.path)
            return
        with open(self.path, "r", encoding="utf8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"config {self.path} must hold a JSON object")
        self.data.update(loaded)

    def save(self):
        if not self.path:
            raise ValueError("config has no path to save to")
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self):
        for k, v in self.data.items():
            print(f"{k:18} = {v}")

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, val, persist: bool = True):
        if key not in DEFAULTS:
            raise KeyError(f"no such option: {key}")
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            val = val.strip().lower() in ("1", "true", "yes", "on")
        self.data[key] = kind(val)
        if persist and self.path:
            self.save()

    # typed views --------------------------------------------------------
    def trainer_config(self) -> TrainerConfig:
        return TrainerConfig(
            max_order=int(self.data["max_order"]),
            min_word_length=int(self.data["min_word_length"]),
            case_sensitive=bool(self.data["case_sensitive"]),
            phrase_prediction=bool(self.data["phrase_prediction"]),
        )

    def markov_config(self) -> MarkovConfig:
        return MarkovConfig(
            order=int(self.data["markov_order"]),
            min_word_length=int(self.data["min_word_length"]),
            lowercase=not bool(self.data["case_sensitive"]),
            topn=int(self.data["max_suggestions"]),
        )

    @property
    def max_suggestions(self) -> int:
        return int(self.data["max_suggestions"])

    @property
    def min_query_length(self) -> int:
        return int(self.data["min_query_length"])

    @property
    def phrase_corpus(self) -> str:
        return str(self.data["phrase_corpus"])

    @property
    def word_list(self) -> str:
        return str(self.data["word_list"])
