# model_store.py - JSON snapshots of trained models
#
# - markov chain transitions
# - autocompleter frequency tables (words, phrases, n-grams)
# Loading a snapshot replaces retraining from the raw corpus; it never
# merges into the state already in memory.

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from aac_autocompleter.core.autocompleter import Autocompleter
from aac_autocompleter.core.markov_chain import MarkovChain

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def save_json(path: PathLike, data: dict) -> None:
    """Write `data` atomically (temp file + rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f)
    os.replace(tmp, path)


def load_json(path: PathLike) -> Optional[dict]:
    """Parsed JSON object, or None when the file does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold a JSON object")
    return data


# Markov chain ----------------------------------------------------------------
def save_markov(chain: MarkovChain, path: PathLike) -> None:
    state = chain.save_state()
    save_json(path, state)
    logger.info("saved markov chain (%d contexts) to %s", len(state["chain"]), path)


def load_markov(chain: MarkovChain, path: PathLike) -> bool:
    """Restore `chain` from `path`. Returns False when there is no snapshot."""
    data = load_json(path)
    if data is None:
        logger.info("no markov snapshot at %s; cold start", path)
        return False
    chain.load_state(data)
    logger.info("loaded markov chain (%d contexts) from %s", len(chain.contexts()), path)
    return True


# Autocompleter ---------------------------------------------------------------
def save_autocompleter(ac: Autocompleter, path: PathLike) -> None:
    save_json(path, ac.save_state())
    logger.info("saved autocompleter tables to %s", path)


def load_autocompleter(ac: Autocompleter, path: PathLike) -> bool:
    data = load_json(path)
    if data is None:
        logger.info("no autocompleter snapshot at %s; cold start", path)
        return False
    ac.load_state(data)
    return True
