# aac_autocompleter/core/errors.py
# error taxonomy for the completion engine


class AutocompleteError(Exception):
    """Base class for every error raised by the engine."""


class NotTrainedError(AutocompleteError):
    """Raised when a model is queried before training/initialization finished."""

    def __init__(self, what: str = "model") -> None:
        super().__init__(f"{what} must be trained before use")
        self.what = what


class InvalidCorpusError(AutocompleteError, ValueError):
    """Raised when train()/add_text() receive an empty or non-text corpus."""


class InvalidInputError(AutocompleteError, TypeError):
    """
    Raised for non-string query input.
    The query path maps it to an empty suggestion list.
    """
