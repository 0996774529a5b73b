# aac_autocompleter/cli - rich console front end for trying the engine
from .cli import CLI, main

__all__ = ["CLI", "main"]
