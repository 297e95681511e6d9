"""Dictionary lookup interface."""

from abc import ABC, abstractmethod

from .models import DictionaryResult


LOOKUP_ERROR_MESSAGE = "Erreur lors de la vérification du dictionnaire"


class DictionaryLookup(ABC):
    """
    A service that reports whether a word exists.

    Implementations must not raise for lookup failures (network errors,
    bad payloads); they return a DictionaryResult with `error` set instead.
    Calls may block, so callers run them off the intent loop.
    """

    @abstractmethod
    def check_word(self, word: str) -> DictionaryResult:
        """
        Look up a word.

        Args:
            word: The word to check, any case

        Returns:
            DictionaryResult for the word
        """
