"""Dictionary lookup services for the letters round."""

from .models import DictionaryResult
from .base import DictionaryLookup, LOOKUP_ERROR_MESSAGE
from .wordlist import WordListDictionary, DEFAULT_WORDS
from .wiktionary import WiktionaryClient, WIKTIONARY_API_URL

__all__ = [
    "DictionaryResult",
    "DictionaryLookup",
    "LOOKUP_ERROR_MESSAGE",
    "WordListDictionary",
    "DEFAULT_WORDS",
    "WiktionaryClient",
    "WIKTIONARY_API_URL",
]
