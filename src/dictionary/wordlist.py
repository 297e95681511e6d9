"""In-memory dictionary backed by a fixed set of words."""

from typing import Iterable, Optional, Set

from .base import DictionaryLookup
from .models import DictionaryResult


# Small demo list used when no words are given
DEFAULT_WORDS = {
    'AIME', 'AMI', 'ARBRE', 'BATEAU', 'CHAISE', 'CHAT', 'CHIEN', 'DIRE',
    'EAU', 'ECOLE', 'FLEUR', 'JARDIN', 'LIRE', 'LIVRE', 'MAISON', 'MAIS',
    'MER', 'MOT', 'NUIT', 'OISEAU', 'PAIN', 'PORTE', 'RIRE', 'ROUTE',
    'SAISON', 'SOLEIL', 'TABLE', 'TERRE', 'TRAIN', 'VILLE',
}


class WordListDictionary(DictionaryLookup):
    """Case-insensitive lookups against an in-memory word set."""

    def __init__(self, words: Optional[Iterable[str]] = None):
        self._words: Set[str] = {w.upper() for w in (words if words is not None else DEFAULT_WORDS)}

    def __contains__(self, word: str) -> bool:
        return bool(word) and word.upper() in self._words

    def check_word(self, word: str) -> DictionaryResult:
        return DictionaryResult(word=word.upper(), exists=word in self)
