"""
Letters round: tile pool, word assembly and word scoring.

The round operates on a LettersData payload owned by the session; it does
not know about timers. The session decides whether an intent is allowed
at all (countdown, expiry) before delegating here.
"""

import logging
from typing import Dict, List, Optional
from pydantic import BaseModel

from .models import LettersData, Tile, WordSummary


logger = logging.getLogger(__name__)

WORD_ACCEPTED_MESSAGE = "Mot formé avec les lettres disponibles."
WORD_TOO_LATE_MESSAGE = "Temps écoulé ! Le mot est affiché mais ne rapporte aucun point."


class WordRound(BaseModel):
    """
    Word assembly over the drawn tiles.

    Attributes:
        data: The letters payload this round mutates
        max_tiles: Number of tiles drawn per round
    """

    data: LettersData
    max_tiles: int = 10

    @property
    def tiles(self) -> List[Tile]:
        return self.data.tiles

    @property
    def word(self) -> str:
        return self.data.word_text

    @property
    def is_full(self) -> bool:
        """True once every tile of the round has been drawn."""
        return len(self.data.tiles) >= self.max_tiles

    @property
    def letter_summary(self) -> Dict[str, int]:
        """Count of each drawn letter."""
        summary: Dict[str, int] = {}
        for tile in self.data.tiles:
            summary[tile.symbol] = summary.get(tile.symbol, 0) + 1
        return dict(sorted(summary.items()))

    def add_tile(self, symbol: str) -> bool:
        """
        Add a freshly drawn letter.

        Returns:
            True if added, False if the round already has all its tiles
        """
        if self.is_full:
            return False
        self.data.tiles.append(Tile(symbol=symbol.upper()))
        return True

    def append_letter(self, tile_index: int) -> bool:
        """
        Append the letter of an unused tile to the word.

        Args:
            tile_index: Position of the tile in draw order

        Returns:
            True if appended, False if the tile is used or the round is locked

        Raises:
            ValueError: If tile_index does not name a drawn tile
        """
        if tile_index < 0 or tile_index >= len(self.data.tiles):
            raise ValueError(f"No tile at index {tile_index}")

        tile = self.data.tiles[tile_index]
        if self.data.locked or tile.used:
            return False

        tile.used = True
        self.data.word.append(tile.symbol)
        logger.debug("Word is now %s", self.word)
        return True

    def remove_last_letter(self) -> bool:
        """
        Remove the last letter of the word and free its tile.

        The freed tile is the used tile with the same letter closest to the
        end of the draw order, so with duplicate letters the later tile is
        freed first.

        Returns:
            True if a letter was removed, False if the word was empty
        """
        if self.data.locked or not self.data.word:
            return False

        last_letter = self.data.word[-1]
        for tile in reversed(self.data.tiles):
            if tile.symbol == last_letter and tile.used:
                tile.used = False
                break

        self.data.word.pop()
        return True

    def clear_word(self) -> bool:
        """Free every tile and empty the word."""
        if self.data.locked:
            return False
        for tile in self.data.tiles:
            tile.used = False
        self.data.word = []
        return True

    def submit_word(self, time_expired: bool) -> Optional[WordSummary]:
        """
        Submit the current word and lock the round.

        One point per letter, unless time had already expired, in which case
        the word is kept for display and scores nothing.

        Args:
            time_expired: Whether the letters timer had run out

        Returns:
            WordSummary, or None if the word is empty or already submitted
        """
        if not self.data.word or self.data.word_summary is not None:
            return None

        word = self.word
        points = 0 if time_expired else len(word)
        summary = WordSummary(
            word=word,
            points=points,
            message=WORD_TOO_LATE_MESSAGE if time_expired else WORD_ACCEPTED_MESSAGE,
        )
        self.data.word_summary = summary
        self.data.locked = True
        logger.info("Word %s submitted for %d point(s)", word, points)
        return summary
