import logging
import random
from typing import List, Dict, Optional
from pydantic import BaseModel, ConfigDict


logger = logging.getLogger(__name__)


# French letter frequencies (percent)
LETTER_FREQUENCIES: Dict[str, float] = {
    "A": 8.15, "B": 0.97, "C": 3.15, "D": 3.73, "E": 17.39, "F": 1.12,
    "G": 0.97, "H": 0.85, "I": 7.31, "J": 0.45, "K": 0.02, "L": 5.69,
    "M": 2.87, "N": 7.12, "O": 5.28, "P": 2.80, "Q": 1.21, "R": 6.64,
    "S": 8.14, "T": 7.22, "U": 6.38, "V": 1.64, "W": 0.03, "X": 0.41,
    "Y": 0.28, "Z": 0.15,
}

VOWELS: List[str] = ["A", "E", "I", "O", "U", "Y"]
CONSONANTS: List[str] = [
    "B", "C", "D", "F", "G", "H", "J", "K", "L", "M",
    "N", "P", "Q", "R", "S", "T", "V", "W", "X", "Z",
]

NUMBER_POOL: List[int] = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 25, 50, 75, 100]
NUMBERS_PER_ROUND = 6

TARGET_MIN = 100
TARGET_MAX = 999


class RandomDraw(BaseModel):
    """
    Random source for both rounds.

    Letters are drawn with frequency weighting from the vowel or consonant
    pool, numbers are drawn without replacement from the 14-number pool,
    and targets are uniform in [100, 999].

    Attributes:
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    def draw_letter(self, is_vowel: bool) -> str:
        """
        Draw one letter with frequency weighting.

        A uniform value in [0, total weight) is compared against the running
        sum of weights; the first letter whose cumulative weight reaches it
        wins. The first letter of the pool is the fallback for float drift.

        Args:
            is_vowel: Draw from the vowels if True, else from the consonants

        Returns:
            The drawn letter
        """
        pool = VOWELS if is_vowel else CONSONANTS
        total_weight = sum(LETTER_FREQUENCIES[letter] for letter in pool)

        draw = self._rng.random() * total_weight
        cumulative = 0.0
        for letter in pool:
            cumulative += LETTER_FREQUENCIES[letter]
            if draw <= cumulative:
                logger.debug("Drew %s (%s)", letter, "vowel" if is_vowel else "consonant")
                return letter
        return pool[0]

    def draw_six_numbers(self) -> List[int]:
        """
        Draw six distinct numbers from the pool, keeping draw order.

        Returns:
            List of 6 numbers
        """
        available = list(NUMBER_POOL)
        numbers = []
        for _ in range(NUMBERS_PER_ROUND):
            index = self._rng.randrange(len(available))
            numbers.append(available.pop(index))
        logger.debug("Drew numbers %s", numbers)
        return numbers

    def draw_target(self) -> int:
        """Draw a target uniformly in [100, 999]."""
        return self._rng.randint(TARGET_MIN, TARGET_MAX)
