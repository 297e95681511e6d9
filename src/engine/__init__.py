"""Round-state engine for the letters and numbers game."""

from .models import (
    Phase,
    TimerStatus,
    Tile,
    NumberToken,
    CalculationStep,
    Operation,
    WordSummary,
    RoundSummary,
    DictionaryDisplay,
    LettersData,
    NumbersData,
    TargetData,
    TimerState,
    SessionStats,
    Notice,
    Rejection,
    IntentResult,
    GameSnapshot,
    GameConfig,
    PHASES,
    LETTERS_TIMER_DURATION,
    NUMBERS_TIMER_DURATION,
    COUNTDOWN_DURATION,
)
from .draw import RandomDraw, LETTER_FREQUENCIES, VOWELS, CONSONANTS, NUMBER_POOL
from .word_round import WordRound
from .arithmetic_round import ArithmeticRound, OPERATORS
from .timer import PhaseTimer
from .session import GameSession, next_phase
from .runner import SessionRunner

__all__ = [
    "Phase",
    "TimerStatus",
    "Tile",
    "NumberToken",
    "CalculationStep",
    "Operation",
    "WordSummary",
    "RoundSummary",
    "DictionaryDisplay",
    "LettersData",
    "NumbersData",
    "TargetData",
    "TimerState",
    "SessionStats",
    "Notice",
    "Rejection",
    "IntentResult",
    "GameSnapshot",
    "GameConfig",
    "PHASES",
    "RandomDraw",
    "LETTER_FREQUENCIES",
    "VOWELS",
    "CONSONANTS",
    "NUMBER_POOL",
    "OPERATORS",
    "LETTERS_TIMER_DURATION",
    "NUMBERS_TIMER_DURATION",
    "COUNTDOWN_DURATION",
    "WordRound",
    "ArithmeticRound",
    "PhaseTimer",
    "GameSession",
    "next_phase",
    "SessionRunner",
]
