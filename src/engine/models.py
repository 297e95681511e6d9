"""
Pydantic models for the round-state engine.

This module holds every data model the engine passes around: tiles and
number tokens, phase payloads, timer and session state, intent results
and the detached snapshot handed to the presentation layer. The logic
classes (RandomDraw, WordRound, ArithmeticRound, PhaseTimer, GameSession)
live in their own files.
"""

from typing import List, Optional, Literal, Union
from pydantic import BaseModel, Field, ConfigDict


# Type aliases
Phase = Literal["letters", "numbers", "target"]
TimerStatus = Literal["idle", "countdown", "running", "expired"]
TokenOrigin = Literal["initial", "derived"]
InputKind = Literal["number", "operator"]
RejectionCode = Literal["INVALID_INTENT", "INPUT_PARSE_FAILURE"]
LookupStatus = Literal["pending", "found", "missing", "error"]

PHASES: List[str] = ["letters", "numbers", "target"]

LETTERS_TIMER_DURATION = 45  # seconds
NUMBERS_TIMER_DURATION = 60  # seconds
COUNTDOWN_DURATION = 2  # seconds


class Tile(BaseModel):
    """One drawn letter."""
    symbol: str = Field(..., min_length=1, max_length=1, pattern=r'^[A-Z]$')
    used: bool = False


class NumberToken(BaseModel):
    """A number available for building expressions."""
    id: str
    value: float
    origin: TokenOrigin = "initial"
    consumed: bool = False

    @property
    def is_initial(self) -> bool:
        return self.origin == "initial"


class CalculationStep(BaseModel):
    """The expression currently being built and the player's typed result."""
    expression: str = ""
    pending_result: Optional[str] = None
    committed: bool = False


class Operation(BaseModel):
    """A committed intermediate calculation."""
    id: str
    expression: str
    result: float


class WordSummary(BaseModel):
    """Shown after a word is submitted."""
    word: str
    points: int = 0
    message: str = ""


class RoundSummary(BaseModel):
    """End-of-round summary for the numbers round."""
    target: int
    final_result: float
    difference: float
    points: int
    message: str
    success: bool = False
    initial_numbers: List[int] = Field(default_factory=list)


class DictionaryDisplay(BaseModel):
    """Display-only state of the last dictionary lookup."""
    word: str
    status: LookupStatus = "pending"
    message: Optional[str] = None


class LettersData(BaseModel):
    """Phase payload while the letters round is active."""
    kind: Literal["letters"] = "letters"
    tiles: List[Tile] = Field(default_factory=list)
    word: List[str] = Field(default_factory=list)
    locked: bool = False
    word_summary: Optional[WordSummary] = None
    dictionary: Optional[DictionaryDisplay] = None

    @property
    def word_text(self) -> str:
        return "".join(self.word)


class NumbersData(BaseModel):
    """Phase payload while the six numbers are shown, before the target."""
    kind: Literal["numbers"] = "numbers"
    numbers: List[int] = Field(default_factory=list)


class TargetData(BaseModel):
    """Phase payload while the player works towards the target."""
    kind: Literal["target"] = "target"
    target: int
    numbers: List[int] = Field(default_factory=list)
    initial_tokens: List[NumberToken] = Field(default_factory=list)
    derived_tokens: List[NumberToken] = Field(default_factory=list)
    operations: List[Operation] = Field(default_factory=list)
    current_step: CalculationStep = Field(default_factory=CalculationStep)
    last_input: Optional[InputKind] = None
    last_clicked_value: Optional[float] = None
    final_answer: Optional[float] = None
    locked: bool = False
    summary: Optional[RoundSummary] = None


PhaseData = Union[LettersData, NumbersData, TargetData]


class TimerState(BaseModel):
    """Snapshot of the active phase timer."""
    status: TimerStatus = "idle"
    remaining: int = 0
    duration: int = 0
    generation: int = 0


class SessionStats(BaseModel):
    """Score and round count, kept across phases."""
    score: int = Field(default=0, ge=0)
    rounds_played: int = Field(default=0, ge=0)


class Notice(BaseModel):
    """Transient message for the player."""
    text: str
    is_error: bool = False


class Rejection(BaseModel):
    """Why an intent was not applied."""
    code: RejectionCode = "INVALID_INTENT"
    message: Optional[str] = None


class IntentResult(BaseModel):
    """Outcome of a single intent."""
    accepted: bool = True
    rejection: Optional[Rejection] = None
    points: int = 0

    @classmethod
    def ok(cls, points: int = 0) -> "IntentResult":
        return cls(accepted=True, points=points)

    @classmethod
    def rejected(cls, message: Optional[str] = None, code: RejectionCode = "INVALID_INTENT") -> "IntentResult":
        return cls(accepted=False, rejection=Rejection(code=code, message=message))


class GameSnapshot(BaseModel):
    """Detached copy of the whole session, emitted after every change.

    Fields cannot be reassigned; the nested payload is a deep copy, so
    editing it never reaches the session.
    """
    model_config = ConfigDict(frozen=True)

    phase: Phase
    data: PhaseData = Field(..., discriminator="kind")
    timer: TimerState
    stats: SessionStats
    time_expired: bool = False
    notice: Optional[Notice] = None


class GameConfig(BaseModel):
    """Build-time settings for a session."""
    letters_duration: int = Field(default=LETTERS_TIMER_DURATION, ge=1)
    numbers_duration: int = Field(default=NUMBERS_TIMER_DURATION, ge=1)
    countdown_duration: int = Field(default=COUNTDOWN_DURATION, ge=1)
    letters_per_round: int = Field(default=10, ge=1)
    dictionary_lookup: bool = True
    seed: Optional[int] = None
