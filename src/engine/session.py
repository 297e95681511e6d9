import logging
from typing import Any, Callable, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .draw import RandomDraw
from .timer import PhaseTimer
from .word_round import WordRound
from .arithmetic_round import ArithmeticRound
from .models import (
    PHASES,
    Phase,
    PhaseData,
    LettersData,
    NumbersData,
    TargetData,
    DictionaryDisplay,
    GameConfig,
    GameSnapshot,
    IntentResult,
    Notice,
    Rejection,
    SessionStats,
)
from ..arithmetic import FormattedSolution, format_number, format_solution, solve_approx
from ..dictionary import DictionaryResult


logger = logging.getLogger(__name__)

Listener = Callable[[GameSnapshot], None]

WORD_FOUND = 'Le mot "{word}" existe dans le dictionnaire Wiktionnaire.'
WORD_MISSING = "Le mot n'est pas trouvé dans le dictionnaire français."


def next_phase(phase: str) -> Phase:
    """The phase that follows `phase` in the letters -> numbers -> target cycle."""
    return PHASES[(PHASES.index(phase) + 1) % len(PHASES)]


class GameSession(BaseModel):
    """
    Top-level orchestrator for a single-player game.

    Owns the phase payload, the phase timer and the running score, and is
    the only entry point for player intents and timer ticks. Every intent
    returns an IntentResult; gameplay problems are reported as rejections,
    never raised.

    Attributes:
        config: Durations and optional features
        draw: Random source for letters, numbers and targets
        phase: The active phase
        data: Payload of the active phase (always matches `phase`)
        timer: Timer of the active phase instance
        stats: Score and rounds played
        time_expired: Whether the active phase's main timer ran out
        notice: Transient message from the last intent
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    draw: RandomDraw = Field(default_factory=RandomDraw)
    phase: Phase = "letters"
    data: PhaseData = Field(default_factory=LettersData)
    timer: PhaseTimer = Field(default_factory=PhaseTimer)
    stats: SessionStats = Field(default_factory=SessionStats)
    time_expired: bool = False
    notice: Optional[Notice] = None
    listeners: List[Listener] = Field(default_factory=list)
    lookup_requests: List[str] = Field(default_factory=list)

    @classmethod
    def create(cls, config: Optional[GameConfig] = None, **config_kwargs: Any) -> "GameSession":
        """
        Factory method to create a session at the start of a letters round.

        Args:
            config: Optional GameConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured GameSession instance
        """
        if config is None:
            config = GameConfig(**config_kwargs)
        return cls(
            config=config,
            draw=RandomDraw(seed=config.seed),
            timer=PhaseTimer(countdown_duration=config.countdown_duration),
        )

    # ----- Presentation layer plumbing -----

    def subscribe(self, listener: Listener) -> None:
        """Register a callback receiving a snapshot after every change."""
        self.listeners.append(listener)

    def snapshot(self) -> GameSnapshot:
        """Deep copy of the current state, detached from the session."""
        return GameSnapshot(
            phase=self.phase,
            data=self.data.model_copy(deep=True),
            timer=self.timer.snapshot(),
            stats=self.stats.model_copy(),
            time_expired=self.time_expired,
            notice=self.notice.model_copy() if self.notice else None,
        )

    def _emit(self) -> None:
        if not self.listeners:
            return
        snap = self.snapshot()
        for listener in self.listeners:
            listener(snap)

    def _accept(self, notice: Optional[str] = None, points: int = 0) -> IntentResult:
        self.notice = Notice(text=notice) if notice else None
        self._emit()
        return IntentResult.ok(points=points)

    def _reject(self, rejection: Optional[Rejection] = None) -> IntentResult:
        rejection = rejection or Rejection()
        if rejection.message:
            self.notice = Notice(text=rejection.message, is_error=True)
            self._emit()
        elif self.notice is not None:
            self.notice = None
            self._emit()
        return IntentResult(accepted=False, rejection=rejection)

    def _blocked(self, phase: Phase) -> bool:
        """Whether intents for `phase` are currently refused."""
        return self.phase != phase or self.timer.in_countdown or self.time_expired

    # ----- Sub-engines -----

    @property
    def word_round(self) -> Optional[WordRound]:
        if not isinstance(self.data, LettersData):
            return None
        return WordRound(data=self.data, max_tiles=self.config.letters_per_round)

    @property
    def arithmetic_round(self) -> Optional[ArithmeticRound]:
        if not isinstance(self.data, TargetData):
            return None
        return ArithmeticRound(data=self.data)

    # ----- Letters round intents -----

    def draw_letter(self, is_vowel: bool) -> IntentResult:
        """Draw one vowel or consonant; the last tile starts the timer."""
        rnd = self.word_round
        if rnd is None or self._blocked("letters") or rnd.is_full:
            return self._reject()

        rnd.add_tile(self.draw.draw_letter(is_vowel))
        if rnd.is_full:
            self.timer.arm(self.config.letters_duration)
            logger.info("Letters drawn: %s", "".join(t.symbol for t in rnd.tiles))
        return self._accept()

    def append_to_word(self, tile_index: int) -> IntentResult:
        rnd = self.word_round
        if rnd is None or self._blocked("letters"):
            return self._reject()
        if not rnd.append_letter(tile_index):
            return self._reject()
        return self._accept()

    def remove_last_letter(self) -> IntentResult:
        rnd = self.word_round
        if rnd is None or self._blocked("letters") or not rnd.remove_last_letter():
            return self._reject()
        return self._accept()

    def clear_word(self) -> IntentResult:
        rnd = self.word_round
        if rnd is None or self._blocked("letters") or not rnd.clear_word():
            return self._reject()
        return self._accept()

    def submit_word(self) -> IntentResult:
        """
        Submit the current word.

        Before expiry the word scores one point per letter, stops the timer
        and asks for a dictionary lookup. After expiry it is only shown.
        """
        rnd = self.word_round
        if rnd is None or self.timer.in_countdown:
            return self._reject()

        summary = rnd.submit_word(time_expired=self.time_expired)
        if summary is None:
            return self._reject()

        if not self.time_expired:
            self.stats.score += summary.points
            self.timer.stop()
            if self.config.dictionary_lookup:
                self.data.dictionary = DictionaryDisplay(word=summary.word)
                self.lookup_requests.append(summary.word)
        return self._accept(notice=summary.message, points=summary.points)

    def dictionary_result_arrived(self, word: str, result: DictionaryResult) -> IntentResult:
        """
        Apply a dictionary lookup result to the display state.

        Results for a word that is no longer awaiting a lookup are dropped.
        """
        display = self.data.dictionary if isinstance(self.data, LettersData) else None
        if display is None or display.status != "pending" or display.word != word.upper():
            logger.debug("Discarding dictionary result for '%s'", word)
            return IntentResult.rejected()

        if result.error:
            display.status = "error"
            display.message = result.error
        elif result.exists:
            display.status = "found"
            display.message = WORD_FOUND.format(word=display.word)
        else:
            display.status = "missing"
            display.message = WORD_MISSING
        self._emit()
        return IntentResult.ok()

    def take_lookup_requests(self) -> List[str]:
        """Hand over the words waiting for a dictionary lookup."""
        words, self.lookup_requests = self.lookup_requests, []
        return words

    # ----- Numbers round intents -----

    def generate_target(self) -> IntentResult:
        """Draw a target for the six numbers and start the numbers timer."""
        if not isinstance(self.data, NumbersData) or not self.data.numbers or self.timer.in_countdown:
            return self._reject()
        self._start_target(self.data.numbers)
        return self._accept()

    def _start_target(self, numbers: List[int]) -> None:
        rnd = ArithmeticRound.start(numbers, self.draw.draw_target())
        self.phase = "target"
        self.data = rnd.data
        self.time_expired = False
        self.timer.arm(self.config.numbers_duration)
        logger.info("Target %d with numbers %s", rnd.data.target, numbers)

    def append_number(self, token_id: str) -> IntentResult:
        rnd = self.arithmetic_round
        if rnd is None or self._blocked("target"):
            return self._reject()
        rejection = rnd.append_number(token_id)
        return self._reject(rejection) if rejection else self._accept()

    def append_operator(self, op: str) -> IntentResult:
        rnd = self.arithmetic_round
        if rnd is None or self._blocked("target"):
            return self._reject()
        rejection = rnd.append_operator(op)
        return self._reject(rejection) if rejection else self._accept()

    def set_pending_result(self, text: Optional[str]) -> IntentResult:
        rnd = self.arithmetic_round
        if rnd is None or self._blocked("target"):
            return self._reject()
        rejection = rnd.set_pending_result(text)
        return self._reject(rejection) if rejection else self._accept()

    def commit_step(self) -> IntentResult:
        rnd = self.arithmetic_round
        if rnd is None or self._blocked("target"):
            return self._reject()
        rejection = rnd.commit_step()
        if rejection:
            return self._reject(rejection)
        op = rnd.data.operations[-1]
        return self._accept(notice=f"Opération validée : {op.expression} = {format_number(op.result)}")

    def finalize_answer(self) -> IntentResult:
        """Fix the final answer, stop the timer and score the round."""
        rnd = self.arithmetic_round
        if rnd is None or self._blocked("target"):
            return self._reject()
        rejection = rnd.finalize_answer()
        if rejection:
            return self._reject(rejection)

        self.timer.stop()
        summary = rnd.score()
        self.stats.score += summary.points
        return self._accept(
            notice=f"Résultat final défini : {format_number(summary.final_result)}",
            points=summary.points,
        )

    def solver_hint(self) -> Optional[FormattedSolution]:
        """Approximate solution for a scored numbers round."""
        if not isinstance(self.data, TargetData) or self.data.summary is None:
            return None
        return format_solution(solve_approx(self.data.numbers, self.data.target))

    # ----- Timer -----

    def on_tick(self, token: int) -> bool:
        """
        Advance the active timer by one second.

        Args:
            token: Generation the tick was scheduled for

        Returns:
            True if the tick applied, False if it was stale or idle
        """
        event = self.timer.tick(token)
        if event is None:
            return False

        if event == "started":
            logger.info("%s timer running (%ds)", self.phase, self.timer.duration)
        elif event == "expired":
            self.time_expired = True
            logger.info("%s timer expired", self.phase)
            rnd = self.arithmetic_round
            if rnd is not None:
                summary = rnd.score()
                if summary is not None:
                    self.stats.score += summary.points
        self._emit()
        return True

    # ----- Phase transitions -----

    def advance_phase(self, phase: str) -> IntentResult:
        """
        Move to the next phase of the cycle.

        Only the successor of the current phase is accepted. Entering the
        target phase keeps the drawn numbers; the other transitions start
        the destination phase afresh.
        """
        if phase != next_phase(self.phase):
            return self._reject()
        if phase == "target":
            return self.generate_target()
        return self.reset_game(phase)

    def reset_game(self, phase: str) -> IntentResult:
        """
        Discard the round in progress and enter `phase` with fresh inputs.

        Raises:
            ValueError: If phase is not a known phase name
        """
        self._enter_phase(phase)
        return self._accept()

    def _enter_phase(self, phase: str) -> None:
        if phase not in PHASES:
            raise ValueError(f"Unknown phase '{phase}'")

        self.timer.cancel()
        self.time_expired = False
        self.lookup_requests = []

        if phase == "letters":
            self.stats.rounds_played += 1
            self.phase = "letters"
            self.data = LettersData()
        elif phase == "numbers":
            self.phase = "numbers"
            self.data = NumbersData(numbers=self.draw.draw_six_numbers())
        else:
            self._start_target(self.draw.draw_six_numbers())

        logger.info("Entered %s phase (round %d)", self.phase, self.stats.rounds_played)

    def reset_entire_game(self) -> IntentResult:
        """Start over from the letters phase with score and rounds at zero."""
        self._enter_phase("letters")
        self.stats = SessionStats()
        logger.info("Game reset")
        return self._accept()
