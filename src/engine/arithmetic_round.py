"""
Numbers round: expression building, intermediate results and final scoring.

The round operates on a TargetData payload owned by the session. Player
results are taken as typed; the expression evaluator in src.arithmetic is
available for checking them but is not applied here.
"""

import logging
import math
from typing import List, Optional
from pydantic import BaseModel

from .models import TargetData, NumberToken, CalculationStep, Operation, RoundSummary, Rejection
from ..arithmetic import score_final_answer, format_number


logger = logging.getLogger(__name__)

OPERATORS: List[str] = ["+", "-", "*", "/"]

SELECT_NUMBER_FIRST = "Vous devez d'abord sélectionner un nombre!"
INVALID_RESULT = "Veuillez entrer un résultat numérique valide"
NO_FINAL_RESULT = "Veuillez entrer un résultat ou cliquer sur un nombre"


def parse_result(text: Optional[str]) -> Optional[float]:
    """
    Parse a typed result, accepting a decimal comma.

    Returns:
        The value, or None if the text is not a finite number
    """
    if text is None:
        return None
    try:
        value = float(text.strip().replace(',', '.'))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


class ArithmeticRound(BaseModel):
    """
    Expression building towards a target.

    Attributes:
        data: The target-phase payload this round mutates
    """

    data: TargetData

    @classmethod
    def start(cls, numbers: List[int], target: int) -> "ArithmeticRound":
        """
        Create a round with fresh initial tokens for the drawn numbers.

        Args:
            numbers: The six drawn numbers, in draw order
            target: The number to reach

        Returns:
            A new ArithmeticRound with an empty ledger
        """
        tokens = [
            NumberToken(id=f"initial-{index}", value=number, origin="initial")
            for index, number in enumerate(numbers)
        ]
        data = TargetData(target=target, numbers=list(numbers), initial_tokens=tokens)
        return cls(data=data)

    @property
    def tokens(self) -> List[NumberToken]:
        """All tokens, initial first, then derived in creation order."""
        return self.data.initial_tokens + self.data.derived_tokens

    @property
    def expression(self) -> str:
        return self.data.current_step.expression

    def get_token(self, token_id: str) -> NumberToken:
        """
        Find a token by id.

        Raises:
            KeyError: If no token has that id
        """
        for token in self.tokens:
            if token.id == token_id:
                return token
        raise KeyError(f"Unknown number token '{token_id}'")

    def append_number(self, token_id: str) -> Optional[Rejection]:
        """
        Append a token's value to the expression and consume the token.

        Two numbers can never be adjacent: a number is only accepted at the
        start of the expression or right after an operator.

        Returns:
            None on success, otherwise the Rejection
        """
        token = self.get_token(token_id)
        if self.data.locked or token.consumed:
            return Rejection()
        if self.data.last_input == "number":
            return Rejection()

        step = self.data.current_step
        step.expression = f"{step.expression} {format_number(token.value)}".lstrip()
        token.consumed = True
        self.data.last_input = "number"
        self.data.last_clicked_value = token.value
        logger.debug("Expression is now '%s'", step.expression)
        return None

    def append_operator(self, op: str) -> Optional[Rejection]:
        """
        Append an operator, or replace the trailing one.

        Raises:
            ValueError: If op is not one of + - * /
        """
        if op not in OPERATORS:
            raise ValueError(f"Unknown operator '{op}'")
        if self.data.locked:
            return Rejection()

        step = self.data.current_step
        if not step.expression.strip():
            return Rejection(message=SELECT_NUMBER_FIRST)

        if self.data.last_input == "operator":
            trimmed = step.expression.rstrip()
            head, _, _ = trimmed.rpartition(' ')
            step.expression = f"{head} {op} "
        else:
            step.expression = f"{step.expression} {op} "
            self.data.last_input = "operator"
        return None

    def set_pending_result(self, text: Optional[str]) -> Optional[Rejection]:
        """Store the player's typed result as-is."""
        if self.data.locked:
            return Rejection()
        text = text.strip() if text else ""
        self.data.current_step.pending_result = text or None
        return None

    def commit_step(self) -> Optional[Rejection]:
        """
        Record the current expression with the typed result.

        The result becomes a derived token usable in later expressions and
        the step is reset.

        Returns:
            None on success, otherwise the Rejection
        """
        step = self.data.current_step
        if self.data.locked or not step.expression.strip() or step.pending_result is None:
            return Rejection()

        result = parse_result(step.pending_result)
        if result is None:
            return Rejection(code="INPUT_PARSE_FAILURE", message=INVALID_RESULT)

        step.committed = True
        count = len(self.data.operations) + 1
        operation = Operation(id=f"op-{count}", expression=step.expression.strip(), result=result)
        self.data.operations.append(operation)
        self.data.derived_tokens.append(
            NumberToken(id=f"derived-{count}", value=result, origin="derived")
        )
        self.data.current_step = CalculationStep()
        self.data.last_input = None
        logger.debug("Committed %s = %s", operation.expression, format_number(result))
        return None

    def finalize_answer(self) -> Optional[Rejection]:
        """
        Fix the final answer and lock the round.

        The typed result wins over the last clicked number. A typed result
        marks the live step as committed.

        Returns:
            None on success, otherwise the Rejection
        """
        if self.data.locked:
            return Rejection()

        pending = self.data.current_step.pending_result
        if pending is not None:
            result = parse_result(pending)
            if result is None:
                return Rejection(code="INPUT_PARSE_FAILURE", message=INVALID_RESULT)
            self.data.current_step.committed = True
        elif self.data.last_clicked_value is not None:
            result = self.data.last_clicked_value
        else:
            return Rejection(message=NO_FINAL_RESULT)

        self.data.final_answer = result
        self.data.locked = True
        return None

    def score(self) -> Optional[RoundSummary]:
        """
        Score the round once, locking it.

        Without a final answer the result counts as 0.

        Returns:
            RoundSummary, or None if the round was already scored
        """
        if self.data.summary is not None:
            return None

        final_result = self.data.final_answer if self.data.final_answer is not None else 0
        scored = score_final_answer(self.data.target, final_result)
        summary = RoundSummary(
            target=scored.target,
            final_result=scored.final_result,
            difference=scored.difference,
            points=scored.points,
            message=scored.message,
            success=scored.success,
            initial_numbers=list(self.data.numbers),
        )
        self.data.summary = summary
        self.data.locked = True
        logger.info(
            "Numbers round scored: target=%d result=%s points=%d",
            summary.target, format_number(summary.final_result), summary.points,
        )
        return summary
