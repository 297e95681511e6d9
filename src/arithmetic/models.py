"""Data models for arithmetic scoring and the reference solver."""

from typing import List, Optional
from pydantic import BaseModel, Field


class RoundScore(BaseModel):
    """Points and message for a final answer against a target."""
    target: int
    final_result: float
    difference: float
    points: int
    message: str

    @property
    def success(self) -> bool:
        return self.difference == 0


class SolverResult(BaseModel):
    """Raw output of the approximate solver."""
    best_value: Optional[int] = None
    diff: float = float("inf")
    human_steps: List[str] = Field(default_factory=list)


class SolutionStep(BaseModel):
    """A single displayable step of a formatted solution."""
    id: int
    expression: str
    result: float
    is_intermediate: bool = False


class FormattedSolution(BaseModel):
    """Solver output shaped for display."""
    message: str
    steps: List[SolutionStep] = Field(default_factory=list)
    result: Optional[int] = None
    diff: float = float("inf")
