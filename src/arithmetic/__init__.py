"""Arithmetic utilities for the numbers round."""

from .evaluate import evaluate_expression, sanitize_expression, check_expression
from .models import RoundScore, SolverResult, SolutionStep, FormattedSolution
from .scoring import score_final_answer, points_for_difference, message_for_difference, format_number
from .solver import solve_approx, format_solution

__all__ = [
    # Expression evaluation
    "evaluate_expression",
    "sanitize_expression",
    "check_expression",
    # Models
    "RoundScore",
    "SolverResult",
    "SolutionStep",
    "FormattedSolution",
    # Scoring
    "score_final_answer",
    "points_for_difference",
    "message_for_difference",
    "format_number",
    # Reference solver
    "solve_approx",
    "format_solution",
]
