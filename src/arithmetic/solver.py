"""
Simplified reference solver for the numbers round.

This is a hint generator, not a full solver: it only looks at each number
on its own and at every pair combined by addition or multiplication.
Subtraction, division and chains of more than two numbers are never tried.
"""

from typing import List, Sequence

from .models import SolverResult, SolutionStep, FormattedSolution
from .scoring import format_number


def solve_approx(numbers: Sequence[int], target: int) -> SolverResult:
    """
    Find the closest value reachable with a single number or one +/× pair.

    Ties keep the first candidate found (singles first, then pairs in
    index order, sum before product).

    Args:
        numbers: The six drawn numbers, in draw order
        target: The number to reach

    Returns:
        SolverResult with the best value, its distance and one human step
    """
    best_diff = float("inf")
    best_value = None
    best_steps: List[str] = []

    for num in numbers:
        diff = abs(num - target)
        if diff < best_diff:
            best_diff = diff
            best_value = num
            best_steps = [f"Le nombre {num} est déjà proche de la cible"]

    for i in range(len(numbers)):
        for j in range(i + 1, len(numbers)):
            a, b = numbers[i], numbers[j]

            total = a + b
            diff = abs(total - target)
            if diff < best_diff:
                best_diff = diff
                best_value = total
                best_steps = [f"{a} + {b} = {total}"]

            product = a * b
            diff = abs(product - target)
            if diff < best_diff:
                best_diff = diff
                best_value = product
                best_steps = [f"{a} × {b} = {product}"]

    return SolverResult(best_value=best_value, diff=best_diff, human_steps=best_steps)


def format_solution(solution: SolverResult) -> FormattedSolution:
    """
    Shape a solver result for display.

    Steps of the form "a op b = r" are split into expression and result;
    descriptive steps without '=' keep the best value as their result.
    """
    if not solution.human_steps:
        return FormattedSolution(message="Aucune solution trouvée")

    steps: List[SolutionStep] = []
    last = len(solution.human_steps) - 1
    for index, step in enumerate(solution.human_steps):
        expression, sep, result = step.partition(' = ')
        steps.append(SolutionStep(
            id=index + 1,
            expression=expression,
            result=float(result) if sep else float(solution.best_value),
            is_intermediate=index < last,
        ))

    value = format_number(solution.best_value)
    if solution.diff == 0:
        message = f"J'ai trouvé le nombre exact ({value}) !"
    else:
        message = f"J'ai trouvé {value}, à {format_number(solution.diff)} du nombre cible."

    return FormattedSolution(
        message=message,
        steps=steps,
        result=solution.best_value,
        diff=solution.diff,
    )
