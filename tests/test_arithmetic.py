"""
Tests for the arithmetic utilities.

Covers:
- Expression evaluation (precedence, parentheses, invalid input)
- End-of-round scoring tiers and messages
- The pairwise +/× reference solver and its formatting
"""

import pytest

from src.arithmetic import (
    evaluate_expression,
    sanitize_expression,
    check_expression,
    score_final_answer,
    points_for_difference,
    solve_approx,
    format_solution,
    SolverResult,
)


class TestEvaluateExpression:
    """Arithmetic evaluation with standard precedence."""

    def test_multiplication(self):
        assert evaluate_expression("75 * 4") == 300

    def test_precedence(self):
        assert evaluate_expression("2 + 3 * 4") == 14
        assert evaluate_expression("10 - 4 / 2") == 8

    def test_parentheses(self):
        assert evaluate_expression("(2 + 3) * 4") == 20
        assert evaluate_expression("((100 - 1) * 5) + 3") == 498

    def test_left_associative_subtraction_and_division(self):
        assert evaluate_expression("10 - 3 - 2") == 5
        assert evaluate_expression("100 / 5 / 2") == 10

    def test_non_integral_division(self):
        assert evaluate_expression("7 / 2") == 3.5

    def test_integral_division_returns_int(self):
        result = evaluate_expression("9 / 3")
        assert result == 3
        assert isinstance(result, int)

    def test_unary_minus(self):
        assert evaluate_expression("-5 + 10") == 5

    def test_division_by_zero_is_invalid(self):
        assert evaluate_expression("10 / 0") is None
        assert evaluate_expression("10 / (5 - 5)") is None

    def test_empty_is_invalid(self):
        assert evaluate_expression("") is None
        assert evaluate_expression("   ") is None
        assert evaluate_expression(None) is None

    def test_only_stripped_characters_is_invalid(self):
        assert evaluate_expression("abc") is None

    def test_unparseable_is_invalid(self):
        assert evaluate_expression("5 +") is None
        assert evaluate_expression("* 5") is None
        assert evaluate_expression("(5 + 3") is None
        assert evaluate_expression("5 + 3)") is None
        assert evaluate_expression("()") is None

    def test_foreign_characters_are_stripped(self):
        assert evaluate_expression("75 x * 4 =") == 300

    def test_whitespace_is_removed(self):
        """Digits separated by spaces merge, as the sanitizer drops whitespace."""
        assert sanitize_expression(" 7 5 ") == "75"
        assert evaluate_expression("7 5") == 75

    def test_check_expression(self):
        assert check_expression("75 * 4", 300) == (True, 300)
        assert check_expression("75 * 4", 301) == (False, 300)
        assert check_expression("10 / 0", 0) == (False, None)


class TestScoring:
    """Points and messages for the final answer."""

    @pytest.mark.parametrize("difference,points", [
        (0, 10),
        (1, 5),
        (5, 5),
        (6, 3),
        (10, 3),
        (11, 2),
        (20, 2),
        (21, 1),
        (400, 1),
    ])
    def test_points_for_difference(self, difference, points):
        assert points_for_difference(difference) == points

    def test_exact(self):
        score = score_final_answer(500, 500)
        assert score.difference == 0
        assert score.points == 10
        assert score.success is True
        assert score.message == "Félicitations ! Vous avez trouvé le nombre exact !"

    def test_very_close(self):
        score = score_final_answer(500, 505)
        assert score.difference == 5
        assert score.points == 5
        assert score.message == "Très bien ! Votre résultat (505) est à seulement 5 du nombre cible."

    def test_close_and_not_bad_share_message(self):
        close = score_final_answer(500, 492)
        not_bad = score_final_answer(500, 515)
        assert close.points == 3
        assert not_bad.points == 2
        assert close.message == "Votre résultat (492) est à 8 du nombre cible."
        assert not_bad.message == "Votre résultat (515) est à 15 du nombre cible."

    def test_far(self):
        score = score_final_answer(500, 530)
        assert score.points == 1
        assert score.message == "Vous êtes à 30 du nombre cible. Continuez à vous entraîner !"

    def test_fractional_result(self):
        score = score_final_answer(500, 502.5)
        assert score.difference == 2.5
        assert score.points == 5


class TestSolveApprox:
    """Weak reference solver: singles and pairwise + / ×."""

    def test_finds_pair_sum(self):
        result = solve_approx([3, 5, 8, 25, 50, 100], 103)
        assert result.best_value == 103
        assert result.diff == 0
        assert result.human_steps == ["3 + 100 = 103"]

    def test_finds_pair_product(self):
        result = solve_approx([3, 5, 8, 25, 50, 100], 200)
        assert result.best_value == 200
        assert result.human_steps == ["8 × 25 = 200"]

    def test_pair_beats_single(self):
        result = solve_approx([1, 2, 3, 4, 5, 100], 102)
        assert result.best_value == 102

    def test_single_number_exact(self):
        result = solve_approx([1, 2, 3, 4, 5, 100], 100)
        assert result.best_value == 100
        assert result.human_steps == ["Le nombre 100 est déjà proche de la cible"]

    def test_ignores_subtraction(self):
        """100 - 3 = 97 is exact but subtraction is never tried."""
        result = solve_approx([3, 5, 8, 25, 50, 100], 97)
        assert result.diff > 0
        assert result.best_value != 97

    def test_ignores_division(self):
        """100 / 5 = 20 is exact but division is never tried."""
        result = solve_approx([5, 7, 9, 100, 1, 2], 20)
        assert result.best_value != 20
        assert all("/" not in step and "-" not in step for step in result.human_steps)

    def test_ignores_longer_chains(self):
        """No three-number combination is considered."""
        result = solve_approx([1, 2, 3, 4, 5, 6], 720)
        assert result.best_value == 30
        assert result.diff == 690

    def test_ties_keep_first_candidate(self):
        """10 and 30 are both 10 away from 20; the first one seen wins."""
        result = solve_approx([10, 30, 100, 75, 50, 60], 20)
        assert result.best_value == 10
        assert result.diff == 10
        assert result.human_steps == ["Le nombre 10 est déjà proche de la cible"]


class TestFormatSolution:
    """Display shaping of the solver output."""

    def test_exact_message(self):
        formatted = format_solution(solve_approx([3, 5, 8, 25, 50, 100], 103))
        assert formatted.message == "J'ai trouvé le nombre exact (103) !"
        assert len(formatted.steps) == 1
        assert formatted.steps[0].expression == "3 + 100"
        assert formatted.steps[0].result == 103
        assert formatted.steps[0].is_intermediate is False

    def test_approximate_message(self):
        formatted = format_solution(solve_approx([1, 2, 3, 4, 5, 6], 720))
        assert formatted.message == "J'ai trouvé 30, à 690 du nombre cible."
        assert formatted.result == 30

    def test_descriptive_step(self):
        formatted = format_solution(solve_approx([1, 2, 3, 4, 5, 100], 100))
        assert formatted.steps[0].expression == "Le nombre 100 est déjà proche de la cible"
        assert formatted.steps[0].result == 100

    def test_empty_solution(self):
        formatted = format_solution(SolverResult())
        assert formatted.message == "Aucune solution trouvée"
        assert formatted.steps == []
        assert formatted.result is None
