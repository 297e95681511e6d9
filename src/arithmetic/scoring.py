"""End-of-round scoring for the numbers round."""

from typing import Union

from .models import RoundScore


# Points per difference tier
EXACT_POINTS = 10  # difference == 0
VERY_CLOSE_POINTS = 5  # difference <= 5
CLOSE_POINTS = 3  # difference <= 10
NOT_BAD_POINTS = 2  # difference <= 20
TRIED_POINTS = 1  # anything else

VERY_CLOSE_MAX = 5
CLOSE_MAX = 10
NOT_BAD_MAX = 20


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing '.0' when it is integral."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def points_for_difference(difference: float) -> int:
    """
    Map the distance to the target onto round points.

    Args:
        difference: Absolute distance between target and final result

    Returns:
        Points awarded (10, 5, 3, 2 or 1)
    """
    if difference == 0:
        return EXACT_POINTS
    if difference <= VERY_CLOSE_MAX:
        return VERY_CLOSE_POINTS
    if difference <= CLOSE_MAX:
        return CLOSE_POINTS
    if difference <= NOT_BAD_MAX:
        return NOT_BAD_POINTS
    return TRIED_POINTS


def message_for_difference(difference: float, final_result: float) -> str:
    """Player-facing message for the result tier."""
    diff = format_number(difference)
    result = format_number(final_result)
    if difference == 0:
        return "Félicitations ! Vous avez trouvé le nombre exact !"
    if difference <= VERY_CLOSE_MAX:
        return f"Très bien ! Votre résultat ({result}) est à seulement {diff} du nombre cible."
    # The 3 and 2 point tiers share one message
    if difference <= NOT_BAD_MAX:
        return f"Votre résultat ({result}) est à {diff} du nombre cible."
    return f"Vous êtes à {diff} du nombre cible. Continuez à vous entraîner !"


def score_final_answer(target: int, final_result: float) -> RoundScore:
    """
    Score a final answer against the target.

    Args:
        target: The number to reach (100-999)
        final_result: The player's final answer

    Returns:
        RoundScore with difference, points and message
    """
    difference = abs(target - final_result)
    if isinstance(difference, float) and difference.is_integer():
        difference = int(difference)
    return RoundScore(
        target=target,
        final_result=final_result,
        difference=difference,
        points=points_for_difference(difference),
        message=message_for_difference(difference, final_result),
    )
