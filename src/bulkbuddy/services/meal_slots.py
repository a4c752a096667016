"""Split a daily calorie target across meals."""

import math

from bulkbuddy.domain.meal_slots import (
    DEFAULT_SLOT_CONSTANTS,
    MealSlot,
    MealSlotConstants,
    MealSlotTargets,
)


def partition_meal_slots(
    total_calories: float, constants: MealSlotConstants = DEFAULT_SLOT_CONSTANTS
) -> MealSlotTargets:
    """Return breakfast, lunch and dinner targets with variance bands.

    Each slot is rounded on its own, so slot targets may drift from the
    total by a few calories.
    """
    return MealSlotTargets(
        total=total_calories,
        breakfast=_slot(total_calories * constants.breakfast_share, constants.variance),
        lunch=_slot(total_calories * constants.lunch_share, constants.variance),
        dinner=_slot(total_calories * constants.dinner_share, constants.variance),
    )


def _slot(raw_target: float, variance: float) -> MealSlot:
    target = _round_half_up(raw_target)
    return MealSlot(
        target=target,
        min=_round_half_up(target * (1 - variance)),
        max=_round_half_up(target * (1 + variance)),
    )


def _round_half_up(value: float) -> int:
    # builtin round() uses banker's rounding; calorie targets round .5 up
    return int(math.floor(value + 0.5))
