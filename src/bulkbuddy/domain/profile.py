"""Person and goal inputs for calorie planning."""

from dataclasses import dataclass
from typing import Literal

Sex = Literal["male", "female"]
GoalType = Literal["surplus", "deficit"]

ACTIVITY_FACTORS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

WEEKLY_CHANGE_OPTIONS: dict[str, tuple[float, ...]] = {
    "surplus": (0.25, 0.5, 0.75, 1.0),
    "deficit": (0.25, 0.5, 0.75, 1.0),
}


@dataclass(frozen=True)
class PersonProfile:
    """Body measurements used to estimate energy needs."""

    age: int
    weight_kg: float
    height_cm: float
    sex: Sex
    activity_factor: float
    body_fat_percent: float | None = None


@dataclass(frozen=True)
class GoalSpec:
    """Desired direction and pace of weight change."""

    goal_type: GoalType
    weekly_change_kg: float
    goal_weight_kg: float
