"""Meal slot calorie targets."""

from dataclasses import dataclass

SLOT_NAMES = ("breakfast", "lunch", "dinner")


@dataclass(frozen=True)
class MealSlotConstants:
    """Share of daily calories per slot and the allowed variance."""

    breakfast_share: float = 0.25
    lunch_share: float = 0.35
    dinner_share: float = 0.40
    variance: float = 0.10


DEFAULT_SLOT_CONSTANTS = MealSlotConstants()


@dataclass(frozen=True)
class MealSlot:
    """Calorie target for one meal with its tolerance band."""

    target: int
    min: int
    max: int

    def contains(self, calories: float) -> bool:
        """Return True if calories fall inside the band."""
        return self.min <= calories <= self.max


@dataclass(frozen=True)
class MealSlotTargets:
    """Breakfast, lunch and dinner targets for a daily total."""

    total: float
    breakfast: MealSlot
    lunch: MealSlot
    dinner: MealSlot

    def slot(self, name: str) -> MealSlot:
        """Return a slot by name."""
        if name not in SLOT_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def slot_for(self, calories: float) -> list[str]:
        """Return the slot names whose band contains the given calories."""
        return [name for name in SLOT_NAMES if self.slot(name).contains(calories)]
