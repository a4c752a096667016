"""Pydantic request models for the HTTP API."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bulkbuddy.domain.nutrition import NutritionItem
from bulkbuddy.domain.recipes import DIETARY_FLAGS, Ingredient, RecipeSubmission
from bulkbuddy.domain.profile import (
    ACTIVITY_FACTORS,
    WEEKLY_CHANGE_OPTIONS,
    GoalSpec,
    PersonProfile,
)

NonNegativeAmount = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class ProfileIn(BaseModel):
    """Body measurements submitted by the calculators."""

    model_config = ConfigDict(allow_inf_nan=False)

    age: int = Field(gt=0, le=120)
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    sex: Literal["male", "female"]
    activity_level: str | None = None
    activity_factor: float | None = None
    body_fat_percent: float | None = Field(default=None, ge=0, le=100)

    @model_validator(mode="after")
    def _check_activity(self) -> "ProfileIn":
        if self.activity_level is not None:
            if self.activity_level not in ACTIVITY_FACTORS:
                raise ValueError(f"Unknown activity level: {self.activity_level}")
            factor = ACTIVITY_FACTORS[self.activity_level]
            if self.activity_factor is not None and self.activity_factor != factor:
                raise ValueError("activity_level and activity_factor disagree")
            self.activity_factor = factor
        elif self.activity_factor is None:
            self.activity_factor = ACTIVITY_FACTORS["sedentary"]
        elif self.activity_factor not in ACTIVITY_FACTORS.values():
            raise ValueError(f"Unsupported activity factor: {self.activity_factor}")
        return self

    def to_domain(self) -> PersonProfile:
        """Convert to the engine's profile record."""
        return PersonProfile(
            age=self.age,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            sex=self.sex,
            activity_factor=float(self.activity_factor),
            body_fat_percent=self.body_fat_percent,
        )


class GoalIn(BaseModel):
    """Weight goal settings."""

    model_config = ConfigDict(allow_inf_nan=False)

    goal_type: Literal["surplus", "deficit"]
    weekly_change_kg: float
    goal_weight_kg: float = Field(gt=0)

    @model_validator(mode="after")
    def _check_weekly_change(self) -> "GoalIn":
        options = WEEKLY_CHANGE_OPTIONS[self.goal_type]
        if self.weekly_change_kg not in options:
            raise ValueError(
                f"weekly_change_kg must be one of {list(options)} for {self.goal_type}"
            )
        return self

    def to_domain(self) -> GoalSpec:
        """Convert to the engine's goal record."""
        return GoalSpec(
            goal_type=self.goal_type,
            weekly_change_kg=self.weekly_change_kg,
            goal_weight_kg=self.goal_weight_kg,
        )


class CalorieGoalRequest(BaseModel):
    """Profile and goal for a full calorie plan."""

    profile: ProfileIn
    goal: GoalIn


class NutritionItemIn(BaseModel):
    """Per-100 g nutrient values; omitted fields count as zero."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    sugar_g: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)
    sodium_mg: float = Field(default=0.0, ge=0)
    micronutrients: dict[str, NonNegativeAmount] = Field(default_factory=dict)

    def to_domain(self) -> NutritionItem:
        """Convert to the engine's nutrition record."""
        return NutritionItem(**self.model_dump())


class AggregateRequest(BaseModel):
    """Items with the grams eaten of each."""

    model_config = ConfigDict(allow_inf_nan=False)

    items: list[NutritionItemIn]
    servings_g: list[NonNegativeAmount]


class MealPlanEntryIn(BaseModel):
    """Meal plan entry payload; field checks happen in the service."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_id: str | int | None = Field(default=None, alias="recipeId")
    source: str | None = None
    date: str | None = None
    meal_type: str | None = Field(default=None, alias="mealType")


class IngredientIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float = Field(ge=0)
    unit: str = ""
    name: str


class RecipeSubmissionIn(BaseModel):
    """A user recipe sent in for moderation."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    title: str
    instructions: str
    ingredients: list[IngredientIn]
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    sugar: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    sodium: float = Field(default=0.0, ge=0)
    micronutrients: dict[str, NonNegativeAmount] = Field(default_factory=dict)
    servings: int = Field(default=1, ge=1)
    health_score: int = Field(default=0, ge=0, le=100, alias="healthScore")
    diet_type: str = Field(default="all", alias="dietType")
    cuisine: str | None = None
    meal_type: str | None = Field(default=None, alias="mealType")
    max_prep_time: int | None = Field(default=None, ge=0, alias="maxPrepTime")
    flags: list[str] = Field(default_factory=list)
    image: str | None = None

    @model_validator(mode="after")
    def _check_flags(self) -> "RecipeSubmissionIn":
        unknown = sorted(set(self.flags) - set(DIETARY_FLAGS))
        if unknown:
            raise ValueError(f"Unknown dietary flags: {', '.join(unknown)}")
        return self

    def to_domain(self) -> RecipeSubmission:
        """Convert to the service's submission record."""
        return RecipeSubmission(
            title=self.title,
            instructions=self.instructions,
            ingredients=[
                Ingredient(amount=item.amount, unit=item.unit, name=item.name)
                for item in self.ingredients
            ],
            nutrition=NutritionItem(
                calories=self.calories,
                protein_g=self.protein,
                fat_g=self.fat,
                carbs_g=self.carbs,
                sugar_g=self.sugar,
                fiber_g=self.fiber,
                sodium_mg=self.sodium,
                micronutrients=dict(self.micronutrients),
            ),
            servings=self.servings,
            health_score=self.health_score,
            diet_type=self.diet_type,
            cuisine=self.cuisine,
            meal_type=self.meal_type,
            max_prep_time=self.max_prep_time,
            flags=frozenset(self.flags),
            image=self.image,
        )
