"""Domain models for user-submitted recipes and recipe search."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from bulkbuddy.domain.nutrition import NutritionItem

DEFAULT_RECIPE_IMAGE = "/default-food.jpg"
PENDING = "pending"
APPROVED = "approved"

MICRONUTRIENT_COLUMNS = (
    "vitamin_a",
    "vitamin_b6",
    "vitamin_b12",
    "vitamin_c",
    "vitamin_e",
    "vitamin_k",
    "folate",
    "calcium",
    "iron",
    "magnesium",
    "phosphorus",
    "potassium",
    "zinc",
)

DIETARY_FLAGS = (
    "vegetarian",
    "vegan",
    "gluten_free",
    "dairy_free",
    "low_fodmap",
    "egg_free",
    "peanut_free",
    "soy_free",
    "tree_nut_free",
    "shellfish_free",
    "sustainable",
    "very_healthy",
    "budget_friendly",
)

# Spoonacular filter values mapped to recipe flag columns
DIET_FLAGS = {
    "vegetarian": "vegetarian",
    "vegan": "vegan",
    "glutenFree": "gluten_free",
    "dairyFree": "dairy_free",
    "lowFodmap": "low_fodmap",
}
INTOLERANCE_FLAGS = {
    "dairy": "dairy_free",
    "gluten": "gluten_free",
    "peanut": "peanut_free",
    "soy": "soy_free",
    "treeNut": "tree_nut_free",
    "shellfish": "shellfish_free",
}

# (label, NutritionItem field or micronutrient key, unit) in display order
NUTRIENT_LABELS = (
    ("Calories", "calories", "kcal"),
    ("Protein", "protein_g", "g"),
    ("Fat", "fat_g", "g"),
    ("Carbohydrates", "carbs_g", "g"),
    ("Sugar", "sugar_g", "g"),
    ("Fiber", "fiber_g", "g"),
    ("Vitamin B6", "vitamin_b6", "mg"),
    ("Folate", "folate", "mcg"),
    ("Vitamin B12", "vitamin_b12", "mcg"),
    ("Vitamin C", "vitamin_c", "mg"),
    ("Vitamin K", "vitamin_k", "mcg"),
    ("Vitamin E", "vitamin_e", "mg"),
    ("Vitamin A", "vitamin_a", "IU"),
    ("Sodium", "sodium_mg", "mg"),
    ("Zinc", "zinc", "mg"),
    ("Iron", "iron", "mg"),
    ("Phosphorus", "phosphorus", "mg"),
    ("Magnesium", "magnesium", "mg"),
    ("Potassium", "potassium", "mg"),
    ("Calcium", "calcium", "mg"),
)


@dataclass(frozen=True)
class Ingredient:
    """One ingredient line of a submitted recipe."""

    amount: float
    unit: str
    name: str

    def line(self) -> str:
        return " ".join(part for part in (f"{self.amount:g}", self.unit, self.name) if part)


@dataclass(frozen=True)
class RecipeSubmission:
    """A recipe sent in by a user, before moderation."""

    title: str
    instructions: str
    ingredients: list[Ingredient]
    nutrition: NutritionItem
    servings: int = 1
    health_score: int = 0
    diet_type: str = "all"
    cuisine: str | None = None
    meal_type: str | None = None
    max_prep_time: int | None = None
    flags: frozenset[str] = frozenset()
    image: str | None = None


@dataclass(frozen=True)
class UserRecipe:
    """A stored recipe row."""

    id: str
    user_id: UUID | None
    title: str
    instructions: str
    ingredients: list[str]
    nutrition: NutritionItem
    source: str = "user"
    status: str = PENDING
    image: str | None = None
    servings: int = 1
    health_score: int = 0
    diet_type: str = "all"
    cuisine: str | None = None
    meal_type: str | None = None
    max_prep_time: int | None = None
    flags: frozenset[str] = frozenset()
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserRecipeCriteria:
    """Filters applied to approved user recipes during search."""

    title_query: str | None = None
    required_flags: tuple[str, ...] = ()
    meal_type: str | None = None
    minimums: dict[str, float] = field(default_factory=dict)
    maximums: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class RecipeSearchResult:
    """Spoonacular hits followed by matching approved user recipes."""

    spoonacular: list[dict[str, object]]
    user: list[UserRecipe] = field(default_factory=list)
