"""Domain errors raised by BulkBuddy services."""


class BulkBuddyError(Exception):
    """Base error for service failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidMealPlanRequest(BulkBuddyError):
    """Meal plan generation parameters were rejected."""


class MealPlanNotFound(BulkBuddyError):
    """No meal plan matches the requested filters."""


class InvalidInput(BulkBuddyError):
    """One or more submitted fields failed validation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(", ".join(errors))
        self.errors = errors


class MealPlanValidationError(InvalidInput):
    """A meal plan entry failed validation."""


class RecipeValidationError(InvalidInput):
    """A recipe submission or search filter failed validation."""


class RecipeNotFound(BulkBuddyError):
    """A referenced recipe does not exist."""


class RecipeForbidden(BulkBuddyError):
    """The caller may not modify this recipe."""


class MealPlanEntryNotFound(BulkBuddyError):
    """A meal plan entry does not exist for the user."""


class UpstreamError(BulkBuddyError):
    """A third-party nutrition API call failed."""

    def __init__(self, message: str, details: object | None = None) -> None:
        super().__init__(message)
        self.details = details
