"""Errors raised by the swipe session core."""


class MealPlanError(Exception):
    """Base error for invalid requests against a plan session."""

    code = "MEAL_PLAN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateDecisionError(MealPlanError):
    """A meal already has an active decision."""

    code = "DUPLICATE_DECISION"

    def __init__(self, meal_id: str) -> None:
        super().__init__(f"Meal '{meal_id}' already has an active decision")
        self.meal_id = meal_id


class InvalidStrengthError(MealPlanError):
    """Decision strength is outside the 1-5 range."""

    code = "INVALID_STRENGTH"

    def __init__(self, strength: object) -> None:
        super().__init__(f"Strength must be an integer from 1 to 5, got {strength!r}")
        self.strength = strength


class InvalidTargetError(MealPlanError):
    """Goal target is negative or above the weekly maximum."""

    code = "INVALID_TARGET"

    def __init__(self, target: object, maximum: int) -> None:
        super().__init__(
            f"Target must be an integer from 0 to {maximum}, got {target!r}"
        )
        self.target = target
        self.maximum = maximum


class StaleDecisionError(MealPlanError):
    """Decision targets a meal that is not the current candidate."""

    code = "STALE_DECISION"


class NotAcceptedError(MealPlanError):
    """Meal is not currently an accepted decision."""

    code = "NOT_ACCEPTED"

    def __init__(self, meal_id: str) -> None:
        super().__init__(f"Meal '{meal_id}' is not an accepted meal")
        self.meal_id = meal_id


class NotFoundError(MealPlanError):
    """Meal or decision does not exist."""

    code = "NOT_FOUND"


class ReconciliationFailedError(MealPlanError):
    """Retraction batch could not be applied as a whole."""

    code = "RECONCILIATION_FAILED"


class PlanNotReadyError(MealPlanError):
    """Plan cannot be finalized in the current state."""

    code = "PLAN_NOT_READY"


class InvalidDirectionError(MealPlanError):
    """Decision direction is not accept, reject or defer."""

    code = "INVALID_DIRECTION"

    def __init__(self, direction: object) -> None:
        super().__init__(f"Unknown swipe direction {direction!r}")
        self.direction = direction
