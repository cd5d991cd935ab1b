"""
Mealwise - Error types.

Every failure in the planning flow is terminal for the request. Each error
carries the HTTP status the web layer answers with.
"""


class PlannerError(Exception):
    """Base class for request-terminating planner errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInputError(PlannerError):
    """A required input (household id, selection, meal) was not supplied."""

    status_code = 400


class InvalidInputError(PlannerError):
    """An input was supplied but is not a valid day, slot or rating."""

    status_code = 400


class NoEligibleItemsError(PlannerError):
    """The household has no green-rated items to plan from."""

    status_code = 400


class NotFoundError(PlannerError):
    status_code = 404


class ConflictError(PlannerError):
    status_code = 409


class MalformedResponseError(PlannerError):
    """The provider answered with text that is not the JSON we asked for."""

    status_code = 500


class PersistenceError(PlannerError):
    status_code = 500


class GenerationError(PlannerError):
    """The generation provider call itself failed."""

    status_code = 502
