"""Domain error types."""


class ConfigurationError(ValueError):
    """Raised when nutrient lookup data is unusable."""


class NotFoundError(LookupError):
    """Base class for missing records."""


class UserNotFoundError(NotFoundError):
    """Raised when a user does not exist."""


class PlanNotFoundError(NotFoundError):
    """Raised when no matching cycle plan exists."""


class MealPlanNotFoundError(NotFoundError):
    """Raised when a cycle plan has no meal plan for a date."""


class SummaryNotFoundError(NotFoundError):
    """Raised when a cycle plan has no generated summary."""


class RestrictionWindowClosedError(ValueError):
    """Raised when a diet-restriction check-in falls after the first month."""


class BodyMetricsNotFoundError(NotFoundError):
    """Raised when a user has no measurement for a date."""
