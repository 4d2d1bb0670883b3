"""Error taxonomy.

Generation-time errors (extraction, validation, provider, not configured) are
caught by the pipeline and turned into a fallback menu with a warning.
Caller-level errors are raised before generation starts and reach the HTTP layer.
"""


class NutritionPlannerError(Exception):
    """Base class for all planner errors."""


class ResponseError(NutritionPlannerError):
    """Provider output could not be turned into a menu."""


class ExtractionError(ResponseError):
    """No parsable JSON object could be located in the provider text."""


class ValidationError(ResponseError):
    """Parsed payload lacks the required `days` list."""


class ProviderError(NutritionPlannerError):
    """Network, timeout or quota failure from the generative service."""


class NotConfiguredError(ProviderError):
    """No provider credentials available."""


class UserNotFoundError(NutritionPlannerError):
    def __init__(self, email: str) -> None:
        super().__init__("User not found.")
        self.email = email


class UserExistsError(NutritionPlannerError):
    def __init__(self, email: str) -> None:
        super().__init__("User with this email already exists.")
        self.email = email


class ProfileIncompleteError(NutritionPlannerError):
    """Profile lacks required fields."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Profile is missing required fields: {', '.join(missing)}")
        self.missing = missing
