"""Errors raised by the food search engine."""


class FoodSearchError(Exception):
    """Base class for food search failures."""


class ConfigurationError(FoodSearchError):
    """Raised when no provider API key can be resolved."""


class ProviderError(FoodSearchError):
    """Raised when the food provider fails or returns a non-success response."""

    def __init__(
        self, message: str, *, status: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is None:
            return base
        return f"{base} (status={self.status})"
