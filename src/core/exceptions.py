"""Custom exceptions for the application."""


class ApiException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnauthorizedError(ApiException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(401, message)


class ValidationError(ApiException):
    """Request validation error."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(422, message, details)


class ReviewFailedError(ApiException):
    """A review run aborted before finishing."""

    def __init__(self, pr: str, message: str) -> None:
        super().__init__(500, f"Review failed for {pr}: {message}", {"pr": pr})


class SignatureVerificationError(UnauthorizedError):
    """Webhook signature verification failed."""

    def __init__(self, source: str = "webhook") -> None:
        super().__init__(f"Invalid {source} signature")


class ReviewError(Exception):
    """Base exception for review pipeline errors not tied to an HTTP response."""


class ConfigurationError(ReviewError):
    """A required setting is missing or invalid."""


class UnsupportedProviderError(ConfigurationError):
    """The configured AI provider is not one we can talk to."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Unsupported AI provider: {provider}")
