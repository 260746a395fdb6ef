"""Domain error classes.

Protocol-agnostic errors that represent discovery failures.
The stub HTTP API translates them to JSON responses; the pagination
controller records their codes on the session for user-facing messaging.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Contains business error information that can be translated to HTTP
    responses or to session state.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """A search request broke a business rule (page < 1, minPrice > maxPrice, ...).

    ``errors`` names the offending parameters so the stub API can report them
    field by field. The HTTP layer answers 422.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors = errors or []
        super().__init__(message, **context)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


# ==============================================================================
# Search gateway failures
# ==============================================================================


class SearchFailure(DomainError):
    """Base class for failures of a single search fetch.

    The pagination controller treats every kind identically (the session
    goes to ``error``) but keeps ``error_code`` and ``user_message`` so the
    presentation layer can word the retry affordance.
    """

    error_code: str = "SEARCH_FAILED"
    user_message: str = "Could not load products. Please try again."


class NetworkError(SearchFailure):
    """The discovery endpoint could not be reached (transport error or timeout)."""

    error_code: str = "NETWORK_ERROR"
    user_message: str = "Could not reach the store. Check your connection and try again."


class InvalidRequestError(SearchFailure):
    """The request was rejected as malformed, locally or by the backend (4xx)."""

    error_code: str = "INVALID_REQUEST"
    user_message: str = "Some filters could not be applied. Please adjust them and try again."


class ServerError(SearchFailure):
    """The backend failed (5xx) or answered with a body we could not read."""

    error_code: str = "SERVER_ERROR"
    user_message: str = "Could not load products. Please try again."
