"""Error taxonomy for the assistant.

Every error raised by the core carries the HTTP status and error code the API
layer answers with, so routes never have to branch on exception types.
"""

from fastapi import status


class AssistantError(Exception):
    """Base class for errors surfaced to the user."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "ASSISTANT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AssistantError):
    """No AI provider has a credential configured."""

    error_code = "NOT_CONFIGURED"


class EditValidationError(AssistantError):
    """Request rejected before any provider I/O."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_REQUEST"


class CompletionError(AssistantError):
    """A provider call failed.

    Attributes:
        provider: Value of the provider that failed, if known.
        is_auth_failure: True when switching providers might fix the failure.
    """

    is_auth_failure: bool = False

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class AuthFailure(CompletionError):
    """The provider rejected the credential (HTTP 401 or equivalent message)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_FAILURE"
    is_auth_failure = True


class ProviderError(CompletionError):
    """Any other provider-side failure: rate limit, outage, timeout, bad payload."""

    error_code = "PROVIDER_ERROR"


class TransportError(AssistantError):
    """The assistant API answered with an error or could not be reached."""

    error_code = "TRANSPORT_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


AUTH_ERROR_MARKERS = (
    "incorrect api key",
    "invalid api key",
    "unauthorized",
)


def is_auth_error(status_code: int | None, message: str | None) -> bool:
    """Classify a provider failure as authentication-related.

    Args:
        status_code: HTTP status reported by the provider, if any.
        message: Raw provider error message.

    Returns:
        True for HTTP 401 or a message containing a known auth marker.
    """
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return True
    lowered = (message or "").lower()
    return any(marker in lowered for marker in AUTH_ERROR_MARKERS)
