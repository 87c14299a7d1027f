"""
Error types and the provider error classifier.

classify_error() decides whether a failed model call should fall through to
the next candidate model and produces the message shown to the user.
"""
from dataclasses import dataclass
from typing import List, Optional


class ConfigurationError(RuntimeError):
    """Raised when the provider credential is missing."""


class ProviderError(Exception):
    """A failed generate-content call, with the HTTP status when one was returned."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class EmptyResponseError(ProviderError):
    """The provider answered but produced no text."""


class ResponseValidationError(ValueError):
    """The provider answered with text that does not have the expected shape."""


@dataclass(frozen=True)
class Classification:
    should_retry: bool
    user_message: str


@dataclass(frozen=True)
class FallbackAttemptError:
    model_identifier: str
    http_status: Optional[int]
    provider_message: str
    classification: Classification


class FallbackError(Exception):
    """Final error surfaced after the candidate list stopped or ran out."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 attempts: Optional[List[FallbackAttemptError]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.attempts = attempts or []


def _error_message(error: BaseException) -> str:
    return getattr(error, "message", None) or str(error)


def _error_status(error: BaseException) -> int:
    status = getattr(error, "status", None)
    return status if isinstance(status, int) else 0


def classify_error(error: BaseException, model_id: str) -> Classification:
    """Map a failed attempt to retry/abort. First matching rule wins."""
    msg = _error_message(error)
    status = _error_status(error)

    if status == 400 and "INVALID_ARGUMENT" in msg:
        return Classification(False, (
            "Invalid request format. Please check your input and try again. If the issue "
            "persists, the document might be too large or contain unsupported content."
        ))

    if status == 400 and "FAILED_PRECONDITION" in msg:
        return Classification(False, (
            "Gemini API is not available in your region with the free tier. Please enable "
            "billing in Google AI Studio or use a VPN."
        ))

    if status == 403 or "PERMISSION_DENIED" in msg or "403" in msg:
        return Classification(False, (
            "API key permission denied. Please verify your API key is valid and has the "
            "required permissions in Google AI Studio."
        ))

    if status == 404 or "NOT_FOUND" in msg or "not found" in msg:
        return Classification(False, (
            f'Model "{model_id}" not found. This model may not be available in your API '
            "version. Please try a different model."
        ))

    if status == 429 or "RESOURCE_EXHAUSTED" in msg or "429" in msg or "quota" in msg:
        return Classification(True, (
            f"Rate limit exceeded for {model_id}. Trying fallback model with higher rate limit..."
        ))

    if status == 500 or "INTERNAL" in msg or "500" in msg:
        return Classification(True, (
            "Internal server error. Your input might be too long. Trying a different model "
            "or reduce input size..."
        ))

    if status == 503 or "UNAVAILABLE" in msg or "503" in msg or "overloaded" in msg:
        return Classification(True, f"{model_id} is temporarily overloaded. Trying fallback model...")

    if status == 504 or "DEADLINE_EXCEEDED" in msg or "504" in msg or "timeout" in msg:
        return Classification(False, (
            "Request timeout. Your input is too large to process. Please reduce the size of "
            "your resume or job description and try again."
        ))

    if isinstance(error, EmptyResponseError):
        return Classification(True, f"{model_id} returned an empty response. Trying fallback model...")

    return Classification(False, f"Unexpected error: {msg or 'Unknown error occurred'}")
