"""Sequential model fallback: try each candidate until one succeeds or an error is terminal."""
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, List, Sequence, TypeVar

from .errors import FallbackAttemptError, FallbackError, classify_error
from .models import ModelDescriptor

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_UNAVAILABLE = "All Gemini models are currently unavailable. Please try again later."


@dataclass
class FallbackResult(Generic[T]):
    value: T
    model_used: str
    was_fallback: bool
    attempts: List[FallbackAttemptError] = field(default_factory=list)


async def run_with_fallback(
    candidates: Sequence[ModelDescriptor],
    build_prompt: Callable[[ModelDescriptor], str],
    call_provider: Callable[[str, str], Awaitable[str]],
    parse: Callable[[str], T],
) -> FallbackResult[T]:
    """
    Try candidates in order. Each call is awaited before the next starts.

    A failure (from the provider or from ``parse``) is classified; retryable
    failures move on to the next candidate, anything else stops the run with
    the classified message. Running out of candidates on a retryable failure
    reports the last provider message.
    """
    if not candidates:
        raise FallbackError("No models available to handle the request.")

    attempts: List[FallbackAttemptError] = []
    first_attempted = candidates[0].identifier

    for i, model in enumerate(candidates):
        label = "Primary" if i == 0 else f"Fallback {i}"
        try:
            logger.info(f"Attempting to use model: {model.identifier} ({label})")
            text = await call_provider(model.identifier, build_prompt(model))
            value = parse(text)
        except Exception as e:
            classification = classify_error(e, model.identifier)
            status = getattr(e, "status", None)
            message = getattr(e, "message", None) or str(e)
            attempts.append(FallbackAttemptError(
                model_identifier=model.identifier,
                http_status=status,
                provider_message=message,
                classification=classification,
            ))
            logger.error(f"Failed with model {model.identifier} ({label}): {message}")

            if not classification.should_retry:
                raise FallbackError(classification.user_message, status, attempts) from e
            if i < len(candidates) - 1:
                logger.info(classification.user_message)
                continue

            logger.error(f"All models failed. Last error: {message}")
            raise FallbackError(f"{ALL_UNAVAILABLE} {message}", status, attempts) from e

        logger.info(f"Successfully used model: {model.identifier} ({label})")
        return FallbackResult(
            value=value,
            model_used=model.identifier,
            was_fallback=model.identifier != first_attempted,
            attempts=attempts,
        )

    # unreachable: the loop either returns or raises
    raise FallbackError(ALL_UNAVAILABLE, None, attempts)
