"""
Thin async client for the Gemini generateContent REST endpoint.
Failures are raised as ProviderError carrying the HTTP status and the
provider's machine-readable status string (RESOURCE_EXHAUSTED, ...).
"""
import os
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def get_api_key() -> Optional[str]:
    return os.getenv("GEMINI_API_KEY") or None


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.api_key = api_key or get_api_key()
        if not self.api_key:
            raise ConfigurationError(
                "Gemini API key is not configured. Please add GEMINI_API_KEY to your .env file."
            )
        self.base_url = (base_url or os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = timeout or float(os.getenv("GEMINI_TIMEOUT", "60"))

    async def generate_content(self, model: str, prompt: str) -> str:
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        url = f"{self.base_url}/models/{model}:generateContent"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderError(f"Request timeout while calling {model}: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Network error while calling {model}: {e}") from e

        if response.status_code != 200:
            raise _provider_error(response)

        return _extract_text(response.json())


def _provider_error(response: httpx.Response) -> ProviderError:
    """Build an error like '[429 RESOURCE_EXHAUSTED] Quota exceeded ...' from the Google error envelope."""
    status = response.status_code
    try:
        err = response.json().get("error", {})
    except ValueError:
        err = {}
    if not isinstance(err, dict):
        err = {}
    code_name = err.get("status") or response.reason_phrase
    message = err.get("message") or response.text
    return ProviderError(f"[{status} {code_name}] {message}".strip(), status)


def _extract_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        reason = (data.get("promptFeedback") or {}).get("blockReason", "UNKNOWN")
        raise ProviderError(f"Text not available. Response was blocked due to {reason}")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [p.get("text", "") for p in parts if isinstance(p, dict)]
    if not texts and candidates[0].get("finishReason") not in (None, "STOP"):
        raise ProviderError(
            f"Text not available. Response was blocked due to {candidates[0]['finishReason']}"
        )
    return "".join(texts)
