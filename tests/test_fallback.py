import asyncio
import json

import pytest

from careerdesk.errors import EmptyResponseError, FallbackError, ProviderError
from careerdesk.fallback import run_with_fallback
from careerdesk.models import ModelDescriptor
from careerdesk.validators import parse_analysis_response, validate_proposal_text

from .conftest import FakeGeminiClient

A = ModelDescriptor("model-a", "A", 3, "")
B = ModelDescriptor("model-b", "B", 3, "")
C = ModelDescriptor("model-c", "C", 3, "")


def run(candidates, fake, parse=validate_proposal_text):
    return asyncio.run(run_with_fallback(candidates, lambda m: "prompt", fake.generate_content, parse))


def test_first_candidate_success_is_not_fallback():
    fake = FakeGeminiClient({"model-a": ["hello"]})
    result = run([A, B, C], fake)
    assert result.value == "hello"
    assert result.model_used == "model-a"
    assert result.was_fallback is False
    assert [m for m, _ in fake.calls] == ["model-a"]


def test_retryable_error_falls_back_and_stops_at_success():
    fake = FakeGeminiClient({
        "model-a": [ProviderError("[503 UNAVAILABLE] overloaded", 503)],
        "model-b": ["from b"],
        "model-c": ["from c"],
    })
    result = run([A, B, C], fake)
    assert result.value == "from b"
    assert result.model_used == "model-b"
    assert result.was_fallback is True
    assert [m for m, _ in fake.calls] == ["model-a", "model-b"]
    assert len(result.attempts) == 1
    assert result.attempts[0].http_status == 503


def test_non_retryable_error_aborts_immediately():
    fake = FakeGeminiClient({
        "model-a": [ProviderError("[403 PERMISSION_DENIED] bad key", 403)],
        "model-b": ["never"],
    })
    with pytest.raises(FallbackError) as info:
        run([A, B, C], fake)
    assert "permission denied" in info.value.message
    assert info.value.status_code == 403
    assert [m for m, _ in fake.calls] == ["model-a"]


def test_exhausted_candidates_report_last_provider_message():
    fake = FakeGeminiClient({
        "model-a": [ProviderError("[429 RESOURCE_EXHAUSTED] a is busy", 429)],
        "model-b": [ProviderError("[500 INTERNAL] b broke", 500)],
        "model-c": [ProviderError("[503 UNAVAILABLE] c is overloaded", 503)],
    })
    with pytest.raises(FallbackError) as info:
        run([A, B, C], fake)
    assert info.value.message.startswith("All Gemini models are currently unavailable.")
    assert "c is overloaded" in info.value.message
    assert info.value.status_code == 503
    assert [a.model_identifier for a in info.value.attempts] == ["model-a", "model-b", "model-c"]


def test_json_parse_failure_is_not_retried(analysis_json):
    # A malformed JSON body on a successful call stops the run like any unknown error
    fake = FakeGeminiClient({"model-a": ["{not json"], "model-b": [analysis_json]})
    with pytest.raises(FallbackError) as info:
        run([A, B], fake, parse=parse_analysis_response)
    assert info.value.message.startswith("Unexpected error:")
    assert info.value.status_code is None
    assert [m for m, _ in fake.calls] == ["model-a"]


def test_shape_mismatch_is_not_retried():
    fake = FakeGeminiClient({"model-a": [json.dumps({"matchScore": "high"})], "model-b": ["{}"]})
    with pytest.raises(FallbackError) as info:
        run([A, B], fake, parse=parse_analysis_response)
    assert "Invalid response structure" in info.value.message
    assert len(fake.calls) == 1


def test_empty_proposal_falls_back():
    fake = FakeGeminiClient({"model-a": ["   \n"], "model-b": ["  real text  "]})
    result = run([A, B], fake)
    assert result.value == "real text"
    assert result.was_fallback is True
    assert isinstance(EmptyResponseError("x"), ProviderError)


def test_prompt_built_per_candidate():
    fake = FakeGeminiClient({"model-a": [ProviderError("quota", 429)], "model-b": ["ok"]})
    asyncio.run(run_with_fallback(
        [A, B], lambda m: f"prompt for {m.identifier}", fake.generate_content, validate_proposal_text
    ))
    assert [p for _, p in fake.calls] == ["prompt for model-a", "prompt for model-b"]


def test_empty_candidate_list():
    with pytest.raises(FallbackError):
        run([], FakeGeminiClient())
