import json

import pytest
from fastapi.testclient import TestClient


ANALYSIS_PAYLOAD = {
    "matchScore": 72,
    "missingSkills": ["Kubernetes", "GraphQL"],
    "weakSkills": ["Docker"],
    "suggestedImprovements": [
        {
            "section": "Work Experience - Backend Engineer",
            "original": "Worked on APIs",
            "improved": "Built FastAPI services handling 2k req/s",
            "reason": "Quantifies impact and uses job keywords",
        }
    ],
    "atsOptimizations": ["Use standard section headers"],
    "overallFeedback": "Solid backend profile; add container orchestration experience.",
}


class FakeGeminiClient:
    """Scripted stand-in for GeminiClient: per-model list of texts or exceptions."""

    def __init__(self, script=None, default=None):
        self.script = {k: list(v) for k, v in (script or {}).items()}
        self.default = default
        self.calls = []

    async def generate_content(self, model, prompt):
        self.calls.append((model, prompt))
        queue = self.script.get(model)
        outcome = queue.pop(0) if queue else self.default
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def analysis_json():
    return json.dumps(ANALYSIS_PAYLOAD)


@pytest.fixture
def client(monkeypatch):
    """Provide a FastAPI TestClient with a fake API key and empty session state."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("CORS_ORIGINS", "*")

    from careerdesk.sessions import SESSIONS
    SESSIONS.clear()

    from careerdesk.main import app
    return TestClient(app)


@pytest.fixture
def fake_gemini(monkeypatch):
    """Route every AIService built by the API through a FakeGeminiClient."""
    from careerdesk.ai_services import AIService
    from careerdesk.api import deps

    fake = FakeGeminiClient()
    monkeypatch.setattr(deps, "get_ai_service", lambda: AIService(client=fake))
    return fake
