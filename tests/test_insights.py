import json

import requests

from takween.integrations import insights
from takween.models import Employee, Role, Task, TaskStatus


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.body


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client():
    return insights.InsightsClient("key", "gemini-test", "https://example.test/v1beta/", timeout_s=5)


def _employee():
    return Employee(id=1, name="Sara", role=Role.DEPT_MANAGER, department_id="interior", kpi=88)


def test_generate_posts_to_the_model_endpoint(monkeypatch):
    calls = []

    def fake_post(url, params=None, headers=None, json=None, timeout=None):
        calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        return FakeResponse(_reply("hello"))

    monkeypatch.setattr(insights.requests, "post", fake_post)

    assert _client().generate("hi", json_output=True) == "hello"
    assert calls[0]["url"] == "https://example.test/v1beta/models/gemini-test:generateContent"
    assert calls[0]["params"] == {"key": "key"}
    assert calls[0]["timeout"] == 5
    assert calls[0]["json"]["generationConfig"] == {"responseMimeType": "application/json"}


def test_analysis_returns_model_text(monkeypatch):
    monkeypatch.setattr(insights.requests, "post", lambda *a, **kw: FakeResponse(_reply(" Strong delivery. ")))
    tasks = [Task(title="Suite", status=TaskStatus.COMPLETED, estimated_hours=8, actual_hours=6, kpi_points=40)]

    assert insights.analyze_performance(_employee(), tasks, client=_client()) == "Strong delivery."


def test_analysis_falls_back_on_network_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(insights.requests, "post", boom)
    assert insights.analyze_performance(_employee(), [], client=_client()) == insights.FALLBACK_ANALYSIS


def test_analysis_falls_back_on_http_error_and_bad_body(monkeypatch):
    monkeypatch.setattr(insights.requests, "post", lambda *a, **kw: FakeResponse({}, status_code=500))
    assert insights.analyze_performance(_employee(), [], client=_client()) == insights.FALLBACK_ANALYSIS

    monkeypatch.setattr(insights.requests, "post", lambda *a, **kw: FakeResponse({"candidates": []}))
    assert insights.analyze_performance(_employee(), [], client=_client()) == insights.FALLBACK_ANALYSIS


def test_no_api_key_means_fallback(monkeypatch):
    monkeypatch.setattr(insights.Settings, "GEMINI_API_KEY", "")
    assert insights.InsightsClient.from_settings() is None
    assert insights.analyze_performance(_employee(), []) == insights.FALLBACK_ANALYSIS
    assert insights.suggest_tasks("Design a lobby") == []


def test_suggestions_are_normalized(monkeypatch):
    raw = json.dumps([
        {"title": "Survey site", "description": "Measure", "priority": "high"},
        {"title": "Moodboard", "priority": "URGENT"},
        {"title": "   "},
        "not an object",
    ])
    monkeypatch.setattr(insights.requests, "post", lambda *a, **kw: FakeResponse(_reply(raw)))

    suggestions = insights.suggest_tasks("Lobby redesign", client=_client())

    assert suggestions == [
        {"title": "Survey site", "description": "Measure", "priority": "HIGH"},
        {"title": "Moodboard", "description": "", "priority": "MEDIUM"},
    ]


def test_suggestions_with_invalid_json_are_empty(monkeypatch):
    monkeypatch.setattr(insights.requests, "post", lambda *a, **kw: FakeResponse(_reply("not json")))
    assert insights.suggest_tasks("Lobby redesign", client=_client()) == []
