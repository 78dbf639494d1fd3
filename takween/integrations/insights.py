# takween/integrations/insights.py
"""Client for the generative text API behind the AI insight buttons.

The service is decorative: every failure turns into a fallback value and is
only logged.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from takween.config.settings import Settings
from takween.models.employee import Employee
from takween.models.task import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

FALLBACK_ANALYSIS = "Performance analysis is unavailable right now. Please try again later."


class InsightsClient:
    def __init__(self, api_key: str, model: str, base_url: str, timeout_s: float = 20.0):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s

    @classmethod
    def from_settings(cls) -> Optional["InsightsClient"]:
        if not Settings.GEMINI_API_KEY:
            return None
        return cls(
            Settings.GEMINI_API_KEY,
            Settings.GEMINI_MODEL,
            Settings.GEMINI_BASE_URL,
            Settings.GEMINI_TIMEOUT_SECONDS,
        )

    def generate(self, prompt: str, json_output: bool = False) -> str:
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if json_output:
            payload["generationConfig"] = {"responseMimeType": "application/json"}

        r = requests.post(
            f"{self.base_url}/models/{self.model}:generateContent",
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout_s,
        )
        r.raise_for_status()
        body = r.json()
        return body["candidates"][0]["content"]["parts"][0]["text"]


def _performance_prompt(employee: Employee, tasks: Iterable[Task]) -> str:
    lines = [
        f"- {task.title}: status {TaskStatus(task.status).value}, "
        f"{task.actual_hours or 0}/{task.estimated_hours or 0} hours, {task.kpi_points or 0} KPI points"
        for task in tasks
    ]
    return (
        "You are an HR analyst at an engineering firm. Write a short performance review "
        f"for {employee.name} (role {employee.role.value}, KPI {employee.kpi}/100). "
        "Mention strengths, risks and one concrete recommendation.\n"
        "Tasks:\n" + ("\n".join(lines) if lines else "- no tasks assigned")
    )


def analyze_performance(employee: Employee, tasks: Iterable[Task], client: Optional[InsightsClient] = None) -> str:
    """Free-text performance review, FALLBACK_ANALYSIS on any failure"""
    client = client or InsightsClient.from_settings()
    if client is None:
        logger.info("Insights API key not configured, returning fallback analysis")
        return FALLBACK_ANALYSIS
    try:
        text = client.generate(_performance_prompt(employee, list(tasks)))
        return text.strip() or FALLBACK_ANALYSIS
    except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as e:
        logger.error(f"Performance analysis failed for employee {employee.id}: {e}")
        return FALLBACK_ANALYSIS


def suggest_tasks(goal: str, client: Optional[InsightsClient] = None) -> List[dict]:
    """Task ideas for a goal as [{title, description, priority}], empty on failure"""
    client = client or InsightsClient.from_settings()
    if client is None:
        return []
    prompt = (
        "Break the following engineering goal into 3 to 5 actionable tasks. "
        "Answer with a JSON array of objects with keys title, description and priority "
        "(LOW, MEDIUM or HIGH).\nGoal: " + goal
    )
    try:
        raw = json.loads(client.generate(prompt, json_output=True))
    except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as e:
        logger.error(f"Task suggestion request failed: {e}")
        return []

    if not isinstance(raw, list):
        return []

    suggestions = []
    for item in raw:
        if not isinstance(item, dict) or not str(item.get("title", "")).strip():
            continue
        priority = str(item.get("priority", "")).upper()
        suggestions.append({
            "title": str(item["title"]).strip(),
            "description": str(item.get("description", "")).strip(),
            "priority": priority if priority in TaskPriority.__members__ else TaskPriority.MEDIUM.value,
        })
    return suggestions
