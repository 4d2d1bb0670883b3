"""Shared fixtures and fakes."""

import asyncio
import json
from typing import Any

import pytest

from nutrition_planner.llm.base import LLMClient
from nutrition_planner.mail import MailSender
from nutrition_planner.models import Profile
from nutrition_planner.persistence import JsonMenuStore

EMAIL = "student@example.com"

PROFILE_DATA = {
    "goal": "Lose weight",
    "ageRange": "25-34",
    "gender": "Male",
    "heightCm": 180,
    "weightKg": 80,
    "activityLevel": "Moderate - 1-2 hours/week",
}


def week_payload(version: int | None = None, days: int = 7) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "days": [
            {
                "dayIndex": i,
                "label": f"Day {i}",
                "meals": [
                    {"type": "Breakfast", "name": f"Porridge {i}", "description": "Oats and fruit", "calories": 450},
                    {"type": "Lunch", "name": f"Lentil soup {i}", "description": "With bread", "calories": 700},
                    {"type": "Dinner", "name": f"Chicken rice {i}", "description": "Stir-fried", "calories": 800},
                ],
                "shoppingItems": [
                    {"product": "Oats", "quantity": "100 g"},
                    {"product": "Lentils", "quantity": "150 g"},
                ],
            }
            for i in range(1, days + 1)
        ]
    }
    if version is not None:
        payload["version"] = version
    return payload


class FakeLLM(LLMClient):
    """Records prompts and returns a canned reply."""

    def __init__(
        self,
        response: str | None = None,
        *,
        configured: bool = True,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.response = json.dumps(week_payload()) if response is None else response
        self.configured = configured
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, prompt: str, *, max_tokens: int = 8192) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class FakeMailer(MailSender):
    """Configured mailer that records messages instead of talking SMTP."""

    def __init__(self, *, ok: bool = True, error: Exception | None = None) -> None:
        super().__init__(host="smtp.test", user="menus@test", password="secret")
        self.ok = ok
        self.error = error
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, body: str) -> bool:
        self.sent.append((to, subject, body))
        if self.error is not None:
            raise self.error
        return self.ok


@pytest.fixture
def store(tmp_path):
    return JsonMenuStore(tmp_path)


@pytest.fixture
def profile() -> Profile:
    return Profile.from_request(PROFILE_DATA)
