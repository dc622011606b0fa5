"""Shared test fixtures."""

from __future__ import annotations

import json
import random
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from archcoach.shared.llm_client import LLMClient

SAMPLE_MODEL_OUTPUT = {
    "businessArchitecture": {
        "capabilities": [
            {
                "name": "X",
                "description": "Capability X",
                "maturity": 50,
                "importance": 60,
                "processes": ["Process X"],
                "systems": ["System X"],
                "gaps": ["Gap X"],
            }
        ],
        "processes": ["Quote to cash"],
        "stakeholders": ["CFO", "CIO"],
    },
    "applicationArchitecture": {
        "applications": ["Billing"],
        "services": ["Invoice API", "Tax API", "Ledger API"],
        "interfaces": ["REST"],
    },
    "dataArchitecture": {
        "entities": ["Invoice"],
        "flows": ["Invoice to ledger", "Ledger to warehouse"],
        "governance": ["Retention"],
    },
    "technologyArchitecture": {
        "infrastructure": ["Kubernetes"],
        "platforms": ["PostgreSQL"],
        "networks": ["VPC"],
    },
    "recommendations": ["Automate invoicing"],
    "risks": ["Tax rule drift"],
    "opportunities": ["Faster close"],
    "visionTitle": "Finance Modernization",
    "visionDescription": "Modern finance stack",
    "objectives": ["Close books in 3 days"],
    "constraints": ["SOX"],
    "assumptions": ["Budget approved"],
    "timeline": [
        {"phase": "Assess", "duration": "1 month", "deliverables": ["Baseline"], "status": "completed"},
        {"phase": "Build", "duration": "4 months", "deliverables": ["Billing v2"], "status": "in-progress"},
    ],
}


def make_text_response(text: str | None):
    """Create a mock OpenAI chat completion carrying ``text``."""
    message = SimpleNamespace(content=text, tool_calls=None)
    choice = SimpleNamespace(message=message)
    return SimpleNamespace(choices=[choice], usage=SimpleNamespace(prompt_tokens=11, completion_tokens=7))


class FakeGenerator:
    """Text generator double that returns a fixed reply or raises."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def generate_text(self, prompt: str, *, model: str = "gpt-4o", max_tokens: int = 2000, on_tokens=None) -> str:
        self.calls.append({"prompt": prompt, "model": model, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def sample_output() -> dict:
    return json.loads(json.dumps(SAMPLE_MODEL_OUTPUT))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "archcoach.yml"
    cfg.write_text(
        """\
model: "gpt-4o-mini"
framework: "zachman"
output_directory: "{out}"
""".format(out=str(tmp_path / "output"))
    )
    return cfg


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Return an LLMClient with a mocked OpenAI SDK underneath."""
    client = LLMClient.__new__(LLMClient)
    client._client = AsyncMock()
    return client
