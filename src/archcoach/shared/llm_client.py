"""Async OpenAI wrapper exposing the single text-generation call the agents need.

Agents depend only on ``generate_text(prompt, model=..., max_tokens=...)``;
any object with that coroutine (``DryRunClient``, a test double) can stand
in for ``LLMClient``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Protocol

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

# Model used when the config does not name one
DEFAULT_MODEL = "gpt-4o"

TokensCallback = Callable[[int, int], None]
"""Called with (input_tokens, output_tokens) when a completion finishes."""


class TextGenerator(Protocol):
    """The narrow contract the agents rely on."""

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 2000,
        on_tokens: TokensCallback | None = None,
    ) -> str: ...


class LLMClient:
    """Thin async wrapper around the OpenAI SDK.

    Makes exactly one request per call. Errors from the SDK (connection,
    rate limit, provider errors) propagate to the caller, which decides
    what to substitute.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self._client = AsyncOpenAI(api_key=api_key)

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 2000,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        """Send ``prompt`` as a single user message and return the reply text.

        Returns ``""`` when the provider sends back no choices or no content.
        """
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        logger.debug("generate_text: model=%s max_tokens=%d prompt=%d chars", model, max_tokens, len(prompt))

        response = await self._client.chat.completions.create(**kwargs)
        usage = getattr(response, "usage", None)
        if on_tokens and usage:
            on_tokens(getattr(usage, "prompt_tokens", 0), getattr(usage, "completion_tokens", 0))
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


# ======================================================================
# Dry-run mock client — zero API calls
# ======================================================================

_DRY_RUN_ANALYSIS = json.dumps({
    "businessArchitecture": {
        "capabilities": [
            {
                "name": "Order Management",
                "description": "Capture and fulfil customer orders",
                "maturity": 65,
                "importance": 90,
                "processes": ["Order capture", "Fulfilment"],
                "systems": ["ERP"],
                "gaps": ["Manual order routing"],
            },
            {
                "name": "Customer Insight",
                "description": "Understand customer behaviour across channels",
                "maturity": 40,
                "importance": 85,
                "processes": ["Segmentation"],
                "systems": ["CRM", "Data Warehouse"],
                "gaps": ["No single customer view"],
            },
        ],
        "processes": ["Order to cash", "Lead to customer"],
        "stakeholders": ["COO", "Head of Sales", "Enterprise Architect"],
    },
    "applicationArchitecture": {
        "applications": ["ERP", "CRM"],
        "services": ["Order API", "Customer Profile Service"],
        "interfaces": ["REST", "Event bus"],
    },
    "dataArchitecture": {
        "entities": ["Order", "Customer"],
        "flows": ["Order events to warehouse"],
        "governance": ["Data ownership per domain"],
    },
    "technologyArchitecture": {
        "infrastructure": ["Kubernetes cluster"],
        "platforms": ["Managed PostgreSQL"],
        "networks": ["Private VPC"],
    },
    "recommendations": ["Introduce an order orchestration service"],
    "risks": ["ERP customisation limits agility"],
    "opportunities": ["Real-time customer insight"],
    "visionTitle": "Dry-run Architecture Vision",
    "visionDescription": "Canned analysis produced without calling the model.",
    "objectives": ["Shorten order cycle time"],
    "constraints": ["Keep the existing ERP"],
    "assumptions": ["Cloud hosting is approved"],
    "timeline": [
        {"phase": "Discovery", "duration": "1 month", "deliverables": ["Current-state map"], "status": "planned"},
    ],
})

_DRY_RUN_ANSWER = (
    "Dry-run answer: start by confirming stakeholder concerns, then map the "
    "affected business capabilities before changing applications."
)


class DryRunClient:
    """Drop-in replacement for LLMClient that makes zero API calls.

    Returns canned analysis JSON when the prompt asks for the architecture
    schema, and a canned sentence otherwise.
    """

    def __init__(self) -> None:
        self.last_prompt: str | None = None
        self.call_count = 0

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 2000,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        self.last_prompt = prompt
        self.call_count += 1
        logger.info("[dry-run] generate_text(model=%s, max_tokens=%d)", model, max_tokens)
        if "businessArchitecture" in prompt:
            return _DRY_RUN_ANALYSIS
        return _DRY_RUN_ANSWER
