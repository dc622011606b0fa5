"""Base agent ABC — the call / catch / substitute pattern every agent follows."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from archcoach.schemas.architecture import Framework
from archcoach.schemas.config import CoachConfig
from archcoach.shared.llm_client import TextGenerator, TokensCallback

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Abstract base class for the model-backed agents.

    Subclasses implement:
    - ``name`` — human-readable agent name
    - ``build_prompt(text, framework)`` — returns the full prompt string

    ``_generate`` makes exactly one call to the text generator and turns any
    failure into ``None`` so that the public entry points stay total.
    """

    def __init__(self, client: TextGenerator, config: CoachConfig | None = None) -> None:
        self.client = client
        self.config = config or CoachConfig()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logs and progress display."""

    @abstractmethod
    def build_prompt(self, text: str, framework: Framework) -> str:
        """Return the prompt sent to the model for ``text``."""

    async def _generate(
        self,
        prompt: str,
        *,
        max_tokens: int,
        on_tokens: TokensCallback | None = None,
    ) -> str | None:
        """Call the model once; return its text, or ``None`` if the call failed."""
        try:
            raw = await self.client.generate_text(
                prompt,
                model=self.config.model,
                max_tokens=max_tokens,
                on_tokens=on_tokens,
            )
        except Exception as exc:
            logger.warning("Agent %s: text generation failed: %s", self.name, exc)
            return None

        logger.debug("Agent %s raw output:\n%s", self.name, (raw or "")[:500])
        return raw


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from text that may contain markdown fences."""
    text = text.strip()

    # 1. Try direct parse (clean JSON response)
    if text.startswith("{"):
        try:
            return _require_object(json.loads(text))
        except json.JSONDecodeError:
            # Might have trailing text — try raw_decode
            try:
                obj, _ = json.JSONDecoder().raw_decode(text)
                return _require_object(obj)
            except json.JSONDecodeError:
                pass

    # 2. Look for ```json ... ``` or ``` ... ``` fenced blocks
    match = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if match:
        return _require_object(json.loads(match.group(1).strip()))

    # 3. Find the first { and try to parse a JSON object starting there
    try:
        start = text.index("{")
        obj, _ = json.JSONDecoder().raw_decode(text, idx=start)
        return _require_object(obj)
    except (ValueError, json.JSONDecodeError):
        pass

    raise ValueError(
        f"Could not extract JSON from model response (length={len(text)}). "
        f"First 300 chars: {text[:300]!r}"
    )


def _require_object(obj: Any) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise ValueError(f"Expected a JSON object, got {type(obj).__name__}")
    return obj
