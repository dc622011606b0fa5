"""Strategy Coach Agent — framework-aware question answering and chat transcript."""

from __future__ import annotations

import logging
import random

from archcoach.agents.base import BaseAgent
from archcoach.agents.strategy_coach.prompts import (
    FALLBACK_ANSWERS,
    QUESTION_PROMPT,
    WELCOME_MESSAGE,
)
from archcoach.schemas.architecture import Framework
from archcoach.schemas.coach import Message
from archcoach.schemas.config import CoachConfig
from archcoach.shared.llm_client import TextGenerator, TokensCallback

logger = logging.getLogger(__name__)

# Confidence shown next to assistant messages
WELCOME_CONFIDENCE = 95
MODEL_CONFIDENCE_RANGE = (80, 100)  # [low, high)
FALLBACK_CONFIDENCE = 60


class StrategyCoachAgent(BaseAgent):
    """Answers free-text architecture questions for a given framework.

    No structured parsing: the model's text is returned as-is. A failed
    call or an empty reply yields the framework's fixed fallback sentence.
    """

    def __init__(self, client: TextGenerator, config: CoachConfig | None = None) -> None:
        super().__init__(client, config)

    @property
    def name(self) -> str:
        return "Strategy Coach"

    def build_prompt(self, text: str, framework: Framework) -> str:
        return QUESTION_PROMPT.format(framework=framework.value, question=text)

    async def answer_question(
        self,
        question: str,
        framework: Framework | str,
        *,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        """Return the model's answer, or the framework fallback sentence on failure."""
        answer, _ = await self.answer_with_source(question, Framework.parse(framework), on_tokens=on_tokens)
        return answer

    async def answer_with_source(
        self,
        question: str,
        framework: Framework,
        *,
        on_tokens: TokensCallback | None = None,
    ) -> tuple[str, bool]:
        """Return ``(answer, from_model)``."""
        raw = await self._generate(
            self.build_prompt(question, framework),
            max_tokens=self.config.question_max_tokens,
            on_tokens=on_tokens,
        )
        if raw is None or not raw.strip():
            if raw is not None:
                logger.warning("Agent %s got an empty answer, using fallback", self.name)
            return FALLBACK_ANSWERS[framework], False
        return raw.strip(), True


class ChatSession:
    """In-memory chat transcript with the Strategy Coach for one framework.

    Opens with a welcome message. Each ``ask`` appends the user's question
    and the coach's reply; replies that came from the fallback carry a lower
    confidence than model replies.
    """

    def __init__(
        self,
        agent: StrategyCoachAgent,
        framework: Framework | str,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.agent = agent
        self.framework = Framework.parse(framework)
        self._rng = rng or random.Random()
        self.messages: list[Message] = [
            Message(
                role="assistant",
                content=WELCOME_MESSAGE.format(framework=self.framework.value),
                framework=self.framework,
                confidence=WELCOME_CONFIDENCE,
            )
        ]

    async def ask(self, question: str, *, on_tokens: TokensCallback | None = None) -> Message | None:
        """Send ``question`` and return the assistant reply.

        Blank questions are ignored: nothing is appended and ``None`` is returned.
        """
        if not question or not question.strip():
            return None

        self.messages.append(Message(role="user", content=question.strip()))
        answer, from_model = await self.agent.answer_with_source(
            question.strip(), self.framework, on_tokens=on_tokens,
        )
        confidence = self._rng.randrange(*MODEL_CONFIDENCE_RANGE) if from_model else FALLBACK_CONFIDENCE
        reply = Message(
            role="assistant",
            content=answer,
            framework=self.framework,
            confidence=confidence,
        )
        self.messages.append(reply)
        return reply
