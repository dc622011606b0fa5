"""Scenario Analyzer Agent — free-text scenario to normalized architecture."""

from __future__ import annotations

import logging
import random
from typing import Any

from archcoach.agents.base import BaseAgent, extract_json
from archcoach.agents.scenario_analyzer.prompts import build_analysis_prompt
from archcoach.analysis.fallback import (
    DEFAULT_ASSUMPTIONS,
    DEFAULT_CONSTRAINTS,
    DEFAULT_OBJECTIVES,
    DEFAULT_VISION_DESCRIPTION,
    synthesize,
    vision_title,
)
from archcoach.analysis.projector import normalize_capabilities, project
from archcoach.schemas.architecture import (
    ArchitectureVision,
    Framework,
    Phase,
    RawAnalysis,
    ScenarioAnalysis,
    string_list,
)
from archcoach.schemas.config import CoachConfig
from archcoach.shared.llm_client import TextGenerator, TokensCallback

logger = logging.getLogger(__name__)

_QUADRANT_KEYS = (
    "businessArchitecture",
    "applicationArchitecture",
    "dataArchitecture",
    "technologyArchitecture",
)


class ScenarioAnalyzerAgent(BaseAgent):
    """Turns a business scenario into a ScenarioAnalysis.

    ``analyze`` never fails because of the model: a failed call or an
    unparseable reply is replaced by the fallback analysis, and missing keys
    in an otherwise valid reply are defaulted one field at a time.
    """

    def __init__(
        self,
        client: TextGenerator,
        config: CoachConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(client, config)
        self._rng = rng

    @property
    def name(self) -> str:
        return "Scenario Analyzer"

    def build_prompt(self, text: str, framework: Framework) -> str:
        return build_analysis_prompt(text, framework)

    async def analyze(
        self,
        scenario: str,
        framework: Framework | str,
        *,
        on_tokens: TokensCallback | None = None,
    ) -> ScenarioAnalysis:
        """Analyze ``scenario`` under ``framework``.

        Raises ``ValueError`` only for a blank scenario; model and parse
        failures fall back silently (logged at WARNING).
        """
        if not scenario or not scenario.strip():
            raise ValueError("Scenario text must not be empty")
        framework = Framework.parse(framework)

        prompt = self.build_prompt(scenario, framework)
        raw_text = await self._generate(
            prompt, max_tokens=self.config.analysis_max_tokens, on_tokens=on_tokens,
        )

        parsed: dict[str, Any] | None = None
        if raw_text is not None:
            try:
                parsed = extract_json(raw_text)
            except ValueError as err:
                # json.JSONDecodeError is a ValueError subclass
                logger.warning("Agent %s output was not valid JSON, using fallback. Error: %s", self.name, err)

        analysis: ScenarioAnalysis | None = None
        if parsed is not None:
            try:
                analysis = self._build_analysis(scenario, framework, parsed)
            except (ValueError, TypeError) as err:
                # pydantic.ValidationError is a ValueError subclass
                logger.warning("Agent %s output had an unusable shape, using fallback. Error: %s", self.name, err)
        if analysis is None:
            analysis = synthesize(scenario, framework, rng=self._rng)

        logger.info(
            "Agent %s produced %s analysis: %d components, %d capabilities",
            self.name, analysis.source, len(analysis.vision.components), len(analysis.vision.capabilities),
        )
        return analysis

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def _build_analysis(
        self,
        scenario: str,
        framework: Framework,
        parsed: dict[str, Any],
    ) -> ScenarioAnalysis:
        raw = RawAnalysis.model_validate({key: parsed.get(key) for key in _QUADRANT_KEYS})

        capabilities = normalize_capabilities(raw, rng=self._rng)

        vision = ArchitectureVision(
            title=_text(parsed.get("visionTitle")) or vision_title(scenario),
            description=_text(parsed.get("visionDescription")) or DEFAULT_VISION_DESCRIPTION,
            objectives=string_list(parsed.get("objectives")) or list(DEFAULT_OBJECTIVES),
            stakeholders=list(raw.business.stakeholders),
            constraints=string_list(parsed.get("constraints")) or list(DEFAULT_CONSTRAINTS),
            assumptions=string_list(parsed.get("assumptions")) or list(DEFAULT_ASSUMPTIONS),
            components=project(raw, capabilities=capabilities, rng=self._rng),
            capabilities=capabilities,
            timeline=_timeline(parsed.get("timeline")),
        )

        return ScenarioAnalysis(
            scenario=scenario,
            framework=framework,
            analysis=raw,
            recommendations=string_list(parsed.get("recommendations")),
            risks=string_list(parsed.get("risks")),
            opportunities=string_list(parsed.get("opportunities")),
            vision=vision,
            source="model",
        )


def _text(value: object) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _timeline(value: object) -> list[Phase]:
    """Keep well-formed phase entries; skip anything without a phase name."""
    if not isinstance(value, list):
        return []
    phases: list[Phase] = []
    for entry in value:
        if not isinstance(entry, dict) or not _text(entry.get("phase")):
            continue
        phases.append(Phase(
            phase=_text(entry.get("phase")),
            duration=_text(entry.get("duration")),
            deliverables=string_list(entry.get("deliverables")),
            status=entry.get("status", "planned"),
        ))
    return phases
