"""Fallback synthesizer — a complete, always-valid analysis with no model call.

Used whenever the scenario analyzer cannot get a parseable response. The
content is generic; only the vision title echoes the scenario text.
"""

from __future__ import annotations

import random
from typing import Any

from archcoach.analysis.projector import normalize_capabilities, project
from archcoach.schemas.architecture import (
    ArchitectureVision,
    Framework,
    Phase,
    RawAnalysis,
    ScenarioAnalysis,
)

# Narrative defaults, also used field-by-field when a parsed response omits them
DEFAULT_VISION_DESCRIPTION = (
    "Target architecture addressing the scenario across business, "
    "application, data and technology layers."
)
DEFAULT_OBJECTIVES = [
    "Improve operational efficiency",
    "Enhance customer experience",
    "Reduce technology debt",
]
DEFAULT_CONSTRAINTS = ["Budget limitations", "Regulatory requirements", "Legacy system dependencies"]
DEFAULT_ASSUMPTIONS = ["Executive sponsorship is in place", "Teams are available for the transition"]
DEFAULT_STAKEHOLDERS = ["Executive leadership", "IT department", "Business users", "Customers"]

_FALLBACK_RAW: dict[str, Any] = {
    "businessArchitecture": {
        "capabilities": [
            {
                "name": "Customer Management",
                "description": "Managing customer relationships and interactions",
                "maturity": 75,
                "importance": 90,
                "processes": ["Customer onboarding", "Support management"],
                "systems": ["CRM", "Support portal"],
                "gaps": ["Limited self-service options"],
            },
            {
                "name": "Digital Operations",
                "description": "Running core operations on digital channels",
                "maturity": 60,
                "importance": 85,
                "processes": ["Order processing", "Inventory management"],
                "systems": ["ERP", "Order management system"],
                "gaps": ["Manual handoffs between systems"],
            },
            {
                "name": "Data Analytics",
                "description": "Turning operational data into decisions",
                "maturity": 45,
                "importance": 95,
                "processes": ["Reporting", "Forecasting"],
                "systems": ["Data warehouse", "BI tools"],
                "gaps": ["No real-time insight", "Fragmented data sources"],
            },
            {
                "name": "Security & Compliance",
                "description": "Protecting assets and meeting regulatory obligations",
                "maturity": 70,
                "importance": 100,
                "processes": ["Access management", "Audit"],
                "systems": ["Identity provider", "SIEM"],
                "gaps": ["Inconsistent policy enforcement"],
            },
        ],
        "processes": ["Customer journey", "Order fulfilment", "Financial reporting"],
        "stakeholders": list(DEFAULT_STAKEHOLDERS),
    },
    "applicationArchitecture": {
        "applications": ["Customer Portal", "ERP System", "Analytics Platform"],
        "services": ["Authentication Service", "Payment Service", "Notification Service"],
        "interfaces": ["REST APIs", "Event streams", "Batch file transfer"],
    },
    "dataArchitecture": {
        "entities": ["Customer", "Product", "Order", "Transaction"],
        "flows": ["Customer data synchronization", "Order events to analytics"],
        "governance": ["Data quality standards", "Privacy controls", "Retention policies"],
    },
    "technologyArchitecture": {
        "infrastructure": ["Cloud hosting", "Container orchestration", "Content delivery network"],
        "platforms": ["Microservices platform", "Managed database", "Integration platform"],
        "networks": ["Virtual private cloud", "Secure API gateway"],
    },
}

FALLBACK_RECOMMENDATIONS = [
    "Implement API-first architecture",
    "Establish data governance framework",
    "Adopt cloud-native technologies",
]
FALLBACK_RISKS = ["Legacy system integration", "Data migration complexity", "Skills gap"]
FALLBACK_OPPORTUNITIES = ["Process automation", "Improved customer insights", "Operational cost reduction"]

_FALLBACK_TIMELINE: list[dict[str, Any]] = [
    {
        "phase": "Phase 1: Foundation",
        "duration": "3 months",
        "deliverables": ["Current state assessment", "Target architecture"],
        "status": "planned",
    },
    {
        "phase": "Phase 2: Transformation",
        "duration": "6 months",
        "deliverables": ["Platform migration", "Service integration"],
        "status": "planned",
    },
    {
        "phase": "Phase 3: Optimization",
        "duration": "3 months",
        "deliverables": ["Performance tuning", "Capability uplift review"],
        "status": "planned",
    },
]


def fallback_raw_analysis() -> RawAnalysis:
    """Return a fresh copy of the fixed four-quadrant fallback analysis."""
    return RawAnalysis.model_validate(_FALLBACK_RAW)


def fallback_timeline() -> list[Phase]:
    return [Phase(**phase) for phase in _FALLBACK_TIMELINE]


def vision_title(scenario: str) -> str:
    """Title used for fallback visions — embeds the scenario verbatim."""
    return f"Architecture Vision: {scenario.strip()}"


def synthesize(
    scenario: str,
    framework: Framework | str,
    *,
    rng: random.Random | None = None,
) -> ScenarioAnalysis:
    """Build a complete, well-formed ScenarioAnalysis without any model call.

    The structure is identical for every framework and scenario; the
    scenario text only appears in the vision title.
    """
    framework = Framework.parse(framework)
    raw = fallback_raw_analysis()
    capabilities = normalize_capabilities(raw, rng=rng)
    vision = ArchitectureVision(
        title=vision_title(scenario),
        description=DEFAULT_VISION_DESCRIPTION,
        objectives=list(DEFAULT_OBJECTIVES),
        stakeholders=list(raw.business.stakeholders),
        constraints=list(DEFAULT_CONSTRAINTS),
        assumptions=list(DEFAULT_ASSUMPTIONS),
        components=project(raw, capabilities=capabilities, rng=rng),
        capabilities=capabilities,
        timeline=fallback_timeline(),
    )
    return ScenarioAnalysis(
        scenario=scenario,
        framework=framework,
        analysis=raw,
        recommendations=list(FALLBACK_RECOMMENDATIONS),
        risks=list(FALLBACK_RISKS),
        opportunities=list(FALLBACK_OPPORTUNITIES),
        vision=vision,
        source="fallback",
    )
