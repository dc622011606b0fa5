"""Mocked compliance checklist per framework.

These are fixed demonstration checks, not the result of scanning anything.
Frameworks without their own checklist use the TOGAF one.
"""

from __future__ import annotations

from collections import Counter

from archcoach.schemas.architecture import Framework
from archcoach.schemas.compliance import ComplianceCheck

_CHECKS: dict[Framework, list[dict]] = {
    Framework.TOGAF: [
        {
            "id": "togaf-1",
            "category": "Architecture Governance",
            "requirement": "Architecture Board Establishment",
            "status": "compliant",
            "score": 95,
            "description": "Architecture governance structure is well-defined",
            "recommendation": "Continue regular governance reviews",
        },
        {
            "id": "togaf-2",
            "category": "ADM Process",
            "requirement": "Stakeholder Management",
            "status": "partial",
            "score": 70,
            "description": "Some stakeholder groups not fully engaged",
            "recommendation": "Expand stakeholder analysis in Phase A",
        },
        {
            "id": "togaf-3",
            "category": "Architecture Repository",
            "requirement": "Standards Information Base",
            "status": "non-compliant",
            "score": 45,
            "description": "Standards repository incomplete",
            "recommendation": "Establish comprehensive standards catalog",
        },
    ],
    Framework.ISO42001: [
        {
            "id": "iso42001-1",
            "category": "AI Governance",
            "requirement": "AI Management System",
            "status": "partial",
            "score": 65,
            "description": "Basic AI governance framework in place",
            "recommendation": "Enhance AI risk assessment procedures",
        },
        {
            "id": "iso42001-2",
            "category": "Risk Management",
            "requirement": "AI Risk Assessment",
            "status": "compliant",
            "score": 88,
            "description": "Comprehensive AI risk framework established",
            "recommendation": "Regular risk assessment updates needed",
        },
        {
            "id": "iso42001-3",
            "category": "Documentation",
            "requirement": "AI System Documentation",
            "status": "non-compliant",
            "score": 35,
            "description": "AI system documentation insufficient",
            "recommendation": "Implement systematic AI documentation process",
        },
    ],
}


def checks_for(framework: Framework | str) -> list[ComplianceCheck]:
    """Return the checklist for ``framework`` (TOGAF's for frameworks without one)."""
    framework = Framework.parse(framework)
    rows = _CHECKS.get(framework, _CHECKS[Framework.TOGAF])
    return [ComplianceCheck(**row) for row in rows]


def overall_score(checks: list[ComplianceCheck]) -> int:
    """Rounded mean score; 0 for an empty checklist."""
    if not checks:
        return 0
    return round(sum(c.score for c in checks) / len(checks))


def score_band(score: int) -> str:
    if score >= 80:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"


def status_counts(checks: list[ComplianceCheck]) -> dict[str, int]:
    """Number of checks per status, including statuses with zero checks."""
    counts = Counter(c.status for c in checks)
    return {status: counts.get(status, 0) for status in ("compliant", "partial", "non-compliant", "unknown")}
