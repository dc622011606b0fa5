"""Markdown report builder — renders analyses and compliance checklists."""

from __future__ import annotations

from collections.abc import Sequence

from archcoach.analysis.compliance import overall_score, score_band, status_counts
from archcoach.schemas.architecture import (
    ArchitectureComponent,
    Framework,
    ScenarioAnalysis,
)
from archcoach.schemas.compliance import ComplianceCheck

_LAYER_TITLES = {
    "business": "Business Architecture",
    "application": "Application Architecture",
    "data": "Data Architecture",
    "technology": "Technology Architecture",
}

_STATUS_ICONS = {
    "completed": "✅",
    "in-progress": "🔄",
    "planned": "🕒",
    "compliant": "🟢",
    "partial": "🟡",
    "non-compliant": "🔴",
    "unknown": "⚪",
}


def _bullets(items: Sequence[str]) -> list[str]:
    return [f"- {item}" for item in items] or ["- _None_"]


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def _component_table(components: Sequence[ArchitectureComponent]) -> list[str]:
    lines = [
        "| ID | Name | Maturity | Importance | Dependencies | Risks |",
        "|----|------|----------|------------|--------------|-------|",
    ]
    for c in components:
        lines.append(
            f"| {c.id} | {_cell(c.name)} | {c.maturity}% | {c.importance}% "
            f"| {_cell(', '.join(c.dependencies)) or '—'} | {_cell(', '.join(c.risks)) or '—'} |"
        )
    return lines


def render_markdown_report(analysis: ScenarioAnalysis) -> str:
    """Render a ScenarioAnalysis into a Markdown string."""
    vision = analysis.vision
    sections: list[str] = []

    sections.append(f"# {vision.title}\n")
    sections.append(f"*Framework: {analysis.framework.value} · Generated: {analysis.created_at}*\n")
    if analysis.source == "fallback":
        sections.append(
            "> **Note:** the model response was unavailable or unparseable; "
            "this is the generic fallback analysis.\n"
        )

    sections.append("## Scenario\n")
    sections.append(f"{analysis.scenario}\n")

    sections.append("## Architecture Vision\n")
    sections.append(f"{vision.description}\n")
    for heading, items in (
        ("Objectives", vision.objectives),
        ("Stakeholders", vision.stakeholders),
        ("Constraints", vision.constraints),
        ("Assumptions", vision.assumptions),
    ):
        sections.append(f"### {heading}\n")
        sections.extend(_bullets(items))
        sections.append("")

    # Components grouped by layer, in layer order
    sections.append("## Architecture Layers\n")
    for layer, title in _LAYER_TITLES.items():
        layer_components = [c for c in vision.components if c.type == layer]
        if not layer_components:
            continue
        sections.append(f"### {title}\n")
        sections.extend(_component_table(layer_components))
        sections.append("")

    if vision.capabilities:
        sections.append("## Business Capabilities\n")
        sections.append("| Capability | Maturity | Importance | Processes | Systems | Gaps |")
        sections.append("|-----------|----------|------------|-----------|---------|------|")
        for cap in vision.capabilities:
            sections.append(
                f"| {_cell(cap.name)} | {cap.maturity}% | {cap.importance}% "
                f"| {_cell(', '.join(cap.processes)) or '—'} | {_cell(', '.join(cap.systems)) or '—'} "
                f"| {_cell(', '.join(cap.gaps)) or '—'} |"
            )
        sections.append("")

    if vision.timeline:
        sections.append("## Strategic Roadmap\n")
        for phase in vision.timeline:
            icon = _STATUS_ICONS.get(phase.status, "")
            duration = f" ({phase.duration})" if phase.duration else ""
            sections.append(f"### {icon} {phase.phase}{duration}\n")
            sections.append(f"*Status: {phase.status}*\n")
            sections.extend(_bullets(phase.deliverables))
            sections.append("")

    for heading, items in (
        ("Recommendations", analysis.recommendations),
        ("Risks", analysis.risks),
        ("Opportunities", analysis.opportunities),
    ):
        sections.append(f"## {heading}\n")
        sections.extend(_bullets(items))
        sections.append("")

    return "\n".join(sections)


def render_compliance_report(framework: Framework, checks: list[ComplianceCheck]) -> str:
    """Render the compliance checklist for ``framework`` as Markdown."""
    score = overall_score(checks)
    counts = status_counts(checks)
    sections = [
        f"# Compliance Radar: {framework.value}\n",
        f"**Overall score:** {score}% ({score_band(score)})\n",
        f"- Compliant: {counts['compliant']}",
        f"- Partial: {counts['partial']}",
        f"- Non-compliant: {counts['non-compliant']}",
        "",
        "| Status | Category | Requirement | Score | Recommendation |",
        "|--------|----------|-------------|-------|----------------|",
    ]
    for check in checks:
        icon = _STATUS_ICONS.get(check.status, "")
        sections.append(
            f"| {icon} {check.status} | {_cell(check.category)} | {_cell(check.requirement)} "
            f"| {check.score}% | {_cell(check.recommendation) or '—'} |"
        )
    sections.append("")
    return "\n".join(sections)
