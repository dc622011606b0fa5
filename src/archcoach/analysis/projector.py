"""Component projector — flattens raw quadrants into typed layer components.

The projection is total: any quadrant or list may be missing and any
numeric field may be absent, non-numeric or out of range. Missing scores are
filled with placeholder values drawn from ``rng``; they stand in for "no
data" and are not a scoring model.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Any

from archcoach.schemas.architecture import (
    ArchitectureComponent,
    BusinessCapability,
    RawAnalysis,
    clamp_score,
)

# Placeholder ranges for missing scores: [low, high)
MATURITY_RANGE = (60, 100)
IMPORTANCE_RANGE = (70, 100)

_APP_RISKS = ["Integration complexity", "Legacy constraints"]
_APP_OPPORTUNITIES = ["API modernization", "Cloud migration"]
_SERVICE_RISKS = ["Service coupling", "Versioning drift"]
_SERVICE_OPPORTUNITIES = ["Reuse across channels", "Independent scaling"]
_DATA_RISKS = ["Data quality", "Privacy compliance"]
_DATA_OPPORTUNITIES = ["Analytics enablement", "Master data management"]
_INFRA_RISKS = ["Single points of failure", "Capacity limits"]
_INFRA_OPPORTUNITIES = ["Automation", "Cost optimization"]
_PLATFORM_RISKS = ["Vendor lock-in", "Skills availability"]
_PLATFORM_OPPORTUNITIES = ["Managed services", "Developer productivity"]


def coerce_score(value: Any, default_range: tuple[int, int], rng: random.Random | None = None) -> int:
    """Turn a model-supplied score into an int in [0, 100].

    Accepts ints of any size, floats and numeric strings (rounded). Anything
    else, or a NaN/infinite value, is replaced by a placeholder drawn from
    ``default_range``.
    """
    number: float | None = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        # Arbitrarily large JSON integers do not fit in a float
        return clamp_score(value)
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            number = None

    if number is None or not math.isfinite(number):
        low, high = default_range
        return (rng or random).randrange(low, high)
    return clamp_score(int(round(number)))


def _as_raw(raw: RawAnalysis | dict[str, Any] | None) -> RawAnalysis:
    if isinstance(raw, RawAnalysis):
        return raw
    return RawAnalysis.model_validate(raw or {})


def _capability_component(index: int, cap: BusinessCapability) -> ArchitectureComponent:
    return ArchitectureComponent(
        id=f"business-{index}",
        name=cap.name,
        type="business",
        description=cap.description or f"Business capability: {cap.name}",
        maturity=cap.maturity,
        importance=cap.importance,
        dependencies=list(cap.systems),
        risks=list(cap.gaps),
        opportunities=list(cap.processes),
    )


def _simple_components(
    prefix: str,
    component_type: str,
    names: Sequence[str],
    description: str,
    dependencies: Sequence[str],
    risks: Sequence[str],
    opportunities: Sequence[str],
    rng: random.Random | None,
) -> list[ArchitectureComponent]:
    return [
        ArchitectureComponent(
            id=f"{prefix}-{i}",
            name=name,
            type=component_type,
            description=description.format(name=name),
            maturity=coerce_score(None, MATURITY_RANGE, rng),
            importance=coerce_score(None, IMPORTANCE_RANGE, rng),
            dependencies=list(dependencies),
            risks=list(risks),
            opportunities=list(opportunities),
        )
        for i, name in enumerate(names)
    ]


def project(
    raw: RawAnalysis | dict[str, Any] | None,
    *,
    capabilities: Sequence[BusinessCapability] | None = None,
    rng: random.Random | None = None,
) -> list[ArchitectureComponent]:
    """Map a raw analysis to a flat list of layer components.

    Groups are emitted in a fixed order — business capabilities,
    applications, services, data entities, infrastructure, platforms — and
    ids are namespaced per source list (``business-0``, ``app-0``,
    ``service-0``, ``data-0``, ``tech-infra-0``, ``tech-platform-0``).

    Business components mirror ``capabilities`` (normalized from ``raw`` when
    not given), so ``business-i`` and ``capability-i`` carry the same scores.
    """
    analysis = _as_raw(raw)
    apps = analysis.application
    data = analysis.data
    tech = analysis.technology

    if capabilities is None:
        capabilities = normalize_capabilities(analysis, rng=rng)

    components: list[ArchitectureComponent] = [
        _capability_component(i, cap) for i, cap in enumerate(capabilities)
    ]
    components += _simple_components(
        "app", "application", apps.applications, "Application component: {name}",
        apps.services[:2], _APP_RISKS, _APP_OPPORTUNITIES, rng,
    )
    components += _simple_components(
        "service", "application", apps.services, "Application service: {name}",
        [], _SERVICE_RISKS, _SERVICE_OPPORTUNITIES, rng,
    )
    components += _simple_components(
        "data", "data", data.entities, "Data entity: {name}",
        data.flows[:1], _DATA_RISKS, _DATA_OPPORTUNITIES, rng,
    )
    components += _simple_components(
        "tech-infra", "technology", tech.infrastructure, "Infrastructure: {name}",
        [], _INFRA_RISKS, _INFRA_OPPORTUNITIES, rng,
    )
    components += _simple_components(
        "tech-platform", "technology", tech.platforms, "Platform: {name}",
        [], _PLATFORM_RISKS, _PLATFORM_OPPORTUNITIES, rng,
    )
    return components


def normalize_capabilities(
    raw: RawAnalysis | dict[str, Any] | None,
    *,
    rng: random.Random | None = None,
) -> list[BusinessCapability]:
    """Normalize ``businessArchitecture.capabilities`` into BusinessCapability records.

    Uses the same score defaulting and clamping as ``project`` so a
    malformed capability can never carry an out-of-range score.
    """
    analysis = _as_raw(raw)
    return [
        BusinessCapability(
            id=f"capability-{i}",
            name=cap.name or f"Capability {i + 1}",
            description=cap.description,
            maturity=coerce_score(cap.maturity, MATURITY_RANGE, rng),
            importance=coerce_score(cap.importance, IMPORTANCE_RANGE, rng),
            processes=list(cap.processes),
            systems=list(cap.systems),
            gaps=list(cap.gaps),
        )
        for i, cap in enumerate(analysis.business.capabilities)
    ]
