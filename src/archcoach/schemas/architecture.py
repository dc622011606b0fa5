"""Pydantic models for architecture analyses and the views derived from them."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Framework(str, Enum):
    """Architecture framework selecting prompt context and fallback text."""

    TOGAF = "TOGAF"
    ZACHMAN = "Zachman"
    ISO42001 = "ISO42001"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: str | Framework) -> Framework:
        """Case-insensitive lookup by value (``"iso42001"`` → ``ISO42001``)."""
        if isinstance(value, Framework):
            return value
        wanted = value.strip().lower().replace(" ", "")
        for member in cls:
            if member.value.lower() == wanted:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown framework {value!r} (expected one of: {choices})")


ComponentType = Literal["business", "application", "data", "technology"]
COMPONENT_TYPES: tuple[str, ...] = ("business", "application", "data", "technology")

PhaseStatus = Literal["planned", "in-progress", "completed"]


def new_id(prefix: str) -> str:
    """Generate a session-unique identifier such as ``scenario-1f0c…``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def clamp_score(value: int) -> int:
    """Clamp a maturity/importance score into [0, 100]."""
    return max(0, min(100, value))


class ArchitectureComponent(BaseModel):
    """One element of a layer (business, application, data or technology)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ComponentType
    description: str = ""
    maturity: int = Field(ge=0, le=100)
    importance: int = Field(ge=0, le=100)
    dependencies: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()


class BusinessCapability(BaseModel):
    """A business capability with its supporting processes and systems."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    maturity: int = Field(ge=0, le=100)
    importance: int = Field(ge=0, le=100)
    processes: tuple[str, ...] = ()
    systems: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()


class Phase(BaseModel):
    """One roadmap phase of a vision's timeline."""

    model_config = ConfigDict(frozen=True)

    phase: str
    duration: str = ""
    deliverables: tuple[str, ...] = ()
    status: PhaseStatus = "planned"

    @field_validator("status", mode="before")
    @classmethod
    def coerce_unknown_status(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower().replace("_", "-").replace(" ", "-")
            if v in ("planned", "in-progress", "completed"):
                return v
        return "planned"


class ArchitectureVision(BaseModel):
    """One scenario's worth of architecture: narrative plus normalized views."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("vision"))
    title: str
    description: str = ""
    objectives: tuple[str, ...] = ()
    stakeholders: tuple[str, ...] = ()
    constraints: tuple[str, ...] = ()
    assumptions: tuple[str, ...] = ()
    components: tuple[ArchitectureComponent, ...] = ()
    capabilities: tuple[BusinessCapability, ...] = ()
    timeline: tuple[Phase, ...] = ()


# ---------------------------------------------------------------------------
# Raw analysis — loosely-typed quadrants as returned by the model
# ---------------------------------------------------------------------------


def string_list(v: object) -> list[str]:
    """Coerce a model-supplied value into a list of strings.

    ``None`` becomes an empty list, a lone scalar is wrapped, and non-string
    items are stringified. Empty entries are dropped.
    """
    if v is None:
        return []
    if not isinstance(v, (list, tuple)):
        v = [v]
    out: list[str] = []
    for item in v:
        if item is None:
            continue
        if isinstance(item, dict):
            # Models sometimes return {"name": ...} objects where strings are expected
            item = item.get("name") or item.get("title") or next(iter(item.values()), "")
        text = str(item).strip()
        if text:
            out.append(text)
    return out


class _RawSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)


class RawCapability(_RawSection):
    """A capability exactly as the model described it — every field optional."""

    name: str = ""
    description: str = ""
    maturity: Any = None
    importance: Any = None
    processes: tuple[str, ...] = ()
    systems: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: object) -> object:
        return "" if v is None else str(v)

    @field_validator("processes", "systems", "gaps", mode="before")
    @classmethod
    def coerce_lists(cls, v: object) -> list[str]:
        return string_list(v)


class BusinessArchitecture(_RawSection):
    capabilities: tuple[RawCapability, ...] = ()
    processes: tuple[str, ...] = ()
    stakeholders: tuple[str, ...] = ()

    @field_validator("capabilities", mode="before")
    @classmethod
    def coerce_capabilities(cls, v: object) -> list[Any]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        # Bare strings are accepted as capability names
        return [
            {"name": item} if isinstance(item, str) else item
            for item in v
            if isinstance(item, (str, dict, RawCapability))
        ]

    @field_validator("processes", "stakeholders", mode="before")
    @classmethod
    def coerce_lists(cls, v: object) -> list[str]:
        return string_list(v)


class ApplicationArchitecture(_RawSection):
    applications: tuple[str, ...] = ()
    services: tuple[str, ...] = ()
    interfaces: tuple[str, ...] = ()

    @field_validator("applications", "services", "interfaces", mode="before")
    @classmethod
    def coerce_lists(cls, v: object) -> list[str]:
        return string_list(v)


class DataArchitecture(_RawSection):
    entities: tuple[str, ...] = ()
    flows: tuple[str, ...] = ()
    governance: tuple[str, ...] = ()

    @field_validator("entities", "flows", "governance", mode="before")
    @classmethod
    def coerce_lists(cls, v: object) -> list[str]:
        return string_list(v)


class TechnologyArchitecture(_RawSection):
    infrastructure: tuple[str, ...] = ()
    platforms: tuple[str, ...] = ()
    networks: tuple[str, ...] = ()

    @field_validator("infrastructure", "platforms", "networks", mode="before")
    @classmethod
    def coerce_lists(cls, v: object) -> list[str]:
        return string_list(v)


class RawAnalysis(_RawSection):
    """The four architecture quadrants extracted from a model response.

    Every quadrant and every list inside it is optional; a ``null`` or
    missing section validates to an empty one. Field aliases match the
    camelCase keys requested in the analysis prompt.
    """

    business: BusinessArchitecture = Field(default_factory=BusinessArchitecture, alias="businessArchitecture")
    application: ApplicationArchitecture = Field(default_factory=ApplicationArchitecture, alias="applicationArchitecture")
    data: DataArchitecture = Field(default_factory=DataArchitecture, alias="dataArchitecture")
    technology: TechnologyArchitecture = Field(default_factory=TechnologyArchitecture, alias="technologyArchitecture")

    @field_validator("business", "application", "data", "technology", mode="before")
    @classmethod
    def coerce_missing_section(cls, v: object) -> object:
        return {} if not isinstance(v, (dict, BaseModel)) else v


class ScenarioAnalysis(BaseModel):
    """The complete, immutable result of analysing one scenario."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("scenario"))
    scenario: str
    framework: Framework
    analysis: RawAnalysis
    recommendations: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    vision: ArchitectureVision
    source: Literal["model", "fallback"] = "model"
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
