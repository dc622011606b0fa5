"""Architecture store — in-memory state for one session.

The store is an explicit object passed to whatever needs it. Its state is an
immutable ``StoreState`` snapshot that every mutation replaces wholesale, so
a reader holding an old snapshot never sees a half-applied change.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from archcoach.schemas.architecture import (
    ArchitectureComponent,
    ArchitectureVision,
    BusinessCapability,
    ScenarioAnalysis,
    clamp_score,
)

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(ArchitectureComponent.model_fields) - {"id"}


class StoreState(BaseModel):
    """Snapshot read by the presentation layer."""

    model_config = ConfigDict(frozen=True)

    scenarios: tuple[ScenarioAnalysis, ...] = ()
    current_vision: ArchitectureVision | None = None
    components: tuple[ArchitectureComponent, ...] = ()
    capabilities: tuple[BusinessCapability, ...] = ()


class ArchitectureStore:
    """History of analyses plus the single active vision.

    ``add_scenario`` appends to history and makes the new analysis current.
    Completions of superseded requests can be discarded by passing the token
    obtained from ``begin_request``; without a token the last write wins.
    """

    def __init__(self) -> None:
        self._state = StoreState()
        self._tokens = itertools.count(1)
        self._latest_token = 0

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def scenarios(self) -> list[ScenarioAnalysis]:
        return list(self._state.scenarios)

    @property
    def current_vision(self) -> ArchitectureVision | None:
        return self._state.current_vision

    @property
    def components(self) -> list[ArchitectureComponent]:
        return list(self._state.components)

    @property
    def capabilities(self) -> list[BusinessCapability]:
        return list(self._state.capabilities)

    def _replace(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def begin_request(self) -> int:
        """Issue a token for an analysis about to start; newer tokens supersede older ones."""
        self._latest_token = next(self._tokens)
        return self._latest_token

    def add_scenario(self, analysis: ScenarioAnalysis, *, request_token: int | None = None) -> bool:
        """Append ``analysis`` to history and make its vision current.

        Returns ``False`` (and changes nothing) when ``request_token`` belongs
        to a request that a later ``begin_request`` has superseded.
        """
        if request_token is not None and request_token < self._latest_token:
            logger.info(
                "Discarding stale analysis %s (request %d, latest %d)",
                analysis.id, request_token, self._latest_token,
            )
            return False

        vision = analysis.vision
        self._replace(
            scenarios=self._state.scenarios + (analysis,),
            current_vision=vision,
            components=tuple(vision.components),
            capabilities=tuple(vision.capabilities),
        )
        logger.debug(
            "Added scenario %s: %d components, %d capabilities (history=%d)",
            analysis.id, len(vision.components), len(vision.capabilities), len(self._state.scenarios),
        )
        return True

    def update_vision(self, vision: ArchitectureVision) -> None:
        """Replace the current vision and its components/capabilities; history is untouched."""
        self._replace(
            current_vision=vision,
            components=tuple(vision.components),
            capabilities=tuple(vision.capabilities),
        )

    def add_component(self, component: ArchitectureComponent) -> None:
        self._replace(components=self._state.components + (component,))

    def update_component(self, component_id: str, **updates: Any) -> None:
        """Merge ``updates`` into the component with ``component_id``.

        Unknown ids are a no-op. Unknown field names raise ``ValueError``;
        scores are clamped into [0, 100].
        """
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update component field(s): {', '.join(sorted(unknown))}")
        for key in ("maturity", "importance"):
            if key in updates:
                updates[key] = clamp_score(int(updates[key]))

        if not any(c.id == component_id for c in self._state.components):
            logger.debug("update_component: no component with id %s", component_id)
            return

        self._replace(components=tuple(
            ArchitectureComponent.model_validate({**c.model_dump(), **updates}) if c.id == component_id else c
            for c in self._state.components
        ))

    def add_capability(self, capability: BusinessCapability) -> None:
        self._replace(capabilities=self._state.capabilities + (capability,))

    def clear(self) -> None:
        """Reset to the empty initial state."""
        self._state = StoreState()
        logger.debug("Store cleared")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_components_by_type(self, component_type: str) -> list[ArchitectureComponent]:
        return [c for c in self._state.components if c.type == component_type]

    def get_capabilities_by_maturity(self, min_maturity: int) -> list[BusinessCapability]:
        return [c for c in self._state.capabilities if c.maturity >= min_maturity]
