"""Tests for the in-memory architecture store."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archcoach.analysis.fallback import synthesize
from archcoach.schemas.architecture import (
    ArchitectureComponent,
    ArchitectureVision,
    BusinessCapability,
    Framework,
)
from archcoach.store import ArchitectureStore, StoreState


@pytest.fixture
def store() -> ArchitectureStore:
    return ArchitectureStore()


class TestAddScenario:
    def test_initial_state_is_empty(self, store: ArchitectureStore) -> None:
        assert store.state == StoreState()
        assert store.scenarios == []
        assert store.current_vision is None

    def test_add_makes_vision_current(self, store: ArchitectureStore) -> None:
        analysis = synthesize("a", Framework.TOGAF)
        assert store.add_scenario(analysis) is True
        assert store.current_vision == analysis.vision
        assert store.components == list(analysis.vision.components)
        assert store.capabilities == list(analysis.vision.capabilities)

    def test_history_accumulates_last_scenario_wins(self, store: ArchitectureStore) -> None:
        first = synthesize("first", Framework.TOGAF)
        second = synthesize("second", Framework.ZACHMAN)
        store.add_scenario(first)
        store.add_scenario(second)

        assert len(store.scenarios) == 2
        assert store.scenarios == [first, second]
        assert store.current_vision == second.vision

    def test_components_by_type_preserves_order(self, store: ArchitectureStore) -> None:
        analysis = synthesize("a", Framework.TOGAF)
        store.add_scenario(analysis)
        expected = [c for c in analysis.vision.components if c.type == "data"]
        assert store.get_components_by_type("data") == expected
        assert expected

    def test_unknown_type_filter_is_empty(self, store: ArchitectureStore) -> None:
        store.add_scenario(synthesize("a", Framework.TOGAF))
        assert store.get_components_by_type("network") == []

    def test_history_survives_caller_edits(self, store: ArchitectureStore) -> None:
        analysis = synthesize("a", Framework.TOGAF)
        store.add_scenario(analysis)
        original = store.scenarios[0].vision.components[0].maturity

        with pytest.raises(ValidationError):
            store.components[0].maturity = original + 1
        with pytest.raises(AttributeError):
            analysis.vision.components.append(store.components[0])

        store.update_component(store.components[0].id, maturity=(original + 1) % 101)
        assert store.scenarios[0].vision.components[0].maturity == original
        assert store.components[0].maturity == (original + 1) % 101

    def test_snapshots_are_not_mutated(self, store: ArchitectureStore) -> None:
        store.add_scenario(synthesize("a", Framework.TOGAF))
        before = store.state
        store.add_scenario(synthesize("b", Framework.TOGAF))
        assert len(before.scenarios) == 1
        assert len(store.state.scenarios) == 2


class TestRequestTokens:
    def test_stale_completion_discarded(self, store: ArchitectureStore) -> None:
        old_token = store.begin_request()
        new_token = store.begin_request()

        newer = synthesize("newer", Framework.TOGAF)
        older = synthesize("older", Framework.TOGAF)
        assert store.add_scenario(newer, request_token=new_token) is True
        assert store.add_scenario(older, request_token=old_token) is False

        assert store.scenarios == [newer]
        assert store.current_vision == newer.vision

    def test_untokened_writes_last_write_wins(self, store: ArchitectureStore) -> None:
        store.begin_request()
        late = synthesize("late", Framework.TOGAF)
        assert store.add_scenario(late) is True
        assert store.current_vision == late.vision


class TestManualEdits:
    def _component(self, cid: str, type_: str = "application") -> ArchitectureComponent:
        return ArchitectureComponent(id=cid, name=cid.upper(), type=type_, maturity=70, importance=80)

    def test_update_vision_bypasses_history(self, store: ArchitectureStore) -> None:
        store.add_scenario(synthesize("a", Framework.TOGAF))
        vision = ArchitectureVision(title="Manual", components=[self._component("m1")])
        store.update_vision(vision)

        assert len(store.scenarios) == 1
        assert store.current_vision == vision
        assert [c.id for c in store.components] == ["m1"]
        assert store.capabilities == []

    def test_add_component_and_capability(self, store: ArchitectureStore) -> None:
        store.add_component(self._component("c1"))
        store.add_capability(BusinessCapability(id="cap", name="Cap", maturity=40, importance=50))
        assert [c.id for c in store.components] == ["c1"]
        assert [c.id for c in store.capabilities] == ["cap"]

    def test_update_component_changes_only_named_field(self, store: ArchitectureStore) -> None:
        store.add_component(self._component("c1"))
        store.add_component(self._component("c2", "data"))
        before = store.components

        store.update_component("c1", maturity=10)

        after = store.components
        assert after[0].maturity == 10
        assert after[0].model_dump(exclude={"maturity"}) == before[0].model_dump(exclude={"maturity"})
        assert after[1] is before[1]

    def test_update_unknown_id_is_noop(self, store: ArchitectureStore) -> None:
        store.add_component(self._component("c1"))
        before = store.state

        store.update_component("missing", maturity=10)

        assert store.state is before

    def test_update_clamps_scores(self, store: ArchitectureStore) -> None:
        store.add_component(self._component("c1"))
        store.update_component("c1", maturity=150, importance=-4)
        assert (store.components[0].maturity, store.components[0].importance) == (100, 0)

    def test_update_rejects_unknown_fields(self, store: ArchitectureStore) -> None:
        store.add_component(self._component("c1"))
        with pytest.raises(ValueError, match="colour"):
            store.update_component("c1", colour="red")
        with pytest.raises(ValueError, match="id"):
            store.update_component("c1", id="c9")

    def test_capabilities_by_maturity(self, store: ArchitectureStore) -> None:
        store.add_scenario(synthesize("a", Framework.TOGAF))
        mature = store.get_capabilities_by_maturity(70)
        assert mature
        assert all(c.maturity >= 70 for c in mature)
        assert len(store.get_capabilities_by_maturity(0)) == 4

    def test_clear(self, store: ArchitectureStore) -> None:
        store.add_scenario(synthesize("a", Framework.TOGAF))
        store.clear()
        assert store.state == StoreState()
