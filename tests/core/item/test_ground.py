"""GroundItems 테스트: 배치/제거, 이미지, 줍기 트리거"""

from __future__ import annotations

import pytest

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.item.errors import NotFoundError
from src.core.item.ground import GroundItems, trigger_id
from src.core.item.models import GroundEntry
from src.core.item.registry import ItemTypeRegistry
from src.core.map import GameMap
from src.core.store import InMemoryVariableStore
from src.core.unit import Unit

RING_IMAGE = "items/ring-gold.png"
SWORD_IMAGE = "items/sword-cunctator.png"


@pytest.fixture()
def ground(
    store: InMemoryVariableStore,
    registry: ItemTypeRegistry,
    game_map: GameMap,
    bus: EventBus,
) -> GroundItems:
    return GroundItems(store, registry, game_map, bus)


@pytest.fixture()
def picks(bus: EventBus) -> list[GameEvent]:
    received: list[GameEvent] = []
    bus.subscribe(EventTypes.ITEM_PICK, received.append)
    return received


class TestAdd:
    def test_add_and_list(self, ground: GroundItems) -> None:
        ground.add(5, 3, 4)
        ground.add(100, 3, 4)
        ground.add(15, 7, 7)
        assert ground.list(3, 4) == [5, 100]
        assert ground.list(7, 7) == [15]
        assert ground.list(0, 0) == []

    def test_add_places_image(self, ground: GroundItems, game_map: GameMap) -> None:
        ground.add(5, 3, 4)
        assert game_map.images_at(3, 4) == [RING_IMAGE]

    def test_add_keeps_category(
        self, ground: GroundItems, store: InMemoryVariableStore
    ) -> None:
        ground.add(260, 1, 2, "helm")
        assert ground.entries(1, 2) == [GroundEntry(item_number=260, x=1, y=2, category="helm")]
        assert store.get_variable("items") == [
            {"item_number": 260, "x": 1, "y": 2, "category": "helm"}
        ]

    def test_add_unknown_item(self, ground: GroundItems) -> None:
        with pytest.raises(NotFoundError):
            ground.add(99999, 1, 1)
        assert ground.entries() == []

    def test_one_trigger_per_tile(self, ground: GroundItems, bus: EventBus) -> None:
        ground.add(5, 3, 4)
        ground.add(100, 3, 4)
        ground.add(5, 3, 4)
        assert bus.has_handler(trigger_id(3, 4))
        assert bus.handler_count == 1

    def test_trigger_ids_distinct(self) -> None:
        assert trigger_id(1, 11) != trigger_id(11, 1)


class TestRemove:
    def test_remove_one_of_two(self, ground: GroundItems, game_map: GameMap) -> None:
        ground.add(5, 3, 4)
        ground.add(5, 3, 4)
        assert ground.remove(5, 3, 4) == GroundEntry(item_number=5, x=3, y=4)
        assert ground.list(3, 4) == [5]
        # 같은 아이템이 남아 있으므로 이미지 유지
        assert RING_IMAGE in game_map.images_at(3, 4)

    def test_remove_sole_clears_image(self, ground: GroundItems, game_map: GameMap) -> None:
        ground.add(5, 3, 4)
        ground.add(100, 3, 4)
        ground.remove(5, 3, 4)
        assert ground.list(3, 4) == [100]
        assert game_map.images_at(3, 4) == [SWORD_IMAGE]

    def test_remove_last_two_steps(self, ground: GroundItems, game_map: GameMap) -> None:
        ground.add(5, 3, 4)
        ground.add(5, 3, 4)
        ground.remove(5, 3, 4)
        ground.remove(5, 3, 4)
        assert ground.list(3, 4) == []
        assert game_map.images_at(3, 4) == []

    def test_remove_missing_is_noop(self, ground: GroundItems, game_map: GameMap) -> None:
        ground.add(5, 3, 4)
        assert ground.remove(100, 3, 4) is None
        assert ground.remove(5, 9, 9) is None
        assert ground.list(3, 4) == [5]
        assert game_map.images_at(3, 4) == [RING_IMAGE]

    def test_remove_takes_last_match(self, ground: GroundItems) -> None:
        ground.add(260, 1, 1, "helm")
        ground.add(100, 1, 1)
        ground.add(260, 1, 1, "boots")
        ground.remove(260, 1, 1)
        assert [e.category for e in ground.entries(1, 1)] == ["helm", None]

    def test_remove_with_category(self, ground: GroundItems) -> None:
        ground.add(260, 1, 1, "helm")
        ground.add(260, 1, 1, "boots")
        assert ground.remove(260, 1, 1, "helm").category == "helm"
        assert [e.category for e in ground.entries(1, 1)] == ["boots"]
        assert ground.remove(260, 1, 1, "gauntlets") is None

    def test_other_tiles_untouched(self, ground: GroundItems) -> None:
        ground.add(5, 3, 4)
        ground.add(5, 4, 3)
        ground.remove(5, 3, 4)
        assert ground.list(4, 3) == [5]

    def test_find_matches_remove(self, ground: GroundItems) -> None:
        ground.add(260, 1, 1, "helm")
        ground.add(260, 1, 1, "boots")
        found = ground.find(260, 1, 1)
        assert found == GroundEntry(item_number=260, x=1, y=1, category="boots")
        assert len(ground.entries(1, 1)) == 2
        assert ground.remove(260, 1, 1) == found
        assert ground.find(260, 9, 9) is None


class TestPickTrigger:
    def test_human_unit_triggers_pick(
        self, ground: GroundItems, game_map: GameMap, picks: list[GameEvent]
    ) -> None:
        ground.add(5, 3, 4)
        hero = Unit(id="hero")
        game_map.move_unit(hero, 3, 4)
        assert len(picks) == 1
        assert picks[0].data == {"unit_id": "hero", "x": 3, "y": 4}

    def test_trigger_repeats(
        self, ground: GroundItems, game_map: GameMap, picks: list[GameEvent]
    ) -> None:
        ground.add(5, 3, 4)
        hero = Unit(id="hero")
        game_map.move_unit(hero, 3, 4)
        game_map.move_unit(hero, 0, 0)
        game_map.move_unit(hero, 3, 4)
        assert len(picks) == 2

    def test_other_tile_does_not_trigger(
        self, ground: GroundItems, game_map: GameMap, picks: list[GameEvent]
    ) -> None:
        ground.add(5, 3, 4)
        game_map.move_unit(Unit(id="hero"), 4, 3)
        assert picks == []

    def test_ai_unit_does_not_trigger(
        self, ground: GroundItems, game_map: GameMap, picks: list[GameEvent]
    ) -> None:
        ground.add(5, 3, 4)
        game_map.move_unit(Unit(id="orc", controller="ai"), 3, 4)
        assert picks == []

    def test_cant_pick_unit_does_not_trigger(
        self, ground: GroundItems, game_map: GameMap, picks: list[GameEvent]
    ) -> None:
        ground.add(5, 3, 4)
        game_map.move_unit(Unit(id="ghost", variables={"cant_pick": "yes"}), 3, 4)
        assert picks == []


class TestRestore:
    def test_restore_triggers(
        self,
        store: InMemoryVariableStore,
        registry: ItemTypeRegistry,
        game_map: GameMap,
        bus: EventBus,
        picks: list[GameEvent],
    ) -> None:
        store.set_variable_array(
            "items",
            [
                {"item_number": 5, "x": 3, "y": 4},
                {"item_number": 100, "x": 6, "y": 6},
            ],
        )
        ground = GroundItems(store, registry, game_map, bus)
        assert ground.restore_triggers() == 2
        assert game_map.images_at(6, 6) == [SWORD_IMAGE]

        game_map.move_unit(Unit(id="hero"), 3, 4)
        assert len(picks) == 1
