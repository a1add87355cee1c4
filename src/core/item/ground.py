"""바닥 아이템 — 맵 좌표 (x, y)에 놓인 아이템

타일 위의 유닛이 주울 수 있고, 유닛이 바닥에 내려놓을 수도 있다.
아이템마다 타일 이미지를 그리고, 타일마다 "줍기" 트리거를 하나 등록한다.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.map import GameMap
from src.core.store import VariableStore

from .models import GroundEntry
from .registry import ItemTypeRegistry

logger = logging.getLogger(__name__)

DEFAULT_GROUND_VARIABLE = "items"


def trigger_id(x: int, y: int) -> str:
    """타일 트리거 id. (1, 11)과 (11, 1)이 겹치지 않도록 구분자 사용."""
    return f"ie{x}_{y}"


class GroundItems:
    def __init__(
        self,
        store: VariableStore,
        registry: ItemTypeRegistry,
        game_map: GameMap,
        event_bus: EventBus,
        variable: str = DEFAULT_GROUND_VARIABLE,
    ) -> None:
        self._store = store
        self._registry = registry
        self._map = game_map
        self._bus = event_bus
        self._variable = variable

    def entries(self, x: Optional[int] = None, y: Optional[int] = None) -> list[GroundEntry]:
        """전체 항목 (x, y 지정 시 해당 타일만)."""
        entries = [
            GroundEntry.from_record(r)
            for r in self._store.get_variable_array(self._variable)
        ]
        if x is None or y is None:
            return entries
        return [e for e in entries if e.x == x and e.y == y]

    def _save(self, entries: list[GroundEntry]) -> None:
        self._store.set_variable_array(
            self._variable, [e.to_record() for e in entries]
        )

    def add(self, item_number: int, x: int, y: int, category: Optional[str] = None) -> None:
        """(x, y)에 아이템 1개 배치."""
        image = self._registry.get(item_number).image

        entries = self.entries()
        entries.append(GroundEntry(item_number=item_number, x=x, y=y, category=category))
        self._save(entries)

        self._map.place_image(x, y, image)
        self._register_pick_trigger(x, y)
        logger.debug("Ground +1 #%d at (%d, %d)", item_number, x, y)

    def remove(
        self, item_number: int, x: int, y: int, category: Optional[str] = None
    ) -> Optional[GroundEntry]:
        """(x, y)에서 아이템 1개 제거 (마지막으로 일치한 항목). 제거한 항목 반환.

        타일에 같은 아이템이 더 없을 때만 이미지를 지운다.
        일치 항목이 없으면 아무것도 하지 않고 None.
        """
        entries = self.entries()

        index_to_remove = None
        items_found = 0

        for index, entry in enumerate(entries):
            if entry.x == x and entry.y == y and entry.item_number == item_number:
                if not category or entry.category == category:
                    index_to_remove = index
                    items_found += 1

        if index_to_remove is None:
            return None

        removed = entries.pop(index_to_remove)
        self._save(entries)

        if items_found == 1:
            self._map.clear_image(x, y, self._registry.get(item_number).image)

        logger.debug(
            "Ground -1 #%d at (%d, %d), %d left", item_number, x, y, items_found - 1
        )
        return removed

    def find(
        self, item_number: int, x: int, y: int, category: Optional[str] = None
    ) -> Optional[GroundEntry]:
        """remove()가 제거할 항목 (마지막으로 일치한 항목). 상태는 바꾸지 않는다."""
        matches = [
            e
            for e in self.entries(x, y)
            if e.item_number == item_number and (not category or e.category == category)
        ]
        return matches[-1] if matches else None

    def list(self, x: int, y: int) -> list[int]:
        """(x, y)에 있는 item_number 목록 (저장 순서)."""
        return [e.item_number for e in self.entries(x, y)]

    def restore_triggers(self) -> int:
        """저장된 바닥 아이템의 이미지와 트리거 복원 (세이브 로드 후).

        반환: 복원한 항목 수.
        """
        entries = self.entries()
        for entry in entries:
            self._map.place_image(entry.x, entry.y, self._registry.get(entry.item_number).image)
            self._register_pick_trigger(entry.x, entry.y)

        logger.info("Restored %d ground items", len(entries))
        return len(entries)

    # === 줍기 트리거 ===

    def _register_pick_trigger(self, x: int, y: int) -> None:
        self._bus.subscribe(
            EventTypes.UNIT_MOVED,
            self._make_pick_trigger(x, y),
            handler_id=trigger_id(x, y),
        )

    def _make_pick_trigger(self, x: int, y: int) -> Callable[[GameEvent], None]:
        """사람이 조종하는 유닛이 (x, y)에 들어오면 item_pick 발행.

        유닛 변수 cant_pick == "yes"면 발동하지 않는다.
        트리거는 반복 발동한다.
        """

        def pick_trigger(event: GameEvent) -> None:
            if event.data.get("x") != x or event.data.get("y") != y:
                return

            unit = self._map.unit_at(x, y)
            if unit is None or unit.controller != "human":
                return
            if unit.variables.get("cant_pick") == "yes":
                return

            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.ITEM_PICK,
                    data={"unit_id": unit.id, "x": x, "y": y},
                    source="ground_trigger",
                )
            )

        return pick_trigger
