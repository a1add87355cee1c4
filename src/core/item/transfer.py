"""유닛 · 보관함 · 바닥 사이의 아이템 이동

이동은 항상 "출발지에서 제거 → 도착지에 추가" 순서로 한다.
출발지에서 제거된 수만큼만 도착지에 추가하므로 아이템이 복제되거나 사라지지 않는다.
실패할 수 있는 카탈로그 조회와 장착 검사는 출발지를 건드리기 전에 끝낸다.
"""

import logging
from typing import Optional

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.unit import Unit

from .equipment import UnitEquipment
from .errors import MissingCraftedCategoryError
from .ground import GroundItems
from .models import EquippedItem
from .registry import ItemTypeRegistry
from .storage import ItemStorage

logger = logging.getLogger(__name__)


class ItemTransfer:
    def __init__(
        self,
        registry: ItemTypeRegistry,
        storage: ItemStorage,
        on_unit: UnitEquipment,
        on_the_ground: GroundItems,
        event_bus: EventBus,
    ) -> None:
        self._registry = registry
        self._storage = storage
        self._on_unit = on_unit
        self._ground = on_the_ground
        self._bus = event_bus

    def undress_unit(self, unit: Unit) -> int:
        """유닛의 일반 아이템을 모두 보관함으로. 수치 재계산은 마지막에 1회.

        반환: 보관함으로 옮긴 수.
        """
        # 같은 (번호, category)는 take 한 번에 모두 빠진다
        pairs = dict.fromkeys(
            (item.number, item.category) for item in self._on_unit.list_regular(unit)
        )

        moved = 0
        for item_number, category in pairs:
            moved += self.take_item_from_unit(
                unit, item_number, category, skip_update=True
            )

        self._on_unit.update_stats(unit)
        return moved

    def take_item_from_unit(
        self,
        unit: Unit,
        item_number: int,
        category: Optional[str] = None,
        skip_update: bool = False,
    ) -> int:
        """유닛에서 아이템을 해제해 보관함으로. 반환: 옮긴 수."""
        equipped = self._matching(unit, item_number, category)
        count = self._on_unit.remove(unit, item_number, category, skip_update)
        if count == 0:
            logger.warning("Unit %s has no item #%d to store", unit.id, item_number)
            return 0

        stored = equipped[:count]
        for item in stored:
            self._storage.add(item_number, item.category)

        if stored:
            self._emit_transfer(
                "unit", "storage", unit, item_number, stored[0].category, len(stored)
            )
        return len(stored)

    def get_item_from_storage(
        self, unit: Unit, item_number: int, category: Optional[str] = None
    ) -> bool:
        """보관함에서 1개 꺼내 유닛 발밑에 놓고 item_pick 발행.

        보관함에 없으면 아무것도 하지 않고 False.
        카탈로그에 없는 번호는 보관함을 건드리기 전에 NotFoundError.
        """
        item_type = self._registry.get(item_number)

        entry = self._storage.remove(item_number, category)
        if entry is None:
            logger.warning("Storage has no item #%d (%s)", item_number, category)
            return False

        ground_category = entry.category if item_type.is_crafted else None
        self._ground.add(item_number, unit.x, unit.y, ground_category)
        self._emit_transfer("storage", "ground", unit, item_number, entry.category)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.ITEM_PICK,
                data={"unit_id": unit.id, "x": unit.x, "y": unit.y},
                source="item_transfer",
                repeatable=True,
            )
        )
        return True

    def drop_item(
        self, unit: Unit, item_number: int, category: Optional[str] = None
    ) -> int:
        """유닛에서 아이템을 해제해 발밑 바닥에. 반환: 옮긴 수."""
        equipped = self._matching(unit, item_number, category)
        count = self._on_unit.remove(unit, item_number, category)
        if count == 0:
            return 0

        dropped = equipped[:count]
        for item in dropped:
            self._ground.add(
                item_number, unit.x, unit.y, self._ground_category(item_number, item.category)
            )

        if dropped:
            self._emit_transfer(
                "unit", "ground", unit, item_number, dropped[0].category, len(dropped)
            )
        return len(dropped)

    def pick_up(
        self, unit: Unit, item_number: int, category: Optional[str] = None
    ) -> bool:
        """유닛 발밑 바닥에서 1개를 주워 장착. 바닥에 없으면 False.

        category를 생략하면 바닥 항목의 category로 장착한다.
        장착할 수 없는 경우(카탈로그에 없음, 제작 아이템인데 category 없음)
        바닥에서 빼기 전에 예외를 던진다.
        """
        entry = self._ground.find(item_number, unit.x, unit.y, category)
        if entry is None:
            logger.warning(
                "No item #%d on the ground at (%d, %d)", item_number, unit.x, unit.y
            )
            return False

        equip_category = category or entry.category
        if self._registry.get(item_number).is_crafted and not equip_category:
            raise MissingCraftedCategoryError(item_number)

        self._ground.remove(item_number, unit.x, unit.y, category)
        item = self._on_unit.add(unit, item_number, equip_category)
        self._emit_transfer("ground", "unit", unit, item_number, item.category)
        return True

    def _matching(
        self, unit: Unit, item_number: int, category: Optional[str]
    ) -> list[EquippedItem]:
        return [
            item
            for item in self._on_unit.list(unit)
            if item.number == item_number and (not category or item.category == category)
        ]

    def _ground_category(self, item_number: int, category: str) -> Optional[str]:
        """바닥 레코드에는 제작 아이템의 category만 남긴다."""
        if self._registry.get(item_number).is_crafted:
            return category
        return None

    def _emit_transfer(
        self,
        from_: str,
        to: str,
        unit: Unit,
        item_number: int,
        category: str,
        count: int = 1,
    ) -> None:
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.ITEM_TRANSFERRED,
                data={
                    "from": from_,
                    "to": to,
                    "unit_id": unit.id,
                    "item_number": item_number,
                    "category": category,
                    "count": count,
                },
                source="item_transfer",
                repeatable=True,
            )
        )
