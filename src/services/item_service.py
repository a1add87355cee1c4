"""아이템 Service — Core 컴포넌트 조립, 변수 저장소/EventBus 연결

호출자는 storage / on_unit / on_the_ground / util 네 구역으로 접근한다.
"""

from collections import Counter
from typing import Optional

from src.config import settings
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.item.equipment import UnitEquipment
from src.core.item.ground import GroundItems
from src.core.item.models import EquippedItem, ItemType
from src.core.item.registry import ItemTypeRegistry
from src.core.item.stats import DefaultStatEngine, StatEngine
from src.core.item.storage import ItemStorage
from src.core.item.transfer import ItemTransfer
from src.core.logging import get_logger
from src.core.map import GameMap
from src.core.store import VariableStore
from src.core.unit import Unit

logger = get_logger(__name__)


class ItemService:
    """아이템 엔진 진입점"""

    def __init__(
        self,
        store: VariableStore,
        registry: ItemTypeRegistry,
        event_bus: EventBus,
        game_map: GameMap,
        stat_engine: Optional[StatEngine] = None,
        storage_variable: str = settings.STORAGE_VARIABLE,
        ground_variable: str = settings.GROUND_VARIABLE,
    ):
        self._bus = event_bus
        self.registry = registry
        self.game_map = game_map
        self.stat_engine = stat_engine or DefaultStatEngine(game_map)

        self.storage = ItemStorage(store, registry, storage_variable)
        self.on_unit = _NotifyingEquipment(registry, self.stat_engine, event_bus)
        self.on_the_ground = GroundItems(
            store, registry, game_map, event_bus, ground_variable
        )
        self.util = ItemTransfer(
            registry, self.storage, self.on_unit, self.on_the_ground, event_bus
        )

    def get_item_type(self, item_number: int) -> ItemType:
        """Registry 조회. 없으면 NotFoundError."""
        return self.registry.get(item_number)

    def restore(self) -> int:
        """세이브 로드 후 바닥 아이템 이미지/트리거 복원."""
        return self.on_the_ground.restore_triggers()

    def total_counts(self, units: list[Unit]) -> dict[tuple[int, str], int]:
        """(item_number, category)별 전체 수량 — 보관함 + 바닥 + 주어진 유닛들.

        바닥 항목에 category가 없으면 카탈로그 category를 쓴다.
        """
        counts: dict[tuple[int, str], int] = {}

        def _bump(key: tuple[int, str]) -> None:
            counts[key] = counts.get(key, 0) + 1

        for entry in self.storage.entries():
            _bump((entry.item_number, entry.category))
        for ground in self.on_the_ground.entries():
            category = ground.category or self.registry.get(ground.item_number).category
            _bump((ground.item_number, category))
        for unit in units:
            for item in self.on_unit.list(unit):
                _bump((item.number, item.category))

        return counts


class _NotifyingEquipment(UnitEquipment):
    """장착/해제 시 item_equipped / item_unequipped 발행"""

    def __init__(
        self, registry: ItemTypeRegistry, stat_engine: StatEngine, event_bus: EventBus
    ) -> None:
        super().__init__(registry, stat_engine)
        self._bus = event_bus

    def add(
        self, unit: Unit, item_number: int, category: Optional[str] = None
    ) -> EquippedItem:
        item = super().add(unit, item_number, category)
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.ITEM_EQUIPPED,
                data={
                    "unit_id": unit.id,
                    "item_number": item.number,
                    "category": item.category,
                },
                source="item_service",
                repeatable=True,
            )
        )
        return item

    def remove(
        self,
        unit: Unit,
        item_number: int,
        category: Optional[str] = None,
        skip_update: bool = False,
    ) -> int:
        """해제된 아이템의 category별로 item_unequipped 1건씩 발행."""
        categories = Counter(
            item.category
            for item in self.list(unit)
            if item.number == item_number and (not category or item.category == category)
        )
        removed = super().remove(unit, item_number, category, skip_update)
        if not removed:
            return removed

        for item_category, count in categories.items():
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.ITEM_UNEQUIPPED,
                    data={
                        "unit_id": unit.id,
                        "item_number": item_number,
                        "category": item_category,
                        "count": count,
                    },
                    source="item_service",
                    repeatable=True,
                )
            )
        return removed
