"""GameMap — 유닛 위치, 타일 이미지, 이동 이벤트

호스트 게임의 맵 계층 중 아이템 엔진이 쓰는 부분만 구현한다.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.unit import Unit

logger = get_logger(__name__)

Coordinate = Tuple[int, int]


class GameMap:
    """좌표 → 유닛, 좌표 → 이미지 오버레이 목록"""

    def __init__(self, event_bus: EventBus) -> None:
        self._bus = event_bus
        self._units: Dict[Coordinate, Unit] = {}
        self._images: Dict[Coordinate, List[str]] = defaultdict(list)

    # === 유닛 ===

    def place_unit(self, unit: Unit, x: int, y: int) -> None:
        """유닛을 (x, y)에 배치. 이벤트 없음."""
        self.remove_unit(unit)
        unit.x, unit.y = x, y
        unit.on_map = True
        self._units[(x, y)] = unit

    def put_unit(self, unit: Unit) -> None:
        """갱신된 유닛을 현재 좌표에 다시 등록."""
        self._units[unit.position] = unit
        unit.on_map = True

    def remove_unit(self, unit: Unit) -> None:
        if self._units.get(unit.position) is unit:
            del self._units[unit.position]
        unit.on_map = False

    def move_unit(self, unit: Unit, x: int, y: int) -> None:
        """유닛 이동 + unit_moved 발행 (타일 트리거 발동)."""
        self.place_unit(unit, x, y)
        logger.debug("Unit %s moved to (%d, %d)", unit.id, x, y)
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.UNIT_MOVED,
                data={"unit_id": unit.id, "x": x, "y": y},
                source="game_map",
            )
        )

    def unit_at(self, x: int, y: int) -> Optional[Unit]:
        return self._units.get((x, y))

    # === 이미지 ===

    def place_image(self, x: int, y: int, image: str) -> None:
        self._images[(x, y)].append(image)

    def clear_image(self, x: int, y: int, image: str) -> None:
        """(x, y)에서 해당 이미지 오버레이를 모두 제거."""
        remaining = [i for i in self._images.get((x, y), []) if i != image]
        if remaining:
            self._images[(x, y)] = remaining
        else:
            self._images.pop((x, y), None)

    def images_at(self, x: int, y: int) -> List[str]:
        return list(self._images.get((x, y), []))
