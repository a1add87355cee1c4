"""유닛 파생 수치 재계산 — 장착/해제 후 호출"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from src.core.map import GameMap
from src.core.unit import Unit

from .models import EquippedItem, Trait

logger = logging.getLogger(__name__)


class StatEngine(ABC):
    """호스트 게임의 수치 엔진 인터페이스."""

    @abstractmethod
    def recompute_stats(self, unit: Unit) -> Unit:
        """전체 modification 목록으로 파생 수치를 다시 계산. 갱신된 유닛 반환."""
        ...

    @abstractmethod
    def commit_unit(self, unit: Unit) -> None:
        """갱신된 유닛을 맵 위치에 다시 등록."""
        ...


class DefaultStatEngine(StatEngine):
    """장착 아이템 보정치와 특성을 합산하는 기본 구현.

    stats["defence"], stats["damage"]: base + 아이템 합계
    stats["resistance_<type>"]: 아이템 저항 합계
    """

    def __init__(self, game_map: Optional[GameMap] = None) -> None:
        self._map = game_map
        self.recompute_count = 0

    def recompute_stats(self, unit: Unit) -> Unit:
        stats = dict(unit.base_stats)
        stats.setdefault("defence", 0.0)
        stats.setdefault("damage", 0)
        traits: list[str] = []

        for mod in unit.modifications:
            if isinstance(mod.payload, EquippedItem):
                modifiers = mod.payload.modifiers
                stats["defence"] += modifiers.defence
                stats["damage"] += modifiers.damage
                for kind, value in modifiers.resistances.items():
                    key = f"resistance_{kind}"
                    stats[key] = stats.get(key, 0) + value
            elif isinstance(mod.payload, Trait):
                traits.append(mod.payload.id)

        unit.stats = stats
        unit.traits = traits
        self.recompute_count += 1
        logger.debug("Recomputed stats for unit %s: %s", unit.id, stats)
        return unit

    def commit_unit(self, unit: Unit) -> None:
        if self._map is not None:
            self._map.put_unit(unit)
