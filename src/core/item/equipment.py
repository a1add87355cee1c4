"""유닛 장착 아이템 — 유닛의 modification 목록 위의 뷰

장착 = "object" modification 추가, 해제 = 제거.
장착/해제 후에는 StatEngine으로 파생 수치를 다시 계산한다.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.core.unit import Unit, add_modification, remove_modifications

from .errors import MissingCraftedCategoryError
from .models import CRAFTED_MINOR_ARMOUR, EquippedItem, Trait
from .registry import ItemTypeRegistry
from .stats import StatEngine

logger = logging.getLogger(__name__)

# category "limited"는 책과 오브가 공유한다. 책은 해제 불가, 오브(#602, #610)는 일반 아이템.
# TODO: 카탈로그에 해제 가능 여부 플래그를 추가하면 이 목록을 제거할 수 있다
LIMITED_REMOVABLE_ORBS = frozenset({602, 610})

FOUL_POTION = 16
BOOK_OF_COURAGE = 89

FLAVOUR_MARKUP = "\n<span color='#808080'><i>{flavour}</i></span>"

FEARLESS_TRAIT_ID = "fearless"


def _fearless_trait() -> Trait:
    return Trait(
        id=FEARLESS_TRAIT_ID,
        name="fearless",
        female_name="fearless",
        description="Fights normally during unfavorable times of day/night",
        effects=({"apply_to": "fearless"},),
    )


class UnitEquipment:
    def __init__(self, registry: ItemTypeRegistry, stat_engine: StatEngine) -> None:
        self._registry = registry
        self._stats = stat_engine

    def list(self, unit: Unit) -> list[EquippedItem]:
        """유닛의 모든 아이템. 아이템이 아닌 object(category 없음)는 제외."""
        return [
            m.payload
            for m in unit.modifications
            if m.kind == "object"
            and isinstance(m.payload, EquippedItem)
            and m.payload.category
        ]

    def list_regular(self, unit: Unit) -> list[EquippedItem]:
        """해제 가능한 일반 아이템만. 책, 물약, 임시/숨김 아이템 제외."""
        items = []

        for item in self.list(unit):
            listed = bool(item.name) and not item.silent and "potion" not in item.category

            if listed and item.category == "limited":
                listed = item.number in LIMITED_REMOVABLE_ORBS

            if listed:
                items.append(item)

        return items

    def find(self, unit: Unit, category: str) -> Optional[EquippedItem]:
        """해당 category의 첫 장착 아이템. 없으면 None."""
        for item in self.list(unit):
            if item.category == category:
                return item
        return None

    def update_stats(self, unit: Unit) -> None:
        updated = self._stats.recompute_stats(unit)
        if unit.on_map:
            self._stats.commit_unit(updated)

    def add(
        self, unit: Unit, item_number: int, category: Optional[str] = None
    ) -> EquippedItem:
        """아이템 1개 장착.

        제작 아이템(weaponword/armourword)은 category 필수.
        """
        item_type = self._registry.get(item_number)
        item = EquippedItem.from_type(item_type)

        if item_type.is_crafted:
            if not category:
                raise MissingCraftedCategoryError(item_number)

            item.category = category

            # 제작 방어구 중 갑옷이 아닌 부위는 방어력 1/3
            if item.category in CRAFTED_MINOR_ARMOUR:
                item.scale_defence(3)

        if item_type.flavour:
            item.description += FLAVOUR_MARKUP.format(flavour=item_type.flavour)

        add_modification(unit, "object", item)

        # Foul Potion: 굶주림 카운터 초기화
        if item.number == FOUL_POTION:
            unit.variables.setdefault("starving", 0)

        # Book of Courage: fearless 특성 부여
        if item.number == BOOK_OF_COURAGE and not self._has_trait(unit, FEARLESS_TRAIT_ID):
            add_modification(unit, "trait", _fearless_trait())

        self.update_stats(unit)
        logger.debug("Unit %s equipped #%d (%s)", unit.id, item.number, item.category)
        return item

    def remove(
        self,
        unit: Unit,
        item_number: int,
        category: Optional[str] = None,
        skip_update: bool = False,
    ) -> int:
        """일치하는 아이템 전부 해제. 반환: 해제된 수.

        skip_update: 여러 개를 연속 해제할 때 마지막에 한 번만 재계산하기 위함.
        """
        filters: dict = {"number": item_number}
        if category:
            filters["category"] = category

        removed = remove_modifications(unit, "object", **filters)

        if not skip_update:
            self.update_stats(unit)

        logger.debug("Unit %s unequipped #%d x%d", unit.id, item_number, removed)
        return removed

    @staticmethod
    def _has_trait(unit: Unit, trait_id: str) -> bool:
        return any(
            m.kind == "trait" and getattr(m.payload, "id", None) == trait_id
            for m in unit.modifications
        )
