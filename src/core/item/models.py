"""아이템 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

# 제작 아이템 템플릿 — 실제 category는 장착 시 결정된다
CRAFTED_CATEGORIES = frozenset({"weaponword", "armourword"})

# 제작 방어구 중 갑옷이 아닌 부위 — 방어력 1/3
CRAFTED_MINOR_ARMOUR = frozenset({"helm", "boots", "gauntlets"})


@dataclass(frozen=True)
class CombatModifiers:
    """전투 수치 보정."""

    defence: float = 0.0
    damage: int = 0
    resistances: dict[str, int] = field(default_factory=dict)
    effects: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class ItemType:
    """아이템 타입 — 불변. 카탈로그에서 로드."""

    number: int  # 100 = "Cunctator's sword"
    category: str  # "sword", "armour", "weaponword", ...
    name: str
    image: str = ""

    description: str = ""
    flavour: Optional[str] = None  # 설명 뒤에 덧붙는 문구

    modifiers: CombatModifiers = field(default_factory=CombatModifiers)

    # 퀘스트 효과 등 플레이어에게 보이지 않는 아이템
    silent: bool = False

    @property
    def is_crafted(self) -> bool:
        return self.category in CRAFTED_CATEGORIES


@dataclass(frozen=True)
class StorageEntry:
    """보관함의 물리적 아이템 1개."""

    category: str
    item_number: int

    def to_record(self) -> dict[str, Any]:
        return {"category": self.category, "item_number": self.item_number}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> StorageEntry:
        return cls(category=record["category"], item_number=int(record["item_number"]))


@dataclass(frozen=True)
class GroundEntry:
    """바닥 (x, y)에 놓인 물리적 아이템 1개."""

    item_number: int
    x: int
    y: int
    category: Optional[str] = None  # 제작 아이템만

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {"item_number": self.item_number, "x": self.x, "y": self.y}
        if self.category is not None:
            record["category"] = self.category
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> GroundEntry:
        return cls(
            item_number=int(record["item_number"]),
            x=int(record["x"]),
            y=int(record["y"]),
            category=record.get("category"),
        )


@dataclass
class EquippedItem:
    """유닛에 장착된 아이템. ItemType의 복사본이며 유닛의 modification 목록이 소유."""

    number: int
    category: str
    name: str
    image: str = ""
    description: str = ""
    modifiers: CombatModifiers = field(default_factory=CombatModifiers)
    silent: bool = False

    @classmethod
    def from_type(cls, item_type: ItemType) -> EquippedItem:
        return cls(
            number=item_type.number,
            category=item_type.category,
            name=item_type.name,
            image=item_type.image,
            description=item_type.description,
            modifiers=item_type.modifiers,
            silent=item_type.silent,
        )

    def scale_defence(self, divisor: float) -> None:
        self.modifiers = replace(self.modifiers, defence=self.modifiers.defence / divisor)


@dataclass
class Trait:
    """유닛 특성 (예: fearless)."""

    id: str
    name: str
    female_name: str = ""
    description: str = ""
    effects: tuple[dict[str, Any], ...] = ()
