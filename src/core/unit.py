"""유닛 표현 — 좌표, 변수, modification 목록

호스트 게임 유닛의 최소 표현. 아이템 장착 = "object" modification 추가.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class Modification:
    """유닛에 붙은 modification. kind: "object" | "trait" """

    kind: str
    payload: Any


@dataclass
class Unit:
    id: str
    x: int = 0
    y: int = 0
    on_map: bool = False
    controller: str = "human"  # "human" | "ai"

    # 게임 변수 (예: starving, cant_pick)
    variables: Dict[str, Any] = field(default_factory=dict)

    modifications: List[Modification] = field(default_factory=list)

    # 기본 수치 / 파생 수치 (StatEngine이 재계산)
    base_stats: Dict[str, float] = field(default_factory=dict)
    stats: Dict[str, float] = field(default_factory=dict)
    traits: List[str] = field(default_factory=list)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


def add_modification(unit: Unit, kind: str, payload: Any) -> Modification:
    """modification 추가."""
    modification = Modification(kind=kind, payload=payload)
    unit.modifications.append(modification)
    return modification


def remove_modifications(unit: Unit, kind: str = "object", **filters: Any) -> int:
    """kind와 filters(payload 속성 == 값)가 모두 일치하는 modification 전부 제거.

    반환: 제거된 수.
    """

    def _matches(mod: Modification) -> bool:
        if mod.kind != kind:
            return False
        return all(
            getattr(mod.payload, key, None) == value for key, value in filters.items()
        )

    kept = [m for m in unit.modifications if not _matches(m)]
    removed = len(unit.modifications) - len(kept)
    unit.modifications[:] = kept
    return removed
