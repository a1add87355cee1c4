"""아이템 타입 저장소 — 카탈로그 지연 로드, 읽기 전용"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterable, Optional

from src.core.store import VariableStore

from .errors import ImmutableRegistryError, NotFoundError
from .models import CombatModifiers, ItemType

logger = logging.getLogger(__name__)

# 카탈로그 로더: 호출 시 원시 레코드 목록을 반환
CatalogLoader = Callable[[], Iterable[dict[str, Any]]]


def item_type_from_record(raw: dict[str, Any]) -> ItemType:
    """원시 레코드 → ItemType. 필수 키 누락 시 KeyError."""
    modifiers = CombatModifiers(
        defence=float(raw.get("defence", 0)),
        damage=int(raw.get("damage", 0)),
        resistances=dict(raw.get("resistances", {})),
        effects=tuple(raw.get("effects", [])),
    )
    return ItemType(
        number=int(raw["number"]),
        category=raw["sort"] if "sort" in raw else raw["category"],
        name=raw.get("name", ""),
        image=raw.get("image", ""),
        description=raw.get("description", ""),
        flavour=raw.get("flavour"),
        modifiers=modifiers,
        silent=bool(raw.get("silent", False)),
    )


def load_catalog_from_json(path: str | Path) -> CatalogLoader:
    """JSON 배열 파일을 읽는 로더 생성. 파일은 첫 조회 시점에 읽는다."""
    path = Path(path)

    def _load() -> list[dict[str, Any]]:
        with path.open("r", encoding="utf-8") as f:
            raw_list: list[dict[str, Any]] = json.load(f)
        logger.info("Read %d item records from %s", len(raw_list), path)
        return raw_list

    return _load


def catalog_from_store(store: VariableStore, name: str = "item_list.object") -> CatalogLoader:
    """변수 저장소의 배열 변수를 읽는 로더 생성."""

    def _load() -> list[dict[str, Any]]:
        return store.get_variable_array(name)

    return _load


class ItemTypeRegistry(Mapping[int, ItemType]):
    """
    item_number → ItemType 읽기 전용 매핑.
    첫 조회 시 카탈로그를 한 번만 읽어 캐시한다. 프로세스 수명 동안 유지.
    """

    def __init__(self, loader: CatalogLoader) -> None:
        self._loader = loader
        self._cache: Optional[Mapping[int, ItemType]] = None

    def _types(self) -> Mapping[int, ItemType]:
        if self._cache is None:
            self._cache = self._build()
        return self._cache

    def _build(self) -> Mapping[int, ItemType]:
        types: dict[int, ItemType] = {}
        for raw in self._loader():
            try:
                item_type = item_type_from_record(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "Failed to load item type %s: %s", raw.get("number", "?"), e
                )
                continue
            types[item_type.number] = item_type

        logger.info("Loaded %d item types", len(types))
        return MappingProxyType(types)

    def get(self, item_number: int) -> ItemType:  # type: ignore[override]
        """O(1) 조회. 없으면 NotFoundError."""
        return self[item_number]

    def __getitem__(self, item_number: int) -> ItemType:
        try:
            return self._types()[item_number]
        except KeyError:
            raise NotFoundError(item_number) from None

    def __setitem__(self, item_number: int, value: Any) -> None:
        raise ImmutableRegistryError()

    def __delitem__(self, item_number: int) -> None:
        raise ImmutableRegistryError()

    def __iter__(self) -> Iterator[int]:
        return iter(self._types())

    def __len__(self) -> int:
        return len(self._types())

    def __contains__(self, item_number: object) -> bool:
        return item_number in self._types()

    @property
    def loaded(self) -> bool:
        return self._cache is not None

    def count(self) -> int:
        """등록된 아이템 타입 수."""
        return len(self)

    def invalidate(self) -> None:
        """캐시 폐기. 다음 조회 시 카탈로그를 다시 읽는다 (핫 리로드 전용)."""
        logger.info("Item type cache invalidated")
        self._cache = None
