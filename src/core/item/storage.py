"""아이템 보관함 — 어떤 유닛에도 장착되지 않은 아이템

플레이어가 언제든 꺼낼 수 있는 공용 보관소. 같은 타입 여러 개 보관 가능.
변수 저장소의 배열 변수 하나에 item_number 오름차순으로 저장된다.
"""

import logging
from collections import Counter
from typing import Optional

from src.core.store import VariableStore

from .models import StorageEntry
from .registry import ItemTypeRegistry

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_VARIABLE = "item_storage"


class ItemStorage:
    def __init__(
        self,
        store: VariableStore,
        registry: ItemTypeRegistry,
        variable: str = DEFAULT_STORAGE_VARIABLE,
    ) -> None:
        self._store = store
        self._registry = registry
        self._variable = variable

    def entries(self) -> list[StorageEntry]:
        """저장된 순서대로 전체 항목."""
        return [
            StorageEntry.from_record(r)
            for r in self._store.get_variable_array(self._variable)
        ]

    def _save(self, entries: list[StorageEntry]) -> None:
        self._store.set_variable_array(
            self._variable, [e.to_record() for e in entries]
        )

    def add(self, item_number: int, category: Optional[str] = None) -> None:
        """아이템 1개 추가. category 지정 시 아이템의 category를 덮어쓴다 (제작 아이템)."""
        entry = StorageEntry(
            category=category or self._registry.get(item_number).category,
            item_number=item_number,
        )
        entries = self.entries()
        entries.append(entry)
        entries.sort(key=lambda e: e.item_number)
        self._save(entries)
        logger.debug("Storage +1 #%d (%s)", item_number, entry.category)

    def remove(
        self, item_number: int, category: Optional[str] = None
    ) -> Optional[StorageEntry]:
        """일치하는 첫 항목 1개만 제거하고 반환. 없으면 아무것도 하지 않고 None."""
        entries = self.entries()

        for index, entry in enumerate(entries):
            if category and entry.category != category:
                continue
            if entry.item_number == item_number:
                del entries[index]
                self._save(entries)
                logger.debug("Storage -1 #%d (%s)", item_number, entry.category)
                return entry

        return None

    def list_items(self, category: Optional[str] = None) -> dict[int, int]:
        """item_number별 수량. 예: {100: 1, 15: 5}

        category 지정 시 해당 category 항목만 센다.
        """
        return dict(
            Counter(
                e.item_number
                for e in self.entries()
                if not category or e.category == category
            )
        )

    def list_categories(self) -> dict[str, int]:
        """category별 수량. 예: {"sword": 10, "bow": 12}"""
        return dict(Counter(e.category for e in self.entries()))
