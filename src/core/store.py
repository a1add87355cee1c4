"""변수 저장소 인터페이스 — 호스트 게임의 영속 변수 저장소 추상화

보관함/바닥 상태는 오직 이 인터페이스로만 영속화된다.
엔진 컴포넌트는 호출 사이에 자체 상태를 가지지 않는다.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Optional


class VariableStore(ABC):
    """이름 → 값 저장소.

    값은 JSON 호환 데이터(dict/list/str/int/float/bool/None)여야 한다.
    배열 변수는 레코드(dict) 리스트다.
    """

    @abstractmethod
    def get_variable(self, name: str) -> Optional[Any]:
        """값 조회. 없으면 None."""
        ...

    @abstractmethod
    def set_variable(self, name: str, value: Any) -> None:
        """값 저장 (덮어쓰기)."""
        ...

    @abstractmethod
    def clear_variable(self, name: str) -> None:
        """값 삭제. 없으면 무시."""
        ...

    def get_variable_array(self, name: str) -> list[dict[str, Any]]:
        """배열 변수 조회. 없으면 빈 리스트."""
        value = self.get_variable(name)
        if value is None:
            return []
        return list(value)

    def set_variable_array(self, name: str, records: list[dict[str, Any]]) -> None:
        """배열 변수 저장. 빈 배열이면 변수 삭제."""
        if not records:
            self.clear_variable(name)
            return
        self.set_variable(name, list(records))


class InMemoryVariableStore(VariableStore):
    """프로세스 내 dict 저장소 (테스트/단독 실행용)."""

    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get_variable(self, name: str) -> Optional[Any]:
        # 호출자가 반환값을 수정해도 저장소에 반영되지 않도록 복사
        return copy.deepcopy(self._values.get(name))

    def set_variable(self, name: str, value: Any) -> None:
        self._values[name] = copy.deepcopy(value)

    def clear_variable(self, name: str) -> None:
        self._values.pop(name, None)

    def names(self) -> list[str]:
        return sorted(self._values)
