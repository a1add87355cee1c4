"""EventBus - 아이템 엔진과 호스트 게임 사이의 이벤트/트리거 인프라

규칙:
- 이벤트는 식별자(ID)와 좌표만 전달한다
- 전파 깊이 최대 MAX_DEPTH 단계
- 하나의 전파 체인 안에서 동일 원인의 동일 이벤트 중복 발행 금지
  (repeatable 이벤트는 예외, 깊이 제한만 적용)
- handler_id가 지정된 핸들러는 같은 id로 한 번만 등록된다 (타일 트리거 중복 방지)
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any, Optional, Set
from collections import defaultdict

from src.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 한 체인 내 이벤트 전파 최대 깊이


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (예: "unit_moved", "item_pick")
        data: 이벤트 데이터 (ID/좌표 위주, 무거운 객체 금지)
        source: 발행한 컴포넌트 이름
        repeatable: True면 체인 내 중복 차단 대상이 아님 (아이템 이동 1건당 1이벤트)
    """

    event_type: str
    data: Dict[str, Any]
    source: str
    repeatable: bool = False

    # 내부 추적용 (외부에서 설정하지 않음)
    _depth: int = field(default=0, repr=False)


# 핸들러 타입: GameEvent를 받는 callable
EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe("unit_moved", trigger, handler_id="ie3_4")
        bus.emit(GameEvent(event_type="unit_moved", data={"x": 3, "y": 4}, source="game_map"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._handler_ids: Dict[str, EventHandler] = {}
        self._current_depth: int = 0
        self._emitted_in_chain: Set[str] = set()  # "source:event_type" 중복 방지

    def subscribe(
        self,
        event_type: str,
        handler: EventHandler,
        handler_id: Optional[str] = None,
    ) -> bool:
        """이벤트 구독 등록. 이미 등록된 handler_id면 무시하고 False 반환."""
        if handler_id is not None:
            if handler_id in self._handler_ids:
                logger.debug(f"EventBus 구독 생략 (id 중복): {handler_id}")
                return False
            self._handler_ids[handler_id] = handler

        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")
        return True

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제"""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(
                    f"EventBus 구독 해제: {event_type} → {handler.__qualname__}"
                )
            except ValueError:
                logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")
                return

        for handler_id, registered in list(self._handler_ids.items()):
            if registered is handler:
                del self._handler_ids[handler_id]

    def has_handler(self, handler_id: str) -> bool:
        """handler_id 등록 여부"""
        return handler_id in self._handler_ids

    def emit(self, event: GameEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        안전장치:
        1. 전파 깊이 MAX_DEPTH 초과 시 무시
        2. 같은 체인에서 동일 source의 동일 event_type 중복 발행 시 무시
           (repeatable 이벤트 제외)
        """
        # 깊이 체크
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return

        # 중복 체크
        if not event.repeatable:
            chain_key = f"{event.source}:{event.event_type}"
            if chain_key in self._emitted_in_chain:
                logger.warning(f"EventBus 중복 이벤트 차단: {chain_key}")
                return
            self._emitted_in_chain.add(chain_key)

        event._depth = self._current_depth

        # 핸들러 실행 중 구독이 추가될 수 있으므로 복사본으로 순회
        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
        else:
            logger.debug(
                f"EventBus 전파: {event.event_type} (source={event.source}, "
                f"depth={self._current_depth}, handlers={len(handlers)})"
            )

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1
            # 최상위 발행이 끝나면 체인 종료
            if self._current_depth == 0:
                self._emitted_in_chain.clear()

    def reset_chain(self) -> None:
        """중복 추적 강제 초기화."""
        self._emitted_in_chain.clear()
        self._current_depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self._handler_ids.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())
