"""SQLAlchemy-backed variable store."""

from typing import Any, Optional

from sqlalchemy.orm import Session

from src.core.logging import get_logger
from src.core.store import VariableStore
from src.db.models import GameVariableModel

logger = get_logger(__name__)


class SqlVariableStore(VariableStore):
    """game_variables 테이블 저장소. set/clear마다 commit."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def _row(self, name: str) -> Optional[GameVariableModel]:
        return self._db.get(GameVariableModel, name)

    def get_variable(self, name: str) -> Optional[Any]:
        row = self._row(name)
        return row.value if row is not None else None

    def set_variable(self, name: str, value: Any) -> None:
        row = self._row(name)
        if row is None:
            self._db.add(GameVariableModel(name=name, value=value))
        else:
            # JSON 컬럼은 내부 변경을 추적하지 않으므로 값 자체를 교체
            row.value = value
        self._db.commit()
        logger.debug("Variable saved: %s", name)

    def clear_variable(self, name: str) -> None:
        row = self._row(name)
        if row is None:
            return
        self._db.delete(row)
        self._db.commit()
        logger.debug("Variable cleared: %s", name)
