"""Factory for creating variable store instances."""

from typing import Optional

from sqlalchemy.orm import Session

from src.config import settings
from src.core.logging import get_logger
from src.core.store import InMemoryVariableStore, VariableStore
from src.db.variable_store import SqlVariableStore

logger = get_logger(__name__)


def get_variable_store(
    db: Optional[Session] = None, backend: Optional[str] = None
) -> VariableStore:
    """Get a variable store instance.

    Args:
        db: Database session, required for the "sql" backend.
        backend: Optional backend name. If not specified,
                 uses VARIABLE_STORE from config.

    Returns:
        A VariableStore instance.
    """
    name = backend or settings.VARIABLE_STORE

    if name == "memory":
        logger.debug("Using InMemoryVariableStore")
        return InMemoryVariableStore()

    if name == "sql":
        if db is not None:
            logger.debug("Using SqlVariableStore")
            return SqlVariableStore(db)
        logger.warning("No database session given, falling back to InMemoryVariableStore")
        return InMemoryVariableStore()

    logger.warning("Unknown variable store '%s', falling back to InMemoryVariableStore", name)
    return InMemoryVariableStore()
