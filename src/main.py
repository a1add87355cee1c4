"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.health import router as health_router
from src.api.items import router as items_router
from src.config import settings
from src.core.event_bus import EventBus
from src.core.item.registry import ItemTypeRegistry, load_catalog_from_json
from src.core.logging import get_logger, setup_logging
from src.core.map import GameMap
from src.db.database import SessionLocal, engine as db_engine
from src.db.models import Base
from src.services.item_service import ItemService
from src.services.store_factory import get_variable_store

setup_logging(settings.LOG_LEVEL, sql_echo=settings.DEBUG)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # ItemService 초기화
    logger.info("Initializing ItemService...")
    db_session = SessionLocal()
    store = get_variable_store(db_session)

    event_bus = EventBus()
    game_map = GameMap(event_bus)
    registry = ItemTypeRegistry(load_catalog_from_json(settings.ITEM_CATALOG_PATH))

    item_service = ItemService(
        store=store,
        registry=registry,
        event_bus=event_bus,
        game_map=game_map,
    )
    restored = item_service.restore()
    app.state.event_bus = event_bus
    app.state.item_service = item_service
    logger.info(
        "ItemService initialized (%d item types, %d ground items restored).",
        registry.count(),
        restored,
    )

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    db_session.close()


app = FastAPI(title="LotI Item Engine", lifespan=lifespan)

app.include_router(health_router)
app.include_router(items_router)
