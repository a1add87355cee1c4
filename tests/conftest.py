"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.core.event_bus import EventBus
from src.core.item.registry import ItemTypeRegistry, load_catalog_from_json
from src.core.map import GameMap
from src.core.store import InMemoryVariableStore
from src.core.unit import Unit
from src.db.database import get_db
from src.db.models import Base
from src.main import app
from src.services.item_service import ItemService

CATALOG_PATH = Path(__file__).resolve().parent.parent / "src" / "data" / "item_catalog.json"

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)
Base.metadata.create_all(TEST_ENGINE)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database."""
    return TestClient(app)


@pytest.fixture()
def db_session() -> Session:
    """Raw database session for direct DB assertions."""
    session = TestSession()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


# ── 아이템 엔진 ──────────────────────────────────────────────


@pytest.fixture()
def registry() -> ItemTypeRegistry:
    return ItemTypeRegistry(load_catalog_from_json(CATALOG_PATH))


@pytest.fixture()
def store() -> InMemoryVariableStore:
    return InMemoryVariableStore()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def game_map(bus: EventBus) -> GameMap:
    return GameMap(bus)


@pytest.fixture()
def service(store, registry, bus, game_map) -> ItemService:
    """인메모리 저장소 + 기본 StatEngine"""
    return ItemService(store=store, registry=registry, event_bus=bus, game_map=game_map)


@pytest.fixture()
def unit(game_map: GameMap) -> Unit:
    """(3, 4)에 배치된 플레이어 유닛"""
    u = Unit(id="hero", base_stats={"defence": 10, "damage": 7})
    game_map.place_unit(u, 3, 4)
    return u
