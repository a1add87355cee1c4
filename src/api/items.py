"""Item API endpoints (read-only)."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    GroundItemInfo,
    GroundTileResponse,
    ItemTypeInfo,
    StorageCategoriesResponse,
    StorageItemsResponse,
)
from src.core.item.errors import NotFoundError
from src.core.logging import get_logger
from src.services.item_service import ItemService

logger = get_logger(__name__)

router = APIRouter(prefix="/items", tags=["items"])


def get_item_service(request: Request) -> ItemService:
    """ItemService 인스턴스 반환 (의존성 주입)"""
    service: ItemService = request.app.state.item_service
    return service


@router.get("/storage", response_model=StorageItemsResponse)
def list_storage_items(
    category: Optional[str] = None,
    service: ItemService = Depends(get_item_service),
) -> StorageItemsResponse:
    """보관함 item_number별 수량 (category 필터 선택)"""
    items = service.storage.list_items(category)
    return StorageItemsResponse(
        category=category, items=items, total=sum(items.values())
    )


@router.get("/storage/categories", response_model=StorageCategoriesResponse)
def list_storage_categories(
    service: ItemService = Depends(get_item_service),
) -> StorageCategoriesResponse:
    """보관함 category별 수량"""
    return StorageCategoriesResponse(categories=service.storage.list_categories())


@router.get("/ground/{x}/{y}", response_model=GroundTileResponse)
def list_ground_items(
    x: int, y: int, service: ItemService = Depends(get_item_service)
) -> GroundTileResponse:
    """타일 (x, y)의 바닥 아이템"""
    entries = service.on_the_ground.entries(x, y)
    return GroundTileResponse(
        x=x,
        y=y,
        items=[
            GroundItemInfo(item_number=e.item_number, category=e.category)
            for e in entries
        ],
        images=service.game_map.images_at(x, y),
    )


@router.get("/{item_number}", response_model=ItemTypeInfo)
def get_item_type(
    item_number: int, service: ItemService = Depends(get_item_service)
) -> ItemTypeInfo:
    """아이템 타입 조회"""
    try:
        item_type = service.get_item_type(item_number)
    except NotFoundError as e:
        logger.info("Item type lookup failed: %s", e)
        raise HTTPException(status_code=404, detail=str(e)) from e

    return ItemTypeInfo(
        number=item_type.number,
        category=item_type.category,
        name=item_type.name,
        image=item_type.image,
        description=item_type.description,
        flavour=item_type.flavour,
        defence=item_type.modifiers.defence,
        damage=item_type.modifiers.damage,
        resistances=dict(item_type.modifiers.resistances),
        silent=item_type.silent,
    )
