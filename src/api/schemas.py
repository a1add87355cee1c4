"""API response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class ItemTypeInfo(BaseModel):
    """아이템 타입 정보"""

    number: int
    category: str
    name: str
    image: str = ""
    description: str = ""
    flavour: Optional[str] = None
    defence: float = 0.0
    damage: int = 0
    resistances: dict[str, int] = {}
    silent: bool = False


class StorageItemsResponse(BaseModel):
    """보관함 item_number별 수량"""

    category: Optional[str] = Field(None, description="필터로 쓴 category")
    items: dict[int, int] = {}
    total: int = 0


class StorageCategoriesResponse(BaseModel):
    """보관함 category별 수량"""

    categories: dict[str, int] = {}


class GroundItemInfo(BaseModel):
    """바닥 아이템 1개"""

    item_number: int
    category: Optional[str] = None


class GroundTileResponse(BaseModel):
    """타일 (x, y)의 바닥 아이템"""

    x: int
    y: int
    items: list[GroundItemInfo] = []
    images: list[str] = []

