"""아이템 시스템 Core — 순수 Python, DB 무관"""

from .errors import (
    ImmutableRegistryError,
    ItemError,
    MissingCraftedCategoryError,
    NotFoundError,
)
from .models import CombatModifiers, EquippedItem, GroundEntry, ItemType, StorageEntry, Trait
from .registry import ItemTypeRegistry, catalog_from_store, load_catalog_from_json
from .storage import ItemStorage
from .equipment import UnitEquipment
from .ground import GroundItems
from .stats import DefaultStatEngine, StatEngine
from .transfer import ItemTransfer

__all__ = [
    "CombatModifiers",
    "DefaultStatEngine",
    "EquippedItem",
    "GroundEntry",
    "GroundItems",
    "ImmutableRegistryError",
    "ItemError",
    "ItemStorage",
    "ItemTransfer",
    "ItemType",
    "ItemTypeRegistry",
    "MissingCraftedCategoryError",
    "NotFoundError",
    "StatEngine",
    "StorageEntry",
    "Trait",
    "UnitEquipment",
    "catalog_from_store",
    "load_catalog_from_json",
]
