"""Item engine core"""
__version__ = "0.1.0"

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.map import GameMap
from src.core.store import InMemoryVariableStore, VariableStore
from src.core.unit import Modification, Unit, add_modification, remove_modifications

__all__ = [
    "EventBus",
    "GameEvent",
    "EventTypes",
    "GameMap",
    "InMemoryVariableStore",
    "VariableStore",
    "Modification",
    "Unit",
    "add_modification",
    "remove_modifications",
]
