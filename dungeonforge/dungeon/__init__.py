"""Public dungeon package interface.

Everything callers need to generate, inspect and clear a dungeon.
"""

from .catalog import (
    EnemyDescriptor,
    PlacementDescriptor,
    RoomCatalog,
    RoomContent,
    default_catalog,
    load_catalog,
)
from .cells import Cell, Region
from .collaborators import ContentSpawner, MemorySpawner, MemoryTileRenderer, TileRenderer
from .config import GenerationConfig
from .corridors import Corridor, connect_rooms, create_corridor, route_corridors
from .errors import ConfigurationError, DungeonError, GenerationEmptyError
from .partition import partition
from .pipeline import DungeonGenerator, DungeonTopology, generate_dungeon
from .placement import Placement, PlacementEngine
from .roles import RoleAssigner, assign_roles, pick_enemy, populate_room
from .rooms import RandomWalkShaper, RectangularShaper, Room, RoomRole
from .walls import derive_walls

__all__ = [
    "Cell",
    "Region",
    "GenerationConfig",
    "DungeonError",
    "ConfigurationError",
    "GenerationEmptyError",
    "partition",
    "Room",
    "RoomRole",
    "RectangularShaper",
    "RandomWalkShaper",
    "Corridor",
    "create_corridor",
    "route_corridors",
    "connect_rooms",
    "derive_walls",
    "Placement",
    "PlacementEngine",
    "PlacementDescriptor",
    "EnemyDescriptor",
    "RoomContent",
    "RoomCatalog",
    "default_catalog",
    "load_catalog",
    "RoleAssigner",
    "assign_roles",
    "pick_enemy",
    "populate_room",
    "TileRenderer",
    "ContentSpawner",
    "MemoryTileRenderer",
    "MemorySpawner",
    "DungeonTopology",
    "DungeonGenerator",
    "generate_dungeon",
]
