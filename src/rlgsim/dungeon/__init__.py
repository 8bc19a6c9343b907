from .terrain import FloorKind, Room, TerrainModel
from .generation import Level, LevelGenerator
from .pathfinding import DistanceField, PathFields, PathMode, UNREACHED

__all__ = [
    "FloorKind",
    "Room",
    "TerrainModel",
    "Level",
    "LevelGenerator",
    "DistanceField",
    "PathFields",
    "PathMode",
    "UNREACHED",
]
