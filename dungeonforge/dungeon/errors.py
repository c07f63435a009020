"""
project: Dungeon Forge
module: errors.py
License: MIT

Exception taxonomy for dungeon generation.

Placement shortfalls are deliberately absent: a unit that cannot be placed is
skipped and counted in metrics, never raised.
"""


class DungeonError(Exception):
    """Base class for generation failures surfaced to callers."""


class ConfigurationError(DungeonError, ValueError):
    """Degenerate configuration or catalog rejected before generation starts."""


class GenerationEmptyError(DungeonError, RuntimeError):
    """Partitioning/shaping produced no usable floor; the attempt is void."""


__all__ = ["DungeonError", "ConfigurationError", "GenerationEmptyError"]
