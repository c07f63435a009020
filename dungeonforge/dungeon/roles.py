"""
project: Dungeon Forge
module: roles.py
License: MIT

Room role assignment and per-role population.

Roles are assigned once per generation over the ordered room list: the first
room is the spawn, the last is the exit, and every interior room draws one
uniform number that can make it the (single) treasure room or the (single)
shop. A fresh ``RoleAssigner`` starts with both flags down; the generator
builds a new one for every run, which is how regeneration resets them.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .catalog import EnemyDescriptor, RoomContent
from .errors import ConfigurationError
from .placement import Placement, PlacementEngine
from .rooms import Room, RoomRole

ENEMY_LOTTERY_DRAWS = 10


class RoleAssigner:
    def __init__(self, treasure_chance: float, shop_chance: float, rng=None):
        self.treasure_chance = treasure_chance
        self.shop_chance = shop_chance
        self.rng = rng if rng is not None else random
        self.treasure_spawned = False
        self.shop_spawned = False

    def reset(self) -> None:
        self.treasure_spawned = False
        self.shop_spawned = False

    def role_for(self, index: int, count: int) -> RoomRole:
        if index == 0:
            return RoomRole.SPAWN
        if index == count - 1:
            return RoomRole.EXIT
        roll = self.rng.random()
        if roll < self.treasure_chance and not self.treasure_spawned:
            self.treasure_spawned = True
            return RoomRole.TREASURE
        if roll < self.shop_chance and not self.shop_spawned:
            self.shop_spawned = True
            return RoomRole.SHOP
        return RoomRole.GENERIC

    def assign(self, rooms: Sequence[Room]) -> List[RoomRole]:
        roles = []
        for room in rooms:
            room.role = self.role_for(room.index, len(rooms))
            roles.append(room.role)
        return roles


def assign_roles(rooms: Sequence[Room], treasure_chance: float, shop_chance: float, rng=None) -> List[RoomRole]:
    return RoleAssigner(treasure_chance, shop_chance, rng).assign(rooms)


def pick_enemy(
    enemies: Sequence[EnemyDescriptor],
    level: int,
    blacklist: List[EnemyDescriptor],
    rng=None,
) -> Optional[EnemyDescriptor]:
    """Bounded lottery: draw up to 10 times, accept the first type that is
    unlocked at ``level`` and not yet drawn. Every drawn type is blacklisted."""
    if rng is None:
        rng = random
    if not enemies:
        return None
    for _ in range(ENEMY_LOTTERY_DRAWS):
        candidate = enemies[rng.randrange(len(enemies))]
        if candidate in blacklist:
            continue
        blacklist.append(candidate)
        if candidate.appearance_level <= level:
            return candidate
    return None


def populate_room(room: Room, content: RoomContent, engine: PlacementEngine, level: int) -> List[Placement]:
    """Landmark at the center, then catalog objects, then enemies."""
    made: List[Placement] = []
    if content.landmark:
        room.landmark = content.landmark
        made.append(engine.place_landmark(content.landmark, room.center, room.center))
    for descriptor in content.objects:
        if descriptor.unlock_level > level:
            continue
        if descriptor.near_wall:
            made.extend(engine.place_near_wall(descriptor, room.free_floor, room.center))
        else:
            made.extend(engine.place_randomly(descriptor, room.free_floor, room.center))
    if content.can_spawn_enemies:
        if not content.enemies:
            raise ConfigurationError(f"{room.role.value} room may spawn enemies but has none listed")
        blacklist: List[EnemyDescriptor] = []
        for _ in range(content.enemy_picks):
            enemy = pick_enemy(content.enemies, level, blacklist, engine.rng)
            if enemy is None:
                continue
            made.extend(engine.place_enemy(enemy, room.free_floor, room.center))
    room.placements.extend(made)
    return made


__all__ = [
    "RoleAssigner",
    "assign_roles",
    "pick_enemy",
    "populate_room",
    "ENEMY_LOTTERY_DRAWS",
]
