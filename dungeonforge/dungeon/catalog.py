"""
project: Dungeon Forge
module: catalog.py
License: MIT

Room content catalog: what each room role may contain.

``default_catalog()`` dresses rooms like a crypt tileset
(graves, lanterns, spikes, boxes, a merchant cart and a handful of undead).
Catalogs can also be loaded from JSON shaped like ``RoomCatalog.to_dict()``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import ConfigurationError
from .rooms import RoomRole


@dataclass(frozen=True)
class PlacementDescriptor:
    name: str
    width: int = 1
    height: int = 1
    min_quantity: int = 1
    max_quantity: int = 1
    unlock_level: int = 0
    near_wall: bool = False


@dataclass(frozen=True)
class EnemyDescriptor:
    name: str
    min_quantity: int = 1
    max_quantity: int = 1
    appearance_level: int = 0
    width: int = 1
    height: int = 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_descriptor_types(d: Union[PlacementDescriptor, EnemyDescriptor]) -> None:
    if not isinstance(d.name, str) or not d.name:
        raise ConfigurationError(f"descriptor name must be a non-empty string, got {d.name!r}")
    level_field = "unlock_level" if isinstance(d, PlacementDescriptor) else "appearance_level"
    for name in ("width", "height", "min_quantity", "max_quantity", level_field):
        value = getattr(d, name)
        if not _is_int(value):
            raise ConfigurationError(f"{d.name}: {name} must be an integer, got {value!r}")
    if isinstance(d, PlacementDescriptor) and not isinstance(d.near_wall, bool):
        raise ConfigurationError(f"{d.name}: near_wall must be true or false")


@dataclass
class RoomContent:
    landmark: Optional[str] = None
    objects: List[PlacementDescriptor] = field(default_factory=list)
    enemies: List[EnemyDescriptor] = field(default_factory=list)
    can_spawn_enemies: bool = False
    enemy_picks: int = 2

    def validate(self, role: RoomRole) -> None:
        if self.landmark is not None and not isinstance(self.landmark, str):
            raise ConfigurationError(f"{role.value}: landmark must be a string, got {self.landmark!r}")
        if not isinstance(self.can_spawn_enemies, bool):
            raise ConfigurationError(f"{role.value}: can_spawn_enemies must be true or false")
        if not _is_int(self.enemy_picks) or self.enemy_picks < 0:
            raise ConfigurationError(f"{role.value}: enemy_picks must be a non-negative integer")
        if self.can_spawn_enemies and not self.enemies:
            raise ConfigurationError(f"{role.value} rooms may spawn enemies but list none")
        for d in [*self.objects, *self.enemies]:
            _check_descriptor_types(d)
            if d.width < 1 or d.height < 1:
                raise ConfigurationError(f"{d.name}: footprint must be at least 1x1")
            if d.min_quantity < 0 or d.max_quantity < d.min_quantity:
                raise ConfigurationError(
                    f"{d.name}: invalid quantity range [{d.min_quantity}, {d.max_quantity}]"
                )


class RoomCatalog:
    def __init__(self, contents: Mapping[RoomRole, RoomContent]):
        self.contents: Dict[RoomRole, RoomContent] = dict(contents)
        for role, content in self.contents.items():
            content.validate(role)

    def for_role(self, role: RoomRole) -> RoomContent:
        content = self.contents.get(role)
        if content is None:
            # Roles without an entry are left bare.
            return RoomContent()
        return content

    def to_dict(self) -> Dict[str, Any]:
        return {role.value: asdict(content) for role, content in self.contents.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoomCatalog":
        contents: Dict[RoomRole, RoomContent] = {}
        for key, raw in data.items():
            try:
                role = RoomRole(key)
            except ValueError:
                raise ConfigurationError(f"unknown room role in catalog: {key!r}") from None
            if not isinstance(raw, Mapping):
                raise ConfigurationError(f"catalog entry for {key!r} must be an object")
            try:
                contents[role] = RoomContent(
                    landmark=raw.get("landmark"),
                    objects=[PlacementDescriptor(**o) for o in raw.get("objects", [])],
                    enemies=[EnemyDescriptor(**e) for e in raw.get("enemies", [])],
                    can_spawn_enemies=raw.get("can_spawn_enemies", False),
                    enemy_picks=raw.get("enemy_picks", 2),
                )
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"malformed catalog entry for {key!r}: {exc}") from None
        return cls(contents)


def load_catalog(path: Union[str, Path]) -> RoomCatalog:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"cannot read room catalog {path}: {exc}") from None
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"room catalog {path} must hold a JSON object")
    return RoomCatalog.from_dict(data)


GRAVE_TALL = PlacementDescriptor("grave_1x2", width=1, height=2, min_quantity=1, max_quantity=2, near_wall=True)
GRAVE_WIDE = PlacementDescriptor("grave_2x1", width=2, height=1, min_quantity=1, max_quantity=2, near_wall=True)
LANTERN = PlacementDescriptor("lantern", min_quantity=1, max_quantity=3)
SPIKES = PlacementDescriptor("spikes", min_quantity=0, max_quantity=3, unlock_level=2)
BOX = PlacementDescriptor("box", min_quantity=1, max_quantity=2, near_wall=True)
MERCHANT_CART = PlacementDescriptor("merchant_cart", width=2, height=2, near_wall=True)

UNDEAD = [
    EnemyDescriptor("skeleton", min_quantity=1, max_quantity=3, appearance_level=0),
    EnemyDescriptor("zombie", min_quantity=1, max_quantity=2, appearance_level=0),
    EnemyDescriptor("ghost", min_quantity=1, max_quantity=2, appearance_level=2),
    EnemyDescriptor("necromancer", min_quantity=1, max_quantity=1, appearance_level=4),
]


def default_catalog() -> RoomCatalog:
    # Spawn room graves are scattered freely rather than hugging walls.
    return RoomCatalog(
        {
            RoomRole.SPAWN: RoomContent(
                landmark="player",
                objects=[
                    PlacementDescriptor("grave_1x2", width=1, height=2, min_quantity=1, max_quantity=2),
                    PlacementDescriptor("grave_2x1", width=2, height=1, min_quantity=1, max_quantity=2),
                    LANTERN,
                ],
            ),
            RoomRole.EXIT: RoomContent(
                landmark="exit",
                objects=[GRAVE_TALL, GRAVE_WIDE, LANTERN, SPIKES, BOX],
            ),
            RoomRole.GENERIC: RoomContent(
                objects=[GRAVE_TALL, GRAVE_WIDE, LANTERN, SPIKES],
                enemies=list(UNDEAD),
                can_spawn_enemies=True,
            ),
            RoomRole.TREASURE: RoomContent(
                landmark="treasure_chest",
                objects=[LANTERN, SPIKES],
                enemies=list(UNDEAD),
                can_spawn_enemies=True,
            ),
            RoomRole.SHOP: RoomContent(
                landmark="merchant",
                objects=[LANTERN, MERCHANT_CART, BOX],
            ),
        }
    )


__all__ = [
    "PlacementDescriptor",
    "EnemyDescriptor",
    "RoomContent",
    "RoomCatalog",
    "load_catalog",
    "default_catalog",
]
