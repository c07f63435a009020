"""
project: Dungeon Forge
module: config.py
License: MIT

Generation parameters and their validation.

Values can come from code, from a plain mapping (HTTP payloads, Flask config)
or from ``DUNGEON_<FIELD>`` environment variables. ``validate()`` must pass
before any randomness is consumed.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError

ENV_PREFIX = "DUNGEON_"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass
class GenerationConfig:
    dungeon_width: int = 50
    dungeon_height: int = 50
    min_room_width: int = 10
    min_room_height: int = 10
    room_offset: int = 2
    use_random_walk: bool = True
    random_walk_iterations: int = 10
    random_walk_steps: int = 10
    start_randomly_each_iteration: bool = False
    treasure_room_chance: float = 0.15
    shop_room_chance: float = 0.3
    dungeon_level: int = 1
    spoke_length: int = 10
    populate_rooms: bool = True

    def validate(self) -> "GenerationConfig":
        """Raise ConfigurationError on degenerate input; returns self for chaining."""
        if self.dungeon_width <= 0 or self.dungeon_height <= 0:
            raise ConfigurationError(
                f"dungeon size must be positive, got {self.dungeon_width}x{self.dungeon_height}"
            )
        if self.min_room_width <= 0 or self.min_room_height <= 0:
            raise ConfigurationError(
                f"minimum room size must be positive, got {self.min_room_width}x{self.min_room_height}"
            )
        if not 1 <= self.room_offset <= 5:
            raise ConfigurationError(f"room_offset must be within 1..5, got {self.room_offset}")
        smallest = min(self.min_room_width, self.min_room_height)
        if self.room_offset * 2 >= smallest:
            raise ConfigurationError(
                f"room_offset {self.room_offset} leaves no floor in a {smallest}-cell room; "
                f"it must be below {smallest / 2}"
            )
        if not 1 <= self.random_walk_iterations <= 100:
            raise ConfigurationError(
                f"random_walk_iterations must be within 1..100, got {self.random_walk_iterations}"
            )
        if not 1 <= self.random_walk_steps <= 50:
            raise ConfigurationError(f"random_walk_steps must be within 1..50, got {self.random_walk_steps}")
        for name in ("treasure_room_chance", "shop_room_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
        if self.dungeon_level < 0:
            raise ConfigurationError(f"dungeon_level must not be negative, got {self.dungeon_level}")
        if self.spoke_length < 0:
            raise ConfigurationError(f"spoke_length must not be negative, got {self.spoke_length}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def merged(self, overrides: Mapping[str, Any]) -> "GenerationConfig":
        """Copy with ``overrides`` applied (same coercion rules as from_mapping)."""
        return replace(self, **_coerce_fields(overrides))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        return cls(**_coerce_fields(data))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GenerationConfig":
        environ = os.environ if environ is None else environ
        found = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key in environ:
                found[f.name] = environ[key]
        return cls.from_mapping(found)


def _field_types() -> Dict[str, str]:
    # Annotations are strings under postponed evaluation.
    return {f.name: str(f.type) for f in fields(GenerationConfig)}


def _coerce_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    types = _field_types()
    unknown = sorted(k for k in data if k not in types)
    if unknown:
        raise ConfigurationError(f"unknown configuration field(s): {', '.join(unknown)}")
    out: Dict[str, Any] = {}
    for key, raw in data.items():
        out[key] = _coerce(key, types[key], raw)
    return out


def _coerce(name: str, type_name: str, raw: Any) -> Any:
    try:
        if type_name == "bool":
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if text in _TRUTHY:
                return True
            if text in _FALSY:
                return False
            raise ValueError(raw)
        if type_name == "int":
            if isinstance(raw, bool):
                raise ValueError(raw)
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError(raw)
            return int(raw)
        if type_name == "float":
            if isinstance(raw, bool):
                raise ValueError(raw)
            return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"invalid value for {name}: {raw!r}") from None
    return raw


__all__ = ["GenerationConfig", "ENV_PREFIX"]
