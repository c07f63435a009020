"""
project: Dungeon Forge
module: logging_utils.py
License: MIT

Minimal structured logging helper.

Emits one key=value line (or one JSON object) per event with a timestamp and
level. Generation code logs events, not prose:

    from .logging_utils import get_logger
    log = get_logger("dungeonforge.pipeline")
    log.info(event="dungeon_generated", seed=42, rooms=7)

Level comes from DUNGEONFORGE_LOG_LEVEL (debug/info/warn/error, default info);
DUNGEONFORGE_LOG_JSON=1 switches to JSON lines. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("DUNGEONFORGE_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("DUNGEONFORGE_LOG_JSON", "0") in TRUTHY


def _format(level: str, **fields) -> str:
    now = int(time.time())
    if json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = now
        # Values json can't encode (Cells in sets, enums) fall back to repr.
        return json.dumps(rec, separators=(",", ":"), default=repr)
    parts = [f"level={level}", f"ts={now}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "dungeonforge"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < current_level():
            return
        fields.setdefault("logger", self.name)
        # stderr keeps stdout clean for JSON the CLI and scripts print.
        print(_format(lvl, **fields), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dungeonforge")
