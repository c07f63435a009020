"""
project: Dungeon Forge
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

    POST /api/dungeon/generate   body: config fields + optional "seed"
    POST /api/dungeon/clear
    GET  /api/dungeon            current topology
    GET  /api/dungeon/metrics    metrics of the current topology

Config fields in the body override the app-wide DUNGEON_* defaults. Seeds may
be ints or strings; non-numeric strings are hashed to a stable int so a
shared phrase reproduces the same dungeon.
"""

import hashlib
import threading

from flask import Blueprint, current_app, jsonify, request

from dungeonforge.dungeon import ConfigurationError, GenerationConfig
from dungeonforge.dungeon.config import ENV_PREFIX
from dungeonforge.dungeon.pipeline import MAX_SEED, new_seed

bp_dungeon = Blueprint("dungeon", __name__)

# Flask's threaded server may run two requests against the shared generator at once.
_generator_lock = threading.Lock()


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a non-negative int below 2**31."""
    if payload_seed is None:
        return new_seed()
    if isinstance(payload_seed, bool):
        raise ConfigurationError(f"invalid seed: {payload_seed!r}")
    if isinstance(payload_seed, int):
        return payload_seed % (MAX_SEED + 1)
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return new_seed()
        if s.isdigit():
            return int(s) % (MAX_SEED + 1)
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % (MAX_SEED + 1)
    raise ConfigurationError(f"invalid seed: {payload_seed!r}")


def _generator():
    return current_app.extensions["dungeon_generator"]


def _check_request_bounds(config: GenerationConfig) -> None:
    """Refuse sizes the server should not spend a worker on."""
    max_side = current_app.config["DUNGEON_MAX_SIDE"]
    if config.dungeon_width > max_side or config.dungeon_height > max_side:
        raise ConfigurationError(
            f"dungeon size {config.dungeon_width}x{config.dungeon_height} exceeds {max_side} cells per side"
        )
    max_rooms = current_app.config["DUNGEON_MAX_ROOMS"]
    possible = (config.dungeon_width // config.min_room_width) * (config.dungeon_height // config.min_room_height)
    if possible > max_rooms:
        raise ConfigurationError(
            f"up to {possible} rooms fit with these minimums; at most {max_rooms} are served"
        )


def _app_defaults() -> GenerationConfig:
    names = GenerationConfig().to_dict().keys()
    found = {}
    for name in names:
        key = ENV_PREFIX + name.upper()
        if key in current_app.config:
            found[name] = current_app.config[key]
    return GenerationConfig.from_mapping(found)


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def generate():
    """Generate a fresh dungeon, replacing any current one.

    Response: the topology as JSON (seed, config, floor, walls, corridors,
    rooms, metrics). 400 on bad config, 422 when nothing fits.
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    overrides = dict(data)
    seed = _coerce_seed(overrides.pop("seed", None))
    config = _app_defaults().merged(overrides).validate()
    _check_request_bounds(config)
    with _generator_lock:
        topology = _generator().generate(config, seed=seed)
        return jsonify(topology.to_dict())


@bp_dungeon.route("/api/dungeon/clear", methods=["POST"])
def clear():
    with _generator_lock:
        _generator().clear()
    return jsonify({"cleared": True})


@bp_dungeon.route("/api/dungeon", methods=["GET"])
def current():
    with _generator_lock:
        topology = _generator().topology
        if topology is None:
            return jsonify({"error": "no dungeon generated"}), 404
        return jsonify(topology.to_dict())


@bp_dungeon.route("/api/dungeon/metrics", methods=["GET"])
def metrics():
    with _generator_lock:
        topology = _generator().topology
        if topology is None:
            return jsonify({"error": "no dungeon generated"}), 404
        return jsonify({"seed": topology.seed, "metrics": topology.metrics})
