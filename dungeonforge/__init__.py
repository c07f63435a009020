"""
project: Dungeon Forge
module: __init__.py
License: MIT

Flask application factory.

The app exposes the Generate/Clear boundary of the dungeon generator as a
small JSON API. Generation defaults come from ``DUNGEON_<FIELD>`` environment
variables (a local ``.env`` is honoured) and can be overridden per request.
One ``DungeonGenerator`` lives on ``app.extensions["dungeon_generator"]``.
Requests larger than ``DUNGEON_MAX_SIDE`` cells per side or able to hold more
than ``DUNGEON_MAX_ROOMS`` rooms are refused.
"""

import os

from dotenv import load_dotenv
from flask import Flask, jsonify

from dungeonforge.dungeon import (
    ConfigurationError,
    DungeonGenerator,
    GenerationConfig,
    GenerationEmptyError,
    load_catalog,
)

__version__ = "0.3.0"

# Load .env if present so DUNGEON_* defaults can be supplied without exporting
# shell variables during development.
load_dotenv()


def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve the API; only file logging needs it.
        pass

    defaults = GenerationConfig.from_env()
    app.config.update(
        DUNGEON_CATALOG_PATH=os.getenv("DUNGEON_CATALOG_PATH"),
        DUNGEON_MAX_SIDE=int(os.getenv("DUNGEON_MAX_SIDE", "500")),
        DUNGEON_MAX_ROOMS=int(os.getenv("DUNGEON_MAX_ROOMS", "400")),
        **{f"DUNGEON_{k.upper()}": v for k, v in defaults.to_dict().items()},
    )
    if test_config:
        app.config.update(test_config)

    catalog_path = app.config.get("DUNGEON_CATALOG_PATH")
    catalog = load_catalog(catalog_path) if catalog_path else None
    # Responses carry the whole topology, so no renderer/spawner is attached.
    app.extensions["dungeon_generator"] = DungeonGenerator(catalog=catalog)

    from dungeonforge.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(ConfigurationError)
    def _configuration_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(GenerationEmptyError)
    def _generation_empty(e):
        return jsonify({"error": str(e)}), 422

    return app
