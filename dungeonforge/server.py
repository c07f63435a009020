"""
project: Dungeon Forge
module: server.py
License: MIT

Server bootstrap: logging setup and the development server entry point.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from dungeonforge import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging and serve it with Flask's server."""
    app = create_app()
    _configure_logging(app.instance_path)
    try:
        print(f"[INFO] Starting Dungeon Forge on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir):
    """Log to the console and to a rotating ``dungeonforge.log`` in ``log_dir``.

    Safe to call repeatedly: existing root handlers are replaced.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "dungeonforge.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
