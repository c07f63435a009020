"""Dungeon Forge CLI entry point.

Provides subcommands for running the JSON API server and for generating a
single dungeon straight to stdout. Accepts configuration via flags and
DUNGEON_* environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

# Flag name -> GenerationConfig field for the generate subcommand.
CONFIG_FLAGS = {
    "width": "dungeon_width",
    "height": "dungeon_height",
    "min_room_width": "min_room_width",
    "min_room_height": "min_room_height",
    "offset": "room_offset",
    "walk_iterations": "random_walk_iterations",
    "walk_steps": "random_walk_steps",
    "treasure_chance": "treasure_room_chance",
    "shop_chance": "shop_room_chance",
    "level": "dungeon_level",
}

ROLE_MARKS = {"spawn": "S", "exit": "E", "generic": "o", "treasure": "T", "shop": "$"}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Forge

    Serve the dungeon generation JSON API or generate one dungeon from the
    command line. Generation defaults come from DUNGEON_* environment
    variables; CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                   Bind address for the web server (default: 0.0.0.0)
          PORT                   Port for the web server (default: 5000)
          DUNGEON_<FIELD>        Generation default, e.g. DUNGEON_DUNGEON_WIDTH=80
          DUNGEON_CATALOG_PATH   JSON room catalog used by the server
          DUNGEON_MAX_SIDE       Largest dungeon side the server accepts (default: 500)
          DUNGEON_MAX_ROOMS      Most rooms a server request may allow for (default: 400)
          DUNGEONFORGE_LOG_LEVEL debug/info/warn/error

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Generate a seeded 80x60 dungeon with rectangular rooms as JSON
          python run.py generate --seed 42 --width 80 --height 60 --rectangular

          # Same seed, drawn as a character map
          python run.py generate --seed 42 --format map

          # Load variables from .env then run the server
          python run.py --env-file .env server
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeonforge",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    from dungeonforge import __version__

    parser.add_argument("--version", action="version", version=f"Dungeon Forge {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the JSON API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve POST /api/dungeon/generate, /api/dungeon/clear and friends",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon and print its topology (JSON) or a character map.",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or phrase; phrases hash to a stable seed")
    gen_parser.add_argument("--width", type=int, default=None, help="Dungeon width in cells")
    gen_parser.add_argument("--height", type=int, default=None, help="Dungeon height in cells")
    gen_parser.add_argument("--min-room-width", type=int, default=None)
    gen_parser.add_argument("--min-room-height", type=int, default=None)
    gen_parser.add_argument("--offset", type=int, default=None, help="Room inset from its partition leaf (1..5)")
    gen_parser.add_argument("--walk-iterations", type=int, default=None)
    gen_parser.add_argument("--walk-steps", type=int, default=None)
    gen_parser.add_argument("--treasure-chance", type=float, default=None)
    gen_parser.add_argument("--shop-chance", type=float, default=None)
    gen_parser.add_argument("--level", type=int, default=None, help="Dungeon level gating enemies and objects")
    gen_parser.add_argument("--rectangular", action="store_true", help="Rectangular rooms instead of random walk")
    gen_parser.add_argument("--no-content", action="store_true", help="Skip object/enemy placement")
    gen_parser.add_argument("--catalog", default=None, help="JSON room catalog file")
    gen_parser.add_argument("--format", choices=("json", "map"), default="json")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def config_from_args(args):
    from dungeonforge.dungeon import GenerationConfig

    overrides = {}
    for flag, field_name in CONFIG_FLAGS.items():
        val = getattr(args, flag, None)
        if val is not None:
            overrides[field_name] = val
    if getattr(args, "rectangular", False):
        overrides["use_random_walk"] = False
    if getattr(args, "no_content", False):
        overrides["populate_rooms"] = False
    return GenerationConfig.from_env().merged(overrides)


def render_map(topology) -> str:
    """Character map, north at the top: '.' floor, '#' wall, a role mark at room centers."""
    cells = topology.floor | topology.walls
    if not cells:
        return ""
    min_x = min(c.x for c in cells)
    max_x = max(c.x for c in cells)
    min_y = min(c.y for c in cells)
    max_y = max(c.y for c in cells)
    marks = {r.center: ROLE_MARKS.get(r.role.value, "?") for r in topology.rooms}
    rows = []
    for y in range(max_y, min_y - 1, -1):
        row = []
        for x in range(min_x, max_x + 1):
            if (x, y) in marks:
                row.append(marks[(x, y)])
            elif (x, y) in topology.floor:
                row.append(".")
            elif (x, y) in topology.walls:
                row.append("#")
            else:
                row.append(" ")
        rows.append("".join(row).rstrip())
    return "\n".join(rows)


def run_generate(args) -> int:
    from dungeonforge.dungeon import DungeonError, DungeonGenerator, load_catalog
    from dungeonforge.routes.dungeon_api import _coerce_seed

    try:
        config = config_from_args(args)
        catalog = load_catalog(args.catalog) if args.catalog else None
        seed = _coerce_seed(args.seed)
        topology = DungeonGenerator(catalog=catalog).generate(config, seed=seed)
    except DungeonError as e:
        msg = f"[ERROR] {e}"
        print(f"{Fore.RED}{msg}{Style.RESET_ALL}" if _COLOR_ENABLED else msg, file=sys.stderr)
        return 2
    if args.format == "map":
        print(render_map(topology))
    else:
        print(json.dumps(topology.to_dict(), indent=2))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from dungeonforge.logging_utils import log
    from dungeonforge.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon Forge{Style.RESET_ALL}" if _COLOR_ENABLED else "Dungeon Forge"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Catalog:'):12} {value(os.getenv('DUNGEON_CATALOG_PATH') or 'default')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=getattr(args, "debug", False))
    return 0


if __name__ == "__main__":
    _color_init()
    sys.exit(main(sys.argv[1:]))
