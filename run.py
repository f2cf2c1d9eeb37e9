"""Delver CLI entry point.

Provides subcommands for running the map API server, printing a generated
map, and building a stack of linked dungeon levels. Accepts configuration via
flags and ``DELVER_MAP_*`` environment variables, with optional .env loading.

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

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

# CLI flag -> MapConfig field for the generation subcommands
_CONFIG_FLAGS = (
    ("width", int, "Map width, odd, 15..1999"),
    ("height", int, "Map height, odd, 15..1999"),
    ("min_room_size", int, "Smallest room extent"),
    ("max_room_size", int, "Largest room extent"),
    ("num_room_attempts", int, "Room placement attempts"),
    ("cave_width", int, "Cave blob width"),
    ("cave_height", int, "Cave blob height"),
    ("num_caves", int, "Caves to stamp"),
    ("cave_setting", str, "Cellular automaton birth counts, e.g. 6,7,8"),
    ("num_extra_connectors", int, "Extra loop-adding connectors"),
    ("connector_thickness", int, "Half-width of extra connectors"),
    ("straight_tendency", float, "Chance a maze corridor keeps its direction"),
    ("island_threshold", int, "Islands smaller than this are erased"),
)


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seed", default=None, help="Seed (digits or any string; default: random)")
    for name, typ, text in _CONFIG_FLAGS:
        p.add_argument("--" + name.replace("_", "-"), dest=name, type=typ, default=None, help=text)
    p.add_argument(
        "--allow-room-overlap",
        dest="allow_room_overlap",
        action="store_true",
        default=None,
        help="Allow rooms to overlap",
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delver Map Generator

    Run the map API server or generate maps from the command line.
    Generation knobs can be provided via CLI flags or DELVER_MAP_* environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          DELVER_MAP_WIDTH     Default map width (any MapConfig field works, upper-cased)
          DELVER_LOG_LEVEL     debug | info | warn | error (default: info)
          DELVER_LOG_JSON      1 to emit JSON log lines

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a small map
          python run.py generate --seed 42 --width 41 --height 21

          # Same map as JSON with generation metrics
          python run.py generate --seed 42 --json --metrics

          # Build three linked levels below the home level
          python run.py levels --count 3 --seed 7
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delver",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Delver Map Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the map API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask map API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one map and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single map and print it as text or JSON.",
    )
    _add_config_flags(gen_parser)
    gen_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    gen_parser.add_argument("--metrics", action="store_true", help="Include generation metrics")
    gen_parser.set_defaults(command="generate")

    # levels subcommand
    levels_parser = subparsers.add_parser(
        "levels",
        help="Build the home level plus linked levels below it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Build linked dungeon levels and print their staircases.",
    )
    _add_config_flags(levels_parser)
    levels_parser.add_argument("--count", type=int, default=3, help="Levels below home (default: 3)")
    levels_parser.add_argument("--show", action="store_true", help="Print each level's tiles")
    levels_parser.set_defaults(command="levels")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def build_config(args: argparse.Namespace):
    """MapConfig from DELVER_MAP_* env defaults overridden by CLI flags."""
    from delver.dungeon import MapConfig
    from delver.routes.map_api import _coerce_seed

    overrides = {}
    for name, _typ, _text in _CONFIG_FLAGS:
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val
    if getattr(args, "allow_room_overlap", None):
        overrides["allow_room_overlap"] = True
    if "cave_setting" in overrides:
        overrides["cave_setting"] = tuple(int(p) for p in overrides["cave_setting"].split(",") if p.strip())
    config = MapConfig.from_env(**overrides)
    seed_raw = getattr(args, "seed", None)
    if seed_raw is not None:
        config.seed = _coerce_seed(seed_raw)
    elif config.seed is None:
        config.seed = _coerce_seed(None)
    return config.validate()


def _cmd_generate(args) -> int:
    from delver.dungeon import MapGenerator

    result = MapGenerator(build_config(args)).generate()
    if args.json:
        payload = {
            "seed": result.metrics["seed"],
            "width": result.grid.width,
            "height": result.grid.height,
            "rows": result.grid.rows(),
            "rooms": [r.to_dict() for r in result.rooms],
        }
        if args.metrics:
            payload["metrics"] = result.metrics
        print(json.dumps(payload))
        return 0
    print(result.grid.to_text())
    if args.metrics:
        for k, v in result.metrics.items():
            print(f"{k}={v}")
    return 0


def _cmd_levels(args) -> int:
    from delver.dungeon import Dungeon, LevelGenerationError

    config = build_config(args)
    dungeon = Dungeon(config)
    try:
        # Home level no larger than the map so its staircase lands in bounds
        levels = [dungeon.build_home_level(min(63, config.width), min(31, config.height))]
        for index in range(1, args.count + 1):
            levels.append(dungeon.build_level(index))
    except LevelGenerationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    for level in levels:
        print(f"level={level.index} up={level.up_stairs} down={level.down_stairs} attempts={level.attempts}")
        if args.show:
            print(level.grid.to_text())
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args and getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()

    from delver.dungeon import InvalidMapConfiguration

    if mode in ("generate", "levels"):
        try:
            return _cmd_generate(args) if mode == "generate" else _cmd_levels(args)
        except InvalidMapConfiguration as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 2

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from delver.logging_utils import log
    from delver.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Delver Map Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Delver Map Server Bootup"
    )

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
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    info_prefix = f"{Fore.CYAN}[INFO]{Style.RESET_ALL}" if _COLOR_ENABLED else "[INFO]"
    print(f"{info_prefix} Listening for connections... Press Ctrl+C to stop.")
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
