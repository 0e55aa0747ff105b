"""CLI entrypoint for the cube net walker."""

from __future__ import annotations

import argparse
from pathlib import Path

import yaml

from .engine import CubeNetEngine
from .net_codec import NetValidationError, split_puzzle_input
from .net_map import CubeNetMap
from .server import CubeNetHTTPServer
from .walker import AdvanceMode

DEFAULTS = {
    "face_size": None,
    "mode": "both",
    "host": "127.0.0.1",
    "port": 8000,
    "progress": False,
}


def load_config(path: str | Path) -> dict:
    """Load YAML config. Returns a flat dict of option overrides."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping")
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return data


def resolve_options(args: argparse.Namespace) -> dict:
    options = dict(DEFAULTS)
    if args.config:
        options.update(load_config(args.config))
    for key in DEFAULTS:
        value = getattr(args, key, None)
        if value is not None:
            options[key] = value
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cube net walker")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", type=str, required=True, help="Puzzle file: net, blank line, commands")
    common.add_argument("--face-size", dest="face_size", type=int, default=None)
    common.add_argument("--config", type=str, default=None, help="YAML file with option defaults")

    solve = sub.add_parser("solve", parents=[common], help="Print the final password")
    solve.add_argument("--mode", choices=["fold", "wrap", "both"], default=None)
    solve.add_argument("--progress", action="store_true", default=None)

    headless = sub.add_parser("headless", parents=[common], help="Run headless HTTP walker")
    headless.add_argument("--mode", choices=["fold", "wrap"], default=None)
    headless.add_argument("--host", default=None)
    headless.add_argument("--port", type=int, default=None)

    return parser


def _modes(mode: str) -> list[AdvanceMode]:
    if mode == "both":
        return [AdvanceMode.WRAP, AdvanceMode.FOLD]
    return [AdvanceMode(mode)]


def run_solve(net_map: CubeNetMap, command_text: str, options: dict) -> dict[str, int]:
    results: dict[str, int] = {}
    for mode in _modes(options["mode"]):
        engine = CubeNetEngine(net_map, mode=mode)
        state = engine.run(command_text, progress=bool(options["progress"]))
        results[mode.value] = state.password()
        print(
            f"mode={mode.value} x={state.position[0]} y={state.position[1]} "
            f"heading={state.heading} password={results[mode.value]}",
            flush=True,
        )
    return results


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
        text = Path(args.input).read_text(encoding="utf-8")
        grid_text, command_text = split_puzzle_input(text)
        net_map = CubeNetMap.from_text(grid_text, face_size=options["face_size"])
    except (OSError, ValueError, yaml.YAMLError) as exc:
        parser.error(str(exc))

    print(
        f"net_loaded width={net_map.width} height={net_map.height} face_size={net_map.face_size}",
        flush=True,
    )

    if args.command == "solve":
        try:
            run_solve(net_map, command_text, options)
        except NetValidationError as exc:
            parser.error(str(exc))
        return None

    if args.command == "headless":
        mode = "fold" if options["mode"] == "both" else options["mode"]
        engine = CubeNetEngine(net_map, mode=mode)
        server = CubeNetHTTPServer(engine=engine, host=options["host"], port=options["port"])
        print(f"Cube net headless server listening on http://{server.host}:{server.port}", flush=True)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            server.shutdown()
        return None

    parser.error(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    main()
