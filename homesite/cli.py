from __future__ import annotations

import argparse
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional

import uvicorn

from .config import load_site_config
from .server import create_app
from .site import build_site


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Personal website generator and live server.")
    parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file with GitHub credentials.")
    commands = parser.add_subparsers(dest="command")

    build = commands.add_parser("build", help="Render the static site.")
    build.add_argument("--output", default=None, help="Output directory for the site.")

    serve = commands.add_parser("serve", help="Run the live server.")
    serve.add_argument("--host", default=None, help="Interface to bind.")
    serve.add_argument("--port", default=None, type=int, help="Port to listen on.")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "build"
        args.output = None
    return args


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    env_file = Path(args.env_file) if args.env_file else None
    config = load_site_config(Path(args.config), env_file)

    if args.command == "serve":
        if args.host:
            config = replace(config, host=args.host)
        if args.port:
            config = replace(config, port=args.port)
        print(f"Serving on http://{config.host}:{config.port}")
        uvicorn.run(create_app(config), host=config.host, port=config.port)
        return

    if args.output:
        config = replace(config, output_dir=Path(args.output))
    start = time.perf_counter()
    build_site(config)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
