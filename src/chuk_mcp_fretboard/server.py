#!/usr/bin/env python3
"""
Entry point for the CHUK Fretboard MCP Server.

Runs the fretboard tools over stdio or http. The project voicings
directory can be set with --voicings-dir or the
CHUK_FRETBOARD_VOICINGS_DIR environment variable.
"""

import argparse
import asyncio
import logging
import os

from chuk_mcp_fretboard.constants import COMMON_ROOTS, VOICINGS_DIR_ENV

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the server."""
    parser = argparse.ArgumentParser(description="CHUK Fretboard MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--voicings-dir",
        help="Directory of project voicing files (default: ./voicings)",
    )
    parser.add_argument(
        "--preload",
        action="store_true",
        help=f"Warm the voicing cache for {', '.join(COMMON_ROOTS)} on startup",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


async def serve(transport: str, port: int, preload: bool) -> None:
    """Start the server, optionally warming the voicing cache first."""
    # The server module reads its paths at import time
    from chuk_mcp_fretboard.async_server import engine, mcp

    if preload:
        tasks = engine.loader.preload(COMMON_ROOTS)
        logger.info(f"Preloading {len(tasks)} voicing partitions")

    if transport == "stdio":
        logger.info("Starting CHUK Fretboard MCP Server (stdio)")
        await mcp.run_stdio()
    else:
        logger.info(f"Starting CHUK Fretboard MCP Server (http:{port})")
        await mcp.run_http(port=port)


def main() -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.voicings_dir:
        os.environ[VOICINGS_DIR_ENV] = args.voicings_dir

    asyncio.run(serve(args.transport, args.port, args.preload))


if __name__ == "__main__":
    main()
