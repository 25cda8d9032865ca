"""
Command line entry point.

    packy validate <folder>
    packy zip <folder> [-o OUTPUT] [--packs-root DIR]
    packy serve
"""

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from .actions import zip_pack
from .config import Config
from .manifest import ManifestValidator
from .manifest.models import format_version_string


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure loguru handlers.

    Console handler on stderr at ``level`` (default Config.LOG_LEVEL), plus a
    rotating file handler when Config.LOG_FILE is set.
    """
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>",
        level=(level or Config.LOG_LEVEL).upper(),
    )

    if Config.LOG_FILE:
        logger.add(
            Config.LOG_FILE,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            level="DEBUG",
        )


def _cmd_validate(args: argparse.Namespace) -> int:
    result = ManifestValidator().check(args.folder)
    if not result.is_valid:
        if result.issues:
            for issue in result.issues:
                print(f"- {issue}", file=sys.stderr)
        else:
            print(result.error_message, file=sys.stderr)
        return 1

    header = result.manifest.header
    print(f"ok: {header.name} {format_version_string(header.version)}")
    return 0


def _cmd_zip(args: argparse.Namespace) -> int:
    result = zip_pack(args.folder, args.output or "", packs_root=args.packs_root)
    print(result.message, file=sys.stdout if result.ok else sys.stderr)
    return 0 if result.ok else 1


def _cmd_serve(args: argparse.Namespace) -> int:
    from .servers import pack_server

    Config.validate()
    logger.info(f"Starting PackTools ({Config.TRANSPORT})...")
    try:
        if Config.TRANSPORT == "stdio":
            pack_server.run(transport="stdio")
        else:
            pack_server.run(transport=Config.TRANSPORT, host=Config.HOST, port=Config.PORT)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="packy", description="Validate and zip resource pack folders.")
    p.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=Config.VALID_LOG_LEVELS,
        help="Console log level (default: PACKY_LOG_LEVEL or INFO)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", help="Check a pack folder's manifest.json")
    v.add_argument("folder", help="Path to the resource pack folder")
    v.set_defaults(func=_cmd_validate)

    z = sub.add_parser("zip", help="Validate a pack folder and zip it")
    z.add_argument("folder", help="Path to the resource pack folder")
    z.add_argument("-o", "--output", default="", help="Output zip path (optional)")
    z.add_argument("--packs-root", default=None, help="Folder for zips when no output is given")
    z.set_defaults(func=_cmd_zip)

    s = sub.add_parser("serve", help="Run the PackTools MCP server")
    s.set_defaults(func=_cmd_serve)
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
