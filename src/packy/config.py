"""Centralized configuration for Packy."""

import os
import sys
from pathlib import Path


def _program_dir() -> Path:
    """
    Directory holding the running program.

    A frozen binary or a launching script gives its own folder. Running the
    package itself (``python -m packy``) gives the interpreter's folder, the
    same place the ``packy`` console script lives.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    script = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not script or script == "-c":
        return Path.cwd()
    script_dir = Path(script).resolve().parent
    if script_dir == Path(__file__).resolve().parent:
        return Path(sys.executable).absolute().parent
    return script_dir


class Config:
    """
    Packy configuration with environment variable overrides.

    All configuration values are centralized here with sensible defaults.
    Values can be overridden via environment variables.
    """

    @staticmethod
    def _parse_port(port_str: str) -> int:
        """Parse and validate port number from string."""
        try:
            port = int(port_str)
            if not (1 <= port <= 65535):
                raise ValueError(f"Port must be 1-65535, got {port}")
            return port
        except ValueError as e:
            raise ValueError(f"Invalid PACKY_PORT environment variable: {e}")

    # ========================================================================
    # Pack Layout
    # ========================================================================
    MANIFEST_FILENAME: str = "manifest.json"
    ARCHIVE_SUFFIX: str = ".zip"
    PACKS_ROOT: str = os.getenv("PACKY_PACKS_ROOT", str(_program_dir() / "packs"))

    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = os.getenv("PACKY_LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("PACKY_LOG_FILE", "")

    # ========================================================================
    # Tool Server
    # ========================================================================
    HOST: str = os.getenv("PACKY_HOST", "127.0.0.1")
    PORT: int = _parse_port.__func__(os.getenv("PACKY_PORT", "8002"))
    TRANSPORT: str = os.getenv("PACKY_TRANSPORT", "stdio").lower()

    VALID_TRANSPORTS: tuple[str, ...] = ("stdio", "sse", "http")
    VALID_LOG_LEVELS: tuple[str, ...] = (
        "TRACE",
        "DEBUG",
        "INFO",
        "SUCCESS",
        "WARNING",
        "ERROR",
        "CRITICAL",
    )

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - PACKS_ROOT is set
        - LOG_LEVEL is a loguru level name
        - TRANSPORT is supported by the tool server

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if not cls.PACKS_ROOT.strip():
            errors.append("PACKS_ROOT must not be empty")

        if cls.LOG_LEVEL not in cls.VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of {', '.join(cls.VALID_LOG_LEVELS)}, got {cls.LOG_LEVEL}"
            )

        if cls.TRANSPORT not in cls.VALID_TRANSPORTS:
            errors.append(
                f"TRANSPORT must be one of {', '.join(cls.VALID_TRANSPORTS)}, got {cls.TRANSPORT}"
            )

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
