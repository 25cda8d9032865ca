"""Pack validation and zipping tools as a standalone FastMCP server."""

import json

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from loguru import logger

from packy.actions import zip_pack as run_zip_pack
from packy.manifest import ManifestValidator

# Create FastMCP server instance
pack_server = FastMCP("PackTools")

validator = ManifestValidator()


@pack_server.tool()
def validate_pack(folder_path: str) -> str:
    """
    Check a resource pack folder's manifest.json.

    Args:
        folder_path: Path to the resource pack folder

    Returns:
        JSON report with status, every issue found and the parsed manifest
    """
    folder = folder_path.strip()
    if not folder:
        raise ToolError("folder path is required")

    result = validator.check(folder)
    return json.dumps(result.to_dict(), indent=2)


@pack_server.tool()
def zip_pack(folder_path: str, output_path: str = "") -> str:
    """
    Validate a resource pack folder and zip its contents.

    Args:
        folder_path: Path to the resource pack folder
        output_path: Output zip path (optional, default: packs folder)

    Returns:
        Status message with the saved zip path
    """
    result = run_zip_pack(folder_path, output_path)
    if not result.ok:
        raise ToolError(result.message)
    return result.message


@pack_server.tool()
def get_validation_metrics() -> str:
    """
    Report how many folders were validated and how many passed.

    Returns:
        JSON metrics
    """
    metrics = validator.get_metrics()
    logger.debug(f"Validation metrics requested: {metrics}")
    return json.dumps(metrics, indent=2)
