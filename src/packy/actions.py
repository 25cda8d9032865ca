"""Pack actions invoked by user-facing shells (tool server, CLI)."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from .archive import archive_folder
from .errors import PackyError
from .manifest import validate_folder


@dataclass(frozen=True)
class ActionResult:
    """Status text for one shell action."""

    ok: bool
    message: str
    path: Optional[str] = None

    def to_dict(self) -> dict:
        return {"ok": self.ok, "message": self.message, "path": self.path}


def zip_pack(
    folder_path: str,
    output_path: str = "",
    packs_root: Optional[str | Path] = None,
) -> ActionResult:
    """Validate a pack folder, then zip it if the manifest is valid."""
    folder = (folder_path or "").strip()
    output = (output_path or "").strip()
    if not folder:
        return ActionResult(ok=False, message="folder path is required")

    try:
        validate_folder(folder)
        zip_path = archive_folder(folder, output or None, packs_root=packs_root)
    except PackyError as exc:
        logger.warning(
            "Zip pack failed | folder={} error_type={} error={}",
            folder,
            type(exc).__name__,
            exc,
        )
        return ActionResult(ok=False, message=str(exc))

    logger.info("Zip pack saved | folder={} zip={}", folder, zip_path)
    return ActionResult(ok=True, message=f"Saved zip: {zip_path}", path=str(zip_path))


__all__ = ["ActionResult", "archive_folder", "validate_folder", "zip_pack"]
