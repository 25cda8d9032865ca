"""Pytest fixtures and test utilities for the Packy test suite."""

import copy
import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest


HEADER_UUID = "0f1e2d3c-4b5a-4978-8796-a5b4c3d2e1f0"
MODULE_UUID = "9a8b7c6d-5e4f-4a3b-9c2d-1e0f9a8b7c6d"


# ============================================================================
# MANIFEST FIXTURES
# ============================================================================


VALID_MANIFEST: dict[str, Any] = {
    "format_version": 2,
    "header": {
        "name": "Crisp Textures",
        "description": "Sharper blocks",
        "uuid": HEADER_UUID,
        "version": [1, 0, 0],
        "min_engine_version": [1, 20, 0],
    },
    "modules": [
        {
            "type": "resources",
            "uuid": MODULE_UUID,
            "version": [1, 0, 0],
        }
    ],
}


@pytest.fixture
def valid_manifest() -> dict[str, Any]:
    """
    Provide a fresh copy of a manifest that passes validation.

    Tests mutate the copy freely.
    """
    return copy.deepcopy(VALID_MANIFEST)


@pytest.fixture
def make_pack(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory creating a pack folder under tmp_path.

    Args:
        name: Folder name
        manifest: Object to dump as manifest.json, or None for no manifest
        raw: Raw manifest.json text (overrides manifest)
        files: Mapping of relative path -> bytes/str content

    Returns:
        Path of the created pack folder
    """

    def _make(
        name: str = "crisp_textures",
        manifest: Optional[dict[str, Any]] = None,
        raw: Optional[str] = None,
        files: Optional[dict[str, Any]] = None,
    ) -> Path:
        folder = tmp_path / name
        folder.mkdir(parents=True, exist_ok=True)
        if raw is not None:
            (folder / "manifest.json").write_text(raw, encoding="utf-8")
        elif manifest is not None:
            (folder / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")
        for rel, content in (files or {}).items():
            target = folder / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return folder

    return _make


@pytest.fixture
def valid_pack(make_pack, valid_manifest) -> Path:
    """Pack folder with a valid manifest and a couple of asset files."""
    return make_pack(
        manifest=valid_manifest,
        files={
            "pack_icon.png": b"\x89PNG\r\n\x1a\n",
            "textures/blocks/stone.png": b"stone-bytes",
        },
    )


# ============================================================================
# ARCHIVE FIXTURES
# ============================================================================


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Folder with a.txt, sub/b.txt and an empty sub/empty/ directory.
    """
    root = tmp_path / "pack"
    (root / "sub" / "empty").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"alpha\n")
    (root / "sub" / "b.txt").write_bytes(b"beta \x00\xff bytes")
    return root
