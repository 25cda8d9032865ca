"""Packy - resource pack manifest validation and zipping."""

__version__ = "0.1.0"

from .actions import ActionResult, zip_pack
from .archive import PackArchiver, archive_folder
from .manifest import validate_folder

__all__ = [
    "ActionResult",
    "PackArchiver",
    "__version__",
    "archive_folder",
    "validate_folder",
    "zip_pack",
]
