"""Pack folder archiving."""

from .zipper import PackArchiver, archive_folder, archive_name, is_inside, iter_tree

__all__ = ["PackArchiver", "archive_folder", "archive_name", "is_inside", "iter_tree"]
