# archive/zipper.py
"""
Directory archiver for resource pack folders.

Writes a ZIP of a folder tree: forward-slash relative names, explicit
directory entries (so empty folders survive), deflate-compressed file
entries, and a stable lexical entry order.
"""

import os
import stat
import zipfile
from pathlib import Path, PurePath
from typing import Iterator, Optional, Union

from loguru import logger

from ..config import Config
from ..errors import (
    ArchiveIOError,
    InvalidDestinationError,
    SourceNotADirectoryError,
    SourceNotFoundError,
)

PathLike = Union[str, os.PathLike]


def iter_tree(root: str) -> Iterator[os.DirEntry]:
    """
    Walk ``root`` depth-first, yielding entries in lexical order per level.

    Directories are yielded before their contents. Symlinked directories are
    yielded but not descended into.

    Raises:
        OSError: If a directory cannot be listed
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        yield entry
        if entry.is_dir(follow_symlinks=False):
            yield from iter_tree(entry.path)


def is_inside(path: str, folder: str) -> bool:
    """
    True if ``path`` lies under ``folder``.

    Plain string prefix test on absolute, normalized paths; symlinks are not
    resolved.
    """
    return path.startswith(folder.rstrip(os.sep) + os.sep)


def archive_name(path: str, root: str) -> str:
    """
    Entry name for ``path`` relative to ``root``, with forward slashes.

    Filename bytes that are not valid UTF-8 become U+FFFD; ZIP names are
    stored as UTF-8.
    """
    rel = os.fsencode(os.path.relpath(path, root)).decode("utf-8", "replace")
    return PurePath(rel).as_posix()


class PackArchiver:
    """
    Zips pack folders into a packs root.

    Args:
        packs_root: Directory receiving archives when no destination is
            given. Defaults to Config.PACKS_ROOT at call time.

    Example:
        archiver = PackArchiver(packs_root="/srv/packs")
        path = archiver.archive("work/my_pack")  # /srv/packs/my_pack.zip
    """

    def __init__(self, packs_root: Optional[PathLike] = None):
        self._packs_root = packs_root

    @property
    def packs_root(self) -> Path:
        return Path(self._packs_root if self._packs_root is not None else Config.PACKS_ROOT)

    def default_destination(self, source: Path) -> Path:
        """
        ``<packs_root>/<source name>.zip``, creating the packs root if needed.

        Raises:
            ArchiveIOError: If the packs root cannot be created
        """
        packs_root = self.packs_root
        try:
            packs_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveIOError(f"create packs folder: {e}") from e
        return packs_root / f"{source.name}{Config.ARCHIVE_SUFFIX}"

    def archive(self, source: PathLike, destination: Optional[PathLike] = None) -> Path:
        """
        Zip a folder.

        Args:
            source: Folder to archive
            destination: Output zip path; blank or None means the default
                destination under the packs root

        Returns:
            Absolute path of the written archive

        Raises:
            SourceNotFoundError: source does not exist
            SourceNotADirectoryError: source is not a directory
            InvalidDestinationError: destination lies inside source
            ArchiveIOError: any filesystem failure while writing
        """
        source_path = Path(source)
        try:
            source_stat = source_path.stat()
        except OSError as e:
            raise SourceNotFoundError(f"folder path error: {e}") from e
        if not stat.S_ISDIR(source_stat.st_mode):
            raise SourceNotADirectoryError("folder path is not a directory")

        abs_source = os.path.abspath(source_path)

        if destination is None or not str(destination).strip():
            destination = self.default_destination(Path(abs_source))
        abs_dest = os.path.abspath(destination)

        if is_inside(abs_dest, abs_source):
            raise InvalidDestinationError("output zip cannot be inside the source folder")

        logger.info(f"Archiving pack: source={abs_source}, destination={abs_dest}")

        try:
            archive = zipfile.ZipFile(
                abs_dest,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                strict_timestamps=False,
            )
        except OSError as e:
            raise ArchiveIOError(f"create zip: {e}") from e

        try:
            with archive:
                count = self._write_tree(archive, abs_source, abs_dest)
        except (OSError, ValueError) as e:
            logger.warning(f"Archive aborted: destination={abs_dest}, error={e}")
            raise ArchiveIOError(f"zip folder: {e}") from e

        logger.info(f"Archive written: destination={abs_dest}, entries={count}")
        return Path(abs_dest)

    def _write_tree(self, archive: zipfile.ZipFile, abs_source: str, abs_dest: str) -> int:
        """Add every entry under abs_source except the destination itself."""
        real_dest = os.path.realpath(abs_dest)
        count = 0

        for entry in iter_tree(abs_source):
            abs_path = os.path.abspath(entry.path)
            if abs_path == abs_dest or os.path.realpath(abs_path) == real_dest:
                logger.debug(f"Skipping archive destination: {abs_path}")
                continue

            arcname = archive_name(abs_path, abs_source)
            if entry.is_dir(follow_symlinks=False):
                # ZipFile.write appends the trailing slash for directories
                archive.write(abs_path, arcname)
            else:
                archive.write(abs_path, arcname, compress_type=zipfile.ZIP_DEFLATED)
            count += 1

        return count


def archive_folder(
    source: PathLike,
    destination: Optional[PathLike] = None,
    packs_root: Optional[PathLike] = None,
) -> Path:
    """
    Zip a pack folder.

    Convenience wrapper around PackArchiver.archive().

    Args:
        source: Folder to archive
        destination: Output zip path (optional)
        packs_root: Override for Config.PACKS_ROOT

    Returns:
        Absolute path of the written archive
    """
    return PackArchiver(packs_root=packs_root).archive(source, destination)
