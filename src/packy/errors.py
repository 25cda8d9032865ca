"""
Error types raised by the validator and archiver.

Every error carries the user-facing message as its string form, so a caller
can show ``str(exc)`` verbatim in a status area.
"""


class PackyError(Exception):
    """Base class for all pack validation and archiving failures."""


class ManifestNotFoundError(PackyError):
    """No readable manifest.json in the pack folder."""


class ManifestParseError(PackyError):
    """manifest.json is not a JSON object."""


class ManifestValidationError(PackyError):
    """
    manifest.json parsed but violates the schema.

    Attributes:
        issues: Every violation found, in discovery order
    """

    DELIMITER = "; "

    def __init__(self, issues: list[str]):
        self.issues = list(issues)
        super().__init__(self.DELIMITER.join(self.issues))


class SourceNotFoundError(PackyError):
    """The folder to archive does not exist or cannot be stat'ed."""


class SourceNotADirectoryError(PackyError):
    """The folder to archive is a file."""


class InvalidDestinationError(PackyError):
    """The archive destination lies inside the folder being archived."""


class ArchiveIOError(PackyError):
    """Filesystem failure while creating or writing an archive."""
