"""
Manifest data models.

Defines Manifest, ManifestHeader and ManifestModule. These are built from a
raw manifest document only after it passed validation, so constructors here
do no checking of their own.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


VersionTriplet = tuple[int, int, int]


def _triplet(value: Any) -> Optional[VersionTriplet]:
    if not value:
        return None
    major, minor, patch = (int(part) for part in value)
    return (major, minor, patch)


def format_version_string(version: Optional[VersionTriplet]) -> str:
    """Render a version triplet as ``1.2.3``; empty string when absent."""
    if version is None:
        return ""
    return ".".join(str(part) for part in version)


@dataclass(frozen=True)
class ManifestHeader:
    """Identity of the pack."""

    name: str
    uuid: str
    version: VersionTriplet
    description: str = ""
    min_engine_version: Optional[VersionTriplet] = None


@dataclass(frozen=True)
class ManifestModule:
    """One sub-component entry of the pack."""

    type: str
    uuid: str
    version: VersionTriplet


@dataclass(frozen=True)
class Manifest:
    """
    Parsed manifest.json.

    Attributes:
        format_version: Schema version, 1 or 2
        header: Pack identity
        modules: Sub-components, at least one
    """

    format_version: int
    header: ManifestHeader
    modules: list[ManifestModule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], format_version: int) -> "Manifest":
        """
        Build a Manifest from a document that already passed validation.

        Args:
            data: Decoded manifest.json object
            format_version: Coerced format_version value

        Returns:
            Manifest with trimmed strings and tuple versions
        """
        raw_header = data["header"]
        header = ManifestHeader(
            name=raw_header["name"].strip(),
            uuid=raw_header["uuid"].strip(),
            version=_triplet(raw_header["version"]),
            description=raw_header.get("description") or "",
            min_engine_version=_triplet(raw_header.get("min_engine_version")),
        )
        modules = [
            ManifestModule(
                type=raw["type"].strip(),
                uuid=raw["uuid"].strip(),
                version=_triplet(raw["version"]),
            )
            for raw in data["modules"]
        ]
        return cls(format_version=format_version, header=header, modules=modules)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "format_version": self.format_version,
            "header": {
                "name": self.header.name,
                "description": self.header.description,
                "uuid": self.header.uuid,
                "version": list(self.header.version),
                "min_engine_version": (
                    list(self.header.min_engine_version)
                    if self.header.min_engine_version
                    else None
                ),
            },
            "modules": [
                {"type": m.type, "uuid": m.uuid, "version": list(m.version)}
                for m in self.modules
            ],
        }
