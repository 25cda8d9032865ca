"""Resource pack manifest models and validation."""

from .models import Manifest, ManifestHeader, ManifestModule
from .validator import (
    IssueCollector,
    ManifestValidator,
    ValidationResult,
    ValidationStatus,
    coerce_format_version,
    collect_manifest_issues,
    is_valid_uuid,
    is_valid_version,
    read_manifest,
    validate_folder,
    validate_manifest,
)

__all__ = [
    "IssueCollector",
    "Manifest",
    "ManifestHeader",
    "ManifestModule",
    "ManifestValidator",
    "ValidationResult",
    "ValidationStatus",
    "coerce_format_version",
    "collect_manifest_issues",
    "is_valid_uuid",
    "is_valid_version",
    "read_manifest",
    "validate_folder",
    "validate_manifest",
]
