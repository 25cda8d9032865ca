# manifest/validator.py
"""
Manifest validator for resource pack folders.

Reads ``<folder>/manifest.json`` once and checks it against the pack schema.
Every violation is collected before deciding, so a caller sees the whole
list of problems at once instead of fixing them one run at a time.
"""

import json
import math
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger

from ..config import Config
from ..errors import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestValidationError,
    PackyError,
)
from .models import Manifest


SUPPORTED_FORMAT_VERSIONS = (1, 2)

UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


# -----------------------------------------------------------------------------
# Field Checks
# -----------------------------------------------------------------------------


def coerce_format_version(value: Any) -> Optional[int]:
    """
    Coerce a raw format_version value to an int.

    Accepts a JSON integer, a numeric string, or a number with no fractional
    part (``2.0``). Booleans, fractional numbers, blank strings and any other
    type yield None.

    Args:
        value: format_version as decoded from JSON

    Returns:
        Integer value, or None if the value has no lossless integer form
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            return None
        # int() of a huge exponent would materialize every digit
        if abs(value) > sys.maxsize:
            return None
        return int(value)
    return None


def is_valid_uuid(value: Any) -> bool:
    """True for the canonical 8-4-4-4-12 hex form, any case, outer whitespace ignored."""
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.fullmatch(value.strip()) is not None


def is_valid_version(value: Any) -> bool:
    """True for exactly three non-negative integers."""
    if not isinstance(value, list) or len(value) != 3:
        return False
    return all(
        isinstance(part, int) and not isinstance(part, bool) and part >= 0
        for part in value
    )


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


# -----------------------------------------------------------------------------
# Issue Collection
# -----------------------------------------------------------------------------


class IssueCollector:
    """Accumulates issue strings; turns them into one error at the end."""

    def __init__(self) -> None:
        self._issues: list[str] = []

    def add(self, message: str) -> None:
        self._issues.append(message)

    def check(self, ok: bool, message: str) -> None:
        """Record ``message`` unless ``ok``."""
        if not ok:
            self._issues.append(message)

    @property
    def issues(self) -> list[str]:
        return list(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def raise_if_any(self) -> None:
        if self._issues:
            raise ManifestValidationError(self._issues)


def collect_manifest_issues(data: dict[str, Any]) -> IssueCollector:
    """
    Check a decoded manifest document against the pack schema.

    Args:
        data: Decoded manifest.json object

    Returns:
        IssueCollector holding every issue found, in field order
    """
    collector = IssueCollector()

    format_version = coerce_format_version(data.get("format_version"))
    collector.check(
        format_version in SUPPORTED_FORMAT_VERSIONS,
        "format_version must be 1 or 2",
    )

    header = data.get("header")
    if not isinstance(header, dict):
        header = {}
    collector.check(not _is_blank(header.get("name")), "header.name is required")
    collector.check(
        isinstance(header.get("description", ""), (str, type(None))),
        "header.description must be a string",
    )
    collector.check(is_valid_uuid(header.get("uuid")), "header.uuid must be a valid UUID")
    collector.check(
        is_valid_version(header.get("version")),
        "header.version must be 3 integers",
    )
    min_engine_version = header.get("min_engine_version")
    if min_engine_version not in (None, []):
        collector.check(
            is_valid_version(min_engine_version),
            "header.min_engine_version must be 3 integers",
        )

    modules = data.get("modules")
    if not isinstance(modules, list) or not modules:
        collector.add("modules must include at least one entry")
    else:
        for i, module in enumerate(modules):
            if not isinstance(module, dict):
                module = {}
            collector.check(not _is_blank(module.get("type")), f"modules[{i}].type is required")
            collector.check(
                is_valid_uuid(module.get("uuid")),
                f"modules[{i}].uuid must be a valid UUID",
            )
            collector.check(
                is_valid_version(module.get("version")),
                f"modules[{i}].version must be 3 integers",
            )

    return collector


def validate_manifest(data: dict[str, Any]) -> list[str]:
    """Every schema issue in a decoded manifest, in field order (empty if valid)."""
    return collect_manifest_issues(data).issues


# -----------------------------------------------------------------------------
# Reading
# -----------------------------------------------------------------------------


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not allowed")


def parse_manifest_bytes(raw: bytes) -> dict[str, Any]:
    """
    Decode manifest bytes without losing numeric precision.

    Integers decode to ``int`` and other numbers to ``Decimal``. NaN and
    Infinity literals are rejected.

    Raises:
        ManifestParseError: If the bytes are not a JSON object
    """
    try:
        data = json.loads(
            raw.decode("utf-8-sig"),
            parse_float=Decimal,
            parse_constant=_reject_constant,
        )
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise ManifestParseError(f"manifest.json is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(
            f"manifest.json is not valid JSON: expected an object, got {type(data).__name__}"
        )
    return data


def read_manifest(folder_path: Union[str, Path]) -> dict[str, Any]:
    """
    Read and decode ``<folder_path>/manifest.json``.

    Raises:
        ManifestNotFoundError: If the file is missing or unreadable
        ManifestParseError: If the file is not a JSON object
    """
    manifest_path = Path(folder_path) / Config.MANIFEST_FILENAME
    try:
        raw = manifest_path.read_bytes()
    except OSError as e:
        logger.debug(f"Manifest read failed: path={manifest_path}, error={e}")
        raise ManifestNotFoundError("manifest.json not found in folder") from e

    logger.debug(f"Read manifest: path={manifest_path}, bytes={len(raw)}")
    return parse_manifest_bytes(raw)


def validate_folder(folder_path: Union[str, Path]) -> Manifest:
    """
    Validate the manifest of a pack folder.

    Args:
        folder_path: Pack folder containing manifest.json

    Returns:
        The parsed Manifest

    Raises:
        ManifestNotFoundError: No manifest.json in the folder
        ManifestParseError: manifest.json is not valid JSON
        ManifestValidationError: Schema violations, all of them
    """
    data = read_manifest(folder_path)
    collect_manifest_issues(data).raise_if_any()
    return Manifest.from_dict(data, coerce_format_version(data["format_version"]))


# -----------------------------------------------------------------------------
# Validation Result Types
# -----------------------------------------------------------------------------


class ValidationStatus(Enum):
    """Validation status codes."""
    VALID = "valid"
    NOT_FOUND = "not_found"
    PARSE_ERROR = "parse_error"
    INVALID = "invalid"


_STATUS_BY_ERROR = {
    ManifestNotFoundError: ValidationStatus.NOT_FOUND,
    ManifestParseError: ValidationStatus.PARSE_ERROR,
    ManifestValidationError: ValidationStatus.INVALID,
}


@dataclass
class ValidationResult:
    """
    Result of a pack folder validation.

    Attributes:
        folder: Folder that was checked
        status: Detailed validation status code
        issues: Schema violations (empty unless status is INVALID)
        error_message: Human-readable error message (empty if valid)
        manifest: Parsed manifest when valid
        validated_at: When validation was performed
    """
    folder: str
    status: ValidationStatus
    issues: list[str] = field(default_factory=list)
    error_message: str = ""
    manifest: Optional[Manifest] = None
    validated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "folder": self.folder,
            "is_valid": self.is_valid,
            "status": self.status.value,
            "issues": list(self.issues),
            "error_message": self.error_message,
            "manifest": self.manifest.to_dict() if self.manifest else None,
            "validated_at": self.validated_at.isoformat(),
        }


# -----------------------------------------------------------------------------
# Manifest Validator
# -----------------------------------------------------------------------------


class ManifestValidator:
    """
    Non-raising front end for pack folder validation.

    Wraps validate_folder() and reports the outcome as a ValidationResult,
    keeping simple counters for the tool server.

    Example:
        validator = ManifestValidator()

        result = validator.check("packs/src/my_pack")
        if not result.is_valid:
            print(result.error_message)
    """

    def __init__(self) -> None:
        self._checks_performed = 0
        self._checks_passed = 0
        self._checks_failed = 0

    def check(self, folder_path: Union[str, Path]) -> ValidationResult:
        """
        Validate a pack folder and describe the outcome.

        Args:
            folder_path: Pack folder containing manifest.json

        Returns:
            ValidationResult with status, issues and parsed manifest
        """
        self._checks_performed += 1
        folder = str(folder_path)

        try:
            manifest = validate_folder(folder_path)
        except PackyError as e:
            self._checks_failed += 1
            status = _STATUS_BY_ERROR.get(type(e), ValidationStatus.INVALID)
            issues = e.issues if isinstance(e, ManifestValidationError) else []
            logger.info(
                f"Manifest rejected: folder={folder}, status={status.value}, issues={len(issues)}"
            )
            return ValidationResult(
                folder=folder,
                status=status,
                issues=issues,
                error_message=str(e),
            )

        self._checks_passed += 1
        logger.info(f"Manifest valid: folder={folder}, name={manifest.header.name}")
        return ValidationResult(
            folder=folder,
            status=ValidationStatus.VALID,
            manifest=manifest,
        )

    def get_metrics(self) -> dict:
        """
        Get validator metrics.

        Returns:
            Dict with validation statistics
        """
        return {
            "checks_performed": self._checks_performed,
            "checks_passed": self._checks_passed,
            "checks_failed": self._checks_failed,
            "pass_rate": (
                self._checks_passed / self._checks_performed
                if self._checks_performed > 0
                else 0.0
            ),
        }
