"""
Suite and document loader.

This module provides the public API for loading check suites and the
JSON documents they run against, from disk or from strings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .models import CheckSuite
from .parser import SuiteParser
from .validation import SuiteValidator, ValidationResult

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_suite(path: str | Path) -> tuple[CheckSuite | None, ValidationResult]:
    """
    Load and validate a check suite from a YAML file.

    Args:
        path: Path to the YAML suite file

    Returns:
        Tuple of (CheckSuite or None, ValidationResult)
        If validation fails, CheckSuite will be None.

    Example:
        suite, result = load_suite("checks/user.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    logger.debug(f"Loading suite from {path}")
    result = ValidationResult()
    text = _read_text(path, result)
    if text is None:
        return None, result
    return load_suite_yaml(text, source=str(path))


def load_suite_yaml(yaml_string: str, source: str = "yaml") -> tuple[CheckSuite | None, ValidationResult]:
    """
    Load and validate a check suite from a YAML string.

    Args:
        yaml_string: YAML content as a string
        source: Name used in error paths

    Returns:
        Tuple of (CheckSuite or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            source,
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    validator = SuiteValidator(data)
    result = validator.validate()

    if not result.is_valid:
        return None, result

    return SuiteParser(data).parse(), result


def load_document(path: str | Path) -> tuple[Any, ValidationResult]:
    """
    Load the JSON document a suite runs against.

    Files ending in .yaml or .yml are read as YAML; anything else as JSON.

    Returns:
        Tuple of (data, ValidationResult); data is None when loading failed.
    """
    path = Path(path)
    result = ValidationResult()

    if not path.exists():
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    text = _read_text(path, result)
    if text is None:
        return None, result
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text), result
        except yaml.YAMLError as e:
            result.add_error(str(path), f"Invalid YAML syntax: {e}")
            return None, result

    try:
        return json.loads(text), result
    except json.JSONDecodeError as e:
        result.add_error(
            str(path),
            f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
        )
        return None, result


def _read_text(path: Path, result: ValidationResult) -> str | None:
    """Read a UTF-8 file, recording a validation error instead of raising."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        result.add_error(
            str(path),
            f"File is not valid UTF-8: {e.reason} at byte {e.start}",
            suggestion="Save the file with UTF-8 encoding"
        )
    except OSError as e:
        result.add_error(str(path), f"Could not read file: {e.strerror or e}")
    return None
