# File: crudgen/validators.py
"""
crudgen - Preset Validation
===========================
Values passed on the command line skip their prompt, so they never go
through the interactive checks. This module applies the same checks up
front and collects the outcome in a ``ValidationResult``.

Usage::

    from crudgen.validators import validate_presets
    result = validate_presets(config, table_names, module_name="cmsadmin")
    if not result.is_valid:
        print(result.format_report())
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from crudgen.models import GeneratorConfig
from crudgen.utils import camelize

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.validators")

_API_ENDPOINT_RE: re.Pattern[str] = re.compile(r"^api-[a-z0-9]+(-[a-z0-9]+)*$")


# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationError:
    """Lightweight error descriptor."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationError`` instances."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationError] = []

    def add_error(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("error", code, message, context))

    def add_warning(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("warning", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    @property
    def errors(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_error]

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_warning]

    @property
    def is_valid(self) -> bool:
        return not any(e.is_error for e in self._items)

    def summary(self) -> str:
        return (
            f"Validation: {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self) -> str:
        """Human-readable multi-line report."""
        lines: List[str] = [self.summary()]
        for item in self._items:
            prefix: str = "✗" if item.is_error else "⚠"
            lines.append(f"  {prefix} [{item.code}] {item.message}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_module(config: GeneratorConfig, module_name: str) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    if config.get_module(module_name) is None:
        known: List[str] = [m.id for m in config.modules]
        result.add_error(
            "MODULE_UNKNOWN",
            f"Module '{module_name}' is not registered. Known modules: {known}.",
            {"module": module_name},
        )
    return result


def validate_model_name(model_name: str) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    camelized: str = camelize(model_name)
    if not camelized:
        result.add_error(
            "MODEL_NAME_EMPTY",
            f"Model name '{model_name}' contains no usable characters.",
        )
    elif camelized != model_name:
        result.add_warning(
            "MODEL_NAME_NOT_CAMELIZED",
            f"Model name '{model_name}' will be used as class '{camelized}'.",
            {"model": model_name, "class": camelized},
        )
    return result


def validate_api_endpoint(api_endpoint: str) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    if not _API_ENDPOINT_RE.match(api_endpoint):
        result.add_warning(
            "API_ENDPOINT_FORMAT",
            f"API endpoint '{api_endpoint}' does not look like 'api-<module>-<model>'.",
            {"api_endpoint": api_endpoint},
        )
    return result


def validate_table_name(table_name: str, table_names: Sequence[str]) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    if table_name not in table_names:
        result.add_error(
            "TABLE_UNKNOWN",
            f"The selected database '{table_name}' does not exist in the list of tables.",
            {"table": table_name},
        )
    return result


def validate_presets(
    config: GeneratorConfig,
    table_names: Sequence[str],
    *,
    module_name: Optional[str] = None,
    model_name: Optional[str] = None,
    api_endpoint: Optional[str] = None,
    db_table_name: Optional[str] = None,
) -> ValidationResult:
    """Validate every preset that was given; ``None`` means "will be prompted"."""
    result: ValidationResult = ValidationResult()

    if module_name is not None:
        result.merge(validate_module(config, module_name))
    if model_name is not None:
        result.merge(validate_model_name(model_name))
    if api_endpoint is not None:
        result.merge(validate_api_endpoint(api_endpoint))
    if db_table_name is not None:
        result.merge(validate_table_name(db_table_name, table_names))

    if result.is_valid:
        logger.info("Preset validation passed. %s", result.summary())
    else:
        logger.error("Preset validation failed. %s", result.summary())
    return result


__all__: List[str] = [
    "ValidationError",
    "ValidationResult",
    "validate_api_endpoint",
    "validate_model_name",
    "validate_module",
    "validate_presets",
    "validate_table_name",
]
