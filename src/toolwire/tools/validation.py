"""Two-phase argument validation: presence first, then declared types.

Missing required arguments short-circuit the type check. Type mismatches are
collected for every present parameter instead of failing on the first one.
Absent optional parameters are skipped here; defaults are not applied.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from toolwire.tools.models import Parameter, ParamType, TypeErrorRecord


class ValidationOutcome(BaseModel):
    """Result of :func:`validate_arguments`.

    Exactly one of ``missing`` / ``type_errors`` is non-empty on failure;
    both are empty when the arguments are valid.
    """

    missing: list[str] = []
    type_errors: list[TypeErrorRecord] = []

    @property
    def valid(self) -> bool:
        return not self.missing and not self.type_errors


def json_type_name(value: Any) -> str:
    """Name the JSON type of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _matches(param_type: ParamType, value: Any) -> bool:
    if param_type is ParamType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, str)


def missing_arguments(parameters: Sequence[Parameter], arguments: Mapping[str, Any]) -> list[str]:
    """Required parameter names absent from *arguments*, in declaration order."""
    return [p.name for p in parameters if p.required and p.name not in arguments]


def check_types(
    parameters: Sequence[Parameter], arguments: Mapping[str, Any]
) -> list[TypeErrorRecord]:
    """Collect a record for every present argument of the wrong type."""
    errors: list[TypeErrorRecord] = []
    for param in parameters:
        if param.name not in arguments:
            continue
        value = arguments[param.name]
        if not _matches(param.type, value):
            errors.append(
                TypeErrorRecord(
                    parameter=param.name,
                    expected=param.type,
                    got=json_type_name(value),
                )
            )
    return errors


def validate_arguments(
    parameters: Sequence[Parameter], arguments: Mapping[str, Any]
) -> ValidationOutcome:
    """Run the presence check, then (only if it passes) the type check."""
    missing = missing_arguments(parameters, arguments)
    if missing:
        return ValidationOutcome(missing=missing)
    return ValidationOutcome(type_errors=check_types(parameters, arguments))
