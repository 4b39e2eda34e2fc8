"""Tool models — parameters, definitions, and invocation results.

A :class:`ToolDefinition` is the static description of one callable tool:
its name, docstring, ordered typed parameters, and the handler that turns an
argument map into a sequence of result values. Definitions are frozen once
built; the registry keys them by name.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Handler = Callable[[dict[str, Any]], Any]


class ParamType(str, Enum):
    """Declared type of a tool parameter."""

    STRING = "string"
    NUMBER = "number"
    TEXT = "text"


# ---------------------------------------------------------------------------
# Static tool description
# ---------------------------------------------------------------------------


class Parameter(BaseModel):
    """One named, typed argument of a tool.

    ``required`` defaults to "no default declared": passing ``default=...``
    makes the parameter optional unless ``required=True`` is given as well.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    doc: str = ""
    type: ParamType = ParamType.STRING
    required: bool = True
    default: Any = None

    @model_validator(mode="before")
    @classmethod
    def _derive_required(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "required" not in data:
            data["required"] = "default" not in data
        if not data.get("doc") and data.get("name"):
            data["doc"] = str(data["name"])
        return data

    @property
    def has_default(self) -> bool:
        """Whether a default value was declared (``None`` counts)."""
        return "default" in self.model_fields_set

    def to_property(self) -> dict[str, Any]:
        """Describe this parameter as an ``inputSchema`` property."""
        prop: dict[str, Any] = {
            "type": self.type.value,
            "doc": self.doc,
            "required": self.required,
        }
        if self.has_default:
            prop["default"] = self.default
        return prop


class ToolDefinition(BaseModel):
    """A named tool with its parameter contract and handler."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    doc: str = ""
    parameters: tuple[Parameter, ...] = ()
    handler: Handler

    @field_validator("parameters")
    @classmethod
    def _unique_parameter_names(cls, value: tuple[Parameter, ...]) -> tuple[Parameter, ...]:
        seen: set[str] = set()
        for param in value:
            if param.name in seen:
                msg = f"duplicate parameter name '{param.name}'"
                raise ValueError(msg)
            seen.add(param.name)
        return value

    @property
    def required_names(self) -> list[str]:
        """Names of required parameters, in declaration order."""
        return [p.name for p in self.parameters if p.required]

    def input_schema(self) -> dict[str, Any]:
        """JSON-Schema-like description of the accepted argument map."""
        return {
            "type": "object",
            "required": self.required_names,
            "properties": {p.name: p.to_property() for p in self.parameters},
        }

    def describe(self) -> dict[str, Any]:
        """Entry for a ``tools/list`` response."""
        return {
            "name": self.name,
            "description": self.doc or self.name,
            "inputSchema": self.input_schema(),
        }


# ---------------------------------------------------------------------------
# Invocation outcomes
# ---------------------------------------------------------------------------


class TypeErrorRecord(BaseModel):
    """A single argument whose value does not match its declared type."""

    parameter: str
    expected: ParamType
    got: str


class InvocationResult(BaseModel):
    """Outcome of running a tool: results on success, errors otherwise."""

    success: bool
    results: list[Any] | None = None
    errors: list[Any] | None = None

    @classmethod
    def ok(cls, results: list[Any]) -> InvocationResult:
        return cls(success=True, results=results)

    @classmethod
    def failed(cls, errors: list[Any]) -> InvocationResult:
        return cls(success=False, errors=errors)
