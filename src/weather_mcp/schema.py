"""Declarative parameter schemas and the validator that interprets them.

A :class:`Schema` describes the object a tool accepts as its ``params``: a set of
named fields, each tagged with a kind (string, number, integer, boolean, object or
array). Schemas are immutable values. :func:`validate` checks a decoded JSON value
against a schema and returns either :class:`ValidatedParams` or a
:class:`SchemaValidationError` listing every violation; it never raises for bad
input.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ViolationKind = Literal["missing", "type", "unknown", "constraint"]


class _FieldBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    description: str = ""
    required: bool = True
    default: Any = None

    def _annotate(self, rendered: dict[str, Any]) -> dict[str, Any]:
        if self.description:
            rendered["description"] = self.description
        if self.default is not None:
            rendered["default"] = self.default
        return rendered


class StringField(_FieldBase):
    """Text value, optionally restricted to a fixed set of choices."""

    kind: Literal["string"] = "string"
    enum: tuple[str, ...] | None = None

    def to_json_schema(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"type": "string"}
        if self.enum is not None:
            rendered["enum"] = list(self.enum)
        return self._annotate(rendered)


class NumberField(_FieldBase):
    """Integer or floating point value with optional bounds."""

    kind: Literal["number"] = "number"
    minimum: float | None = None
    maximum: float | None = None

    def to_json_schema(self) -> dict[str, Any]:
        return self._annotate(_bounds({"type": "number"}, self.minimum, self.maximum))


class IntegerField(_FieldBase):
    """Whole number value with optional bounds."""

    kind: Literal["integer"] = "integer"
    minimum: int | None = None
    maximum: int | None = None

    def to_json_schema(self) -> dict[str, Any]:
        return self._annotate(_bounds({"type": "integer"}, self.minimum, self.maximum))


class BooleanField(_FieldBase):
    """``true`` or ``false``."""

    kind: Literal["boolean"] = "boolean"

    def to_json_schema(self) -> dict[str, Any]:
        return self._annotate({"type": "boolean"})


class ArrayField(_FieldBase):
    """Homogeneous list whose items share one field kind."""

    kind: Literal["array"] = "array"
    items: FieldSpec

    def to_json_schema(self) -> dict[str, Any]:
        return self._annotate({"type": "array", "items": self.items.to_json_schema()})


class ObjectField(_FieldBase):
    """Nested object described by its own schema."""

    kind: Literal["object"] = "object"
    properties: Schema

    def to_json_schema(self) -> dict[str, Any]:
        return self._annotate(self.properties.to_json_schema())


FieldSpec = Annotated[
    Union[StringField, NumberField, IntegerField, BooleanField, ArrayField, ObjectField],
    Field(discriminator="kind"),
]


class Schema(BaseModel):
    """Object-shaped parameter schema: field name to field specification."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fields: dict[str, FieldSpec] = Field(default_factory=dict)
    additional_properties: bool = False

    def required_fields(self) -> list[str]:
        """Names of the fields that must be present."""
        return [name for name, spec in self.fields.items() if spec.required]

    def to_json_schema(self) -> dict[str, Any]:
        """Render the schema as a JSON Schema object for tool discovery."""
        rendered: dict[str, Any] = {
            "type": "object",
            "properties": {
                name: spec.to_json_schema() for name, spec in self.fields.items()
            },
        }
        required = self.required_fields()
        if required:
            rendered["required"] = required
        rendered["additionalProperties"] = self.additional_properties
        return rendered


ArrayField.model_rebuild()
ObjectField.model_rebuild()
Schema.model_rebuild()


class Violation(BaseModel):
    """A single way in which an input failed to match its schema."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: ViolationKind
    message: str


@dataclass(frozen=True)
class ValidatedParams:
    """Parameters that satisfied a schema, with defaults applied."""

    values: dict[str, Any]


@dataclass(frozen=True)
class SchemaValidationError:
    """Every violation found while validating one input."""

    violations: list[Violation] = field(default_factory=list)

    def summary(self) -> str:
        """Human-readable enumeration of all violations."""
        return "; ".join(f"{item.path}: {item.message}" for item in self.violations)

    def to_data(self) -> list[dict[str, str]]:
        """JSON-friendly list of violations."""
        return [item.model_dump() for item in self.violations]


def validate(schema: Schema, raw: Any) -> ValidatedParams | SchemaValidationError:
    """Check ``raw`` against ``schema``.

    Args:
        schema: Declared parameter schema.
        raw: Decoded JSON value supplied by the client.

    Returns:
        ValidatedParams when every field matches, otherwise a
        SchemaValidationError enumerating all violations.

    """
    violations: list[Violation] = []
    values = _check_object(schema, raw, "params", violations)
    if violations:
        return SchemaValidationError(violations=violations)
    return ValidatedParams(values=values)


def _bounds(
    rendered: dict[str, Any], minimum: float | None, maximum: float | None
) -> dict[str, Any]:
    if minimum is not None:
        rendered["minimum"] = minimum
    if maximum is not None:
        rendered["maximum"] = maximum
    return rendered


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _check_object(
    schema: Schema, value: Any, path: str, violations: list[Violation]
) -> dict[str, Any]:
    if not isinstance(value, dict):
        violations.append(
            Violation(
                path=path,
                kind="type",
                message=f"expected object, got {_type_name(value)}",
            )
        )
        return {}

    result: dict[str, Any] = {}
    for name, spec in schema.fields.items():
        child_path = f"{path}.{name}"
        if name not in value:
            if spec.required:
                violations.append(
                    Violation(path=child_path, kind="missing", message="field required")
                )
            elif spec.default is not None:
                result[name] = copy.deepcopy(spec.default)
            continue
        result[name] = _check_field(spec, value[name], child_path, violations)

    for name in value:
        if name in schema.fields:
            continue
        if schema.additional_properties:
            result[name] = value[name]
        else:
            violations.append(
                Violation(
                    path=f"{path}.{name}", kind="unknown", message="unexpected field"
                )
            )
    return result


def _check_field(
    spec: FieldSpec, value: Any, path: str, violations: list[Violation]
) -> Any:
    def mismatch(expected: str) -> None:
        violations.append(
            Violation(
                path=path,
                kind="type",
                message=f"expected {expected}, got {_type_name(value)}",
            )
        )

    if isinstance(spec, StringField):
        if not isinstance(value, str):
            mismatch("string")
        elif spec.enum is not None and value not in spec.enum:
            violations.append(
                Violation(
                    path=path,
                    kind="constraint",
                    message=f"must be one of {', '.join(spec.enum)}",
                )
            )
        return value

    if isinstance(spec, BooleanField):
        if not isinstance(value, bool):
            mismatch("boolean")
        return value

    if isinstance(spec, IntegerField):
        if isinstance(value, bool) or not isinstance(value, int):
            mismatch("integer")
        else:
            _check_bounds(value, spec.minimum, spec.maximum, path, violations)
        return value

    if isinstance(spec, NumberField):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            mismatch("number")
        elif isinstance(value, float) and not math.isfinite(value):
            violations.append(
                Violation(path=path, kind="constraint", message="must be finite")
            )
        else:
            _check_bounds(value, spec.minimum, spec.maximum, path, violations)
        return value

    if isinstance(spec, ArrayField):
        if not isinstance(value, list):
            mismatch("array")
            return value
        return [
            _check_field(spec.items, item, f"{path}[{index}]", violations)
            for index, item in enumerate(value)
        ]

    return _check_object(spec.properties, value, path, violations)


def _check_bounds(
    value: float,
    minimum: float | None,
    maximum: float | None,
    path: str,
    violations: list[Violation],
) -> None:
    if minimum is not None and value < minimum:
        violations.append(
            Violation(path=path, kind="constraint", message=f"must be >= {minimum}")
        )
    if maximum is not None and value > maximum:
        violations.append(
            Violation(path=path, kind="constraint", message=f"must be <= {maximum}")
        )
