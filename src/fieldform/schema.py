"""Form schema data model shared by validation and notification evaluation."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .enums import FieldType

FieldValue = Union[str, int, float, bool, None]
SubmittedData = Mapping[str, FieldValue]


class FieldDefinition(BaseModel):
    """One field of a form schema.

    ``type`` is kept as the raw string so schemas carrying a type this
    package does not know still load; such fields are never validated.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    label: Optional[str] = None
    type: Optional[str] = None
    required: bool = False
    placeholder: Optional[str] = None
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    min_length: Optional[int] = Field(default=None, alias="minLength")
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    options: Optional[list[Any]] = None
    notify_if: Optional[str] = Field(default=None, alias="notifyIf")

    @field_validator("required", mode="before")
    @classmethod
    def default_required(cls, v):
        return False if v is None else v

    @field_validator("notify_if", mode="before")
    @classmethod
    def ignore_non_text_condition(cls, v):
        if v is not None and not isinstance(v, str):
            return None
        return v

    @property
    def display_label(self) -> str:
        return self.label or self.name

    @property
    def field_type(self) -> FieldType | None:
        try:
            return FieldType(self.type)
        except ValueError:
            return None


class FieldSchema(BaseModel):
    """Declarative form definition: a title and an ordered list of fields."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: Optional[str] = None
    fields: list[FieldDefinition]

    @classmethod
    def coerce(cls, schema: Any) -> FieldSchema | None:
        """Build a schema from a model or mapping.

        Returns None when the schema is absent, has no ``fields`` entry or
        does not have the expected shape.
        """
        if isinstance(schema, cls):
            return schema
        if not isinstance(schema, Mapping) or schema.get("fields") is None:
            return None
        try:
            return cls.model_validate(dict(schema))
        except ValidationError:
            return None

    def duplicate_names(self) -> list[str]:
        counts = Counter(field.name for field in self.fields)
        return [name for name, count in counts.items() if count > 1]

    def to_json_fields(self) -> list[dict[str, Any]]:
        return [
            field.model_dump(by_alias=True, exclude_none=True) for field in self.fields
        ]


class NotificationEvent(BaseModel):
    """A threshold condition that fired for one submitted value."""

    field: str
    message: str
    value: Union[int, float]
    threshold: Union[int, float]
    condition: str


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    field: str | None
    message: str
