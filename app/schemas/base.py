from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire. Accepts either on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class PartialUpdate(CamelModel):
    """Update body: every field optional, at least one must be given."""

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


def to_changes(payload: BaseModel) -> Dict[str, Any]:
    """
    Fields the caller actually sent, keyed by attribute name.

    Nested values keep their wire (camelCase) keys since they are stored as
    JSON documents.
    """
    dumped = payload.model_dump(exclude_unset=True, by_alias=True, mode="json")
    changes = {}
    for name, field in type(payload).model_fields.items():
        key = field.alias or name
        if key in dumped:
            changes[name] = dumped[key]
    return changes
