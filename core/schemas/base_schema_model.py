"""Shared pydantic configuration for API bodies, socket payloads and snapshots."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base for every schema in the Track It API.

    Fields are snake_case in Python and camelCase on the wire, for HTTP
    bodies and socket payloads alike; both spellings are accepted on input.
    Models validate straight from ORM instances, and enum fields hold their
    string values so they compare equal to the model columns.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
