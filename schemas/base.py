"""Shared pydantic configuration for wire payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Payload(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict:
        """Dump as a JSON-ready dict using the camelCase contract."""
        return self.model_dump(mode="json", by_alias=True)
