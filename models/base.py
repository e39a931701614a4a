"""
Base schemas for all models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class CamelSchema(BaseSchema):
    """
    Schema exchanged with the storefront as camelCase JSON.

    Accepts both camelCase and snake_case on input. Numbers sent for
    string fields (a numeric zip, say) are kept as their text.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True
    )

    def to_response(self) -> dict[str, Any]:
        """Dump as camelCase JSON, dropping top-level fields that are None."""
        data = self.model_dump(mode="json", by_alias=True)
        return {key: value for key, value in data.items() if value is not None}
