"""
Shared pydantic base for entities stored as camelCase JSON.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_storage(self) -> Dict[str, Any]:
        """Dump as the JSON-ready dict persisted by storage adapters."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
