"""Helpers for partial-field updates of camelCase models."""

from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel


def normalize_fields(model: Type[BaseModel], fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Map camelCase aliases in ``fields`` to the model's attribute names."""
    by_alias = {
        info.alias: name for name, info in model.model_fields.items() if info.alias
    }
    return {by_alias.get(key, key): value for key, value in fields.items()}
