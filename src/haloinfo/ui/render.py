"""JSON rendering of domain records for the command line."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from enum import Enum


def to_jsonable(value: object) -> object:
    """Convert dataclasses, enums, sets and mappings into JSON-compatible values."""

    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((to_jsonable(item) for item in value), key=str)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def render_json(value: object) -> str:
    return json.dumps(to_jsonable(value), indent=2, ensure_ascii=False)
