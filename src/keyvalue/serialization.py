"""Canonical JSON text for objects stored with ``set_object``."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from pydantic import BaseModel

from keyvalue.exceptions import SerializationError


def _to_jsonable(obj: Any) -> Any:
    """``json.dumps`` hook for the structured types we know how to flatten."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(obj: Any) -> str:
    """Serialize *obj* to compact JSON.

    Field order follows declaration order for dataclasses and pydantic
    models and insertion order for dicts, so the same shape always yields
    the same text.

    Raises:
        SerializationError: *obj* (or something nested in it) is not a JSON
            primitive, list, tuple, string-keyed dict, dataclass or pydantic
            model, or contains NaN/Infinity.
    """
    try:
        return json.dumps(
            obj,
            default=_to_jsonable,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(type(obj).__name__, str(e)) from e
