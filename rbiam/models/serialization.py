"""JSON-safe record encoding shared by persistence and the raw exporter."""

from __future__ import annotations

import math
from typing import Any

from rbiam.errors import SerializationFailure
from rbiam.models.entities import Entity

_SCALARS = (str, int, float, bool, type(None))


def _check_lossless(value: Any, path: str) -> None:
    # json.dumps silently turns tuples into lists and non-str keys into strings
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: non-string key {key!r} would not survive JSON")
            _check_lossless(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_lossless(item, f"{path}[{index}]")
    elif isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"{path}: {value} is not valid JSON")
    elif not isinstance(value, _SCALARS):
        raise TypeError(f"{path}: {type(value).__name__} value would not survive JSON")


def encode_record(entity: Entity) -> dict[str, Any]:
    """Return *entity* as a dict that JSON encodes and decodes without loss.

    Raises:
        SerializationFailure: if the record holds tuples, sets, non-string
            keys, non-finite floats or any non-JSON value.
    """
    record = entity.to_dict()
    try:
        _check_lossless(record, "$")
    except (TypeError, ValueError) as exc:
        raise SerializationFailure(str(entity.kind), entity.key, exc) from exc
    return record
