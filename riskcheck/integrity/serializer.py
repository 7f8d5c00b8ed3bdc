import json
import math
from collections.abc import Mapping
from typing import Any

from riskcheck.integrity.exceptions import FingerprintComputationError

NULL_LITERAL = "null"


def stable_serialize(value: Any) -> str:
    """Serialize JSON-compatible data with object keys in sorted order.

    Arrays keep their existing order: ordering sets is the normalizer's job,
    not ours.
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _serialize_float(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, Mapping):
        return _serialize_mapping(value)
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(stable_serialize(item) for item in value) + "]"
    raise FingerprintComputationError(
        f"Cannot serialize value of type {type(value).__name__}"
    )


def _serialize_mapping(value: Mapping[Any, Any]) -> str:
    for key in value:
        if not isinstance(key, str):
            raise FingerprintComputationError(
                f"Object keys must be strings, got {type(key).__name__}"
            )
    entries = [
        f"{json.dumps(key, ensure_ascii=False)}:{stable_serialize(value[key])}"
        for key in sorted(value)
    ]
    return "{" + ",".join(entries) + "}"


def _serialize_float(value: float) -> str:
    if not math.isfinite(value):
        return NULL_LITERAL
    if value.is_integer():
        return str(int(value))
    return repr(value)
