from enum import Enum
from typing import Any


PRIMITIVE_TYPES = (str, int, float, bool, type(None))

# Wire names that plain camelCasing would get wrong
FIELD_NAME_OVERRIDES = {
    "handles_pii": "handlesPII",
}


def wire_name(field_name: str) -> str:
    if field_name in FIELD_NAME_OVERRIDES:
        return FIELD_NAME_OVERRIDES[field_name]
    head, *rest = field_name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_ir(obj: Any):
    """
    Serialize IR objects into JSON-compatible structures.
    Deterministic.
    Tolerant to primitives.
    Field names come out in the camelCase used by config files.
    """

    # Enums carry their wire value (check first: str-enums are also str)
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, (list, tuple)):
        return [serialize_ir(item) for item in obj]

    if isinstance(obj, dict):
        return {k: serialize_ir(v) for k, v in obj.items()}

    # IR dataclasses: unset optionals are omitted, not emitted as null
    if hasattr(obj, "__dict__"):
        return {
            wire_name(key): serialize_ir(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_") and value is not None
        }

    raise TypeError(f"Cannot serialize object of type {type(obj).__name__}")
