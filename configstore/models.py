from enum import Enum
from typing import Any, Dict
from pydantic import JsonValue

ConfigDocument = Dict[str, JsonValue]

class ValueKind(str, Enum):
    STRING  = "string"
    NUMBER  = "number"
    BOOLEAN = "boolean"
    OBJECT  = "object"
    ARRAY   = "array"
    NULL    = "null"

def kind_of(value: Any) -> ValueKind:
    """Classify a raw JSON value. Raises TypeError for anything json can't produce."""
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    raise TypeError(f"Not a JSON value: {type(value).__name__}")
