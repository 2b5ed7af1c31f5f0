"""
coerce.py — Typed access to values of a parsed JSON document.

The to_* helpers coerce a single value and raise CoercionError.
The require_* helpers look a key up on a JSON object and raise StructuralError.
"""

import math

from forecast.errors import StructuralError

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class CoercionError(ValueError):
    """A JSON value does not have the requested scalar type."""


def _type_name(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_number(value) -> bool:
    # bool is a subclass of int; JSON true/false are not numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_int32(number: int) -> int:
    if not INT32_MIN <= number <= INT32_MAX:
        raise CoercionError(f"{number} is outside the 32-bit integer range")
    return number


def to_str(value) -> str:
    if not isinstance(value, str):
        raise CoercionError(f"expected string, got {_type_name(value)}")
    return value


def to_float(value) -> float:
    if not _is_number(value):
        raise CoercionError(f"expected number, got {_type_name(value)}")
    try:
        return float(value)
    except OverflowError as exc:
        raise CoercionError("integer is too large for a 64-bit float") from exc


def to_int(value) -> int:
    """Accept JSON integers only; 3.0 is rejected like any other float."""
    if not _is_number(value) or isinstance(value, float):
        raise CoercionError(f"expected integer, got {_type_name(value)}")
    return _check_int32(value)


def to_truncated_int(value) -> int:
    """Accept any finite JSON number and truncate it toward zero."""
    number = to_float(value)
    if not math.isfinite(number):
        raise CoercionError(f"cannot convert {number} to integer")
    return _check_int32(int(number))


def _path(where: str, key: str) -> str:
    return f"{where}.{key}" if where else key


def _lookup(obj: dict, key: str, where: str):
    if key not in obj:
        raise StructuralError(_path(where, key), "missing")
    return obj[key]


def _require(obj: dict, key: str, where: str, convert):
    value = _lookup(obj, key, where)
    try:
        return convert(value)
    except CoercionError as exc:
        raise StructuralError(_path(where, key), str(exc)) from exc


def require_str(obj: dict, key: str, where: str = "") -> str:
    return _require(obj, key, where, to_str)


def require_float(obj: dict, key: str, where: str = "") -> float:
    return _require(obj, key, where, to_float)


def optional_float(obj: dict, key: str, default: float, where: str = "") -> float:
    """Return default only when the key is absent; a present but mistyped value still fails."""
    if key not in obj:
        return default
    return _require(obj, key, where, to_float)


def require_object(obj: dict, key: str, where: str = "") -> dict:
    value = _lookup(obj, key, where)
    if not isinstance(value, dict):
        raise StructuralError(_path(where, key), f"expected object, got {_type_name(value)}")
    return value


def require_array(obj: dict, key: str, where: str = "") -> list:
    value = _lookup(obj, key, where)
    if not isinstance(value, list):
        raise StructuralError(_path(where, key), f"expected array, got {_type_name(value)}")
    return value
