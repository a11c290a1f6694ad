"""Argument conversion and validation helpers for tool implementations.

Each helper reads one named value out of the caller's argument bag and either
returns it as the declared primitive type or raises ``ToolFailure`` with a
``malformed_argument`` error. A value of ``None`` counts as missing.
"""
import math
from typing import Any, Mapping, Optional

from .models import ErrorKind, ToolFailure


def _malformed(message: str) -> ToolFailure:
    return ToolFailure(ErrorKind.MALFORMED_ARGUMENT, message)


def is_number(value: Any) -> bool:
    """True for ints and floats; bools are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_string(args: Mapping[str, Any], name: str) -> str:
    value = args.get(name)
    if value is None:
        raise _malformed(f"{name} parameter is required")
    if not isinstance(value, str):
        raise _malformed(f"{name} parameter must be a string")
    return value


def optional_string(args: Mapping[str, Any], name: str, default: str) -> str:
    if args.get(name) is None:
        return default
    return require_string(args, name)


def require_number(args: Mapping[str, Any], name: str, context: Optional[str] = None) -> float:
    """Return ``args[name]`` as a float.

    ``context`` is appended to the "required" message, e.g. to say which
    operation needed the operand.
    """
    value = args.get(name)
    if value is None:
        suffix = f" for {context}" if context else ""
        raise _malformed(f"parameter '{name}' is required{suffix}")
    if not is_number(value):
        raise _malformed(f"parameter '{name}' must be a number")
    try:
        number = float(value)
    except OverflowError:
        raise _malformed(f"parameter '{name}' is out of range")
    # JSON parsers turn literals like 1e400 into inf; such operands cannot be echoed back
    if not math.isfinite(number):
        raise _malformed(f"parameter '{name}' must be a finite number")
    return number
