"""Locally implemented tool functions.

Every tool takes the caller's argument mapping and returns a ``ToolResult``.
Tool bodies raise ``ToolFailure`` to reject input; ``tool_function`` turns
that into an error result so nothing escapes to the caller as an exception.
"""
import functools
import logging
import math
import operator
from datetime import datetime, timezone
from typing import Dict, Any, Callable, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import ErrorKind, ToolFailure, ToolResult
from .utils import require_string, optional_string, require_number

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

BINARY_OPERATIONS: Dict[str, Callable[[float, float], float]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
    "power": math.pow,
}
OPERATIONS = ("add", "subtract", "multiply", "divide", "sqrt", "power")

EMAIL_VALID_MESSAGE = "Email format is valid"
EMAIL_INVALID_MESSAGE = "Email format is invalid"

SENTENCE_TERMINATORS = ".!?"


def tool_function(func: Callable[..., Dict[str, Any]]) -> Callable[..., ToolResult]:
    """Wrap a tool body so its dict return or ``ToolFailure`` becomes a ``ToolResult``."""
    @functools.wraps(func)
    def wrapper(args: Mapping[str, Any], **kwargs) -> ToolResult:
        try:
            return ToolResult.success(func(args, **kwargs))
        except ToolFailure as e:
            logger.debug(f"[TOOL] {func.__name__} rejected input: {e.error.message}")
            return ToolResult(error=e.error)
    return wrapper


@tool_function
def calculate(args: Mapping[str, Any]) -> Dict[str, Any]:
    operation = require_string(args, "operation")
    a = require_number(args, "a")

    if operation not in OPERATIONS:
        raise ToolFailure(ErrorKind.UNKNOWN_OPERATOR, f"Unknown operation: {operation}")

    if operation == "sqrt":
        if a < 0:
            raise ToolFailure(ErrorKind.SEMANTIC_REJECTION, "Cannot calculate square root of negative number")
        result = math.sqrt(a)
    else:
        # b is mandatory for binary operations; it is never defaulted to zero
        b = require_number(args, "b", context=f"operation '{operation}'")
        if operation == "divide" and b == 0:
            raise ToolFailure(ErrorKind.SEMANTIC_REJECTION, "Cannot divide by zero")
        try:
            result = BINARY_OPERATIONS[operation](a, b)
        except OverflowError:
            raise ToolFailure(ErrorKind.SEMANTIC_REJECTION, f"Result of {operation} is out of range")
        except ValueError:
            raise ToolFailure(ErrorKind.SEMANTIC_REJECTION, f"Result of {operation} is not a real number")

    if not math.isfinite(result):
        raise ToolFailure(ErrorKind.SEMANTIC_REJECTION, f"Result of {operation} is out of range")

    return {
        "operation": operation,
        "a": a,
        "result": result,
    }


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@tool_function
def get_current_time(args: Mapping[str, Any], clock: Optional[Clock] = None) -> Dict[str, Any]:
    """Current wall-clock time in the requested IANA timezone.

    ``clock`` must return a timezone-aware datetime; it defaults to the system
    clock in UTC.
    """
    tz_name = optional_string(args, "timezone", "UTC")
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ToolFailure(ErrorKind.SEMANTIC_REJECTION, f"Invalid timezone: {tz_name}")

    now = (clock or _utc_now)().astimezone(zone)
    return {
        "timezone": tz_name,
        "time": now.strftime("%Y-%m-%d %H:%M:%S %Z"),
        "iso8601": now.isoformat(timespec="seconds"),
    }


@tool_function
def validate_email(args: Mapping[str, Any]) -> Dict[str, Any]:
    # Coarse format heuristic, not RFC 5322 validation
    email = require_string(args, "email")
    is_valid = "@" in email and "." in email and len(email) > 5
    return {
        "email": email,
        "valid": is_valid,
        "message": EMAIL_VALID_MESSAGE if is_valid else EMAIL_INVALID_MESSAGE,
    }


@tool_function
def text_length_analysis(args: Mapping[str, Any]) -> Dict[str, Any]:
    text = require_string(args, "text")
    # Words are split on anything str.isspace() accepts, which includes the
    # ASCII separators \x1c-\x1f as well as Unicode spaces and line breaks.
    words = text.split()
    length = len(text)
    return {
        "text_length": length,
        "word_count": len(words),
        "character_count": length,
        "sentence_count": sum(text.count(ch) for ch in SENTENCE_TERMINATORS),
        # empty or all-whitespace text has no words; report 0.0 rather than NaN
        "average_word_len": length / len(words) if words else 0.0,
    }
