"""Tool schemas and dispatch logic for LLM agent."""
import logging
from typing import Dict, Any, Callable, Mapping, Optional, Tuple

from orchestrator.tools.functions import (
    calculate,
    get_current_time,
    validate_email,
    text_length_analysis,
)
from orchestrator.tools.models import (
    ErrorKind,
    ParameterSpec,
    ToolDescriptor,
    ToolResult,
)

logger = logging.getLogger(__name__)

# The dispatcher is only invoked directly (HTTP or in-process). Chat requests
# go to Gemini as plain text and never reach it.

TOOL_CATALOG: Tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="calculate",
        description="Performs mathematical operations. Supports: add, subtract, multiply, divide, sqrt, power",
        parameters=(
            ParameterSpec(
                name="operation",
                type="string",
                description="The mathematical operation: add, subtract, multiply, divide, sqrt, power",
                required=True,
            ),
            ParameterSpec(name="a", type="number", description="First operand", required=True),
            ParameterSpec(
                name="b",
                type="number",
                description="Second operand (required for: add, subtract, multiply, divide, power)",
            ),
        ),
    ),
    ToolDescriptor(
        name="get_current_time",
        description="Gets the current date and time in a specified timezone. Returns formatted time.",
        parameters=(
            ParameterSpec(
                name="timezone",
                type="string",
                description="Timezone (e.g., 'UTC', 'America/New_York', 'Europe/London'). Defaults to UTC.",
            ),
        ),
    ),
    ToolDescriptor(
        name="validate_email",
        description="Validates if an email address has a proper format.",
        parameters=(
            ParameterSpec(name="email", type="string", description="The email address to validate", required=True),
        ),
    ),
    ToolDescriptor(
        name="text_length_analysis",
        description="Analyzes text length, word count, and character statistics.",
        parameters=(
            ParameterSpec(name="text", type="string", description="The text to analyze", required=True),
        ),
    ),
)

TOOL_HANDLERS: Dict[str, Callable[[Mapping[str, Any]], ToolResult]] = {
    "calculate": calculate,
    "get_current_time": get_current_time,
    "validate_email": validate_email,
    "text_length_analysis": text_length_analysis,
}


def get_available_tools() -> Tuple[ToolDescriptor, ...]:
    """Return list of available tools for the LLM agent."""
    return TOOL_CATALOG


def get_tool(tool_name: str) -> Optional[ToolDescriptor]:
    for tool in TOOL_CATALOG:
        if tool.name == tool_name:
            return tool
    return None


def dispatch_tool(tool_name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
    """Dispatch a tool call to the appropriate handler.

    Names must match a catalog entry exactly. The handler validates its own
    arguments; its result is returned unchanged.
    """
    handler = TOOL_HANDLERS.get(tool_name)
    if handler is None or get_tool(tool_name) is None:
        logger.warning(f"[TOOL DISPATCH] Unknown function requested: {tool_name!r}")
        return ToolResult.failure(ErrorKind.UNKNOWN_OPERATOR, f"Unknown function: {tool_name}")

    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        logger.warning(f"[TOOL DISPATCH] {tool_name} called with non-object arguments: {type(arguments).__name__}")
        return ToolResult.failure(ErrorKind.MALFORMED_ARGUMENT, "arguments must be an object")

    result = handler(arguments)
    if result.ok:
        logger.info(f"[TOOL DISPATCH] {tool_name} succeeded")
    else:
        logger.warning(f"[TOOL DISPATCH] {tool_name} failed ({result.error.kind.value}): {result.error.message}")
    return result
