"""Data types shared by the tool catalog, the tool implementations and the dispatcher."""
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, model_validator


class ErrorKind(str, Enum):
    """Discriminator for every error the gateway reports."""
    MALFORMED_ARGUMENT = "malformed_argument"
    SEMANTIC_REJECTION = "semantic_rejection"
    UNKNOWN_OPERATOR = "unknown_operator"
    UPSTREAM_FAILURE = "upstream_failure"
    NOT_CONFIGURED = "not_configured"


class ToolError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    def to_payload(self) -> Dict[str, Any]:
        """Serialize as the wire-level error payload."""
        return {"error": self.message, "kind": self.kind.value}


class ToolFailure(Exception):
    """Raised inside a tool to abort it with a structured error."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.error = ToolError(kind=kind, message=message)


class ToolResult(BaseModel):
    """Outcome of one tool invocation: exactly one of ``data`` or ``error`` is set."""
    model_config = ConfigDict(frozen=True)

    data: Optional[Dict[str, Any]] = None
    error: Optional[ToolError] = None

    @model_validator(mode="after")
    def check_exactly_one(self):
        if (self.data is None) == (self.error is None):
            raise ValueError("ToolResult needs exactly one of data or error")
        return self

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "ToolResult":
        return cls(data=data)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ToolResult":
        return cls(error=ToolError(kind=kind, message=message))

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_payload(self) -> Dict[str, Any]:
        if self.error is not None:
            return self.error.to_payload()
        return dict(self.data)


class ParameterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str  # "string" or "number"
    description: str
    required: bool = False


class ToolDescriptor(BaseModel):
    """Declarative description of one tool, used to advertise it to a model or UI."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...] = ()

    @property
    def required(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    def parameters_schema(self) -> Dict[str, Any]:
        """Render the parameter shape as a JSON-schema object."""
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description}
                for p in self.parameters
            },
        }
        if self.required:
            schema["required"] = self.required
        return schema

    def to_schema(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema(),
        }
