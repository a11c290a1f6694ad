"""Router for the chat/ask endpoints that forward messages to Gemini."""
import logging
from typing import Optional
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from orchestrator.llm.agent import call_gemini, GatewayError
from orchestrator.tools.models import ErrorKind, ToolError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["llm"])


class ChatRequest(BaseModel):
    message: str = ""


class ChatResponse(BaseModel):
    response: str


def error_response(status_code: int, error: ToolError, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.to_payload(), headers=headers)


async def forward_message(request: Optional[ChatRequest], endpoint: str):
    """Send the message to Gemini and wrap the reply; never consults the tool dispatcher."""
    message = request.message if request is not None else ""
    if not message:
        return error_response(400, ToolError(kind=ErrorKind.MALFORMED_ARGUMENT, message="No message provided"))

    try:
        text = await call_gemini(message)
    except GatewayError as e:
        logger.error(f"[CHAT] {endpoint} failed: {e.message} (status={e.status_code})")
        return error_response(e.status_code, e.error, headers=e.headers)
    except Exception as e:
        logger.error(f"[CHAT] {endpoint} unexpected error: {e}", exc_info=True)
        return error_response(500, ToolError(kind=ErrorKind.UPSTREAM_FAILURE, message="Error calling Gemini API"))

    return ChatResponse(response=text)


@router.post("/ask", response_model=ChatResponse)
async def handle_ask(request: Optional[ChatRequest] = None):
    """Forward a single message to Gemini and return its text."""
    return await forward_message(request, "ask")


@router.post("/chat", response_model=ChatResponse)
async def handle_chat(request: Optional[ChatRequest] = None):
    """Same plain-text bridge as /api/ask; tool calls are not wired in."""
    return await forward_message(request, "chat")
