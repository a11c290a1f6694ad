# api/tools.py

from typing import Any
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from orchestrator.llm.tools import dispatch_tool, get_available_tools, get_tool

tools_router = APIRouter(prefix="/api/tools", tags=["tools"])


@tools_router.get("")
def list_tools():
    return {"tools": [tool.to_schema() for tool in get_available_tools()]}


# Plain def: FastAPI runs it in the threadpool, and timezone lookups may touch disk.
# The body is taken as-is; dispatch_tool rejects anything that is not an object.
@tools_router.post("/{name}")
def invoke_tool(name: str, arguments: Any = Body(default=None)):
    result = dispatch_tool(name, arguments)
    if result.ok:
        return result.to_payload()
    status_code = 404 if get_tool(name) is None else 400
    return JSONResponse(status_code=status_code, content=result.to_payload())
