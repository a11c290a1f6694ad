"""Main FastAPI application entry point."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from dotenv import load_dotenv

from orchestrator.api.health import health_router
from orchestrator.api.tools import tools_router
from orchestrator.llm.router import router as llm_router
from orchestrator.tools.models import ErrorKind, ToolError

# Load environment variables
load_dotenv()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

app = FastAPI(title="Gemini Orchestrator API", version="1.0.0")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Mount routers
app.include_router(health_router)
app.include_router(llm_router)
app.include_router(tools_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report request-shape problems with the same payload as tool errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "Invalid request")
    message = f"Invalid request body: {location}: {detail}" if location else f"Invalid request body: {detail}"
    logger.warning(f"[REQUEST] {request.method} {request.url.path} rejected: {message}")
    error = ToolError(kind=ErrorKind.MALFORMED_ARGUMENT, message=message)
    return JSONResponse(status_code=400, content=error.to_payload())


def run():
    import uvicorn
    logger.info(f"Orchestrator starting on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
