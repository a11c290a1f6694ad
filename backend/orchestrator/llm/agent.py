"""Gemini API agent wrapper for generating content."""
from asyncio import sleep
import httpx
import logging
import os
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from orchestrator.tools.models import ErrorKind, ToolError

load_dotenv()

logger = logging.getLogger(__name__)

# Gemini configuration
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-latest")
GEMINI_MAX_RETRIES = int(os.getenv("GEMINI_MAX_RETRIES", "2"))
GEMINI_RETRY_BACKOFF = float(os.getenv("GEMINI_RETRY_BACKOFF", "1.0"))
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "60"))

UPSTREAM_ERROR_MESSAGE = "Error calling Gemini API"


class GatewayError(Exception):
    """Failure talking to the language-model collaborator.

    ``message`` is safe to show to callers; upstream bodies never go in it.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        kind: ErrorKind = ErrorKind.UPSTREAM_FAILURE,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = kind
        self.headers = headers

    @property
    def error(self) -> ToolError:
        return ToolError(kind=self.kind, message=self.message)


def get_api_key() -> Optional[str]:
    """Read the Gemini key at call time so it is never taken from a request."""
    return os.getenv("GEMINI_API_KEY") or None


def build_payload(prompt: str) -> Dict[str, Any]:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}],
            }
        ]
    }


def extract_text(data: Any) -> str:
    """Join the text parts of the first candidate; raise if there are none."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates or not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        logger.error("[GEMINI] no candidates returned")
        raise GatewayError(UPSTREAM_ERROR_MESSAGE)
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    texts = [p.get("text") for p in parts or [] if isinstance(p, dict)]
    text = "".join(t for t in texts if isinstance(t, str))
    if not text:
        logger.error("[GEMINI] first candidate has no text parts")
        raise GatewayError(UPSTREAM_ERROR_MESSAGE)
    return text


async def call_gemini(
    prompt: str,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Call Gemini API to generate content"""
    api_key = api_key or get_api_key()
    if not api_key:
        raise GatewayError("Gemini API key not configured", status_code=500, kind=ErrorKind.NOT_CONFIGURED)

    url = f"{GEMINI_BASE_URL}/models/{GEMINI_MODEL}:generateContent"
    params = {"key": api_key}
    payload = build_payload(prompt)

    async with httpx.AsyncClient(timeout=GEMINI_TIMEOUT, transport=transport) as client:
        attempt = 0
        while True:
            try:
                logger.info(f"[GEMINI] request model={GEMINI_MODEL} prompt_len={len(prompt)} attempt={attempt}")
                response = await client.post(url, params=params, json=payload)

                if response.status_code == 429:
                    retry_after = response.headers.get("Retry-After", "60")
                    logger.warning(f"[GEMINI] rate limited. Retry-After: {retry_after}")
                    raise GatewayError("Rate limited by AI service", status_code=429, headers={"Retry-After": retry_after})

                # Retry on transient 5xx
                if 500 <= response.status_code < 600 and attempt < GEMINI_MAX_RETRIES:
                    backoff = GEMINI_RETRY_BACKOFF * (2 ** attempt)
                    logger.warning(f"[GEMINI] 5xx {response.status_code}, retrying in {backoff:.1f}s")
                    await sleep(backoff)
                    attempt += 1
                    continue

                response.raise_for_status()
                text = extract_text(response.json())
                logger.info(f"[GEMINI] response chars={len(text)}")
                return text
            except GatewayError:
                raise
            except httpx.HTTPStatusError as e:
                body_preview = (e.response.text or "")[:500]
                logger.error(f"[GEMINI] HTTP error {e.response.status_code} body={body_preview}")
                raise GatewayError(UPSTREAM_ERROR_MESSAGE)
            except httpx.RequestError as e:
                if attempt < GEMINI_MAX_RETRIES:
                    backoff = GEMINI_RETRY_BACKOFF * (2 ** attempt)
                    logger.warning(f"[GEMINI] request error {e.__class__.__name__}, retrying in {backoff:.1f}s")
                    await sleep(backoff)
                    attempt += 1
                    continue
                logger.error(f"[GEMINI] request error: {repr(e)}")
                raise GatewayError(UPSTREAM_ERROR_MESSAGE)
            except ValueError as e:
                # response.json() on a non-JSON body
                logger.error(f"[GEMINI] unreadable response: {e}")
                raise GatewayError(UPSTREAM_ERROR_MESSAGE)
