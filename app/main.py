from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from config.settings import get_settings
from relay.errors import RelayError
from relay.handler import relay_chat
from relay.llm import build_llm
from relay.schemas import RelayRequest


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("twinchat")

app = FastAPI(title="AI Twin Chat Relay", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("Rejected malformed relay request: %s", errors)
    if errors and "message" in [str(part) for part in errors[0].get("loc", ())]:
        return JSONResponse(status_code=400, content={"error": "Message is required"})
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.post("/chat-relay")
def chat_relay(req: RelayRequest) -> Dict[str, Any]:
    settings = get_settings()
    logger.info(
        "Config: model=%s key_set=%s",
        settings.groq_model,
        bool(settings.groq_api_key),
    )
    result = relay_chat(req, settings, llm_factory=build_llm)
    return result.model_dump()


@app.get("/health")
def health():
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level="info")
