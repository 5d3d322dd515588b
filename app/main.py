from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agent.dispatcher import build_dispatcher
from app.chat import DispatcherFactory, handle_chat, handle_local_chat
from config.settings import PORT, Settings, get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("sid")

SERVICE_NAME = "SID AI Backend (Gemini)"

_rng = random.Random()


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    logger.info(
        "SID AI Backend starting on port %s: key_set=%s models=%s",
        PORT,
        bool(settings.gemini_api_key),
        ",".join(settings.gemini_models),
    )
    yield


app = FastAPI(title="SID AI Assistant", version="1.0.0", lifespan=lifespan)

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


def get_dispatcher_factory() -> DispatcherFactory:
    return build_dispatcher


def get_rng() -> random.Random:
    return _rng


@app.post("/api/chat")
async def chat(
    request: Request,
    settings: Settings = Depends(get_settings),
    dispatcher_factory: DispatcherFactory = Depends(get_dispatcher_factory),
    rng: random.Random = Depends(get_rng),
) -> JSONResponse:
    status, response = await handle_chat(request, settings, dispatcher_factory, rng)
    return JSONResponse(status_code=status, content=response.body())


@app.post("/api/chat/local")
async def chat_local(request: Request, rng: random.Random = Depends(get_rng)) -> JSONResponse:
    status, response = await handle_local_chat(request, rng)
    return JSONResponse(status_code=status, content=response.body())


@app.get("/health")
def health() -> Dict[str, Any]:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return {
        "status": "OK",
        "service": SERVICE_NAME,
        "timestamp": timestamp.replace("+00:00", "Z"),
    }


@app.get("/")
def root() -> Dict[str, Any]:
    return {
        "message": "SID AI Assistant API is running!",
        "description": "Testing Gemini models",
        "endpoints": {
            "chat": "POST /api/chat",
            "local_chat": "POST /api/chat/local",
            "health": "GET /health",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=PORT)
