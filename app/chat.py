from __future__ import annotations

import logging
import random
from typing import Any, Callable, Optional, Tuple

from fastapi import Request
from pydantic import BaseModel, Field, ValidationError

from agent.core.local_replies import LOCAL_MODEL, MOCK_MODEL, MOCK_NOTE, local_reply, pick_filler
from agent.dispatcher import Dispatcher, require_api_key
from agent.errors import ConfigurationError
from config.settings import Settings


logger = logging.getLogger("sid.chat")

DispatcherFactory = Callable[[Settings], Dispatcher]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User's message")


class ChatData(BaseModel):
    response: str
    model: str
    note: Optional[str] = None


class ChatResponse(BaseModel):
    success: bool
    data: Optional[ChatData] = None
    message: Optional[str] = None

    def body(self) -> dict:
        return self.model_dump(exclude_none=True)


def _failure(status: int, message: str) -> Tuple[int, ChatResponse]:
    return status, ChatResponse(success=False, message=message)


async def _read_request(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    return await request.json()


async def handle_chat(
    request: Request,
    settings: Settings,
    dispatcher_factory: DispatcherFactory,
    rng: Optional[random.Random] = None,
) -> Tuple[int, ChatResponse]:
    """Validate, dispatch, and shape the reply for ``POST /api/chat``.

    A dispatch that exhausts every model still answers 200 with a filler
    reply marked as ``mock-service``.
    """
    try:
        try:
            require_api_key(settings)
        except ConfigurationError as exc:
            return _failure(500, str(exc))

        payload = await _read_request(request)
        try:
            chat_request = ChatRequest.model_validate(payload)
        except ValidationError:
            return _failure(400, "Message is required")

        logger.info("Processing message: %s chars", len(chat_request.message))
        dispatcher = dispatcher_factory(settings)
        result = await dispatcher.dispatch(chat_request.message)

        if result.success:
            return 200, ChatResponse(
                success=True,
                data=ChatData(response=result.text, model=result.model_id),
            )

        logger.warning(
            "Falling back to mock response after %s failed attempts", len(result.attempts)
        )
        return 200, ChatResponse(
            success=True,
            data=ChatData(response=pick_filler(rng), model=MOCK_MODEL, note=MOCK_NOTE),
        )
    except Exception as exc:
        logger.exception("Chat processing failed: %s", exc)
        return _failure(500, str(exc))


async def handle_local_chat(
    request: Request, rng: Optional[random.Random] = None
) -> Tuple[int, ChatResponse]:
    try:
        payload = await _read_request(request)
        try:
            chat_request = ChatRequest.model_validate(payload)
        except ValidationError:
            return _failure(400, "Message is required")

        return 200, ChatResponse(
            success=True,
            data=ChatData(response=local_reply(chat_request.message, rng), model=LOCAL_MODEL),
        )
    except Exception as exc:
        logger.exception("Local chat failed: %s", exc)
        return _failure(500, str(exc))
