from __future__ import annotations

import pytest

from agent.dispatcher import Dispatcher, DispatcherConfig, build_dispatcher, require_api_key
from agent.errors import ConfigurationError
from agent.tools.gemini import GeminiTransport


MODELS = ("model-a", "model-b", "model-c")


def _dispatcher(transport, models=MODELS) -> Dispatcher:
    return Dispatcher(DispatcherConfig(models=models, system_prompt="You are SID."), transport)


@pytest.mark.asyncio
async def test_first_success_short_circuits(fake_transport_cls):
    transport = fake_transport_cls({"model-b": "Hi from b", "model-c": "Hi from c"})
    result = await _dispatcher(transport).dispatch("hello")

    assert result.success is True
    assert result.model_id == "model-b"
    assert result.text == "Hi from b"
    assert transport.calls == ["model-a", "model-b"]
    assert [a.ok for a in result.attempts] == [False, True]
    assert result.attempts[0].reason == "model not found"


@pytest.mark.asyncio
async def test_first_candidate_success_makes_one_call(fake_transport_cls):
    transport = fake_transport_cls({"model-a": "Hello back"})
    result = await _dispatcher(transport).dispatch("hello")

    assert result.success is True
    assert result.model_id == "model-a"
    assert transport.calls == ["model-a"]


@pytest.mark.asyncio
async def test_unexpected_transport_error_moves_to_next_model(fake_transport_cls):
    transport = fake_transport_cls({"model-a": RuntimeError("boom"), "model-b": "Hi from b"})
    result = await _dispatcher(transport).dispatch("hello")

    assert result.success is True
    assert result.model_id == "model-b"
    assert transport.calls == ["model-a", "model-b"]
    assert result.attempts[0].reason == "boom"


@pytest.mark.asyncio
async def test_all_candidates_fail_after_exactly_n_attempts(fake_transport_cls):
    transport = fake_transport_cls()
    result = await _dispatcher(transport).dispatch("hello")

    assert result.success is False
    assert result.model_id is None
    assert result.text is None
    assert transport.calls == list(MODELS)
    assert len(result.attempts) == len(MODELS)


@pytest.mark.asyncio
async def test_trial_order_is_stable_across_calls(fake_transport_cls):
    transport = fake_transport_cls()
    dispatcher = _dispatcher(transport)
    for _ in range(3):
        await dispatcher.dispatch("hello")

    assert transport.calls == list(MODELS) * 3


@pytest.mark.asyncio
async def test_prompt_wraps_message_with_system_preamble(fake_transport_cls):
    transport = fake_transport_cls({"model-a": "ok"})
    await _dispatcher(transport).dispatch("What is {this}?")

    assert transport.prompts == ["You are SID.\n\nUser: What is {this}?\n\nAssistant:"]


def test_build_dispatcher_requires_api_key(make_settings):
    with pytest.raises(ConfigurationError, match="Gemini API key is missing"):
        build_dispatcher(make_settings())


def test_require_api_key_returns_configured_key(make_settings):
    assert require_api_key(make_settings(GEMINI_API_KEY="secret")) == "secret"
    with pytest.raises(ConfigurationError):
        require_api_key(make_settings(GEMINI_API_KEY=""))


def test_build_dispatcher_uses_settings(make_settings):
    settings = make_settings(
        GEMINI_API_KEY="secret",
        GEMINI_MODELS="model-x,model-y",
        MODEL_TEMPERATURE="0.2",
        MODEL_TIMEOUT_SECONDS="3",
    )
    dispatcher = build_dispatcher(settings)

    assert dispatcher.config.models == ("model-x", "model-y")
    assert dispatcher.config.temperature == 0.2
    assert isinstance(dispatcher.transport, GeminiTransport)
    assert dispatcher.transport.api_key == "secret"
    assert dispatcher.transport.timeout == 3.0
