"""
Tests for the text generators and the request rate limiter.
"""
import os
from types import SimpleNamespace

import httpx
import openai
import pytest

from agentic_board.core.exceptions import GenerationError
from agentic_board.tools.generator import OpenAIGenerator, RequestRateLimiter, ScriptedGenerator


async def collect(generator, system="system", user="user"):
    return [fragment async for fragment in generator.stream(system, user)]


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.test/v1/chat/completions"))


def chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class FakeStream:
    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.chunks:
            return self.chunks.pop(0)
        if self.error is not None:
            error, self.error = self.error, None
            raise error
        raise StopAsyncIteration


class FakeCompletions:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    async def create(self, **params):
        self.requests.append(params)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def fake_client(*outcomes):
    completions = FakeCompletions(outcomes)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def no_wait_limiter(max_retries=3):
    return RequestRateLimiter(requests_per_minute=1000, max_retries=max_retries, base_delay=0.0)


# =============================================================================
# SCRIPTED GENERATOR
# =============================================================================


@pytest.mark.asyncio
async def test_scripted_fragments_concatenate_to_response():
    generator = ScriptedGenerator("abcdefghij", fragment_size=4)

    fragments = await collect(generator)

    assert fragments == ["abcd", "efgh", "ij"]
    assert generator.calls == [("system", "user")]


@pytest.mark.asyncio
async def test_scripted_sequence_repeats_last_response():
    generator = ScriptedGenerator(["first", "second"], fragment_size=100)

    results = ["".join(await collect(generator)) for _ in range(3)]

    assert results == ["first", "second", "second"]


@pytest.mark.asyncio
async def test_scripted_callable_sees_prompts():
    generator = ScriptedGenerator(lambda system, user: f"{system}|{user}")

    assert "".join(await collect(generator, "sys", "usr")) == "sys|usr"


@pytest.mark.asyncio
async def test_scripted_exception_is_raised():
    generator = ScriptedGenerator([GenerationError("down")])

    with pytest.raises(GenerationError, match="down"):
        await collect(generator)


@pytest.mark.asyncio
async def test_default_script_mentions_prompt():
    text = "".join(await collect(ScriptedGenerator(), user="\nFeature request: dashboard\nmore"))

    assert text.startswith("Offline draft responding to: Feature request: dashboard")


# =============================================================================
# RATE LIMITER
# =============================================================================


@pytest.mark.asyncio
async def test_retry_on_connection_error_then_succeeds():
    limiter = no_wait_limiter()
    attempts = []

    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise connection_error()
        return "ok"

    assert await limiter.call_with_retry(flaky) == "ok"
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_retry_gives_up_after_max_retries():
    limiter = no_wait_limiter(max_retries=2)
    attempts = []

    async def always_down():
        attempts.append(1)
        raise connection_error()

    with pytest.raises(openai.APIConnectionError):
        await limiter.call_with_retry(always_down)
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    limiter = no_wait_limiter()
    attempts = []

    async def broken():
        attempts.append(1)
        raise ValueError("bad request")

    with pytest.raises(ValueError):
        await limiter.call_with_retry(broken)
    assert len(attempts) == 1


def test_parse_retry_after():
    limiter = no_wait_limiter()

    assert limiter._parse_retry_after("Rate limit reached. Please try again in 1.5s.") == 2.5
    assert limiter._parse_retry_after("no hint here") is None


# =============================================================================
# OPENAI GENERATOR
# =============================================================================


@pytest.mark.asyncio
async def test_openai_stream_yields_delta_content():
    client, completions = fake_client(FakeStream([
        chunk("Hello"),
        SimpleNamespace(choices=[]),
        chunk(None),
        chunk(", board"),
    ]))
    generator = OpenAIGenerator(model="test-model", temperature=0.1, max_tokens=64,
                                client=client, rate_limiter=no_wait_limiter())

    fragments = await collect(generator, "sys", "usr")

    assert fragments == ["Hello", ", board"]
    request = completions.requests[0]
    assert request["stream"] is True
    assert request["model"] == "test-model"
    assert request["max_completion_tokens"] == 64
    assert request["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "usr"},
    ]


@pytest.mark.asyncio
async def test_openai_stream_setup_is_retried():
    client, completions = fake_client(connection_error(), FakeStream([chunk("ok")]))
    generator = OpenAIGenerator(client=client, rate_limiter=no_wait_limiter())

    assert await collect(generator) == ["ok"]
    assert len(completions.requests) == 2


@pytest.mark.asyncio
async def test_openai_mid_stream_failure_becomes_generation_error():
    client, completions = fake_client(FakeStream([chunk("partial")], error=connection_error()))
    generator = OpenAIGenerator(client=client, rate_limiter=no_wait_limiter())

    with pytest.raises(GenerationError):
        await collect(generator)
    # Never restarted once fragments were delivered
    assert len(completions.requests) == 1


@pytest.mark.asyncio
async def test_openai_exhausted_retries_become_generation_error():
    client, _ = fake_client(connection_error(), connection_error())
    generator = OpenAIGenerator(client=client, rate_limiter=no_wait_limiter(max_retries=2))

    with pytest.raises(GenerationError):
        await collect(generator)


@pytest.mark.uses_llm
@pytest.mark.asyncio
async def test_openai_live_stream():
    if not os.environ.get("OPENAI_API_KEY"):
        pytest.skip("OPENAI_API_KEY not set")
    generator = OpenAIGenerator(max_tokens=32)

    text = "".join(await collect(generator, "Reply with one short sentence.", "Say hello."))

    assert text.strip()
