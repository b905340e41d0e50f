"""
Text Generation Module for Agentic-Board

Agents never talk to an LLM directly. They receive a TextGenerator whose
stream() method yields text fragments for a (system prompt, user prompt) pair.
Fragments arrive over time; their concatenation is the artifact text. A
stream is finite and cannot be restarted once fragments have been delivered.

Implementations:
- OpenAIGenerator: OpenAI chat completions with stream=True, client-side
  request pacing and exponential backoff when opening the stream
- ScriptedGenerator: deterministic offline generator for tests and dry runs
"""

import asyncio
import re
import time
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable, Sequence
from typing import Optional, Union

import openai
from openai import AsyncOpenAI

from config import settings
from agentic_board.core.exceptions import GenerationError
from agentic_board.utils.logger import get_logger, LogCategory

logger = get_logger(__name__)


class TextGenerator(ABC):
    """Interface to the external text generation service."""

    @abstractmethod
    def stream(self, system_prompt: str, user_prompt: str) -> AsyncIterator[str]:
        """
        Generate text for the given prompts, fragment by fragment.

        Raises:
            GenerationError: If the service fails before or during streaming
        """


class RequestRateLimiter:
    """
    Request-per-minute limiter with exponential backoff for stream setup.

    One limiter is shared by every agent of an Engine; since acts are awaited
    one at a time it never sees concurrent callers.
    """

    def __init__(
        self,
        requests_per_minute: Optional[int] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_delay: float = 60.0
    ):
        self.rpm_limit = requests_per_minute or settings.LLM_REQUESTS_PER_MINUTE
        self.max_retries = max(1, max_retries or settings.LLM_MAX_RETRIES)
        self.base_delay = base_delay if base_delay is not None else settings.LLM_RETRY_BASE_DELAY
        self.max_delay = max_delay
        self.request_times: list[float] = []

    async def wait_if_needed(self) -> None:
        """Sleep if the last minute already holds rpm_limit requests."""
        now = time.monotonic()
        self.request_times = [t for t in self.request_times if now - t < 60]

        if len(self.request_times) >= self.rpm_limit:
            wait_time = 60 - (now - self.request_times[0])
            if wait_time > 0:
                logger.debug(f"Rate limit: waiting {wait_time:.1f}s", category=LogCategory.AGENT)
                await asyncio.sleep(wait_time)

        self.request_times.append(time.monotonic())

    async def call_with_retry(self, func: Callable, *args, **kwargs):
        """
        Await func(*args, **kwargs), retrying rate-limit and connection errors.

        Other errors propagate immediately.
        """
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                await self.wait_if_needed()
                return await func(*args, **kwargs)

            except (openai.RateLimitError, openai.APIConnectionError) as e:
                last_error = e
                if attempt == self.max_retries - 1:
                    break

                wait_time = self._parse_retry_after(str(e))
                if wait_time is None:
                    wait_time = min(self.base_delay * (2 ** attempt), self.max_delay)

                logger.warning(
                    f"{type(e).__name__}, waiting {wait_time:.1f}s before retry "
                    f"{attempt + 1}/{self.max_retries - 1}",
                    category=LogCategory.AGENT
                )
                await asyncio.sleep(wait_time)

        raise last_error

    def _parse_retry_after(self, error_message: str) -> Optional[float]:
        """Parse retry-after time from an OpenAI error message."""
        match = re.search(r'try again in (\d+\.?\d*)s', error_message)
        if match:
            return float(match.group(1)) + 1.0
        return None


class OpenAIGenerator(TextGenerator):
    """
    Streaming generator backed by the OpenAI chat completions API.

    The client is created on first use so that constructing an Engine does not
    require credentials; a missing key surfaces as a GenerationError during
    the first act, which the Engine isolates to that agent.

    Attributes:
        model: Model name sent with each request
        temperature: Sampling temperature
        max_tokens: Maximum completion tokens per response
        rate_limiter: Request pacing and retry policy
    """

    def __init__(
        self,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        rate_limiter: Optional[RequestRateLimiter] = None,
        client: Optional[AsyncOpenAI] = None
    ):
        self.model = model or settings.LLM_MODEL
        self.temperature = temperature if temperature is not None else settings.LLM_TEMPERATURE
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.base_url = base_url or settings.OPENAI_BASE_URL
        self.rate_limiter = rate_limiter or RequestRateLimiter()
        self._client = client

        if client is None and not self.api_key:
            logger.warning(
                "OPENAI_API_KEY not set - online generation will fail",
                category=LogCategory.SYSTEM
            )

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            try:
                self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
            except openai.OpenAIError as e:
                raise GenerationError(f"Cannot create OpenAI client: {e}") from e
        return self._client

    async def stream(self, system_prompt: str, user_prompt: str) -> AsyncIterator[str]:
        params = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_completion_tokens": self.max_tokens,
            "stream": True,
        }

        logger.debug(
            f"LLM stream: model={self.model}, temp={self.temperature}, "
            f"prompt_chars={len(system_prompt) + len(user_prompt)}",
            category=LogCategory.AGENT
        )

        client = self.client
        try:
            response = await self.rate_limiter.call_with_retry(
                client.chat.completions.create, **params
            )
            async for chunk in response:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except openai.OpenAIError as e:
            logger.error(f"LLM streaming call failed: {e}", category=LogCategory.AGENT)
            raise GenerationError(str(e)) from e


Script = Union[str, Sequence[str], Callable[[str, str], str]]


class ScriptedGenerator(TextGenerator):
    """
    Offline generator producing predetermined text.

    The script decides the full response for each call:
    - a string: the same response every time
    - a sequence of strings: one per call, the last one repeated afterwards
    - a callable (system_prompt, user_prompt) -> str

    Responses that are Exception instances are raised instead of streamed.
    The response is yielded in fixed-size fragments, with a scheduler yield
    between fragments, so callers exercise the same incremental path as a
    real stream. Every call is recorded in `calls`.
    """

    def __init__(self, script: Optional[Script] = None, fragment_size: int = 16):
        self.script = script if script is not None else self._default_response
        self.fragment_size = max(1, fragment_size)
        self.calls: list[tuple[str, str]] = []

    @staticmethod
    def _default_response(system_prompt: str, user_prompt: str) -> str:
        first_line = next((line for line in user_prompt.splitlines() if line.strip()), "")
        return (
            f"Offline draft responding to: {first_line.strip()}\n\n"
            "- Generated without contacting a language model.\n"
        )

    def _response_for(self, system_prompt: str, user_prompt: str):
        if callable(self.script):
            return self.script(system_prompt, user_prompt)
        if isinstance(self.script, str):
            return self.script
        if not self.script:
            return ""
        index = min(len(self.calls) - 1, len(self.script) - 1)
        return self.script[index]

    async def stream(self, system_prompt: str, user_prompt: str) -> AsyncIterator[str]:
        self.calls.append((system_prompt, user_prompt))
        response = self._response_for(system_prompt, user_prompt)
        if isinstance(response, Exception):
            raise response

        for start in range(0, len(response), self.fragment_size):
            await asyncio.sleep(0)
            yield response[start:start + self.fragment_size]
