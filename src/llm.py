"""
LLM Client: Interface to the remote language model, plus the chat session.

Design principles:
- No global state
- Configuration passed via constructor
- Exactly one request per call: no SDK retries, no streaming
- Optional JSONL log of every exchange
"""

import contextlib
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Any, Iterator, Sequence

import tiktoken
from openai import AsyncOpenAI

from config import LLMConfig
from database import DataStore
from logging_utils import get_logger
from prompts import build_evaluation_context, system_prompt
from records import ChatMessage

logger = get_logger(__name__)

FALLBACK_MESSAGE = "Sorry, I encountered an error while processing your request. Please try again."


class LLMError(Exception):
    """The model service answered, but the answer could not be used."""


@dataclass
class LLMStats:
    """Statistics for LLM usage tracking."""
    calls: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0

    def record(self, prompt_tokens: int, completion_tokens: int) -> None:
        self.calls += 1
        self.prompt_tokens += prompt_tokens
        self.completion_tokens += completion_tokens


def estimate_tokens(text: str) -> int:
    """Estimate token count using tiktoken cl100k_base encoding."""
    encoding = tiktoken.get_encoding("cl100k_base")
    return len(encoding.encode(text))


class LLMClient:
    """
    Async client for an OpenAI-compatible chat completions endpoint.

    Usage:
        client = LLMClient(config.llm)
        reply = await client.complete(context, [ChatMessage("user", "Which tools are approved?")])
    """

    def __init__(
        self,
        config: LLMConfig,
        log_path: str | None = None,
    ):
        """
        Initialize LLM client.

        Args:
            config: LLM configuration (endpoint, model, limits).
            log_path: Optional path to write exchange logs. If None, no file logging.
        """
        self.config = config
        self.log_path = log_path
        self.stats = LLMStats()
        self._client = AsyncOpenAI(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=config.timeout,
            max_retries=0,
        )

    async def complete(self, context: str, history: Sequence[ChatMessage]) -> ChatMessage:
        """
        Send one request carrying the dataset context and the chat history.

        Args:
            context: Serialized record projection, rendered into the system prompt.
            history: Full conversation so far, oldest first.

        Returns:
            The assistant's reply.

        Raises:
            LLMError: If the response has no usable text.
            openai.OpenAIError: On transport failures or non-success status.
        """
        messages = [{"role": "system", "content": system_prompt(context)}]
        messages.extend(message.to_dict() for message in history)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Sending {len(history)} messages, ~{estimate_tokens(messages[0]['content'])} context tokens")

        completion = await self._client.chat.completions.create(
            messages=messages,
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            stream=False,
        )

        content = _extract_content(completion)
        usage = completion.usage
        prompt_tokens = usage.prompt_tokens if usage else 0
        completion_tokens = usage.completion_tokens if usage else 0

        self.stats.record(prompt_tokens, completion_tokens)
        self._log(messages, content, prompt_tokens, completion_tokens)

        return ChatMessage(role="assistant", content=content)

    def _log(
        self,
        messages: list[dict[str, str]],
        content: str,
        prompt_tokens: int,
        completion_tokens: int,
    ) -> None:
        """Write log entry to file if log_path is set."""
        if not self.log_path:
            return

        log_entry = {
            "model": self.config.model,
            "messages": messages,
            "response": content,
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "timestamp": datetime.now().isoformat(),
        }

        try:
            log_dir = os.path.dirname(self.log_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            with open(self.log_path, 'a', encoding='utf-8') as f:
                f.write(json.dumps(log_entry, ensure_ascii=False) + '\n')
        except OSError as e:
            logger.warning(f"Could not write LLM log to {self.log_path}: {e}")


def _extract_content(completion: Any) -> str:
    choices = getattr(completion, "choices", None)
    if not choices:
        raise LLMError("Response contained no choices")

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise LLMError("Response contained no text content")

    return content


@dataclass
class ConversationState:
    """Chat history for one session plus the in-flight flag. Never persisted."""
    messages: list[ChatMessage] = field(default_factory=list)
    in_flight: bool = False


class ConversationManager:
    """
    Single-flight chat session about the evaluation dataset.

    Usage:
        conv = ConversationManager(client, store)

        await conv.send("What are the pros and cons of Clueso?")
        conv.history[-1].content  # assistant reply, or FALLBACK_MESSAGE on failure

    send() is ignored while a request is outstanding. It never raises on
    model or transport failures; those become FALLBACK_MESSAGE in history.
    """

    def __init__(self, client: LLMClient, store: DataStore):
        self.client = client
        self.store = store
        self._state = ConversationState()

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        return tuple(self._state.messages)

    @property
    def in_flight(self) -> bool:
        return self._state.in_flight

    def get_history(self) -> list[ChatMessage]:
        """Get a copy of the conversation history."""
        return list(self._state.messages)

    @cached_property
    def context(self) -> str:
        """Serialized dataset context. The store is immutable, so this is built once."""
        return build_evaluation_context(self.store)

    async def send(self, text: str) -> None:
        """
        Append a user message, ask the model, and append its reply.

        No-op for blank text or while another send() is in flight.
        """
        text = text.strip() if text else ""
        if not text:
            return
        if self._state.in_flight:
            logger.debug("Ignoring send() while a request is in flight")
            return

        with self._sending():
            self._state.messages.append(ChatMessage(role="user", content=text))
            history = tuple(self._state.messages)

            try:
                reply = await self.client.complete(self.context, history)
                if not isinstance(reply, ChatMessage) or reply.role != "assistant":
                    raise LLMError(f"Unexpected reply from client: {reply!r}")
            except Exception:
                logger.exception("Assistant request failed")
                reply = ChatMessage(role="assistant", content=FALLBACK_MESSAGE)

            self._state.messages.append(reply)

    @contextlib.contextmanager
    def _sending(self) -> Iterator[None]:
        """Hold the in-flight flag for the duration of one request."""
        self._state.in_flight = True
        try:
            yield
        finally:
            self._state.in_flight = False
