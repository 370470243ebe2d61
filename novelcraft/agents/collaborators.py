"""
Collaborators for Phase 1: the LLM caller and the JSON parser.

Phase 1 depends only on the two Protocols below; the concrete classes are
the production implementations. Tests pass their own.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import HumanMessage, SystemMessage

from novelcraft.config import config
from novelcraft.errors import LLMInvocationError
from novelcraft.utils.logging import phase1_logger as logger


RAW_PREVIEW_LENGTH = 500

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass
class LLMOptions:
    """Model settings for a single call."""
    model: str
    temperature: float = 1.0
    max_tokens: int = 8192

    @classmethod
    def from_config(cls) -> "LLMOptions":
        return cls(
            model=config.PHASE1_MODEL,
            temperature=config.PHASE1_TEMPERATURE,
            max_tokens=config.PHASE1_MAX_TOKENS
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens
        }


@dataclass
class ParseResult:
    """Outcome of parsing a model response."""
    success: bool
    data: Any = None
    error: Optional[str] = None
    raw: Optional[str] = None


class LLMCaller(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str, options: LLMOptions) -> str:
        ...


class JSONParser(Protocol):
    def parse(self, raw: str) -> ParseResult:
        ...


class AnthropicLLMCaller:
    """
    LLMCaller backed by Claude through LangChain.

    A ChatAnthropic client is built per distinct option set and reused.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None
    ):
        self.api_key = api_key or config.ANTHROPIC_API_KEY
        self.timeout = timeout if timeout is not None else config.LLM_TIMEOUT_SECONDS
        self.max_retries = max_retries if max_retries is not None else config.LLM_MAX_RETRIES
        self._clients: Dict[tuple, ChatAnthropic] = {}

    def _client(self, options: LLMOptions) -> ChatAnthropic:
        key = (options.model, options.temperature, options.max_tokens)
        if key not in self._clients:
            self._clients[key] = ChatAnthropic(
                model=options.model,
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                anthropic_api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        return self._clients[key]

    async def complete(self, system_prompt: str, user_prompt: str, options: LLMOptions) -> str:
        try:
            llm = self._client(options)
            response = await llm.ainvoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt)
            ])
        except Exception as e:
            logger.error("LLM call failed", model=options.model, error=str(e))
            raise LLMInvocationError(f"{options.model} call failed: {e}") from e

        content = response.content
        # Content blocks come back as a list of dicts/strings
        if isinstance(content, list):
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        return content


class LenientJSONParser:
    """
    JSONParser that tolerates the usual wrapping around model output.

    Tries, in order: the whole text, a fenced ```json block, and the first
    complete JSON object or array in the text. Never raises.
    """

    def parse(self, raw: str) -> ParseResult:
        if not isinstance(raw, str):
            return ParseResult(success=False, error=f"Expected text, got {type(raw).__name__}", raw=None)

        text = raw.strip()

        try:
            return ParseResult(success=True, data=json.loads(text))
        except json.JSONDecodeError as e:
            first_error = str(e)

        match = _FENCED_BLOCK.search(text)
        if match:
            try:
                return ParseResult(success=True, data=json.loads(match.group(1).strip()))
            except json.JSONDecodeError:
                pass

        data = self._first_json_value(text)
        if data is not None:
            return ParseResult(success=True, data=data)

        return ParseResult(
            success=False,
            error=f"Could not parse JSON from response: {first_error}",
            raw=self._preview(raw)
        )

    @staticmethod
    def _first_json_value(text: str) -> Any:
        decoder = json.JSONDecoder()
        for i, ch in enumerate(text):
            if ch not in "{[":
                continue
            try:
                value, _ = decoder.raw_decode(text, i)
                return value
            except json.JSONDecodeError:
                continue
        return None

    @staticmethod
    def _preview(raw: str) -> str:
        if len(raw) <= RAW_PREVIEW_LENGTH:
            return raw
        return raw[:RAW_PREVIEW_LENGTH] + "..."
