"""LLM backends for file review.

One provider is resolved per process and turned into a single
``async (system_prompt, user_prompt) -> str`` callable.
"""

from enum import Enum
from typing import Awaitable, Callable, Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from src.core.exceptions import ConfigurationError, UnsupportedProviderError
from src.core.logging import get_logger

logger = get_logger("llm")

ChatCompletion = Callable[[str, str], Awaitable[str]]

ANTHROPIC_MAX_TOKENS = 4096


class AIProvider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"


PROVIDER_ALIASES = {
    "openai": AIProvider.OPENAI,
    "gpt": AIProvider.OPENAI,
    "chatgpt": AIProvider.OPENAI,
    "anthropic": AIProvider.ANTHROPIC,
    "claude": AIProvider.ANTHROPIC,
    "google": AIProvider.GOOGLE,
    "gemini": AIProvider.GOOGLE,
}

_RATE_LIMIT_MARKERS = ("429", "rate limit", "rate_limit", "resource exhausted", "resource_exhausted")


def resolve_provider(name: str) -> AIProvider:
    """Map a configured provider name (or alias) to a provider."""
    provider = PROVIDER_ALIASES.get((name or "").strip().lower())
    if provider is None:
        raise UnsupportedProviderError(name)
    return provider


def get_chat_llm(
    provider: AIProvider,
    model: str,
    api_key: str,
    base_url: Optional[str] = None,
    temperature: float = 0.0,
) -> Runnable:
    """Build the LangChain chat model for a provider.

    SDK-level retries are disabled: rate limits are retried by the review
    client with its own backoff schedule.
    """
    if provider is AIProvider.OPENAI:
        llm: BaseChatModel = ChatOpenAI(
            model=model,
            api_key=api_key,
            base_url=base_url,
            temperature=temperature,
            max_retries=0,
        )
        return llm.bind(response_format={"type": "json_object"})

    if provider is AIProvider.ANTHROPIC:
        return ChatAnthropic(
            model=model,
            api_key=api_key,
            max_tokens=ANTHROPIC_MAX_TOKENS,
            temperature=temperature,
            max_retries=0,
        )

    if provider is AIProvider.GOOGLE:
        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=temperature,
            max_retries=0,
        )

    raise UnsupportedProviderError(str(provider))


def message_text(content) -> str:
    """Flatten chat message content (plain string or content blocks) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "\n".join(parts)


def build_chat_completion(
    provider_name: str,
    model: str,
    api_key: Optional[str],
    base_url: Optional[str] = None,
) -> ChatCompletion:
    """Resolve the provider once and return the completion callable."""
    provider = resolve_provider(provider_name)
    if not api_key:
        raise ConfigurationError("AI_API_KEY not configured")
    if not model:
        raise ConfigurationError("AI_MODEL not configured")

    llm = get_chat_llm(provider, model, api_key, base_url=base_url)
    logger.info(f"[LLM] Using {provider.value}: {model}")

    async def complete(system_prompt: str, user_prompt: str) -> str:
        response = await llm.ainvoke(
            [
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ]
        )
        return message_text(response.content)

    return complete


def is_rate_limit_error(exc: BaseException) -> bool:
    """Normalize provider-specific throttling failures to one condition."""
    for attr in ("status_code", "status", "code", "http_status"):
        if getattr(exc, attr, None) == 429:
            return True

    response = getattr(exc, "response", None)
    if response is not None and getattr(response, "status_code", None) == 429:
        return True

    message = str(exc).lower()
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)
