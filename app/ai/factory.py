from functools import lru_cache

from app.ai.config import load_ai_config
from app.ai.types import AIClient

from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.providers.claude_provider import ClaudeProvider


@lru_cache(maxsize=None)
def get_ai_client(provider: str) -> AIClient:
    """One provider per name for the process, so SDK connection pools are reused."""
    cfg = load_ai_config(provider)

    if cfg.provider == "openai":
        return OpenAIProvider(cfg)

    if cfg.provider == "claude":
        return ClaudeProvider(cfg)

    raise ValueError(f"Unsupported AI provider '{cfg.provider}'")


def get_openai_client() -> AIClient:
    return get_ai_client("openai")


def get_claude_client() -> AIClient:
    return get_ai_client("claude")
