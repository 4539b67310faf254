import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    base_url: str | None
    timeout_s: float
    max_retries: int
    max_tokens: int
    temperature: float


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def load_ai_config(provider: str) -> AIConfig:
    provider = provider.strip().lower()
    if provider == "openai":
        return AIConfig(
            provider=provider,
            model=_env("OPENAI_MODEL", "gpt-4o-mini"),
            api_key=_env("OPENAI_API_KEY"),
            base_url=_env("OPENAI_BASE_URL") or None,
            timeout_s=float(_env("OPENAI_TIMEOUT_S", "30")),
            max_retries=int(_env("OPENAI_MAX_RETRIES", "2")),
            max_tokens=int(_env("OPENAI_MAX_TOKENS", "600")),
            temperature=float(_env("OPENAI_TEMPERATURE", "0.2")),
        )
    if provider == "claude":
        return AIConfig(
            provider=provider,
            model=_env("CLAUDE_MODEL", "claude-3-5-haiku-latest"),
            api_key=_env("CLAUDE_API_KEY"),
            base_url=_env("CLAUDE_BASE_URL", "https://api.anthropic.com"),
            timeout_s=float(_env("CLAUDE_TIMEOUT_S", "30")),
            max_retries=0,
            max_tokens=int(_env("CLAUDE_MAX_TOKENS", "500")),
            temperature=float(_env("CLAUDE_TEMPERATURE", "0.2")),
        )
    raise ValueError(f"Unsupported AI provider '{provider}'")
