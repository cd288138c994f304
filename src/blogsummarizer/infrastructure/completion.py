"""Text-completion providers reached through the OpenAI SDK."""

import logging
from dataclasses import dataclass

from openai import AsyncOpenAI

from blogsummarizer.config import Settings, get_settings
from blogsummarizer.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSpec:
    """One candidate provider: where its key lives and how to reach it."""

    name: str
    api_key_setting: str
    model_setting: str
    base_url_setting: str | None = None


# Probed in order, the first provider with a key wins
PROVIDERS: tuple[ProviderSpec, ...] = (
    ProviderSpec("groq", "groq_api_key", "groq_model", "groq_base_url"),
    ProviderSpec("openrouter", "openrouter_api_key", "openrouter_model", "openrouter_base_url"),
    ProviderSpec("openai", "openai_api_key", "openai_model"),
)


@dataclass(frozen=True)
class ProviderConfig:
    """Resolved provider settings."""

    name: str
    api_key: str
    model: str
    base_url: str | None = None


def select_provider(
    settings: Settings | None = None,
    providers: tuple[ProviderSpec, ...] = PROVIDERS,
) -> ProviderConfig:
    """Pick the first configured provider.

    Raises:
        ConfigurationError: if no provider has an API key
    """
    settings = settings or get_settings()
    for spec in providers:
        api_key = getattr(settings, spec.api_key_setting, "")
        if not api_key:
            continue
        base_url = getattr(settings, spec.base_url_setting) if spec.base_url_setting else None
        return ProviderConfig(
            name=spec.name,
            api_key=api_key,
            model=getattr(settings, spec.model_setting),
            base_url=base_url,
        )
    raise ConfigurationError("No AI provider configured")


class CompletionClient:
    """Sends a single prompt and returns the raw completion text."""

    def __init__(self, provider: ProviderConfig) -> None:
        """Initialize the client for a resolved provider."""
        self.provider = provider
        self.client = AsyncOpenAI(api_key=provider.api_key, base_url=provider.base_url)

    @property
    def model(self) -> str:
        return self.provider.model

    async def complete(self, prompt: str) -> str:
        """Generate text for ``prompt``."""
        logger.info(f"Using AI model: {self.provider.name}/{self.provider.model}")
        response = await self.client.chat.completions.create(
            model=self.provider.model,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.choices[0].message.content or ""
