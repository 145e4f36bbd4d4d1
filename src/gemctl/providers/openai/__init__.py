"""OpenAI provider."""

from gemctl.providers.openai.ai import OpenAIProvider
from gemctl.providers.openai.config import OpenAIConfig

__all__ = ["OpenAIConfig", "OpenAIProvider"]
