"""Google Gemini provider."""

from gemctl.providers.gemini.ai import GeminiProvider
from gemctl.providers.gemini.config import GeminiConfig

__all__ = ["GeminiConfig", "GeminiProvider"]
