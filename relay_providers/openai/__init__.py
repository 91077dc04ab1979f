"""OpenAI-compatible backend family (OpenAI, Azure OpenAI, compatible servers)."""

from .client import OpenAIProvider
from .models import OPENAI_SANE_DEFAULTS

__all__ = ["OpenAIProvider", "OPENAI_SANE_DEFAULTS"]
