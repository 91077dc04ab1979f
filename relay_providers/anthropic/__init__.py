"""Anthropic backend family."""

from .client import AnthropicProvider
from .models import ANTHROPIC_MODELS

__all__ = ["AnthropicProvider", "ANTHROPIC_MODELS"]
