"""OpenAI streaming completion engine."""

from .client import OpenAIEngine

__all__ = ["OpenAIEngine"]
