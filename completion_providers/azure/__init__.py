"""Azure OpenAI single-shot chat engine."""

from .client import AzureEngine

__all__ = ["AzureEngine"]
