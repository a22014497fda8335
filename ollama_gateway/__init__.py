"""Ollama-compatible gateway in front of managed LLM providers."""

__version__ = "1.0.0"
