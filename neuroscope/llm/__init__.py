"""
LLM Module - inference service interface with factory pattern.
"""
from neuroscope.llm.factory import get_llm, list_providers, LLMProvider
from neuroscope.llm.base import LLMAdapter, LLMResponse, ImageInput

__all__ = ["get_llm", "list_providers", "LLMProvider", "LLMAdapter", "LLMResponse", "ImageInput"]
