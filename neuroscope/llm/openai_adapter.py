"""
OpenAI LLM Adapter - Default inference service provider.

Uses the official OpenAI Python SDK. Any OpenAI-compatible endpoint
(including Gemini's compatibility endpoint) works through `base_url`.
"""
from typing import Optional, Dict, Any, List
from neuroscope.llm.base import LLMAdapter, LLMResponse, ImageInput
from neuroscope.core.logging import get_logger

logger = get_logger("llm.openai")


class OpenAIAdapter(LLMAdapter):
    """
    OpenAI LLM adapter using the official SDK.

    Configuration is passed in explicitly; the adapter never reads
    process-wide settings.
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 30.0
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url or None
        self._timeout = timeout
        self._client = None

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    def _get_client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            import openai
            kwargs = {"api_key": self._api_key, "timeout": self._timeout}
            if self._base_url:
                kwargs["base_url"] = self._base_url
            self._client = openai.OpenAI(**kwargs)
        return self._client

    def is_available(self) -> bool:
        """Check if OpenAI API key is configured."""
        return bool(self._api_key)

    @staticmethod
    def _build_user_content(prompt: str, images: Optional[List[ImageInput]]):
        if not images:
            return prompt
        parts: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for image in images:
            parts.append({
                "type": "image_url",
                "image_url": {"url": image.data_url}
            })
        return parts

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        images: Optional[List[ImageInput]] = None,
        max_tokens: int = 50,
        temperature: float = 0.0,
        **kwargs
    ) -> LLMResponse:
        """Generate completion using OpenAI API."""
        if not self.is_available():
            raise ValueError("OpenAI API key not configured")

        client = self._get_client()

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({
            "role": "user",
            "content": self._build_user_content(prompt, images)
        })

        try:
            logger.info(f"Generating with OpenAI {self._model}...")

            response = client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs
            )

            content = response.choices[0].message.content or ""
            usage = None
            if response.usage is not None:
                usage = {
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens,
                }
                logger.info(f"OpenAI generation successful ({response.usage.total_tokens} tokens)")

            return LLMResponse(
                content=content,
                model=self._model,
                provider=self.provider_name,
                usage=usage,
                finish_reason=response.choices[0].finish_reason,
                raw_response=response
            )

        except Exception as e:
            logger.error(f"OpenAI generation failed: {e}")
            raise

    def health_check(self) -> Dict[str, Any]:
        """Check OpenAI API health."""
        base = super().health_check()
        base["api_key_set"] = bool(self._api_key)
        base["base_url"] = self._base_url
        return base
