"""
Tests for the inference service adapter and factory.
"""
import pytest
from unittest.mock import MagicMock
from neuroscope.core.config import Settings
from neuroscope.llm.base import ImageInput
from neuroscope.llm.factory import get_llm, list_providers
from neuroscope.llm.openai_adapter import OpenAIAdapter


def mock_completion(content="AI, 80"):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.choices[0].finish_reason = "stop"
    response.usage.prompt_tokens = 10
    response.usage.completion_tokens = 3
    response.usage.total_tokens = 13
    return response


class TestOpenAIAdapter:

    def test_unavailable_without_key(self):
        adapter = OpenAIAdapter(api_key="")
        assert adapter.is_available() is False
        with pytest.raises(ValueError):
            adapter.generate("hello")

    def test_text_prompt(self):
        adapter = OpenAIAdapter(api_key="sk-test", model="gpt-test")
        adapter._client = MagicMock()
        adapter._client.chat.completions.create.return_value = mock_completion("Human: 55")

        response = adapter.generate("Is this AI?")

        assert response.content == "Human: 55"
        assert response.provider == "openai"
        assert response.usage["total_tokens"] == 13
        kwargs = adapter._client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["messages"] == [{"role": "user", "content": "Is this AI?"}]

    def test_image_prompt_uses_data_url(self):
        adapter = OpenAIAdapter(api_key="sk-test")
        adapter._client = MagicMock()
        adapter._client.chat.completions.create.return_value = mock_completion()

        adapter.generate("Classify", images=[ImageInput(data_base64="QUJD", mime_type="image/png")])

        content = adapter._client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": "Classify"}
        assert content[1]["image_url"]["url"] == "data:image/png;base64,QUJD"

    def test_sdk_errors_propagate(self):
        adapter = OpenAIAdapter(api_key="sk-test")
        adapter._client = MagicMock()
        adapter._client.chat.completions.create.side_effect = RuntimeError("rate limited")
        with pytest.raises(RuntimeError):
            adapter.generate("x")


class TestFactory:

    def test_no_key_gives_none(self):
        assert get_llm(config=Settings(openai_api_key="")) is None

    def test_disabled_provider(self):
        assert get_llm("none", config=Settings(openai_api_key="sk-test")) is None

    def test_configured_adapter(self):
        config = Settings(openai_api_key="sk-test", openai_model="gpt-x", openai_base_url="http://localhost:9000/v1")
        adapter = get_llm(config=config)
        assert isinstance(adapter, OpenAIAdapter)
        assert adapter.model_name == "gpt-x"
        assert adapter.health_check()["base_url"] == "http://localhost:9000/v1"

    def test_list_providers(self):
        providers = list_providers(config=Settings(openai_api_key=""))
        assert providers["none"]["available"] is True
        assert providers["openai"]["available"] is False
