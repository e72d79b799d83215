"""Tests for the Ollama generation client."""

import json

import httpx
import pytest
import respx

from source_synth.generation.config import GenerationConfig
from source_synth.generation.ollama_client import OllamaClient, OllamaError

GENERATE_URL = "http://ollama.test/api/generate"


@pytest.fixture
def config() -> GenerationConfig:
    return GenerationConfig(
        base_url="http://ollama.test/",
        api_key="test-ollama-key",
        model="test-model",
        timeout_ms=2_000,
    )


class TestGenerationConfig:
    """Tests for GenerationConfig helpers."""

    def test_defaults(self):
        """Should default to the fixed sampling options."""
        cfg = GenerationConfig(_env_file=None)

        assert cfg.sampling_options() == {
            "temperature": 0.2,
            "num_predict": 3000,
            "num_ctx": 4096,
            "top_p": 0.9,
            "repeat_penalty": 1.1,
        }

    def test_timeout_seconds(self):
        """Should convert milliseconds to seconds."""
        assert GenerationConfig(timeout_ms=90_000).timeout_seconds == 90.0

    def test_env_override(self, monkeypatch):
        """Should read OLLAMA_* environment variables."""
        monkeypatch.setenv("OLLAMA_MODEL", "gpt-oss:20b")
        monkeypatch.setenv("OLLAMA_API_KEY", "secret")

        cfg = GenerationConfig()

        assert cfg.model == "gpt-oss:20b"
        assert cfg.api_key.get_secret_value() == "secret"
        assert "secret" not in repr(cfg)


class TestOllamaClient:
    """Tests for OllamaClient.generate()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_payload(self, config):
        """Should send a non-streaming JSON-mode request with sampling options."""
        route = respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json={"response": '{"platform": "website"}'})
        )

        async with OllamaClient(config) as client:
            text = await client.generate("Generate a config")

        assert text == '{"platform": "website"}'
        body = json.loads(route.calls.last.request.content)
        assert body["model"] == "test-model"
        assert body["prompt"] == "Generate a config"
        assert body["stream"] is False
        assert body["format"] == "json"
        assert body["options"]["num_predict"] == 3000
        assert body["options"]["num_ctx"] == 4096

    @pytest.mark.asyncio
    @respx.mock
    async def test_bearer_header(self, config):
        """Should authorize with the API key."""
        route = respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json={"response": "{}"})
        )

        async with OllamaClient(config) as client:
            await client.generate("prompt")

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer test-ollama-key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_api_key(self):
        """Should omit Authorization for a local daemon."""
        route = respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json={"response": "{}"})
        )

        async with OllamaClient(GenerationConfig(base_url="http://ollama.test")) as client:
            await client.generate("prompt")

        assert "Authorization" not in route.calls.last.request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_response_field(self, config):
        """Should return an empty string when the reply has no text."""
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json={"done": True})
        )

        async with OllamaClient(config) as client:
            assert await client.generate("prompt") == ""

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error(self, config):
        """Should raise OllamaError carrying the status code and body."""
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(500, text="model not loaded")
        )

        async with OllamaClient(config) as client:
            with pytest.raises(OllamaError) as exc_info:
                await client.generate("prompt")

        assert exc_info.value.status_code == 500
        assert exc_info.value.response_body == "model not loaded"

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body(self, config):
        """Should raise OllamaError for a non-JSON reply."""
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, text="<html>gateway</html>")
        )

        async with OllamaClient(config) as client:
            with pytest.raises(OllamaError, match="non-JSON"):
                await client.generate("prompt")

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self, config):
        """Should surface httpx timeouts as TimeoutError."""
        respx.post(GENERATE_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        async with OllamaClient(config) as client:
            with pytest.raises(TimeoutError):
                await client.generate("prompt")

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_error(self, config):
        """Should wrap transport errors in OllamaError."""
        respx.post(GENERATE_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with OllamaClient(config) as client:
            with pytest.raises(OllamaError) as exc_info:
                await client.generate("prompt")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, config):
        """Should allow close() before and after use."""
        client = OllamaClient(config)
        await client.close()
        client._get_client()
        await client.close()
        await client.close()

        assert client._client is None

    @pytest.mark.parametrize("value", [{"platform": "website", "common": {}}, ["a"], 7])
    @pytest.mark.asyncio
    @respx.mock
    async def test_non_string_response_field(self, config, value):
        """Should reject a response field that is not text."""
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json={"response": value})
        )

        async with OllamaClient(config) as client:
            with pytest.raises(OllamaError, match="expected str") as exc_info:
                await client.generate("prompt")

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    @respx.mock
    async def test_null_response_field(self, config):
        """Should treat a null response field as empty text."""
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json={"response": None})
        )

        async with OllamaClient(config) as client:
            assert await client.generate("prompt") == ""

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_body(self, config):
        """Should reject a JSON body that is not an object."""
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json=["response"])
        )

        async with OllamaClient(config) as client:
            with pytest.raises(OllamaError, match="unexpected body"):
                await client.generate("prompt")
