import json

import httpx
import pytest

from pagequiz.config.settings import Settings
from pagequiz.generation.example_generator import ExampleTestGenerator
from pagequiz.generation.exceptions import GenerationError, GenerationNetworkError
from pagequiz.generation.factory import GeneratorFactory
from pagequiz.generation.models import GenerationResponse
from pagequiz.generation.remote_generator import RemoteTestGenerator
from pagequiz.session.context import SessionContext
from pagequiz.session.example_adapter import ExampleAuthAdapter

pytestmark = pytest.mark.anyio

ENDPOINT = "https://quiz.example.com/generate"


def _generator(handler, **kwargs) -> RemoteTestGenerator:
    return RemoteTestGenerator(
        endpoint_url=ENDPOINT,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestGenerationResponse:
    def test_result_without_error_is_ok(self) -> None:
        assert GenerationResponse.from_payload({"result": "1. Q?"}).ok

    def test_error_wins_over_result(self) -> None:
        parsed = GenerationResponse.from_payload({"result": "x", "error": "quota"})
        assert not parsed.ok
        assert parsed.failure_message == "quota"

    def test_missing_fields_use_default_message(self) -> None:
        parsed = GenerationResponse.from_payload({})
        assert not parsed.ok
        assert parsed.failure_message == "Test generation failed"

    def test_non_object_payload(self) -> None:
        assert not GenerationResponse.from_payload(["nope"]).ok


class TestRemoteTestGenerator:
    async def test_posts_text_and_returns_result_verbatim(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"result": "1. Q?\nA) a ✓\n"})

        result = await _generator(handler).generate("Paris is the capital of France.")
        assert result == "1. Q?\nA) a ✓\n"
        assert seen[0].method == "POST"
        assert str(seen[0].url) == ENDPOINT
        assert json.loads(seen[0].content) == {"text": "Paris is the capital of France."}
        assert seen[0].headers["content-type"] == "application/json"
        assert "authorization" not in seen[0].headers

    async def test_sends_bearer_token_and_api_key(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"result": "ok"})

        generator = _generator(handler, token_provider=lambda: "tok-123", api_key="anon")
        await generator.generate("some text")
        assert seen[0].headers["authorization"] == "Bearer tok-123"
        assert seen[0].headers["apikey"] == "anon"

    async def test_error_field_is_surfaced(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "No text was provided"})

        with pytest.raises(GenerationError, match="No text was provided"):
            await _generator(handler).generate("")

    async def test_http_error_without_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad gateway")

        with pytest.raises(GenerationError, match="HTTP 502"):
            await _generator(handler).generate("text here")

    async def test_empty_result_is_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"result": ""})

        with pytest.raises(GenerationError, match="Test generation failed"):
            await _generator(handler).generate("text here")

    async def test_missing_result_key_is_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "done"})

        with pytest.raises(GenerationError, match="Test generation failed"):
            await _generator(handler).generate("text here")

    async def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GenerationNetworkError, match="unreachable"):
            await _generator(handler).generate("text here")

    async def test_single_attempt_only(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(500, json={"error": "boom"})

        with pytest.raises(GenerationError):
            await _generator(handler).generate("text here")
        assert calls == 1


class TestGeneratorFactory:
    def test_creates_example(self) -> None:
        generator = GeneratorFactory.create(Settings(generator_backend="example"))
        assert isinstance(generator, ExampleTestGenerator)

    def test_creates_remote(self) -> None:
        assert isinstance(GeneratorFactory.create(Settings()), RemoteTestGenerator)

    def test_remote_requires_url(self) -> None:
        with pytest.raises(ValueError, match="generation_endpoint_url"):
            GeneratorFactory.create(Settings(generation_endpoint_url=" "))

    def test_unknown_backend_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown generator backend"):
            GeneratorFactory.create(Settings(generator_backend="local"))

    async def test_remote_reads_token_from_session_at_call_time(self) -> None:
        session = SessionContext(ExampleAuthAdapter())
        generator = GeneratorFactory.create(Settings(), session=session)
        assert isinstance(generator, RemoteTestGenerator)
        assert "Authorization" not in generator._headers()
        await session.load("example-token")
        assert generator._headers()["Authorization"] == "Bearer example-token"
