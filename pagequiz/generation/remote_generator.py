import json
from collections.abc import Callable

import httpx

from pagequiz.generation.base import BaseTestGenerator
from pagequiz.generation.exceptions import GenerationError, GenerationNetworkError
from pagequiz.generation.models import GenerationRequest, GenerationResponse
from pagequiz.logging.logger import Log


class RemoteTestGenerator(BaseTestGenerator):
    """Calls the quiz generation endpoint once per request, without retries."""

    def __init__(
        self,
        *,
        endpoint_url: str,
        timeout_seconds: int = 60,
        token_provider: Callable[[], str | None] | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._timeout = timeout_seconds
        self._token_provider = token_provider
        self._api_key = api_key
        self._transport = transport

    async def generate(self, text: str) -> str:
        request = GenerationRequest(text=text)
        Log.info(f"Requesting test generation for {len(text)} chars")
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._endpoint_url,
                    json=request.to_payload(),
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            raise GenerationNetworkError(f"Generation endpoint unreachable: {exc}") from exc

        parsed = self._parse(response)
        result = parsed.result
        if not parsed.ok or result is None:
            Log.error(f"Test generation failed: {parsed.failure_message}")
            raise GenerationError(parsed.failure_message)

        Log.info(f"Received generated test: {len(result)} chars")
        return result

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._token_provider() if self._token_provider is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if self._api_key:
            headers["apikey"] = self._api_key
        return headers

    @staticmethod
    def _parse(response: httpx.Response) -> GenerationResponse:
        try:
            payload = response.json()
        except json.JSONDecodeError:
            return GenerationResponse(
                error=f"Test generation failed: HTTP {response.status_code}"
            )
        parsed = GenerationResponse.from_payload(payload)
        if response.is_error and not parsed.error:
            return GenerationResponse(
                error=f"Test generation failed: HTTP {response.status_code}"
            )
        return parsed
