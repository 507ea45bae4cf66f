from typing import Any

import httpx

from pagequiz.logging.logger import Log
from pagequiz.quizgen.client_base import BaseCompletionClient
from pagequiz.quizgen.exceptions import (
    CompletionConfigError,
    CompletionError,
    CompletionNetworkError,
)
from pagequiz.quizgen.models import SamplingParams


class GeminiClientAdapter(BaseCompletionClient):
    """Completion client for the Gemini ``generateContent`` REST API."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._transport = transport

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        params: SamplingParams,
    ) -> str:
        if not self._api_key:
            raise CompletionConfigError("Gemini API key is not configured")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": params.temperature,
                "topP": params.top_p,
                "topK": params.top_k,
                "maxOutputTokens": params.max_output_tokens,
            },
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    f"{self._base_url}/models/{model}:generateContent",
                    params={"key": self._api_key},
                    json=body,
                )
        except httpx.HTTPError as exc:
            raise CompletionNetworkError(f"AI provider network error: {exc}") from exc

        if response.is_error:
            Log.error(f"Gemini API error {response.status_code}: {response.text}")
            raise CompletionError(f"Gemini API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise CompletionError(f"Gemini returned invalid JSON: {exc}") from exc
        return self._first_candidate_text(data)

    @staticmethod
    def _first_candidate_text(data: Any) -> str:
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates or not isinstance(candidates[0], dict):
            raise CompletionError("Gemini returned no candidates")
        content = candidates[0].get("content") or {}
        parts = content.get("parts") or []
        if not parts or not parts[0].get("text"):
            raise CompletionError("Gemini returned an empty response")
        return str(parts[0]["text"])
