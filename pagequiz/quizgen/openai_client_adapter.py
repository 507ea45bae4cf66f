import httpx
import openai

from pagequiz.quizgen.client_base import BaseCompletionClient
from pagequiz.quizgen.exceptions import (
    CompletionConfigError,
    CompletionError,
    CompletionNetworkError,
)
from pagequiz.quizgen.models import SamplingParams


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API.

    ``top_k`` has no chat-completions equivalent and is not sent.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._has_key = bool(api_key)
        self._client = openai.AsyncOpenAI(
            api_key=api_key or "missing",
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        params: SamplingParams,
    ) -> str:
        if not self._has_key:
            raise CompletionConfigError("OpenAI API key is not configured")
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=params.temperature,
                top_p=params.top_p,
                max_tokens=params.max_output_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CompletionNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise CompletionError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise CompletionError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise CompletionError("AI returned empty response")
        return content
