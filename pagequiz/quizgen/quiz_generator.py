"""AI-powered quiz generator used by the generation endpoint."""

from pathlib import Path

from pagequiz.logging.logger import Log
from pagequiz.quizgen.base import BaseQuizGenerator
from pagequiz.quizgen.client_base import BaseCompletionClient
from pagequiz.quizgen.exceptions import CompletionError
from pagequiz.quizgen.models import SamplingParams
from pagequiz.quizgen.prompt_loader import load_prompt_template


class QuizGenerator(BaseQuizGenerator):
    """Builds the quiz prompt and makes a single upstream completion call."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        params: SamplingParams | None = None,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._params = params or SamplingParams()
        self._prompt_template = load_prompt_template(prompt_template_path)

    async def generate(self, text: str) -> str:
        if not text.strip():
            raise CompletionError("No text was provided")
        prompt = self._build_prompt(text)
        Log.info(f"Generating quiz with {self._model} for text: {text[:100]!r}")
        Log.debug(f"Quiz prompt:\n{prompt}")

        result = await self._client.complete(
            model=self._model,
            prompt=prompt,
            params=self._params,
        )
        if not result.strip():
            raise CompletionError("The model returned an empty response")

        Log.info(f"Quiz generated: {len(result)} chars")
        return result

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(text=text)
