"""Example completion client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in QuizGeneratorFactory.
"""

from typing import ClassVar

from pagequiz.quizgen.client_base import BaseCompletionClient
from pagequiz.quizgen.models import SamplingParams


class ExampleClientAdapter(BaseCompletionClient):
    """Example adapter that returns a fixed quiz.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[str] = (
        "1. What is the capital of France?\n"
        "A) Berlin\n"
        "B) Paris ✓\n"
        "C) Rome\n"
        "D) Madrid\n"
        "\n"
        "2. How fast does light travel?\n"
        "A) 3x10^8 m/s ✓\n"
        "B) 340 m/s\n"
        "C) 3x10^5 m/s\n"
        "D) 9.8 m/s\n"
    )

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        params: SamplingParams,
    ) -> str:
        _ = model, prompt, params
        return self.DEFAULT_RESPONSE
