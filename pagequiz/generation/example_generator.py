"""Example test generator returning a fixed quiz. No network calls."""

from typing import ClassVar

from pagequiz.generation.base import BaseTestGenerator


class ExampleTestGenerator(BaseTestGenerator):
    DEFAULT_RESULT: ClassVar[str] = (
        "1. What do plants produce during photosynthesis?\n"
        "A) Nitrogen\n"
        "B) Glucose and oxygen ✓\n"
        "C) Carbon monoxide\n"
        "D) Salt\n"
    )

    def __init__(self, result: str | None = None) -> None:
        self._result = result if result is not None else self.DEFAULT_RESULT

    async def generate(self, text: str) -> str:
        _ = text
        return self._result
