from pagequiz.config.settings import Settings
from pagequiz.quizgen.base import BaseQuizGenerator
from pagequiz.quizgen.client_base import BaseCompletionClient
from pagequiz.quizgen.example_client_adapter import ExampleClientAdapter
from pagequiz.quizgen.gemini_client_adapter import GeminiClientAdapter
from pagequiz.quizgen.models import SamplingParams
from pagequiz.quizgen.openai_client_adapter import OpenAIClientAdapter
from pagequiz.quizgen.quiz_generator import QuizGenerator


class QuizGeneratorFactory:
    """Creates the configured quiz generator for the generation endpoint."""

    PROVIDERS: tuple[str, ...] = ("gemini", "openai", "openai_compatible", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseQuizGenerator:
        """Create a configured quiz generator from application settings."""
        provider = settings.completion_provider.lower()
        return QuizGenerator(
            client=cls._create_client(provider, settings),
            model=cls._resolve_model_name(provider, settings),
            params=SamplingParams(
                temperature=settings.generation_temperature,
                top_p=settings.generation_top_p,
                top_k=settings.generation_top_k,
                max_output_tokens=settings.generation_max_output_tokens,
            ),
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseCompletionClient:
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                timeout_seconds=settings.gemini_timeout_seconds,
            )
        if provider == "openai":
            return OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.openai_timeout_seconds,
                base_url=None,
            )
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "completion_provider=openai_compatible"
                )
            return OpenAIClientAdapter(
                api_key=settings.openai_compatible_api_key,
                timeout_seconds=settings.openai_compatible_timeout_seconds,
                base_url=url,
            )
        raise ValueError(
            f"Unknown completion provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "example": "example",
            "gemini": settings.gemini_model_name,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
        }
        return key_map.get(provider, "") or ""
