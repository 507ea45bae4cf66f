from pagequiz.config.settings import Settings
from pagequiz.generation.base import BaseTestGenerator
from pagequiz.generation.example_generator import ExampleTestGenerator
from pagequiz.generation.remote_generator import RemoteTestGenerator
from pagequiz.session.context import SessionContext


class GeneratorFactory:
    """Creates the configured test generator."""

    BACKENDS: tuple[str, ...] = ("remote", "example")

    @classmethod
    def create(
        cls,
        settings: Settings,
        session: SessionContext | None = None,
    ) -> BaseTestGenerator:
        backend = settings.generator_backend.lower()
        if backend == "example":
            return ExampleTestGenerator()
        if backend == "remote":
            url = settings.generation_endpoint_url.strip()
            if not url:
                raise ValueError("generation_endpoint_url is required for generator_backend=remote")
            return RemoteTestGenerator(
                endpoint_url=url,
                timeout_seconds=settings.generation_timeout_seconds,
                token_provider=(lambda: session.access_token) if session is not None else None,
                api_key=settings.supabase_anon_key or None,
            )
        raise ValueError(
            f"Unknown generator backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
