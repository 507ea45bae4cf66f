from pagequiz.config.settings import Settings
from pagequiz.session.base import BaseAuthProvider
from pagequiz.session.example_adapter import ExampleAuthAdapter
from pagequiz.session.supabase_adapter import SupabaseAuthAdapter


class AuthProviderFactory:
    """Creates the configured auth provider adapter."""

    PROVIDERS: tuple[str, ...] = ("example", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseAuthProvider:
        provider = settings.auth_provider.lower()
        if provider == "example":
            return ExampleAuthAdapter()
        if provider == "supabase":
            url = settings.supabase_url.strip()
            if not url or not settings.supabase_anon_key:
                raise ValueError(
                    "supabase_url and supabase_anon_key are required for auth_provider=supabase"
                )
            return SupabaseAuthAdapter(url=url, anon_key=settings.supabase_anon_key)
        raise ValueError(
            f"Unknown auth provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
