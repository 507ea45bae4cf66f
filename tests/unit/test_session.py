from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import pytest
from supabase import AuthApiError

from pagequiz.config.settings import Settings
from pagequiz.session.context import SessionContext
from pagequiz.session.example_adapter import ExampleAuthAdapter
from pagequiz.session.exceptions import AuthError
from pagequiz.session.factory import AuthProviderFactory
from pagequiz.session.models import AuthUser
from pagequiz.session.supabase_adapter import SupabaseAuthAdapter

pytestmark = pytest.mark.anyio

SUPABASE_URL = "https://project.supabase.co"


def _client(user: SimpleNamespace | None = None) -> MagicMock:
    client = MagicMock()
    client.auth.get_user.return_value = SimpleNamespace(user=user)
    client.auth.admin.sign_out.return_value = None
    return client


def _supabase(client: MagicMock) -> SupabaseAuthAdapter:
    return SupabaseAuthAdapter(url=SUPABASE_URL, anon_key="anon-key", client=client)


class TestAuthUser:
    def test_display_name_prefers_full_name(self) -> None:
        user = AuthUser(id="1", email="a@b.c", full_name="Ali Valiyev")
        assert user.display_name == "Ali Valiyev"

    def test_display_name_falls_back_to_email(self) -> None:
        assert AuthUser(id="1", email="a@b.c").display_name == "a@b.c"
        assert AuthUser(id="1").display_name == "User"

    def test_initials_from_email(self) -> None:
        assert AuthUser(id="1", email="student@example.com").initials == "S"
        assert AuthUser(id="1").initials == "U"


class TestSessionContext:
    async def test_load_restores_existing_session(self) -> None:
        session = SessionContext(ExampleAuthAdapter())
        user = await session.load("example-token")
        assert user is not None
        assert session.is_authenticated
        assert session.access_token == "example-token"

    async def test_load_with_unknown_token_clears_state(self) -> None:
        session = SessionContext(ExampleAuthAdapter())
        await session.load("example-token")
        assert await session.load("stale") is None
        assert not session.is_authenticated
        assert session.access_token is None

    async def test_load_without_token(self) -> None:
        session = SessionContext(ExampleAuthAdapter())
        assert await session.load(None) is None

    async def test_sign_out_runs_teardowns_and_invalidates(self) -> None:
        provider = ExampleAuthAdapter()
        session = SessionContext(provider)
        await session.load("example-token")
        stopped: list[str] = []
        session.register_teardown(lambda: stopped.append("camera"))

        await session.sign_out()

        assert stopped == ["camera"]
        assert not session.is_authenticated
        assert await provider.get_user("example-token") is None

    async def test_failing_teardown_does_not_block_sign_out(self) -> None:
        session = SessionContext(ExampleAuthAdapter())
        await session.load("example-token")

        def broken() -> None:
            raise RuntimeError("already gone")

        session.register_teardown(broken)
        await session.sign_out()
        assert not session.is_authenticated

    async def test_unregistered_teardown_is_not_run(self) -> None:
        session = SessionContext(ExampleAuthAdapter())
        calls: list[int] = []
        unregister = session.register_teardown(lambda: calls.append(1))
        unregister()
        await session.sign_out()
        assert calls == []

    async def test_local_state_cleared_when_provider_fails(self) -> None:
        client = _client(user=SimpleNamespace(id="u1"))
        client.auth.admin.sign_out.side_effect = AuthApiError("boom", 500, None)

        session = SessionContext(_supabase(client))
        await session.load("tok")
        with pytest.raises(AuthError):
            await session.sign_out()
        assert not session.is_authenticated
        assert session.access_token is None


class TestSupabaseAuthAdapter:
    async def test_get_user_maps_metadata(self) -> None:
        client = _client(
            user=SimpleNamespace(
                id="u1",
                email="student@example.com",
                created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                user_metadata={"full_name": "Ali", "avatar_url": "https://img/a.png"},
            )
        )

        user = await _supabase(client).get_user("tok")

        assert user == AuthUser(
            id="u1",
            email="student@example.com",
            full_name="Ali",
            avatar_url="https://img/a.png",
            created_at="2024-01-01T00:00:00+00:00",
            metadata={"full_name": "Ali", "avatar_url": "https://img/a.png"},
        )
        client.auth.get_user.assert_called_once_with("tok")

    async def test_expired_token_means_no_user(self) -> None:
        client = _client()
        client.auth.get_user.side_effect = AuthApiError("expired", 401, None)
        assert await _supabase(client).get_user("tok") is None

    async def test_missing_user_means_no_user(self) -> None:
        client = _client()
        client.auth.get_user.return_value = None
        assert await _supabase(client).get_user("tok") is None

    async def test_server_error_raises(self) -> None:
        client = _client()
        client.auth.get_user.side_effect = AuthApiError("unavailable", 503, None)
        with pytest.raises(AuthError, match="503"):
            await _supabase(client).get_user("tok")

    async def test_invalid_payload_raises(self) -> None:
        client = _client(user=SimpleNamespace(id="", email="x"))
        with pytest.raises(AuthError, match="invalid user payload"):
            await _supabase(client).get_user("tok")

    async def test_network_error_raises(self) -> None:
        client = _client()
        client.auth.get_user.side_effect = httpx.ConnectTimeout("timed out")
        with pytest.raises(AuthError, match="unreachable"):
            await _supabase(client).get_user("tok")

    async def test_sign_out_tolerates_expired_session(self) -> None:
        client = _client()
        client.auth.admin.sign_out.side_effect = AuthApiError("expired", 401, None)
        await _supabase(client).sign_out("tok")
        client.auth.admin.sign_out.assert_called_once_with("tok")

    async def test_sign_out_server_error_raises(self) -> None:
        client = _client()
        client.auth.admin.sign_out.side_effect = AuthApiError("boom", 500, None)
        with pytest.raises(AuthError, match="Sign-out failed with HTTP 500"):
            await _supabase(client).sign_out("tok")

    async def test_client_is_created_once_on_first_use(self) -> None:
        client = _client(user=SimpleNamespace(id="u1"))
        with patch(
            "pagequiz.session.supabase_adapter.create_client", return_value=client
        ) as create:
            adapter = SupabaseAuthAdapter(url=SUPABASE_URL + "/", anon_key="anon-key")
            create.assert_not_called()
            await adapter.get_user("tok")
            await adapter.sign_out("tok")
        create.assert_called_once_with(SUPABASE_URL, "anon-key")

    async def test_client_creation_failure_raises_auth_error(self) -> None:
        with patch(
            "pagequiz.session.supabase_adapter.create_client",
            side_effect=ValueError("Invalid API key"),
        ):
            adapter = SupabaseAuthAdapter(url=SUPABASE_URL, anon_key="bad")
            with pytest.raises(AuthError, match="Invalid API key"):
                await adapter.get_user("tok")

class TestAuthProviderFactory:
    def test_creates_example(self) -> None:
        assert isinstance(AuthProviderFactory.create(Settings()), ExampleAuthAdapter)

    def test_creates_supabase(self) -> None:
        settings = Settings(
            auth_provider="supabase",
            supabase_url=SUPABASE_URL,
            supabase_anon_key="anon",
        )
        assert isinstance(AuthProviderFactory.create(settings), SupabaseAuthAdapter)

    def test_supabase_requires_credentials(self) -> None:
        with pytest.raises(ValueError, match="supabase_url"):
            AuthProviderFactory.create(Settings(auth_provider="supabase"))

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown auth provider"):
            AuthProviderFactory.create(Settings(auth_provider="firebase"))
