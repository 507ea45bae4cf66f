from collections.abc import Callable

from pagequiz.logging.logger import Log
from pagequiz.session.base import BaseAuthProvider
from pagequiz.session.models import AuthUser

Teardown = Callable[[], None]


class SessionContext:
    """Explicit per-session auth state, passed to whoever needs it.

    ``load()`` restores an existing session on start-up. ``sign_out()`` runs
    every registered teardown (for example stopping the camera) before the
    provider session is invalidated, and always clears local state.
    """

    def __init__(self, provider: BaseAuthProvider) -> None:
        self._provider = provider
        self._user: AuthUser | None = None
        self._access_token: str | None = None
        self._teardowns: list[Teardown] = []

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    async def load(self, access_token: str | None) -> AuthUser | None:
        """Check for an existing session behind the token."""
        if not access_token:
            self._clear()
            return None
        user = await self._provider.get_user(access_token)
        if user is None:
            Log.info("No valid session found")
            self._clear()
            return None
        self._user = user
        self._access_token = access_token
        Log.info(f"Session restored for user {user.id}")
        return user

    def register_teardown(self, callback: Teardown) -> Callable[[], None]:
        """Register a callback run on sign-out. Returns an unregister function."""
        self._teardowns.append(callback)

        def unregister() -> None:
            if callback in self._teardowns:
                self._teardowns.remove(callback)

        return unregister

    async def sign_out(self) -> None:
        self._run_teardowns()
        token = self._access_token
        try:
            if token:
                await self._provider.sign_out(token)
                Log.info("Signed out")
        finally:
            self._clear()

    def _run_teardowns(self) -> None:
        for callback in list(self._teardowns):
            try:
                callback()
            except Exception as exc:
                Log.error(f"Session teardown failed: {exc}")

    def _clear(self) -> None:
        self._user = None
        self._access_token = None
