"""In-memory auth provider for local development and tests."""

from pagequiz.session.base import BaseAuthProvider
from pagequiz.session.models import AuthUser


class ExampleAuthAdapter(BaseAuthProvider):
    DEFAULT_TOKEN = "example-token"

    def __init__(self, user: AuthUser | None = None, token: str = DEFAULT_TOKEN) -> None:
        self._sessions: dict[str, AuthUser] = {
            token: user or AuthUser(id="example-user", email="student@example.com"),
        }

    async def get_user(self, access_token: str) -> AuthUser | None:
        return self._sessions.get(access_token)

    async def sign_out(self, access_token: str) -> None:
        self._sessions.pop(access_token, None)
