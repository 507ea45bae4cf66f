from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthUser:
    """Signed-in user as reported by the auth provider (subset of fields)."""

    id: str
    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    created_at: str | None = None
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or "User"

    @property
    def initials(self) -> str:
        source = self.email or self.full_name or "U"
        return source[0].upper()
