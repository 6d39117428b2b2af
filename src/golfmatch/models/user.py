"""
User, profile and session models.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

@dataclass
class Profile:
    """Signed-in user merged with the ``profiles`` row."""
    id: str
    email: str
    full_name: str | None = None
    handicap: float | None = None
    golf_rating: float = 0.0
    avatar_url: str | None = None
    created_at: str | None = None

    @classmethod
    def from_auth_user(cls, user: dict[str, Any], profile: dict[str, Any] | None = None) -> 'Profile':
        """Merge an auth user with its profile row, profile fields win."""
        metadata = user.get('user_metadata') or {}
        merged: dict[str, Any] = {
            'id': user.get('id'),
            'email': user.get('email'),
            'full_name': metadata.get('full_name'),
            'created_at': user.get('created_at'),
        }
        merged.update({k: v for k, v in (profile or {}).items() if v is not None})

        handicap = merged.get('handicap')
        return cls(
            id=str(merged['id']),
            email=str(merged.get('email') or ''),
            full_name=merged.get('full_name'),
            handicap=float(handicap) if handicap is not None else None,
            golf_rating=float(merged.get('golf_rating') or 0),
            avatar_url=merged.get('avatar_url'),
            created_at=merged.get('created_at')
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

DEMO_PROFILE = Profile(
    id='demo-user',
    email='demo@golfmatch.com',
    full_name='Demo User',
    handicap=18.5,
    golf_rating=7.2
)

@dataclass
class AuthSession:
    """Tokens returned by the auth service."""
    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    user: dict[str, Any] = field(default_factory=dict)
    demo: bool = False
    connection_error: str | None = None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> 'AuthSession':
        """Build a session from a token endpoint response."""
        return cls(
            access_token=str(data['access_token']),
            refresh_token=data.get('refresh_token'),
            expires_at=data.get('expires_at'),
            user=data.get('user') or {}
        )

    @classmethod
    def demo_session(cls, connection_error: str | None = None) -> 'AuthSession':
        """Session used when no backend is available."""
        return cls(
            access_token='demo-token',
            user={'id': DEMO_PROFILE.id, 'email': DEMO_PROFILE.email},
            demo=True,
            connection_error=connection_error
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
