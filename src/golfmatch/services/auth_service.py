"""
Authentication and profile service.
"""

from dataclasses import dataclass
from typing import Any

from golfmatch.api.backend import BackendClient
from golfmatch.config.types import AppConfig
from golfmatch.error_codes import ErrorCode
from golfmatch.exceptions import APIError
from golfmatch.exceptions import APIValidationError
from golfmatch.exceptions import AuthError
from golfmatch.exceptions import ValidationError
from golfmatch.models.user import DEMO_PROFILE
from golfmatch.models.user import AuthSession
from golfmatch.models.user import Profile
from golfmatch.utils.logging_utils import EnhancedLoggerMixin


def is_network_error(error: Exception) -> bool:
    """Whether an API error means the backend could not be reached at all."""
    return (
        isinstance(error, APIError)
        and not isinstance(error, APIValidationError)
        and error.status_code is None
    )

@dataclass
class SignUpResult:
    """Outcome of a registration."""
    session: AuthSession | None
    user: dict[str, Any]
    verification_pending: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            'session': self.session.to_dict() if self.session else None,
            'user': self.user,
            'verification_pending': self.verification_pending
        }

def _require_credentials(email: str | None, password: str | None) -> tuple[str, str]:
    email = (email or '').strip()
    if not email or not password:
        raise ValidationError("Email and password are required")
    if '@' not in email:
        raise ValidationError("Invalid email address", {"email": email})
    return email, password

class AuthService(EnhancedLoggerMixin):
    """Sign-up, sign-in and session lookup against the hosted auth service."""

    def __init__(self, config: AppConfig, backend: BackendClient | None = None):
        super().__init__()
        self.config = config
        self._backend = backend
        self.set_log_context(service="auth")

    @property
    def demo_mode(self) -> bool:
        return self._backend is None and self.config.demo_mode

    @property
    def backend(self) -> BackendClient:
        if self._backend is None:
            self._backend = BackendClient.from_config(self.config)
        return self._backend

    def _connection_error(self) -> str | None:
        """Probe the backend, returning the failure message if it is unreachable."""
        timeout = float(self.config.backend.get('connection_check_timeout', 5.0))
        try:
            self.backend.check_connection(timeout=timeout)
        except APIError as e:
            self.warning(f"Backend connection check failed, switching to demo mode: {e.message}")
            return e.message
        return None

    def sign_up(self, email: str | None, password: str | None) -> SignUpResult:
        """Register a new account.

        The display name defaults to the part of the email before ``@``.
        """
        email, password = _require_credentials(email, password)

        connection_error = None if self.demo_mode else self._connection_error()
        if self.demo_mode or connection_error:
            session = AuthSession.demo_session(connection_error)
            return SignUpResult(session, dict(session.user), False)

        site_url = str(self.config.server.get('site_url', '')).rstrip('/')
        try:
            data = self.backend.sign_up(
                email,
                password,
                data={'full_name': email.split('@')[0]},
                redirect_to=f"{site_url}/profile" if site_url else None
            )
        except APIError as e:
            if is_network_error(e):
                session = AuthSession.demo_session(e.message)
                return SignUpResult(session, dict(session.user), False)
            raise

        if data.get('access_token'):
            session = AuthSession.from_response(data)
            self.info("Signed up with immediate session")
            return SignUpResult(session, session.user, False)

        user = data.get('user') or data
        self.info("Signed up, email verification pending")
        return SignUpResult(None, user, True)

    def sign_in(self, email: str | None, password: str | None) -> AuthSession:
        """Sign in with email and password.

        Without a backend, or when it cannot be reached, a demo session is
        returned instead.

        Raises:
            AuthError: If the backend rejects the credentials
        """
        email, password = _require_credentials(email, password)

        if self.demo_mode:
            self.debug("Backend not configured, signing in demo user")
            return AuthSession.demo_session()

        connection_error = self._connection_error()
        if connection_error:
            return AuthSession.demo_session(connection_error)

        try:
            data = self.backend.sign_in_with_password(email, password)
        except APIError as e:
            if is_network_error(e):
                self.warning("Network error during sign-in, switching to demo mode")
                return AuthSession.demo_session(e.message)
            raise

        session = AuthSession.from_response(data)
        self.info("Signed in", user_id=session.user.get('id'))
        return session

    def sign_out(self, access_token: str | None) -> None:
        if not access_token or self.demo_mode:
            return
        self.backend.sign_out(access_token)

    def get_user(self, access_token: str | None) -> dict[str, Any]:
        """Get the auth user behind a token.

        Raises:
            AuthError: If there is no valid session
        """
        if self.demo_mode:
            return dict(AuthSession.demo_session().user)
        if not access_token:
            raise AuthError("Not signed in", code=ErrorCode.AUTH_REQUIRED)
        user = self.backend.get_user(access_token)
        if not user.get('id'):
            raise AuthError("Session expired or invalid", code=ErrorCode.AUTH_REQUIRED)
        return user

    def get_session(self, access_token: str | None) -> AuthSession | None:
        """Current session for a token, None when signed out."""
        if self.demo_mode:
            return AuthSession.demo_session()
        if not access_token:
            return None
        try:
            user = self.get_user(access_token)
        except AuthError:
            return None
        return AuthSession(access_token=access_token, user=user)

    def get_profile(self, access_token: str | None) -> Profile:
        """The signed-in user's profile.

        Raises:
            AuthError: If there is no valid session
        """
        if self.demo_mode:
            return DEMO_PROFILE

        user = self.get_user(access_token)
        profile_row: dict[str, Any] | None = None
        try:
            profile_row = self.backend.select(
                'profiles',
                filters={'id': user['id']},
                single=True,
                access_token=access_token
            )
        except APIError as e:
            self.warning(f"Error fetching profile: {e.message}", user_id=user['id'])

        if profile_row is None:
            self.debug("No profile row, using auth user only", user_id=user['id'])
        return Profile.from_auth_user(user, profile_row)
