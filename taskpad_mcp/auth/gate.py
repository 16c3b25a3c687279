"""Sign-in and sign-up against a hosted Supabase identity service."""

import logging
import re
from typing import Any

import aiohttp
from pydantic import BaseModel

from taskpad_mcp.config import Settings
from taskpad_mcp.errors import AuthError, ConfigurationError, InputValidationError, RequestInFlightError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


class AuthResult(BaseModel):
    """Outcome of a successful sign-in or sign-up."""

    user_id: str | None = None
    email: str
    access_token: str | None = None
    redirect_to: str
    # Sign-up without a session: the service sent a confirmation email
    confirmation_required: bool = False


def validate_credentials(email: str, password: str) -> None:
    if not email or not EMAIL_RE.match(email.strip()):
        raise InputValidationError("Please enter a valid email address")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InputValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def _error_message(status: int, data: Any) -> str:
    if isinstance(data, dict):
        for key in ("error_description", "msg", "message", "error"):
            if isinstance(data.get(key), str) and data[key]:
                return data[key]
    return f"Authentication failed (HTTP {status})"


class AuthGate:
    """
    Wraps the identity service's password sign-in and sign-up calls.

    Errors from the service are passed through verbatim; nothing is retried.
    """

    def __init__(self, url: str | None, anon_key: str | None, redirect_to: str = "/todo", timeout: float = 30):
        if not url or not anon_key:
            raise ConfigurationError("Missing Supabase settings: set SUPABASE_URL and SUPABASE_ANON_KEY")
        url = url.strip()
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f'Invalid Supabase URL format: "{url}". Must be a valid HTTP or HTTPS URL.'
            )
        self.base_url = url.rstrip("/")
        self.anon_key = anon_key.strip()
        self.redirect_to = redirect_to
        self.timeout = timeout
        self.loading = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthGate":
        return cls(settings.supabase_url, settings.supabase_anon_key, settings.auth_redirect)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        return await self._submit("/auth/v1/token?grant_type=password", email, password)

    async def sign_up(self, email: str, password: str) -> AuthResult:
        return await self._submit("/auth/v1/signup", email, password)

    async def _submit(self, path: str, email: str, password: str) -> AuthResult:
        validate_credentials(email, password)
        if self.loading:
            raise RequestInFlightError("An authentication request is already in progress")
        email = email.strip()
        self.loading = True
        try:
            status, data = await self._post(path, {"email": email, "password": password})
        finally:
            self.loading = False
        if status >= 400:
            message = _error_message(status, data)
            logger.error("Identity service refused %s: %s", path, message)
            raise AuthError(message)
        return self._result(email, data)

    async def _post(self, path: str, payload: dict[str, Any]) -> tuple[int, Any]:
        headers = {"apikey": self.anon_key, "Authorization": f"Bearer {self.anon_key}"}
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(f"{self.base_url}{path}", json=payload, headers=headers) as response:
                    try:
                        data = await response.json(content_type=None)
                    except ValueError:
                        data = None
                    return response.status, data
        except aiohttp.ClientError as e:
            logger.error("Identity service unreachable: %s", e)
            raise AuthError(f"Could not reach the identity service: {e}") from e

    def _result(self, email: str, data: Any) -> AuthResult:
        data = data if isinstance(data, dict) else {}
        user = data.get("user") if isinstance(data.get("user"), dict) else data
        access_token = data.get("access_token")
        return AuthResult(
            user_id=user.get("id"),
            email=user.get("email") or email,
            access_token=access_token,
            redirect_to=self.redirect_to,
            confirmation_required=access_token is None,
        )


_gate: AuthGate | None = None


def get_auth_gate() -> AuthGate:
    global _gate
    if _gate is None:
        _gate = AuthGate.from_settings(Settings.from_env())
    return _gate


def set_auth_gate(gate: AuthGate | None) -> None:
    global _gate
    _gate = gate
