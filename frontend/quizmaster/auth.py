"""
auth.py — the signed-in user and the operations that change it.

``AuthSession`` keeps the backend session tokens in a caller-supplied mapping
(``st.session_state`` in the app) so a rerun can restore the user. Failures
are returned on ``AuthResult.error`` as user-facing text, never raised.
"""
from __future__ import annotations

import logging
import time
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Callable

from quizmaster.api_client import APIError, SupabaseClient
from quizmaster.models import AuthTokens, User

log = logging.getLogger(__name__)

TOKEN_KEYS = ("access_token", "refresh_token", "expires_at")
REFRESH_MARGIN_SECONDS = 60
MIN_PASSWORD_LENGTH = 6

_ERROR_MESSAGES = (
    (
        "Invalid login credentials",
        "Invalid email or password. Please check your credentials and try again.",
    ),
    (
        "Email not confirmed",
        "Please check your email and click the confirmation link before signing in.",
    ),
    (
        "Too many requests",
        "Too many login attempts. Please wait a few minutes before trying again.",
    ),
)
_FALLBACK_MESSAGE = "An unexpected error occurred. Please try again."

Listener = Callable[["User | None"], None]


def describe_auth_error(message: str | None) -> str:
    """Map a backend auth error to the text shown on the form."""
    text = message or ""
    for needle, friendly in _ERROR_MESSAGES:
        if needle in text:
            return friendly
    return text or _FALLBACK_MESSAGE


def validate_sign_in(email: str, password: str) -> str | None:
    if not email.strip():
        return "Please enter your email address"
    if not password.strip():
        return "Please enter your password"
    return None


def validate_sign_up(email: str, password: str, confirm: str) -> str | None:
    error = validate_sign_in(email, password)
    if error:
        return error
    if password != confirm:
        return "Passwords do not match."
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    return None


@dataclass(frozen=True)
class AuthResult:
    user: User | None = None
    error: str | None = None
    needs_confirmation: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class AuthSession:
    def __init__(
        self,
        client: SupabaseClient,
        store: MutableMapping,
        clock: Callable[[], float] = time.time,
    ):
        self._client = client
        self._store = store
        self._clock = clock
        self._listeners: list[Listener] = []
        self.user: User | None = None
        self.loading = True

    # ── Subscriptions ────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.user)

    # ── Startup ──────────────────────────────────────────────────────────────

    def initialize(self) -> User | None:
        """Resolve the persisted session, if any. Clears ``loading`` when done."""
        self.loading = True
        try:
            tokens = self._stored_tokens()
            if tokens is None:
                self.user = None
            elif self._expiring(tokens):
                log.info("Access token expired; refreshing session")
                self._establish(self._client.refresh_session(tokens.refresh_token))
            else:
                self._client.set_auth(tokens.access_token)
                self.user = User.from_row(self._client.get_user(tokens.access_token))
        except (APIError, KeyError) as exc:
            log.warning("Stored session rejected: %s", exc)
            self._clear()
        finally:
            self.loading = False
        return self.user

    def ensure_fresh(self) -> User | None:
        """Refresh the access token once it is within the expiry margin.

        Run on every rerun. A rejected refresh signs the user out.
        """
        tokens = self._stored_tokens()
        if self.user is None or tokens is None or not self._expiring(tokens):
            return self.user
        log.info("Access token expiring for %s; refreshing session", self.user.email)
        try:
            self._establish(self._client.refresh_session(tokens.refresh_token))
        except APIError as exc:
            log.warning("Session refresh failed: %s", exc)
            self._clear()
            self._notify()
        return self.user

    # ── Operations ───────────────────────────────────────────────────────────

    def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            data = self._client.sign_in_with_password(email, password)
            user = self._establish(data)
        except APIError as exc:
            log.warning("Sign in failed for %s: %s", email, exc)
            return AuthResult(error=describe_auth_error(str(exc)))
        log.info("Signed in %s", user.email)
        self._notify()
        return AuthResult(user=user)

    def sign_up(self, email: str, password: str) -> AuthResult:
        try:
            data = self._client.sign_up(email, password)
            if not data.get("access_token"):
                log.info("Sign up for %s awaiting email confirmation", email)
                return AuthResult(needs_confirmation=True)
            user = self._establish(data)
        except APIError as exc:
            log.warning("Sign up failed for %s: %s", email, exc)
            return AuthResult(error=describe_auth_error(str(exc)))
        log.info("Signed up %s", user.email)
        self._notify()
        return AuthResult(user=user)

    def sign_out(self) -> AuthResult:
        token = self._store.get("access_token")
        error = None
        if token:
            try:
                self._client.sign_out(token)
            except APIError as exc:
                log.warning("Remote sign out failed: %s", exc)
                error = describe_auth_error(str(exc))
        self._clear()
        self._notify()
        return AuthResult(error=error)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _establish(self, data: dict) -> User:
        try:
            tokens = AuthTokens.from_session(data, self._clock())
            self._client.set_auth(tokens.access_token)
            user_row = data.get("user") or self._client.get_user(tokens.access_token)
            user = User.from_row(user_row)
        except (KeyError, TypeError, ValueError) as exc:
            self._client.set_auth(None)
            raise APIError(f"Malformed session response: {exc}") from exc
        self.user = user
        self._store.update(tokens.to_dict())
        return user

    def _expiring(self, tokens: AuthTokens) -> bool:
        return tokens.expires_at - REFRESH_MARGIN_SECONDS <= self._clock()

    def _stored_tokens(self) -> AuthTokens | None:
        if not self._store.get("access_token"):
            return None
        try:
            return AuthTokens(
                access_token=str(self._store["access_token"]),
                refresh_token=str(self._store.get("refresh_token") or ""),
                expires_at=float(self._store.get("expires_at") or 0),
            )
        except (TypeError, ValueError):
            return None

    def _clear(self) -> None:
        for key in TOKEN_KEYS:
            self._store.pop(key, None)
        self._client.set_auth(None)
        self.user = None
