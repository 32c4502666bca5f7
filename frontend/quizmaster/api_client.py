"""
api_client.py — single HTTP client for all frontend → Supabase communication.
Table reads/writes go to PostgREST (/rest/v1), identity to GoTrue (/auth/v1).
Always attaches the anon key, plus the user's access token once signed in.
"""
from __future__ import annotations

import logging

import requests

log = logging.getLogger(__name__)

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class APIError(Exception):
    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


def eq(value) -> str:
    """PostgREST equality filter value."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


def _raise(resp: requests.Response) -> None:
    if not resp.ok:
        try:
            body = resp.json()
        except ValueError:
            body = None
        msg = ""
        if isinstance(body, dict):
            for key in ("msg", "error_description", "message", "error"):
                if body.get(key):
                    msg = str(body[key])
                    break
        raise APIError(msg or resp.text or resp.reason or "", resp.status_code)


class SupabaseClient:
    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        timeout: int = 10,
        session: requests.Session | None = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout
        self.access_token: str | None = None
        self._http = session or requests.Session()

    def set_auth(self, access_token: str | None) -> None:
        self.access_token = access_token

    def _headers(self, token: str | None = None, extra: dict | None = None) -> dict:
        h = {
            "Content-Type": "application/json",
            "apikey": self.anon_key,
            "Authorization": f"Bearer {token or self.access_token or self.anon_key}",
        }
        if extra:
            h.update(extra)
        return h

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        log.debug("%s %s params=%s", method, path, kwargs.get("params"))
        try:
            resp = self._http.request(
                method, f"{self.url}{path}", timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise APIError(f"Network error: {exc}") from exc
        _raise(resp)
        return resp

    # ── Tables ───────────────────────────────────────────────────────────────

    def select(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: dict | None = None,
        order: str | None = None,
        limit: int | None = None,
        single: bool = False,
    ):
        """Run a PostgREST read. Returns a list of rows, or one row if ``single``."""
        params = {"select": columns}
        for column, condition in (filters or {}).items():
            params[column] = condition
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        extra = {"Accept": _SINGLE_OBJECT} if single else None
        resp = self._request(
            "GET", f"/rest/v1/{table}", params=params, headers=self._headers(extra=extra)
        )
        return resp.json()

    def insert(self, table: str, row: dict) -> dict:
        resp = self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            headers=self._headers(extra={"Prefer": "return=representation"}),
        )
        data = resp.json()
        if isinstance(data, list):
            return data[0] if data else {}
        return data

    # ── Auth ─────────────────────────────────────────────────────────────────

    def sign_in_with_password(self, email: str, password: str) -> dict:
        resp = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._headers(token=self.anon_key),
        )
        return resp.json()

    def refresh_session(self, refresh_tok: str) -> dict:
        resp = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_tok},
            headers=self._headers(token=self.anon_key),
        )
        return resp.json()

    def sign_up(self, email: str, password: str) -> dict:
        resp = self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password},
            headers=self._headers(token=self.anon_key),
        )
        return resp.json()

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/auth/v1/logout", headers=self._headers(token=access_token))

    def get_user(self, access_token: str) -> dict:
        resp = self._request("GET", "/auth/v1/user", headers=self._headers(token=access_token))
        return resp.json()
