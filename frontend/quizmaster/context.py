"""
context.py — everything a screen needs, built once per browser session.

The navigation root owns the context: it creates it at startup and resets
navigation and per-screen state when the user signs out.
"""
from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field

from quizmaster.api_client import SupabaseClient
from quizmaster.auth import AuthSession
from quizmaster.config import Config, get_config, validate_config
from quizmaster.logging_setup import configure_logging
from quizmaster.navigation import Navigator
from quizmaster.repository import QuizRepository

log = logging.getLogger(__name__)


@dataclass
class AppContext:
    config: type[Config]
    client: SupabaseClient
    repo: QuizRepository
    auth: AuthSession
    navigator: Navigator = field(default_factory=Navigator)
    # Per-screen models keyed by screen, dropped on navigation.
    screens: dict = field(default_factory=dict)

    def screen_model(self, key, factory):
        if key not in self.screens:
            self.screens.clear()
            self.screens[key] = factory()
        return self.screens[key]

    def on_auth_change(self, user) -> None:
        self.screens.clear()
        if user is None:
            self.navigator.reset()


def build_context(store: MutableMapping, env: str | None = None) -> AppContext:
    """Validate config and wire client → repository → auth session."""
    cfg = get_config(env)
    configure_logging(cfg.LOG_LEVEL)
    validate_config(cfg)
    log.info("Supabase URL: %s", cfg.SUPABASE_URL)
    log.debug("Supabase anon key length: %d", len(cfg.SUPABASE_ANON_KEY))

    client = SupabaseClient(
        cfg.SUPABASE_URL, cfg.SUPABASE_ANON_KEY, timeout=cfg.REQUEST_TIMEOUT
    )
    ctx = AppContext(
        config=cfg,
        client=client,
        repo=QuizRepository(client),
        auth=AuthSession(client, store),
    )
    ctx.auth.subscribe(ctx.on_auth_change)
    return ctx
