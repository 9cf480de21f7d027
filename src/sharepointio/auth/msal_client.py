"""MSAL client utilities for sharepointio."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import msal

from sharepointio.errors import AuthError, InvalidArgumentError

from .connection_config import ConnectionConfig

logger = logging.getLogger(__name__)

# Fixed delegated scope: read/write on site document libraries.
GRAPH_SCOPES: tuple[str, ...] = ("https://graph.microsoft.com/Sites.ReadWrite.All",)

# One PublicClientApplication (and its in-memory token cache) per
# (authority, app_id) for the lifetime of the process.
_APPS: dict[tuple[str, str], Any] = {}
_APPS_LOCK = threading.Lock()


def reset_app_cache() -> None:
    """Forget all cached MSAL applications (and their tokens)."""
    with _APPS_LOCK:
        _APPS.clear()


class MsalClient:
    """Acquire and reuse delegated access tokens for Microsoft Graph."""

    def __init__(self, config: ConnectionConfig) -> None:
        if not isinstance(config, ConnectionConfig):
            raise InvalidArgumentError("MsalClient requires a ConnectionConfig")
        self._config = config
        self._app = _get_or_create_app(config.authority, config.app_id)
        self._scopes_reported = False

    @property
    def scopes(self) -> list[str]:
        return list(GRAPH_SCOPES)

    def acquire_token(self) -> str:
        """
        Return a bearer token for Graph.

        A cached account is tried silently first (msal refreshes expired tokens
        on its own); the interactive browser flow runs only when that fails.

        Raises:
            AuthError: if the interactive flow fails or returns an error.
        """
        result = self._acquire_silent()
        if result is None:
            result = self._acquire_interactive()
        if not self._scopes_reported:
            report_granted_scopes(result)
            self._scopes_reported = True
        return result["access_token"]

    def _acquire_silent(self) -> Optional[dict[str, Any]]:
        accounts = self._app.get_accounts(username=self._config.login_hint)
        if not accounts:
            return None

        try:
            result = self._app.acquire_token_silent(self.scopes, account=accounts[0])
        except Exception as exc:
            logger.debug("Silent token acquisition failed", exc_info=exc)
            return None

        if not result or "access_token" not in result:
            return None
        if "scope" not in result:
            # Cache hits omit `scope`; a hit means the requested scopes were granted.
            result = {**result, "scope": " ".join(self.scopes)}
        return result

    def _acquire_interactive(self) -> dict[str, Any]:
        logger.info(
            "Opening browser for Microsoft 365 sign-in",
            extra={"tenant": self._config.tenant_domain},
        )
        try:
            result = self._app.acquire_token_interactive(
                self.scopes,
                login_hint=self._config.login_hint,
            )
        except Exception as exc:
            raise AuthError(
                "Interactive sign-in failed",
                details={"tenant": self._config.tenant_domain},
                cause=exc,
            ) from exc

        if not result or "access_token" not in result:
            result = result or {}
            raise AuthError(
                result.get("error_description") or "Interactive sign-in did not return a token",
                details={
                    "tenant": self._config.tenant_domain,
                    "error": result.get("error"),
                },
            )

        return result


def report_granted_scopes(result: dict[str, Any]) -> list[str]:
    """
    Log the scopes granted with a token response and return them.

    Malformed scope metadata is logged as a warning; it never blocks the caller.
    """
    raw = result.get("scope")
    if not isinstance(raw, str) or not raw.strip():
        logger.warning(
            "Token response carried no readable scope list",
            extra={"scope_type": type(raw).__name__},
        )
        return []

    granted = raw.split()
    logger.info("Granted scopes: %s", ", ".join(granted))
    return granted


def _get_or_create_app(authority: str, app_id: str) -> Any:
    key = (authority, app_id)
    with _APPS_LOCK:
        app = _APPS.get(key)
        if app is None:
            try:
                app = msal.PublicClientApplication(app_id, authority=authority)
            except Exception as exc:
                raise AuthError(
                    "Failed to initialize MSAL application",
                    details={"authority": authority},
                    cause=exc,
                ) from exc
            _APPS[key] = app
        return app
