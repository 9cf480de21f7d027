"""Public auth exports for sharepointio."""

from __future__ import annotations

from .connection_config import ConnectionConfig
from .msal_client import GRAPH_SCOPES, MsalClient, reset_app_cache

__all__ = ["ConnectionConfig", "MsalClient", "GRAPH_SCOPES", "reset_app_cache"]
