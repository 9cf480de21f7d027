"""Connection settings for sharepointio (interactive delegated auth only)."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from sharepointio.errors import ConfigurationError, SecurityPolicyError

DEFAULT_AUTHORITY_HOST: str = "login.microsoftonline.com"
DEFAULT_GRAPH_ENDPOINT: str = "https://graph.microsoft.com/v1.0"

# Keys callers may set in `options`. Anything else is rejected.
ALLOWED_OPTIONS: frozenset[str] = frozenset(
    {"authority_host", "graph_endpoint", "login_hint", "timeout"}
)

# Keys that would widen the granted permissions.
_SCOPE_OPTION_KEYS: frozenset[str] = frozenset({"scope", "scopes"})

_GUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

ENV_SITE_URL: str = "SHAREPOINT_SITE_URL"
ENV_TENANT: str = "SHAREPOINT_TENANT"
ENV_APP_ID: str = "SHAREPOINT_APP_ID"


@dataclass(slots=True, frozen=True)
class ConnectionConfig:
    """
    Connection settings for one SharePoint site.

    Required:
        - site_url: https URL of the site, e.g. https://contoso.sharepoint.com/sites/team
        - tenant: tenant name, domain, or GUID
        - app_id: Azure AD application (client) id used for the browser login

    options may only contain the keys in ALLOWED_OPTIONS. The authorization
    scope is fixed and cannot be passed through options.
    """

    site_url: str
    tenant: str
    app_id: str
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key in ("site_url", "tenant", "app_id"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{key} must be a non-empty string",
                    details={"field": key},
                )

        parsed = urlparse(self.site_url.strip())
        if parsed.scheme != "https" or not parsed.hostname:
            raise ConfigurationError(
                "site_url must be an https URL with a host",
                details={"site_url": self.site_url},
            )

        if self.options is None:
            object.__setattr__(self, "options", {})
        if not isinstance(self.options, Mapping):
            raise ConfigurationError("options must be a mapping")
        _validate_options(self.options)

    @classmethod
    def from_env(cls, options: Optional[Mapping[str, Any]] = None) -> "ConnectionConfig":
        """Build a config from SHAREPOINT_SITE_URL, SHAREPOINT_TENANT and SHAREPOINT_APP_ID."""
        return cls(
            site_url=os.environ.get(ENV_SITE_URL, "").strip(),
            tenant=os.environ.get(ENV_TENANT, "").strip(),
            app_id=os.environ.get(ENV_APP_ID, "").strip(),
            options=dict(options or {}),
        )

    @property
    def hostname(self) -> str:
        """Site host, e.g. contoso.sharepoint.com."""
        return str(urlparse(self.site_url.strip()).hostname)

    @property
    def site_path(self) -> str:
        """Server-relative site path without surrounding slashes ("" for the root site)."""
        return urlparse(self.site_url.strip()).path.strip("/")

    @property
    def tenant_domain(self) -> str:
        """Tenant as used in the authority URL; bare names get .onmicrosoft.com."""
        tenant = self.tenant.strip()
        if _GUID_RE.match(tenant) or "." in tenant:
            return tenant
        return f"{tenant}.onmicrosoft.com"

    @property
    def authority(self) -> str:
        host = self.options.get("authority_host") or DEFAULT_AUTHORITY_HOST
        return f"https://{host}/{self.tenant_domain}"

    @property
    def graph_endpoint(self) -> str:
        return str(self.options.get("graph_endpoint") or DEFAULT_GRAPH_ENDPOINT).rstrip("/")

    @property
    def login_hint(self) -> Optional[str]:
        return self.options.get("login_hint")

    @property
    def timeout(self) -> Optional[float]:
        return self.options.get("timeout")


def _validate_options(options: Mapping[str, Any]) -> None:
    keys = {str(k).lower() for k in options}
    blocked = sorted(keys & _SCOPE_OPTION_KEYS)
    if blocked:
        raise SecurityPolicyError(
            "Authorization scope is fixed and cannot be overridden",
            details={"options": blocked},
        )

    unknown = sorted(str(k) for k in options if k not in ALLOWED_OPTIONS)
    if unknown:
        raise ConfigurationError(
            "Unsupported connection options",
            details={"options": unknown, "allowed": sorted(ALLOWED_OPTIONS)},
        )

    timeout = options.get("timeout")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
    ):
        raise ConfigurationError(
            "timeout must be a positive number of seconds",
            details={"timeout": timeout},
        )

    for key in ("authority_host", "graph_endpoint", "login_hint"):
        value = options.get(key)
        if value is not None and (not isinstance(value, str) or not value.strip()):
            raise ConfigurationError(
                f"options['{key}'] must be a non-empty string",
                details={"option": key},
            )
