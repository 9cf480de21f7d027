"""Connect to a SharePoint site and open its document libraries."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from sharepointio.auth import ConnectionConfig, MsalClient
from sharepointio.controller import GraphClient, SharePointDrive, SharePointSite
from sharepointio.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def connect(
    site_url: str,
    tenant: str,
    app_id: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    session: Optional[requests.Session] = None,
) -> SharePointSite:
    """
    Sign in and return a handle to the SharePoint site at site_url.

    The first call in a process opens the browser for an interactive
    sign-in; later calls with the same tenant and app_id reuse the cached
    token.

    Raises:
        ConfigurationError: missing/invalid site_url, tenant, app_id or options.
        SecurityPolicyError: options tries to override the authorization scope.
        AuthError: sign-in failed.
        NotFoundError: the site does not exist.
    """
    config = ConnectionConfig(
        site_url=site_url,
        tenant=tenant,
        app_id=app_id,
        options=dict(options or {}),
    )
    return connect_with_config(config, session=session)


def connect_with_config(
    config: ConnectionConfig,
    *,
    session: Optional[requests.Session] = None,
) -> SharePointSite:
    """Same as connect(), from a prepared ConnectionConfig."""
    if not isinstance(config, ConnectionConfig):
        raise InvalidArgumentError("config must be a ConnectionConfig")

    logger.info("Connecting to SharePoint site...", extra={"site_url": config.site_url})
    auth = MsalClient(config)
    # Authenticate up front so sign-in problems surface here, not on first read.
    auth.acquire_token()

    client = GraphClient(
        auth.acquire_token,
        endpoint=config.graph_endpoint,
        timeout=config.timeout,
        session=session,
    )
    site = SharePointSite.resolve(client, config.hostname, config.site_path)
    logger.info("Connected to SharePoint site: %s", site.name or config.site_url)
    return site


def get_drive(site: SharePointSite, drive_name: str) -> SharePointDrive:
    """
    Return the document library (drive) named drive_name on site.

    Raises:
        InvalidArgumentError: site is not a site handle or drive_name is empty.
        NotFoundError: the site has no such drive.
    """
    if not isinstance(site, SharePointSite):
        raise InvalidArgumentError("site must be a site handle returned by connect")

    logger.info("Accessing drive: %s", drive_name)
    return site.get_drive(drive_name)
