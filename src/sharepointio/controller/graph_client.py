"""Microsoft Graph HTTP client (internal use only)."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Iterator, Optional

import requests

from sharepointio.auth.connection_config import DEFAULT_GRAPH_ENDPOINT
from sharepointio.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    SharePointIOError,
    map_http_error,
)

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_BYTES: int = 1024 * 1024


class GraphClient:
    """
    Thin Graph v1.0 client (internal only).

    Notes:
        - Every request runs exactly once; there is no retry policy.
        - A fresh token is requested from `token_provider` for each call, so
          refresh stays with the authentication layer.
    """

    def __init__(
        self,
        token_provider: Callable[[], str],
        *,
        endpoint: str = DEFAULT_GRAPH_ENDPOINT,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._token_provider = token_provider
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def url(self, path: str) -> str:
        """Resolve an API-relative path; absolute URLs (e.g. nextLink) pass through."""
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._endpoint}/{path.lstrip('/')}"

    # ----------------------------
    # Public API
    # ----------------------------
    def get_json(self, path: str, *, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        resp = self._request("GET", self.url(path), params=params)
        return _json_body(resp)

    def iter_pages(
        self,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
    ) -> Iterator[dict[str, Any]]:
        """Yield `value` entries across @odata.nextLink pages."""
        next_url: Optional[str] = self.url(path)
        next_params = params
        while next_url:
            data = self.get_json(next_url, params=next_params)
            yield from data.get("value", []) or []
            next_url = data.get("@odata.nextLink")
            # nextLink already carries the query string.
            next_params = None

    def post_json(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        resp = self._request("POST", self.url(path), json=body)
        return _json_body(resp)

    def put_content(
        self,
        path: str,
        data: bytes,
        *,
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        resp = self._request(
            "PUT",
            self.url(path),
            data=data,
            params=params,
            headers={"Content-Type": "application/octet-stream"},
        )
        return _json_body(resp)

    def put_chunk(
        self,
        upload_url: str,
        chunk: bytes,
        *,
        start: int,
        total: int,
    ) -> dict[str, Any]:
        """PUT one byte range to an upload session URL (pre-authorized, no bearer token)."""
        end = start + len(chunk) - 1
        resp = self._request(
            "PUT",
            upload_url,
            data=chunk,
            headers={
                "Content-Length": str(len(chunk)),
                "Content-Range": f"bytes {start}-{end}/{total}",
            },
            authorize=False,
        )
        return _json_body(resp)

    def download_to(self, path: str, local_path: str) -> None:
        """Stream the response body of GET `path` into local_path."""
        parent_dir = os.path.dirname(local_path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)

        resp = self._request("GET", self.url(path), stream=True)
        try:
            with open(local_path, "wb") as f:
                for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                    if chunk:
                        f.write(chunk)
        except requests.RequestException as exc:
            raise NetworkError("Download interrupted", cause=exc) from exc
        finally:
            resp.close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        authorize: bool = True,
        **kwargs: Any,
    ) -> requests.Response:
        all_headers = dict(headers or {})
        if authorize:
            all_headers["Authorization"] = f"Bearer {self._token_provider()}"

        logger.debug("Graph request", extra={"method": method, "url": url})
        try:
            resp = self._session.request(
                method,
                url,
                headers=all_headers,
                timeout=self._timeout,
                **kwargs,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise NetworkError("Network error", details={"url": url}, cause=exc) from exc
        except requests.RequestException as exc:
            raise ApiError("Graph request failed", details={"url": url}, cause=exc) from exc

        if resp.status_code >= 400:
            error = _map_response_error(resp)
            # Streamed responses hold the connection until closed.
            resp.close()
            raise error
        return resp


def _json_body(resp: requests.Response) -> dict[str, Any]:
    if resp.status_code == 204 or not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError as exc:
        raise ApiError("Graph returned a non-JSON body", cause=exc) from exc
    return data if isinstance(data, dict) else {}


def _map_response_error(resp: requests.Response) -> SharePointIOError:
    info = _response_to_info(resp)
    return map_http_error(info)


def _response_to_info(resp: Any) -> HttpErrorInfo:
    status_code = getattr(resp, "status_code", None)
    code = None
    message = None
    details: dict[str, Any] = {}

    try:
        payload = resp.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict):
            code = err.get("code") if isinstance(err.get("code"), str) else None
            message = err.get("message") or None
            inner = err.get("innerError")
            if isinstance(inner, dict) and isinstance(inner.get("request-id"), str):
                details["request_id"] = inner["request-id"]

    if not isinstance(status_code, int):
        status_code = 0

    url = getattr(resp, "url", None)
    if isinstance(url, str):
        details["url"] = url

    return HttpErrorInfo(
        status_code=status_code,
        code=code,
        message=message if isinstance(message, str) else None,
        details=details or None,
    )
