"""HTTP request representation for the Forge router.

This module provides a minimal Request class that satisfies the IRequest
protocol. Any object exposing ``method`` and ``path`` can be dispatched; this
one exists so applications and tests have a ready-made implementation.
"""

from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlsplit


class Request:
    """HTTP request dispatched through a Router.

    The URL may be absolute (``http://localhost/users``) or a bare path
    (``/users?page=2``); only its path and query parts are kept.
    """

    def __init__(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
        query_params: Optional[Dict[str, str]] = None,
    ) -> None:
        """Initialize a new HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.).
            url: Request URL or path.
            headers: HTTP headers.
            body: Request body.
            query_params: Query parameters. Defaults to the URL's query string.
        """
        parts = urlsplit(url)
        self.method = method.upper()
        self.url = url
        self._path = parts.path or "/"
        self.headers = headers or {}
        self.body = body or b""
        if query_params is None:
            query_params = dict(parse_qsl(parts.query))
        self.query_params = query_params
        self.path_params: Dict[str, str] = {}
        self.attributes: Dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"

    @property
    def path(self) -> str:
        """Get request path."""
        return self._path

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value.

        Args:
            name: Header name.
            default: Default value if header is not set.

        Returns:
            Header value or default.
        """
        return self.headers.get(name, default)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a query parameter value."""
        return self.query_params.get(name, default)

    def get_path_param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a path parameter captured by the matched route."""
        return self.path_params.get(name, default)
