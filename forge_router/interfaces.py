"""Interfaces for the Forge router.

This module defines the protocols the router consumes from its collaborators.
The router only reads the method and path of a request, creates responses
through a factory, and recognizes responses returned by handlers.
"""

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class IRequest(Protocol):
    """Protocol defining the parts of an HTTP request the router reads."""

    @property
    def method(self) -> str:
        """Get the HTTP method."""
        ...

    @property
    def path(self) -> str:
        """Get the request path."""
        ...


@runtime_checkable
class IResponse(Protocol):
    """Protocol defining the interface for HTTP responses."""

    status_code: int
    headers: Dict[str, str]
    content: bytes

    def write(self, data: Any) -> int:
        """Append data to the response body."""
        ...


class IResponseFactory(Protocol):
    """Protocol for objects that create responses."""

    def create_response(self, status_code: int = 200) -> IResponse:
        """Create a new, empty response with the given status code."""
        ...
