"""HTTP response representation for the Forge router."""

import json
from typing import Any, Dict, Optional, Union


class ResponseError(Exception):
    """Exception raised for errors related to response creation."""
    pass


class Response:
    """Represents an HTTP response.

    Handlers receive a default response as their ``response`` argument and may
    write to it, or return a different Response to replace it.
    """

    def __init__(
        self,
        content: Union[str, bytes] = "",
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize a new response.

        Args:
            content: Response body
            status_code: HTTP status code
            headers: HTTP headers

        Raises:
            ResponseError: If the status code is invalid
        """
        if not isinstance(status_code, int) or status_code < 100 or status_code > 599:
            raise ResponseError(f"Invalid status code: {status_code}")

        self.status_code = status_code
        self.headers = headers or {}

        # Ensure content is bytes
        if isinstance(content, str):
            self.content = content.encode("utf-8")
        else:
            self.content = content

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"

    @property
    def text(self) -> str:
        """Get the body decoded as UTF-8."""
        return self.content.decode("utf-8")

    def write(self, data: Union[str, bytes]) -> int:
        """Append data to the response body.

        Args:
            data: Text or bytes to append

        Returns:
            The number of bytes written
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.content += data
        return len(data)

    @classmethod
    def plain(cls, content: str, status_code: int = 200) -> "Response":
        """Create a text response.

        Args:
            content: Text content
            status_code: HTTP status code

        Returns:
            Response instance
        """
        headers = {"Content-Type": "text/plain; charset=utf-8"}
        return cls(content=content, status_code=status_code, headers=headers)

    @classmethod
    def json(cls, data: Any, status_code: int = 200) -> "Response":
        """Create a JSON response.

        Raises:
            ResponseError: If data cannot be serialized to JSON
        """
        headers = {"Content-Type": "application/json"}
        try:
            content = json.dumps(data).encode("utf-8")
            return cls(content=content, status_code=status_code, headers=headers)
        except (TypeError, ValueError) as e:
            raise ResponseError(f"Failed to serialize data to JSON: {str(e)}") from e

    @classmethod
    def redirect(cls, location: str, permanent: bool = False) -> "Response":
        """Create a redirect response, typically to a URL built with Router.route."""
        status_code = 301 if permanent else 302
        headers = {"Location": location}
        return cls(content="", status_code=status_code, headers=headers)

    @classmethod
    def not_found(cls, message: str = "Not Found") -> "Response":
        """Create a 404 Not Found response."""
        return cls.plain(message, status_code=404)

    def with_header(self, name: str, value: str) -> "Response":
        """Add or update a header in the response.

        Returns:
            Self for method chaining
        """
        self.headers[name] = value
        return self

    def with_status(self, status_code: int) -> "Response":
        """Change the status code of the response.

        Raises:
            ResponseError: If the status code is invalid
        """
        if not isinstance(status_code, int) or status_code < 100 or status_code > 599:
            raise ResponseError(f"Invalid status code: {status_code}")

        self.status_code = status_code
        return self


class ResponseFactory:
    """Creates the default responses handed to route handlers."""

    def __init__(self, response_class: type = Response, headers: Optional[Dict[str, str]] = None) -> None:
        """Initialize a new ResponseFactory.

        Args:
            response_class: The class to instantiate. Must accept
                ``status_code`` and ``headers`` keyword arguments.
            headers: Headers copied into every new response.
        """
        self._response_class = response_class
        self._headers = headers or {}

    def create_response(self, status_code: int = 200) -> Response:
        """Create a new, empty response."""
        return self._response_class(status_code=status_code, headers=dict(self._headers))
