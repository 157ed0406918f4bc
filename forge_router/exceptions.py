"""Exceptions raised by the Forge router.

Every error is local to the call that raised it: a failed dispatch or a
failed reverse lookup never leaves the router in a different state.
"""

from typing import Optional


class RouterError(Exception):
    """Base class for all router errors."""

    status_code = 500


class RouteNotFoundException(RouterError, LookupError):
    """Exception raised when no route matches the given path and method."""

    status_code = 404

    def __init__(self, method: str = "", path: str = "", message: Optional[str] = None) -> None:
        """Initialize a new RouteNotFoundException.

        Args:
            method: The request method.
            path: The normalized request path.
            message: Optional custom message.
        """
        self.method = method
        self.path = path
        if message is None:
            message = f"No route found for {method} {path}".strip()
        super().__init__(message)


class InvalidHandlerError(RouterError, TypeError):
    """Exception raised when a route handler can not be turned into a callable."""

    def __init__(self, handler: object = None) -> None:
        self.handler = handler
        super().__init__("Invalid handler specified")


class UnresolvableParameterError(RouterError, RuntimeError):
    """Exception raised when a handler argument has no value source."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Can not resolve parameter '{parameter}'")


class UnknownRouteError(RouterError, LookupError):
    """Exception raised when reverse routing is asked for an unknown name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown route '{name}'")


class ConstraintViolationError(RouterError, ValueError):
    """Exception raised when a required URL parameter fails its constraint."""

    def __init__(self, parameter: str, value: object = None) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(f"Required parameter '{parameter}' does not match condition")


class BadMethodCallError(RouterError, AttributeError):
    """Exception raised when a controller action does not exist."""

    def __init__(self, owner: str, method: str) -> None:
        self.owner = owner
        self.method = method
        super().__init__(f"Method '{owner}.{method}' does not exist")


# Name used by forge_core's kernel and HTTP service
HandlerNotFound = RouteNotFoundException
