"""Base class for controllers routed through the container."""

from typing import Any

from forge_router.exceptions import BadMethodCallError


class Controller:
    """Base class for controller handlers.

    Routes may point at a controller action with an
    ``(identifier, method_name)`` pair. Subclassing Controller turns a
    missing action into a ``BadMethodCallError`` naming the class and method.
    """

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        raise BadMethodCallError(type(self).__name__, name)
