r"""Route definition for the Forge router.

A Route is created by a registry (see ``forge_router.registry``) and then
configured through its fluent setters::

    router.get("/user/{id}", show_user).set_name("user.show").where("id", r"\d+")

Routes are only read once the router has collected them. Flattening a group
tree produces copies, so the Route objects held by a Group are never
rewritten.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional

ANY_METHOD = "*"


class Route:
    """A single routable unit: slug pattern, methods, name, handler and constraints."""

    def __init__(
        self,
        slug: str = "",
        handler: Any = None,
        methods: Optional[Iterable[str]] = None,
        name: str = "",
    ) -> None:
        """Initialize a new Route.

        Args:
            slug: The path template, e.g. ``/users/edit/{id}/{opt?}``.
            handler: A callable or an ``(identifier, method_name)`` pair.
            methods: HTTP methods accepted by the route. ``*`` accepts any.
            name: The route name used for reverse routing.
        """
        self._name = name
        self._slug = slug
        self._handler = handler
        self._methods: List[str] = []
        self._constraints: Dict[str, str] = {}
        if methods is not None:
            self.set_methods(methods)

    def __repr__(self) -> str:
        return f"<Route {self._name!r} {'|'.join(self._methods)} {self._slug}>"

    @property
    def name(self) -> str:
        """Get the route name."""
        return self._name

    @property
    def slug(self) -> str:
        """Get the route slug."""
        return self._slug

    @property
    def handler(self) -> Any:
        """Get the route handler."""
        return self._handler

    @property
    def methods(self) -> List[str]:
        """Get the upper-cased methods accepted by the route."""
        return list(self._methods)

    @property
    def constraints(self) -> Dict[str, str]:
        """Get the parameter constraints, keyed by parameter name."""
        return dict(self._constraints)

    def has_method(self, method: str) -> bool:
        """Check if the route accepts the given HTTP method.

        Args:
            method: HTTP method, in any case.

        Returns:
            True if the route accepts any method or this one.
        """
        return ANY_METHOD in self._methods or method.upper() in self._methods

    def get_constraint(self, parameter: str) -> str:
        """Get the constraint regex for a parameter, or an empty string."""
        return self._constraints.get(parameter, "")

    def set_name(self, name: str) -> "Route":
        """Set the route name.

        Returns:
            Self for method chaining
        """
        self._name = name
        return self

    def set_slug(self, slug: str) -> "Route":
        """Set the route slug."""
        self._slug = slug
        return self

    def set_handler(self, handler: Any) -> "Route":
        """Set the route handler. The handler shape is checked at dispatch time."""
        self._handler = handler
        return self

    def set_methods(self, methods: Iterable[str]) -> "Route":
        """Set the route methods.

        An empty list is accepted; such a route never matches a request.
        """
        self._methods = [method.upper() for method in methods]
        return self

    def set_constraint(self, parameter: str, constraint: str) -> "Route":
        """Restrict the text a parameter accepts.

        Args:
            parameter: Parameter name, as written in the slug.
            constraint: Regular expression fragment, e.g. ``\\d+``.
        """
        self._constraints[parameter] = constraint
        return self

    where = set_constraint

    def copy(self) -> "Route":
        """Return an independent copy of the route."""
        clone = copy.copy(self)
        clone._methods = list(self._methods)
        clone._constraints = dict(self._constraints)
        return clone
