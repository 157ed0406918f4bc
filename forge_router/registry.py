"""Route registration shared by the Router and by route groups.

Both the top-level ``Router`` and every ``Group`` collect routes and nested
groups the same way, so the behavior lives in a single mixin.
"""

from typing import TYPE_CHECKING, Any, Callable, Iterable, List

from forge_router.route import ANY_METHOD, Route

if TYPE_CHECKING:
    from forge_router.group import Group


class RouteRegistry:
    """Mixin holding an ordered list of routes and an ordered list of groups."""

    def __init__(self) -> None:
        self._routes: List[Route] = []
        self._groups: List["Group"] = []

    @property
    def routes(self) -> List[Route]:
        """Get the routes registered directly on this registry."""
        return list(self._routes)

    @property
    def groups(self) -> List["Group"]:
        """Get the groups registered directly on this registry."""
        return list(self._groups)

    def get(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the GET and HEAD methods."""
        return self._add(slug, handler, ["GET", "HEAD"], insert)

    def post(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the POST method."""
        return self._add(slug, handler, ["POST"], insert)

    def put(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the PUT method."""
        return self._add(slug, handler, ["PUT"], insert)

    def patch(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the PATCH method."""
        return self._add(slug, handler, ["PATCH"], insert)

    def options(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the OPTIONS method."""
        return self._add(slug, handler, ["OPTIONS"], insert)

    def delete(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the DELETE method."""
        return self._add(slug, handler, ["DELETE"], insert)

    def head(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for the HEAD method."""
        return self._add(slug, handler, ["HEAD"], insert)

    def any(self, slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route matching any method."""
        return self._add(slug, handler, [ANY_METHOD], insert)

    def match(self, methods: Iterable[str], slug: str, handler: Any, insert: bool = False) -> Route:
        """Add a route for specific methods."""
        return self._add(slug, handler, methods, insert)

    def _add(self, slug: str, handler: Any, methods: Iterable[str], insert: bool = False) -> Route:
        """Add a new route.

        Args:
            slug: The route slug.
            handler: The route handler.
            methods: HTTP methods accepted by the route.
            insert: Put the route first instead of appending it.

        Returns:
            The new route, for further configuration.
        """
        route = Route().set_slug(slug).set_handler(handler).set_methods(methods)
        if insert:
            self._routes.insert(0, route)
        else:
            self._routes.append(route)
        return route

    def group(self, prefix: str, builder: Callable[["Group"], Any]) -> "Group":
        """Create a nested route group.

        The builder is called with the new group before this method returns,
        so routes it adds are in place when the caller receives the group::

            router.group("users", lambda g: g.get("/", index).set_name("index")).set_name("people")

        Args:
            prefix: The group prefix, prepended to every route slug inside it.
            builder: Callable that populates the group.

        Returns:
            The new group.
        """
        # Avoid circular imports
        from forge_router.group import Group

        group = Group()
        group.set_prefix(prefix)
        builder(group)
        self._groups.append(group)
        return group
