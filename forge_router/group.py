"""Route groups for the Forge router."""

from forge_router.registry import RouteRegistry


class Group(RouteRegistry):
    """A named, prefixed container of routes and nested groups.

    The prefix is prepended to the slugs of every route in the group, and the
    name becomes a dot-separated namespace for their names. When no name is
    set, it is derived from the prefix: ``admin/users`` becomes
    ``admin-users``.
    """

    def __init__(self, prefix: str = "", name: str = "") -> None:
        super().__init__()
        self._prefix = ""
        self._name = name
        if prefix:
            self.set_prefix(prefix)

    def __repr__(self) -> str:
        return f"<Group {self._name!r} {self._prefix}>"

    @property
    def prefix(self) -> str:
        """Get the group prefix."""
        return self._prefix

    @property
    def name(self) -> str:
        """Get the group name."""
        return self._name

    def set_prefix(self, prefix: str) -> "Group":
        """Set the group prefix, deriving the name if none was given.

        Returns:
            Self for method chaining
        """
        self._prefix = prefix
        if self._name == "":
            self._name = prefix.replace("/", "-").strip("-")
        return self

    def set_name(self, name: str) -> "Group":
        """Set the group name."""
        self._name = name
        return self
