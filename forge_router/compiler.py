"""Route compilation and group flattening.

Collection happens in two steps. ``flatten`` walks a group tree and returns
copies of its routes with prefixed slugs and dot-joined names. ``compile_routes``
turns each route slug into a regular expression anchored to the whole path:

    /users/edit/{id}/{opt?}  ->  ^/users/edit/([^/]+)(?:/([^/]+))?$

The order of the resulting list is the dispatch order.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Pattern

from forge_router.group import Group
from forge_router.route import Route

DEFAULT_CONSTRAINT = "[^/]+"

# Placeholder segments of a slug, including their leading slash
SEGMENT_PATTERN = re.compile(r"/\{(.*?)(\?)?\}")

# Placeholders anywhere in a slug
PLACEHOLDER_PATTERN = re.compile(r"\{(.*?)(\?)?\}")


@dataclass(frozen=True)
class CompiledRoute:
    """A route paired with its match pattern and parameter map.

    ``parameters`` maps each parameter name to the capture group used for it,
    in the order the groups appear in ``pattern``.
    """

    route: Route
    parameters: Dict[str, str] = field(default_factory=dict)
    pattern: Optional[Pattern[str]] = None

    @property
    def name(self) -> str:
        """Get the name of the underlying route."""
        return self.route.name if self.route is not None else ""

    def get_parameter(self, parameter: str, default: str = "") -> str:
        """Get the capture group used for a parameter."""
        return self.parameters.get(parameter, default)

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Match a normalized path against the route pattern.

        Captures are bound to parameter names by position. Optional
        parameters that did not participate in the match are left out.

        Returns:
            The captured parameters, or None if the path does not match.
        """
        found = self.pattern.fullmatch(path)
        if found is None:
            return None
        params = {}
        for name, value in zip(self.parameters, found.groups()):
            if value is not None:
                params[name] = value
        return params


def join(parts: Iterable[str], separator: str = "/") -> str:
    """Join path components, trimming the separator from each one."""
    return separator.join(part.strip(separator) for part in parts)


def flatten(group: Group, prefix: str = "", namespace: str = "") -> List[Route]:
    """Flatten a group tree into a list of routes.

    A group's own routes come first, followed by the routes of its nested
    groups, depth first.

    Args:
        group: Route group to flatten.
        prefix: Slug prefix inherited from the enclosing groups.
        namespace: Name prefix inherited from the enclosing groups.

    Returns:
        Copies of the routes, with final slugs and names.
    """
    flattened = []
    prefix = join([prefix, group.prefix])
    namespace = join([namespace, group.name])
    for route in group.routes:
        slug = "/" + join([prefix, route.slug]).strip("/")
        name = join([namespace, route.name]).strip("/").replace("/", ".")
        flattened.append(route.copy().set_slug(slug).set_name(name))
    for subgroup in group.groups:
        flattened.extend(flatten(subgroup, prefix, namespace))
    return flattened


def compile_route(route: Route) -> CompiledRoute:
    """Compile a single route into a CompiledRoute.

    Constraint fragments are inserted verbatim into a capture group. They
    must not contain capture groups of their own, since captures are bound
    to parameters by position.
    """
    parameters: Dict[str, str] = {}

    def replace(match: "re.Match[str]") -> str:
        name, optional = match.group(1), match.group(2) == "?"
        constraint = route.get_constraint(name)
        group = f"({constraint})" if constraint else f"({DEFAULT_CONSTRAINT})"
        parameters[name] = group
        # An optional parameter takes its leading slash with it
        return f"(?:/{group})?" if optional else f"/{group}"

    pattern = SEGMENT_PATTERN.sub(replace, route.slug).rstrip("/")
    return CompiledRoute(
        route=route,
        parameters=parameters,
        pattern=re.compile(f"^{pattern}$"),
    )


def compile_routes(routes: Iterable[Route]) -> List[CompiledRoute]:
    """Compile a list of routes, preserving their order."""
    return [compile_route(route) for route in routes]
