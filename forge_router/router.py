"""Router implementation for Forge framework.

The Router registers routes and groups, compiles them into match patterns,
dispatches requests to the first matching route, and builds URLs from route
names.

Compiled routes are cached. The cache is built on first use and is NOT
invalidated when routes or groups are added later: call
``collect(force=True)`` after late registrations to see them.

The router keeps no locks. Finish registering routes before sharing a router
between threads.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

from kink import Container
from kink.errors import ContainerError

from forge_router import handlers
from forge_router.compiler import (
    DEFAULT_CONSTRAINT,
    PLACEHOLDER_PATTERN,
    CompiledRoute,
    compile_routes,
    flatten,
)
from forge_router.exceptions import (
    ConstraintViolationError,
    RouteNotFoundException,
    UnknownRouteError,
    UnresolvableParameterError,
)
from forge_router.interfaces import IRequest, IResponse, IResponseFactory
from forge_router.registry import RouteRegistry
from forge_router.response import ResponseFactory

logger = logging.getLogger(__name__)


class Router(RouteRegistry):
    """Request router with route groups, dependency injection and reverse routing.

    Example::

        router = Router(container)
        router.get("/users/{id}", show_user).set_name("users.show")
        response = router.dispatch(Request("GET", "/users/42"))
        url = router.route("users.show", {"id": 42})
    """

    def __init__(
        self,
        container: Optional[Container] = None,
        factory: Optional[IResponseFactory] = None,
    ) -> None:
        """Initialize a new Router.

        Args:
            container: Dependency injection container used to resolve
                controllers and typed handler arguments. If not provided,
                a new container will be created.
            factory: Factory for the default response passed to handlers.
                If not provided, a ResponseFactory is used.
        """
        super().__init__()
        self._container = container or Container()
        self._factory = factory or ResponseFactory()
        self._compiled: List[CompiledRoute] = []
        self._collected = False
        self._default = "/index"
        self._directory = ""

    @property
    def container(self) -> Container:
        """Get the dependency injection container used by this router."""
        return self._container

    @property
    def factory(self) -> IResponseFactory:
        """Get the response factory used by this router."""
        return self._factory

    @property
    def default(self) -> str:
        """Get the path dispatched when the request path is empty."""
        return self._default

    @property
    def directory(self) -> str:
        """Get the directory prefix stripped from request paths."""
        return self._directory

    @property
    def collected(self) -> bool:
        """Check if the compiled route cache has been built."""
        return self._collected

    def set_default(self, default: str) -> "Router":
        """Set the default route path.

        Returns:
            Self for method chaining
        """
        self._default = default
        return self

    def set_directory(self, directory: str) -> "Router":
        """Set the directory the application is served from, e.g. ``/app``."""
        self._directory = directory.strip("/")
        return self

    def configure(self, config: Any) -> "Router":
        """Apply the ``default`` and ``directory`` settings of a RouterConfig."""
        self.set_default(config.default)
        self.set_directory(config.directory)
        return self

    def collect(self, force: bool = False) -> List[CompiledRoute]:
        """Flatten groups and compile all routes.

        The result is cached until ``force`` is set.

        Args:
            force: Rebuild the cache even if it already exists.

        Returns:
            The compiled routes, in dispatch order.
        """
        if force or not self._collected:
            routes = list(self._routes)
            for group in self._groups:
                routes.extend(flatten(group))
            self._compiled = compile_routes(routes)
            self._collected = True
            logger.debug("Collected %d routes", len(self._compiled))
        return self._compiled

    def normalize(self, path: str) -> str:
        """Strip the directory prefix and apply the default route.

        Args:
            path: The raw request path.

        Returns:
            The path matched against route patterns, with one leading slash.
        """
        path = path.lstrip("/")
        if self._directory and path.startswith(self._directory):
            path = path[len(self._directory):]
        path = path.strip("/")
        if not path:
            path = self._default.strip("/")
        return f"/{path}"

    def find(self, method: str, path: str) -> Tuple[CompiledRoute, Dict[str, str]]:
        """Find the first compiled route matching a method and raw path.

        Args:
            method: The request method.
            path: The raw request path.

        Returns:
            The compiled route and the captured path parameters.

        Raises:
            RouteNotFoundException: If no route matches.
        """
        resource = self.normalize(path)
        method = method.upper()
        for entry in self.collect():
            if not entry.route.has_method(method):
                continue
            params = entry.match(resource)
            if params is not None:
                logger.debug("Matched %s %s to route %r", method, resource, entry.name)
                return entry, params
        logger.info("No route found for %s %s", method, resource)
        raise RouteNotFoundException(method, resource)

    def dispatch(self, request: IRequest) -> IResponse:
        """Dispatch a request to the handler of the first matching route.

        The handler's arguments are bound by name: ``request`` and
        ``response`` receive the request and the default response, other
        names receive path parameters, then declared defaults, then an
        instance of the declared type from the container.

        Args:
            request: The request to dispatch.

        Returns:
            The response returned by the handler, or the default response.

        Raises:
            RouteNotFoundException: If no route matches.
            InvalidHandlerError: If the route handler is not supported.
            UnresolvableParameterError: If a handler argument can not be bound.
        """
        compiled, params = self.find(request.method, request.path)
        path_params = getattr(request, "path_params", None)
        if isinstance(path_params, dict):
            path_params.update(params)

        func, parameters = handlers.resolve(compiled.route.handler, self._container)
        response = self._factory.create_response(200)
        args, kwargs = self._bind(parameters, params, request, response)

        result = func(*args, **kwargs)
        if isinstance(result, IResponse):
            response = result
        return response

    def _bind(
        self,
        parameters: List[handlers.HandlerParameter],
        params: Dict[str, str],
        request: IRequest,
        response: IResponse,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Bind handler arguments to their values."""
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter in parameters:
            if parameter.name == "request":
                value = request
            elif parameter.name == "response":
                value = response
            elif parameter.name in params:
                try:
                    value = handlers.convert(params[parameter.name], parameter.annotation)
                except ValueError as e:
                    raise RouteNotFoundException(
                        request.method.upper(),
                        self.normalize(request.path),
                        message=f"Invalid value for parameter '{parameter.name}': {params[parameter.name]!r}",
                    ) from e
            elif parameter.has_default:
                value = parameter.default
            else:
                value = self._inject(parameter)

            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _inject(self, parameter: handlers.HandlerParameter) -> Any:
        """Resolve a handler argument from the container."""
        if not parameter.has_annotation:
            raise UnresolvableParameterError(parameter.name)
        try:
            return self._container[parameter.annotation]
        except (ContainerError, KeyError, TypeError) as e:
            raise UnresolvableParameterError(parameter.name) from e

    def route(self, name: str, parameters: Optional[Dict[str, Any]] = None) -> str:
        """Get the URL of a named route.

        Placeholders in the route slug are replaced with the given
        parameters. Parameters that are not placeholders are appended as a
        query string.

        Args:
            name: The route name, e.g. ``admin.users.edit``.
            parameters: Values for the route placeholders and query string.

        Returns:
            The route path.

        Raises:
            UnknownRouteError: If no route has the given name.
            ConstraintViolationError: If a required parameter is missing or
                does not match its constraint.
        """
        compiled = next((entry for entry in self.collect() if entry.name == name), None)
        if compiled is None:
            raise UnknownRouteError(name)

        remaining = dict(parameters or {})

        def replace(match: "re.Match[str]") -> str:
            key, optional = match.group(1), match.group(2) == "?"
            value = remaining.pop(key, None)
            text = "" if value is None else str(value)
            constraint = compiled.get_parameter(key, f"({DEFAULT_CONSTRAINT})")
            if re.fullmatch(constraint, text) is None:
                if not optional:
                    raise ConstraintViolationError(key, value)
                return ""
            return text

        path = PLACEHOLDER_PATTERN.sub(replace, compiled.route.slug)
        # Empty optional parameters leave repeated or trailing slashes behind
        path = re.sub(r"/+", "/", path)
        if len(path) > 1:
            path = path.rstrip("/")
        # Null values are left out of the query string
        query = {key: value for key, value in remaining.items() if value is not None}
        if query:
            path = f"{path}?{urlencode(query, doseq=True)}"

        if not path:
            raise UnknownRouteError(name)
        return path

    url_for = route

