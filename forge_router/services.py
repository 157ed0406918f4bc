"""Service layer for the Forge router.

This module provides the RouteService, which dispatches requests through one
or more routers and turns router errors into HTTP responses.
"""

import logging
import traceback
from typing import Any, Dict, List, Optional, Tuple

from kink import Container
from kink.errors import ContainerError

from forge_router.compiler import CompiledRoute
from forge_router.config import RouterConfig
from forge_router.exceptions import RouteNotFoundException, RouterError
from forge_router.interfaces import IRequest, IResponse
from forge_router.response import Response, ResponseFactory
from forge_router.router import Router

logger = logging.getLogger(__name__)


class BaseService:
    """Base class for services in the Forge framework."""

    def __init__(self, container: Optional[Container] = None) -> None:
        """Initialize a new BaseService.

        Args:
            container: Optional dependency injection container. If not provided,
                       a new container will be created.
        """
        self._container = container or Container()

    @property
    def container(self) -> Container:
        """Get the dependency injection container used by this service."""
        return self._container


class RouteService(BaseService):
    """Service dispatching requests through registered routers.

    Routers are tried in registration order; the first one with a matching
    route handles the request.
    """

    def __init__(self, container: Optional[Container] = None, config: Optional[RouterConfig] = None) -> None:
        """Initialize a new RouteService.

        Args:
            container: Optional dependency injection container.
            config: Optional router configuration, applied to routers the
                    service creates.
        """
        super().__init__(container)
        self._config = config or RouterConfig()
        self._factory = ResponseFactory()
        self._routers: List[Router] = []

    @property
    def routers(self) -> List[Router]:
        """Get the registered routers."""
        return list(self._routers)

    @property
    def config(self) -> RouterConfig:
        """Get the router configuration."""
        return self._config

    def create_router(self) -> Router:
        """Create, configure and register a router sharing this service's container."""
        router = Router(self._container, self._factory).configure(self._config)
        self.register_router(router)
        return router

    def register_router(self, router: Router) -> None:
        """Register a router with the service.

        Args:
            router: The router to register.
        """
        self._routers.append(router)

    def match_route(self, request: IRequest) -> Tuple[CompiledRoute, Dict[str, str]]:
        """Match a request to a route.

        Args:
            request: The request to match.

        Returns:
            The compiled route and its path parameters.

        Raises:
            RouteNotFoundException: If no router has a matching route.
        """
        for router in self._routers:
            try:
                return router.find(request.method, request.path)
            except RouteNotFoundException:
                continue
        raise RouteNotFoundException(request.method, request.path)

    def dispatch(self, request: IRequest) -> IResponse:
        """Dispatch a request through the registered routers.

        Raises:
            RouteNotFoundException: If no router has a matching route.
        """
        for router in self._routers:
            try:
                router.find(request.method, request.path)
            except RouteNotFoundException:
                continue
            return router.dispatch(request)
        raise RouteNotFoundException(request.method, request.path)

    def handle(self, request: IRequest) -> IResponse:
        """Handle a request, converting router errors into responses.

        Args:
            request: The HTTP request to handle.

        Returns:
            The handler's response, a 404 response, or an error response.
        """
        try:
            return self.dispatch(request)
        except RouteNotFoundException:
            return Response.not_found()
        except (RouterError, ContainerError) as e:
            return self._handle_error(e)

    def _handle_error(self, error: Exception) -> IResponse:
        """Create an error response for a router or container error."""
        logger.exception("Error handling request: %s", error)

        error_data: Dict[str, Any] = {
            "error": str(error),
            "type": error.__class__.__name__,
        }
        if self._config.debug:
            error_data["traceback"] = traceback.format_exception(
                type(error), error, error.__traceback__
            )
        return Response.json(error_data, status_code=getattr(error, "status_code", 500))
