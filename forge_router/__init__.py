"""Forge Router - request routing for the Forge framework.

This package matches requests against URL patterns organized in named,
prefixed groups, invokes the matched handler with dependency-injected
arguments, and builds URLs from route names.
"""

# Define version
__version__ = "0.1.0"

__all__ = [
    "BadMethodCallError",
    "CompiledRoute",
    "ConstraintViolationError",
    "Controller",
    "Group",
    "HandlerNotFound",
    "InvalidHandlerError",
    "Request",
    "Response",
    "ResponseFactory",
    "Route",
    "RouteNotFoundException",
    "RouteService",
    "Router",
    "RouterConfig",
    "RouterError",
    "UnknownRouteError",
    "UnresolvableParameterError",
]

from forge_router.compiler import CompiledRoute
from forge_router.config import RouterConfig
from forge_router.controller import Controller
from forge_router.exceptions import (
    BadMethodCallError,
    ConstraintViolationError,
    HandlerNotFound,
    InvalidHandlerError,
    RouteNotFoundException,
    RouterError,
    UnknownRouteError,
    UnresolvableParameterError,
)
from forge_router.group import Group
from forge_router.request import Request
from forge_router.response import Response, ResponseFactory
from forge_router.route import Route
from forge_router.router import Router
from forge_router.services import RouteService
