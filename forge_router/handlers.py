"""Route handler resolution and argument description.

A route handler is either a callable or an ``(identifier, method_name)``
pair. A pair is resolved by fetching ``identifier`` from the dependency
injection container and looking up ``method_name`` on the instance, which is
how controller actions are routed::

    router.get("/users", (UserController, "index"))

The router binds handler arguments by name. This module describes the
arguments a callable expects so the router does not have to inspect
signatures itself.
"""

import inspect
import types
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple, Union, get_args, get_origin, get_type_hints

from kink import Container

from forge_router.exceptions import InvalidHandlerError

EMPTY = inspect.Parameter.empty

# Scalar types a captured path value is converted to before binding
CONVERTERS: Dict[type, Callable[[str], Any]] = {
    int: int,
    float: float,
    str: str,
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

# typing.Union and, on Python 3.10+, the type of `int | None`
_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)


@dataclass(frozen=True)
class HandlerParameter:
    """One argument of a route handler."""

    name: str
    annotation: Any = EMPTY
    default: Any = EMPTY
    keyword_only: bool = False

    @property
    def has_default(self) -> bool:
        """Check if the argument declares a default value."""
        return self.default is not EMPTY

    @property
    def has_annotation(self) -> bool:
        """Check if the argument declares a type."""
        return self.annotation is not EMPTY


@dataclass(frozen=True)
class DirectHandler:
    """A handler that is called as-is."""

    func: Callable[..., Any]


@dataclass(frozen=True)
class ContainerMethodHandler:
    """A handler naming a container service and one of its methods."""

    identifier: Any
    method: str

    def bind(self, container: Container) -> Callable[..., Any]:
        """Fetch the service from the container and return the bound method.

        Errors raised by the container are not converted.
        """
        instance = container[self.identifier]
        return getattr(instance, self.method)


HandlerSpec = Union[DirectHandler, ContainerMethodHandler]


def parse_handler(handler: Any) -> HandlerSpec:
    """Classify a route handler.

    Args:
        handler: The handler stored on the route.

    Returns:
        The handler shape.

    Raises:
        InvalidHandlerError: If the handler is neither a callable nor a
            complete ``(identifier, method_name)`` pair.
    """
    if isinstance(handler, (tuple, list)):
        identifier = handler[0] if len(handler) > 0 else None
        method = handler[1] if len(handler) > 1 else None
        if identifier and method and isinstance(method, str):
            return ContainerMethodHandler(identifier, method)
        raise InvalidHandlerError(handler)
    if callable(handler):
        return DirectHandler(handler)
    raise InvalidHandlerError(handler)


def describe(func: Callable[..., Any]) -> List[HandlerParameter]:
    """Describe the named arguments a callable expects, in declaration order.

    Variadic arguments (``*args`` and ``**kwargs``) are not listed. Types are
    taken from evaluated type hints when possible and from the raw
    annotations otherwise.
    """
    signature = inspect.signature(func)
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        # Unresolvable forward references; keep the raw annotations
        hints = {}

    parameters = []
    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        parameters.append(
            HandlerParameter(
                name=parameter.name,
                annotation=hints.get(parameter.name, parameter.annotation),
                default=parameter.default,
                keyword_only=parameter.kind == parameter.KEYWORD_ONLY,
            )
        )
    return parameters


def _convert_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in _UNION_TYPES:
        remaining = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(remaining) == 1:
            return remaining[0]
    return annotation


def convert(value: str, annotation: Any) -> Any:
    """Convert a captured path value to the declared scalar type.

    Values for arguments without a scalar annotation are returned unchanged.

    Raises:
        ValueError: If the value is not valid for the declared type.
    """
    annotation = _unwrap_optional(annotation)
    if annotation is bool:
        return _convert_bool(value)
    converter = CONVERTERS.get(annotation)
    if converter is None:
        return value
    return converter(value)


def resolve(handler: Any, container: Container) -> Tuple[Callable[..., Any], List[HandlerParameter]]:
    """Turn a route handler into a callable and its argument description.

    Raises:
        InvalidHandlerError: If the handler shape is not supported.
    """
    spec = parse_handler(handler)
    if isinstance(spec, ContainerMethodHandler):
        func = spec.bind(container)
    else:
        func = spec.func
    return func, describe(func)
