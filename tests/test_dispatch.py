"""Tests for Router.dispatch."""

from typing import Optional

import pytest

from conftest import UserController
from forge_router.exceptions import (
    BadMethodCallError,
    InvalidHandlerError,
    RouteNotFoundException,
    UnresolvableParameterError,
)
from forge_router.request import Request
from forge_router.response import Response, ResponseFactory
from forge_router.router import Router


class Mailer:
    """Service resolved from the container by type."""

    def __init__(self, sender="noreply@example.com"):
        self.sender = sender


def test_dispatch_simple(router, request_factory):
    """Test dispatching static routes and the default route."""
    router.set_default("/home")
    router.get("/home", lambda request, response: response.write("HOME")).set_name("test.home")
    router.get("/about", lambda request, response: response.write("ABOUT")).set_name("test.about")

    assert router.default == "/home"

    response = router.dispatch(request_factory("GET", "http://localhost/"))
    assert isinstance(response, Response)
    assert response.status_code == 200
    assert response.text == "HOME"

    response = router.dispatch(request_factory("GET", "http://localhost/about"))
    assert response.text == "ABOUT"


def test_dispatch_non_existing(router, request_factory):
    """Test that unmatched paths raise RouteNotFoundException."""
    router.get("/home", lambda response: response.write("HOME"))

    with pytest.raises(RouteNotFoundException) as excinfo:
        router.dispatch(request_factory("GET", "http://localhost/contact"))

    assert excinfo.value.status_code == 404
    assert excinfo.value.path == "/contact"


def test_dispatch_wrong_method(router, request_factory):
    """Test that a route registered for one method ignores others."""
    router.post("/form", lambda response: response.write("POSTED"))

    assert router.dispatch(request_factory("POST", "/form")).text == "POSTED"
    assert router.dispatch(request_factory("post", "/form")).text == "POSTED"
    with pytest.raises(RouteNotFoundException):
        router.dispatch(request_factory("GET", "/form"))


def test_dispatch_get_route_accepts_head(router, request_factory):
    """Test that get() routes also answer HEAD requests."""
    router.get("/page", lambda response: response.write("PAGE"))

    assert router.dispatch(request_factory("HEAD", "/page")).text == "PAGE"


def test_dispatch_any_method(router, request_factory):
    """Test that any() routes accept every method."""
    router.any("/ping", lambda response: response.write("PONG"))

    for method in ("GET", "POST", "DELETE", "PURGE"):
        assert router.dispatch(request_factory(method, "/ping")).text == "PONG"


def test_dispatch_route_without_methods_never_matches(router, request_factory):
    """Test that a route with an empty method list is skipped."""
    router.match([], "/nothing", lambda response: response.write("NOTHING"))

    with pytest.raises(RouteNotFoundException):
        router.dispatch(request_factory("GET", "/nothing"))


def test_dispatch_invalid_handler(router, request_factory):
    """Test that incomplete handler pairs raise InvalidHandlerError."""
    router.set_default("/home")
    router.get("/home", ["foo"]).set_name("test.home")

    with pytest.raises(InvalidHandlerError) as excinfo:
        router.dispatch(request_factory("GET", "http://localhost/"))

    assert str(excinfo.value) == "Invalid handler specified"


@pytest.mark.parametrize("handler", ["dummy", 42, None, (UserController,), ("", "index")])
def test_dispatch_unsupported_handler_shapes(router, request_factory, handler):
    """Test that only callables and complete pairs are accepted."""
    router.get("/home", handler)

    with pytest.raises(InvalidHandlerError):
        router.dispatch(request_factory("GET", "/home"))


def test_dispatch_invalid_parameter(router, request_factory):
    """Test that unresolvable arguments name the parameter."""
    def handler(request, response, stream: Mailer):
        response.write("HOME")

    router.set_default("/home")
    router.get("/home", handler).set_name("test.home")

    with pytest.raises(UnresolvableParameterError) as excinfo:
        router.dispatch(request_factory("GET", "http://localhost/"))

    assert str(excinfo.value) == "Can not resolve parameter 'stream'"
    assert excinfo.value.parameter == "stream"


def test_dispatch_unannotated_parameter_is_unresolvable(router, request_factory):
    """Test that an argument without source, default or type fails."""
    router.get("/home", lambda response, mystery: None)

    with pytest.raises(UnresolvableParameterError, match="mystery"):
        router.dispatch(request_factory("GET", "/home"))


def test_dispatch_parameters(router, request_factory):
    """Test path parameters, type conversion, defaults and injection."""
    def edit(request, response, factory: ResponseFactory, id: int, opt: str = "foo"):
        response = factory.create_response(210)
        response.write(f"{id + 1}:{opt}")
        return response

    router.get("/users/edit/{id}/{opt?}", edit).set_name("users.edit")

    response = router.dispatch(request_factory("GET", "http://localhost/users/edit/215"))
    assert response.status_code == 210
    assert response.text == "216:foo"

    response = router.dispatch(request_factory("GET", "http://localhost/users/edit/215/bar"))
    assert response.text == "216:bar"


def test_dispatch_parameter_conversion_failure_is_not_found(router, request_factory):
    """Test that a path value not valid for its declared type is a miss."""
    def show_item(response, id: int):
        pass

    def show_price(response, amount: float):
        response.write(f"{amount:.2f}")

    router.get("/items/{id}", show_item)
    router.get("/prices/{amount}", show_price)

    with pytest.raises(RouteNotFoundException, match="id") as excinfo:
        router.dispatch(request_factory("get", "/items/abc"))
    assert excinfo.value.method == "GET"
    assert excinfo.value.path == "/items/abc"
    assert router.dispatch(request_factory("GET", "/prices/3.5")).text == "3.50"


def test_dispatch_bool_and_optional_annotations(router, request_factory):
    """Test conversion of bool and Optional[int] arguments."""
    def show(response, flag: bool, page: Optional[int] = None):
        response.write(f"{flag!r}:{page!r}")

    router.get("/flags/{flag}/{page?}", show)

    assert router.dispatch(request_factory("GET", "/flags/yes/3")).text == "True:3"
    assert router.dispatch(request_factory("GET", "/flags/0")).text == "False:None"


def test_dispatch_keyword_only_arguments(router, request_factory):
    """Test that keyword-only arguments are bound by name."""
    def handler(response, *, slug):
        response.write(slug)

    router.get("/posts/{slug}", handler)

    assert router.dispatch(request_factory("GET", "/posts/hello-world")).text == "hello-world"


def test_dispatch_injects_from_container(container, router, request_factory):
    """Test that typed arguments are resolved from the container."""
    def send(response, mailer: Mailer):
        response.write(mailer.sender)

    container[Mailer] = Mailer("admin@example.com")
    router.post("/mail", send)

    assert router.dispatch(request_factory("POST", "/mail")).text == "admin@example.com"


def test_dispatch_non_response_return_value_is_ignored(router, request_factory):
    """Test that only Response return values replace the default response."""
    router.get("/value", lambda response: "ignored")

    response = router.dispatch(request_factory("GET", "/value"))

    assert response.status_code == 200
    assert response.content == b""


def test_dispatch_handler_without_arguments(router, request_factory):
    """Test a handler that takes no arguments and returns a response."""
    router.get("/plain", lambda: Response.plain("plain", status_code=201))

    response = router.dispatch(request_factory("GET", "/plain"))

    assert response.status_code == 201
    assert response.text == "plain"


def test_dispatch_sets_request_path_params(router, request_factory):
    """Test that captured parameters are exposed on the request."""
    router.get("/users/{id}", lambda request, response: response.write(request.get_path_param("id")))
    request = request_factory("GET", "/users/7")

    assert router.dispatch(request).text == "7"
    assert request.path_params == {"id": "7"}


def test_set_directory(router, request_factory):
    """Test that the directory prefix is stripped before matching."""
    router.set_default("/home")
    router.set_directory("/some/directory/structure/")
    router.get("/home", lambda request, response: response.write("HOME")).set_name("test.home")
    router.get("/about", lambda request, response: response.write("ABOUT")).set_name("test.about")

    assert router.directory == "some/directory/structure"

    response = router.dispatch(request_factory("GET", "http://localhost/some/directory/structure"))
    assert response.text == "HOME"

    response = router.dispatch(request_factory("GET", "https://localhost/some/directory/structure/about"))
    assert response.text == "ABOUT"


def test_directory_and_default_resolve_to_same_route(router, request_factory):
    """Test that /app/ and /app/home dispatch to the same route."""
    router.set_directory("/app").set_default("/home")
    router.get("/home", lambda response: response.write("HOME"))

    assert router.dispatch(request_factory("GET", "/app/")).text == "HOME"
    assert router.dispatch(request_factory("GET", "/app/home")).text == "HOME"
    assert router.dispatch(request_factory("GET", "/app")).text == "HOME"


def test_normalize():
    """Test path normalization."""
    router = Router().set_directory("/app/").set_default("/index/")

    assert router.normalize("/app/users/") == "/users"
    assert router.normalize("/app") == "/index"
    assert router.normalize("") == "/index"
    assert router.normalize("//users//") == "/users"


def test_first_match_wins(router, request_factory):
    """Test that the earlier route wins even if a later one is more specific."""
    router.get("/users/{name}", lambda response, name: response.write(f"GENERIC:{name}"))
    router.get("/users/me", lambda response: response.write("ME"))

    assert router.dispatch(request_factory("GET", "/users/me")).text == "GENERIC:me"

    router.get("/users/me", lambda response: response.write("ME"), insert=True)
    router.collect(force=True)

    assert router.dispatch(request_factory("GET", "/users/me")).text == "ME"


def test_router_routes_precede_group_routes(router, request_factory):
    """Test that routes registered on the router come before group routes."""
    router.group("users", lambda g: g.get("/", lambda response: response.write("GROUP")))
    router.get("/users", lambda response: response.write("ROUTER"))

    assert router.dispatch(request_factory("GET", "/users")).text == "ROUTER"


def test_collect_is_cached_until_forced(router, request_factory):
    """Test that routes added after collection need a forced recollection."""
    router.get("/one", lambda response: response.write("ONE"))
    first = router.collect()

    assert router.collected
    assert router.collect() is first

    router.get("/two", lambda response: response.write("TWO"))
    with pytest.raises(RouteNotFoundException):
        router.dispatch(request_factory("GET", "/two"))

    assert len(router.collect(force=True)) == 2
    assert router.dispatch(request_factory("GET", "/two")).text == "TWO"


def test_dispatch_group_with_controller(router, request_factory, user_routes):
    """Test dispatching to controller actions inside a group."""
    router.set_directory("/some/directory/structure/")
    router.group("users", user_routes).set_name("test.users")
    base = "http://localhost/some/directory/structure"

    assert router.dispatch(request_factory("GET", f"{base}/users")).text == "USERS.INDEX"
    assert router.dispatch(request_factory("GET", f"{base}/users/new")).text == "USERS.NEW"
    assert router.dispatch(request_factory("POST", f"{base}/users/edit/134")).text == "USERS.EDIT:134"
    assert router.dispatch(request_factory("POST", f"{base}/users/delete/625")).text == "USERS.DELETE:625"


def test_dispatch_nested_group_with_controller(router, request_factory, user_routes):
    """Test dispatching through nested groups."""
    router.set_directory("/some/directory/structure/")
    router.group("admin", lambda admin: admin.group("users", user_routes).set_name("users")).set_name("admin")
    base = "http://localhost/some/directory/structure"

    with pytest.raises(RouteNotFoundException):
        router.dispatch(request_factory("GET", f"{base}/users"))

    assert router.dispatch(request_factory("GET", f"{base}/admin/users")).text == "USERS.INDEX"
    assert router.dispatch(request_factory("GET", f"{base}/admin/users/new")).text == "USERS.NEW"
    assert router.dispatch(request_factory("POST", f"{base}/admin/users/edit/134")).text == "USERS.EDIT:134"
    assert router.dispatch(request_factory("POST", f"{base}/admin/users/delete/625")).text == "USERS.DELETE:625"


def test_dispatch_missing_controller_action(router, request_factory):
    """Test that a missing controller action raises BadMethodCallError."""
    router.get("/users", (UserController, "list"))

    with pytest.raises(BadMethodCallError, match="UserController.list"):
        router.dispatch(request_factory("GET", "/users"))


def test_dispatch_unregistered_controller_propagates_container_error(request_factory):
    """Test that the container's error is not converted for handler pairs."""
    router = Router()
    router.get("/users", (UserController, "index"))

    with pytest.raises(KeyError):
        router.dispatch(request_factory("GET", "/users"))


def test_failed_dispatch_keeps_router_usable(router, request_factory):
    """Test that errors do not affect later dispatches."""
    router.get("/broken", ("", ""))
    router.get("/ok", lambda response: response.write("OK"))

    with pytest.raises(InvalidHandlerError):
        router.dispatch(request_factory("GET", "/broken"))

    assert router.dispatch(request_factory("GET", "/ok")).text == "OK"


def test_dispatch_any_request_object(router):
    """Test that any object with method and path can be dispatched."""
    class MinimalRequest:
        method = "get"
        path = "/minimal"

    router.get("/minimal", lambda request, response: response.write(type(request).__name__))

    assert router.dispatch(MinimalRequest()).text == "MinimalRequest"


def test_controller_invalid_method():
    """Test that calling a missing controller method raises."""
    controller = UserController()

    with pytest.raises(BadMethodCallError):
        controller.list()
    with pytest.raises(AttributeError):
        controller.list()


def test_request_object_is_bound(router):
    """Test that the request argument receives the dispatched request."""
    seen = []
    router.get("/me", lambda request: seen.append(request))
    request = Request("GET", "/me")

    router.dispatch(request)

    assert seen == [request]
