"""Test fixtures and configuration for forge_router."""

import pytest
from kink import Container

from forge_router.controller import Controller
from forge_router.request import Request
from forge_router.response import ResponseFactory
from forge_router.router import Router


class UserController(Controller):
    """Controller used by the group dispatch tests."""

    def index(self, request, response):
        response.write("USERS.INDEX")

    def new(self, request, response):
        response.write("USERS.NEW")

    def edit(self, request, response, id: int):
        response.write(f"USERS.EDIT:{id}")

    def delete(self, request, response, id: int):
        response.write(f"USERS.DELETE:{id}")


@pytest.fixture
def response_factory():
    """Create a response factory."""
    return ResponseFactory()


@pytest.fixture
def container(response_factory):
    """Create a container holding the response factory and a controller."""
    container = Container()
    container[ResponseFactory] = response_factory
    container[UserController] = lambda di: UserController()
    return container


@pytest.fixture
def router(container, response_factory):
    """Create a test router."""
    return Router(container, response_factory)


@pytest.fixture
def request_factory():
    """Create a factory function for test requests."""
    def _create_request(method="GET", url="/", headers=None, body=None):
        return Request(method=method, url=url, headers=headers, body=body)
    return _create_request


@pytest.fixture
def user_routes():
    """Create a group builder registering the UserController actions."""
    def _build(group):
        group.get("/", (UserController, "index")).set_name("index")
        group.any("/new", (UserController, "new")).set_name("new")
        group.any("/edit/{id}", (UserController, "edit")).set_name("edit")
        group.any("/delete/{id}", (UserController, "delete")).set_name("delete")
    return _build
