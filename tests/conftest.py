"""Shared fixtures for apidraft tests."""

from __future__ import annotations

import pytest

from apidraft import ANY, Contract, Endpoint, Method, Resolver, TypeSchema, schema
from apidraft.server import NewUser, User


@pytest.fixture
def hello_endpoint() -> Endpoint:
    return Endpoint(1, Method.GET, '/hello')


@pytest.fixture
def hello_contract(hello_endpoint: Endpoint) -> Contract:
    return Contract(hello_endpoint, ANY, ANY)


@pytest.fixture
def hello_resolver(hello_endpoint: Endpoint) -> Resolver:
    return Resolver(hello_endpoint, lambda _: {'message': 'world'})


@pytest.fixture
def new_user_schema() -> TypeSchema[NewUser]:
    return schema(NewUser)


@pytest.fixture
def user_schema() -> TypeSchema[User]:
    return schema(User)
