"""Contracts: the declared shape of an endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .endpoint import Endpoint
from .errors import InvalidContract
from .method import Method
from .schema import Schema


@dataclass(frozen=True, slots=True, eq=False)
class Contract:
    """Pairs an :class:`Endpoint` with its input and output schemas.

    Schemas are referenced, not owned. Identity is the endpoint's: two
    contracts for the same endpoint compare equal whatever their schemas.
    """

    endpoint: Endpoint
    input_schema: Schema
    output_schema: Schema

    def __post_init__(self) -> None:
        if not isinstance(self.endpoint, Endpoint):
            raise InvalidContract('endpoint', 'is not an Endpoint')
        if not isinstance(self.input_schema, Schema):
            raise InvalidContract('input_schema', 'is not a schema')
        if not isinstance(self.output_schema, Schema):
            raise InvalidContract('output_schema', 'is not a schema')

    @property
    def version(self) -> int:
        return self.endpoint.version

    @property
    def method(self) -> Method:
        return self.endpoint.method

    @property
    def path(self) -> str:
        return self.endpoint.path

    @property
    def key(self) -> str:
        return self.endpoint.key

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Contract):
            return NotImplemented
        return self.endpoint == other.endpoint

    def __hash__(self) -> int:
        return hash(self.endpoint)

    def __str__(self) -> str:
        return f'Contract({self.endpoint} -> {self.input_schema!r} -> {self.output_schema!r})'
