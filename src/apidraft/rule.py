"""Rules: a contract bound to the resolver implementing it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .contract import Contract
from .endpoint import Endpoint
from .errors import EndpointMismatch, InvalidRule
from .method import Method
from .resolver import Procedure, Resolver
from .schema import Schema


@dataclass(frozen=True, slots=True, eq=False)
class Rule:
    """The unit installed onto a server.

    A rule can only exist when its contract and resolver share one endpoint.
    Equality tracks the exact pair of instances it was built from, so two
    rules built from equal but distinct contracts are different rules.
    """

    contract: Contract
    resolver: Resolver

    def __post_init__(self) -> None:
        if not isinstance(self.contract, Contract):
            raise InvalidRule('contract', 'must be a Contract')
        if not isinstance(self.resolver, Resolver):
            raise InvalidRule('resolver', 'must be a Resolver')
        if self.contract.endpoint != self.resolver.endpoint:
            raise EndpointMismatch(self.contract.endpoint, self.resolver.endpoint)

    @property
    def endpoint(self) -> Endpoint:
        return self.contract.endpoint

    @property
    def version(self) -> int:
        return self.contract.version

    @property
    def method(self) -> Method:
        return self.contract.method

    @property
    def path(self) -> str:
        return self.contract.path

    @property
    def key(self) -> str:
        return self.contract.key

    @property
    def input_schema(self) -> Schema:
        return self.contract.input_schema

    @property
    def output_schema(self) -> Schema:
        return self.contract.output_schema

    @property
    def procedure(self) -> Procedure:
        return self.resolver.procedure

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.contract is other.contract and self.resolver is other.resolver

    def __hash__(self) -> int:
        return hash((id(self.contract), id(self.resolver)))

    def __str__(self) -> str:
        return f'Rule({self.endpoint})'
