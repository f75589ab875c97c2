"""Resolvers: the behavior behind an endpoint."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .endpoint import Endpoint
from .errors import InvalidResolver
from .method import Method

# Returns the reply or an awaitable resolving to it.
Procedure = Callable[[Any], Any]


@dataclass(frozen=True, slots=True, eq=False)
class Resolver:
    """Pairs an :class:`Endpoint` with the procedure implementing it.

    The procedure receives the validated request input and returns the reply,
    either directly or as an awaitable.
    """

    endpoint: Endpoint
    procedure: Procedure

    def __post_init__(self) -> None:
        if not isinstance(self.endpoint, Endpoint):
            raise InvalidResolver('endpoint', 'must be an Endpoint')
        if not callable(self.procedure):
            raise InvalidResolver('procedure', 'must be callable')

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
        if not isinstance(other, Resolver):
            return NotImplemented
        return self.endpoint == other.endpoint

    def __hash__(self) -> int:
        return hash(self.endpoint)

    def __str__(self) -> str:
        return f'Resolver({self.endpoint})'
