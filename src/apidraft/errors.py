"""Exception hierarchy for the apidraft registry.

Construction-time errors describe a misconfigured API surface and are meant to
stop the process from booting. :class:`SchemaViolation` is the only error
raised while serving and it never reaches the client.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .endpoint import Endpoint


class ApiDraftError(Exception):
    """Base class for every error raised by apidraft."""


class ConstructionError(ApiDraftError, ValueError):
    """A value object or registry could not be built from its inputs."""


class InvalidEndpoint(ConstructionError):
    """Endpoint invariants (positive version, Method, string path) were violated."""


class UnsupportedMethod(ConstructionError):
    """The HTTP verb is not part of the supported set."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f'Unsupported HTTP method: {name!r}')


class _FieldError(ConstructionError):
    owner = 'value'

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(f'{self.owner}.{field} {reason}')


class InvalidContract(_FieldError):
    """A contract field has the wrong type."""

    owner = 'Contract'


class InvalidResolver(_FieldError):
    """A resolver field has the wrong type."""

    owner = 'Resolver'


class InvalidRule(_FieldError):
    """A rule was built from something other than a Contract and a Resolver."""

    owner = 'Rule'


class EndpointMismatch(ConstructionError):
    """Contract and resolver describe different endpoints."""

    def __init__(self, contract_endpoint: Endpoint, resolver_endpoint: Endpoint) -> None:
        self.contract_endpoint = contract_endpoint
        self.resolver_endpoint = resolver_endpoint
        super().__init__(
            'Contract and Resolver endpoints do not match.\n'
            f'Contract: {contract_endpoint}\n'
            f'Resolver: {resolver_endpoint}'
        )


class DuplicateEndpoint(ConstructionError):
    """Two contracts (or two resolvers) share one endpoint identity."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f'Duplicate {kind} for endpoint {key}')


class UnmatchedContract(ConstructionError):
    """One or more contracts have no resolver; ``unmatched`` lists their keys."""

    def __init__(self, unmatched: Iterable[str]) -> None:
        self.unmatched: tuple[str, ...] = tuple(unmatched)
        super().__init__(f'No resolver found for contracts: [{", ".join(self.unmatched)}]')


class OrphanResolvers(ConstructionError):
    """One or more resolvers have no declared contract; ``orphans`` lists their keys."""

    def __init__(self, orphans: Iterable[str]) -> None:
        self.orphans: tuple[str, ...] = tuple(orphans)
        super().__init__(
            f'Extra resolvers without matching contracts: [{", ".join(self.orphans)}]'
        )


class EndpointSetMismatch(UnmatchedContract, OrphanResolvers):
    """Both unmatched contracts and orphan resolvers were found.

    Handlers for either parent class read their own side through
    ``unmatched`` or ``orphans``.
    """

    def __init__(self, unmatched: Iterable[str], orphans: Iterable[str]) -> None:
        self.unmatched = tuple(unmatched)
        self.orphans = tuple(orphans)
        ApiDraftError.__init__(
            self,
            f'No resolver found for contracts: [{", ".join(self.unmatched)}]; '
            f'extra resolvers without matching contracts: [{", ".join(self.orphans)}]',
        )


class SchemaViolation(ApiDraftError):
    """A value did not match the shape a schema declares."""

    def __init__(self, message: str, errors: Sequence[Any] = ()) -> None:
        self.errors = tuple(errors)
        super().__init__(message)
