"""Registry that joins contracts to resolvers and installs them on FastAPI.

An :class:`Api` is built once at boot. Building it checks that declared
contracts and supplied resolvers match one to one by endpoint identity, so a
missing or extra handler fails the process before it serves anything.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .contract import Contract
from .endpoint import Endpoint
from .errors import DuplicateEndpoint, EndpointSetMismatch, OrphanResolvers, UnmatchedContract
from .method import Method
from .resolver import Procedure, Resolver
from .rule import Rule
from .schema import Schema

logger = logging.getLogger(__name__)

CLIENT_ERROR_BODY: Mapping[str, str] = MappingProxyType({'error': 'Client error'})
SERVER_ERROR_BODY: Mapping[str, str] = MappingProxyType({'error': 'Server error'})

ApiTableRow = tuple[int, str, str, Schema, Schema, Procedure]
ContractTableRow = tuple[int, str, str, Schema, Schema]
ResolverTableRow = tuple[int, Method | str, str, Procedure]

Handler = Callable[[Request], Awaitable[JSONResponse]]


def api_path(endpoint: Endpoint) -> str:
    """Return the URL an endpoint is served under."""

    return f'/api/v{endpoint.version}{endpoint.path}'


def contracts_from_table(table: Iterable[ContractTableRow]) -> list[Contract]:
    """Build contracts from ``(version, method, path, input, output)`` rows."""

    return [
        Contract(Endpoint(version, Method.parse(method), path), input_schema, output_schema)
        for version, method, path, input_schema, output_schema in table
    ]


def resolvers_from_table(table: Iterable[ResolverTableRow]) -> list[Resolver]:
    """Build resolvers from ``(version, method, path, procedure)`` rows."""

    return [
        Resolver(Endpoint(version, Method.parse(method), path), procedure)
        for version, method, path, procedure in table
    ]


def _index_by_key(kind: str, items: Iterable[Any]) -> dict[str, Any]:
    index: dict[str, Any] = {}
    for item in items:
        key = item.endpoint.key
        if key in index:
            raise DuplicateEndpoint(kind, key)
        index[key] = item
    return index


def _match(contracts: Iterable[Contract], resolvers: Iterable[Resolver]) -> dict[str, Rule]:
    pending = _index_by_key('resolver', resolvers)
    rules: dict[str, Rule] = {}
    unmatched: list[str] = []
    for key, contract in _index_by_key('contract', contracts).items():
        resolver = pending.pop(key, None)
        if resolver is None:
            unmatched.append(key)
            continue
        rules[key] = Rule(contract, resolver)

    orphans = sorted(pending)
    if unmatched and orphans:
        raise EndpointSetMismatch(sorted(unmatched), orphans)
    if unmatched:
        raise UnmatchedContract(sorted(unmatched))
    if orphans:
        raise OrphanResolvers(orphans)
    return rules


async def _read_body(request: Request) -> Any:
    if not await request.body():
        return None
    return await request.json()


def compile_rule(rule: Rule) -> Handler:
    """Turn a rule into a request handler.

    The handler validates the request body, runs the procedure and validates
    its reply, stopping at the first failure. Only input problems are client
    errors; everything after that is reported as a server error and the
    details stay in the log.
    """

    endpoint = rule.endpoint
    input_schema = rule.input_schema
    output_schema = rule.output_schema
    procedure = rule.procedure

    async def handle(request: Request) -> JSONResponse:
        try:
            payload = input_schema.parse(await _read_body(request))
        except Exception as exc:  # noqa: BLE001
            logger.info('rejected request for %s: %s', endpoint, exc)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST, content=dict(CLIENT_ERROR_BODY)
            )

        try:
            reply = procedure(payload)
            if inspect.isawaitable(reply):
                reply = await reply
        except Exception:  # noqa: BLE001
            logger.exception('procedure failed for %s', endpoint)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=dict(SERVER_ERROR_BODY),
            )

        try:
            result = output_schema.parse(reply)
        except Exception as exc:  # noqa: BLE001
            logger.error('unexpected reply from %s: %r (%s)', endpoint, reply, exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=dict(SERVER_ERROR_BODY),
            )

        try:
            return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result))
        except Exception:  # noqa: BLE001
            logger.exception('reply from %s cannot be encoded as JSON: %r', endpoint, result)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=dict(SERVER_ERROR_BODY),
            )

    return handle


class Api:
    """Immutable set of rules keyed by endpoint.

    Parameters
    ----------
    contracts:
        Declared endpoint shapes.
    resolvers:
        Endpoint implementations. Every resolver must have exactly one
        contract with the same endpoint and vice versa.

    Pass sequences rather than sets when duplicates should be reported:
    contracts and resolvers hash by endpoint, so a set silently collapses
    two entries for the same endpoint.
    """

    __slots__ = ('_rules',)

    def __init__(self, contracts: Iterable[Contract], resolvers: Iterable[Resolver]) -> None:
        self._rules: Mapping[str, Rule] = MappingProxyType(_match(contracts, resolvers))

    @classmethod
    def from_table(cls, table: Iterable[ApiTableRow]) -> Api:
        """Build an API where each row declares and implements one endpoint."""

        contracts: list[Contract] = []
        resolvers: list[Resolver] = []
        for version, method, path, input_schema, output_schema, procedure in table:
            endpoint = Endpoint(version, Method.parse(method), path)
            contracts.append(Contract(endpoint, input_schema, output_schema))
            resolvers.append(Resolver(endpoint, procedure))
        return cls(contracts, resolvers)

    @property
    def rules(self) -> Mapping[str, Rule]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __contains__(self, endpoint: object) -> bool:
        return isinstance(endpoint, Endpoint) and endpoint.key in self._rules

    def routes(self) -> Sequence[tuple[str, str]]:
        """Return ``(METHOD, path)`` pairs in installation order."""

        return [(str(rule.method), api_path(rule.endpoint)) for rule in self]

    def install(self, app: FastAPI) -> FastAPI:
        """Register one route per rule on ``app`` and return it."""

        for rule in self:
            path = api_path(rule.endpoint)
            app.add_api_route(
                path,
                compile_rule(rule),
                methods=[str(rule.method)],
                response_model=None,
                summary=str(rule.endpoint),
            )
            logger.debug('installed %s %s', rule.method, path)
        return app

    def __repr__(self) -> str:
        entries = ', '.join(f'{key} => {rule}' for key, rule in self._rules.items())
        return f'Api {{ {entries} }}'
