"""Endpoint identity: version, method and path."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidEndpoint
from .method import Method


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Identity of one API operation.

    Two endpoints are equal when version, method and path are all equal. The
    path is an opaque token and is kept verbatim.
    """

    version: int
    method: Method
    path: str

    def __post_init__(self) -> None:
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            msg = f'version must be a positive integer, got {self.version!r}'
            raise InvalidEndpoint(msg)
        if self.version <= 0:
            msg = f'version must be a positive integer, got {self.version}'
            raise InvalidEndpoint(msg)
        if not isinstance(self.method, Method):
            msg = f'method must be a Method, got {self.method!r}'
            raise InvalidEndpoint(msg)
        if not isinstance(self.path, str):
            msg = f'path must be a string, got {self.path!r}'
            raise InvalidEndpoint(msg)

    @property
    def key(self) -> str:
        """Canonical lookup key, e.g. ``'1:get:/hello'``.

        Version is all digits and the method token all letters, so the first
        two colons always delimit and the path is whatever remains.
        """

        return f'{self.version}:{self.method.value}:{self.path}'

    def __str__(self) -> str:
        return f'Endpoint({self.version} {self.method} {self.path})'
