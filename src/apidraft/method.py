"""Supported HTTP verbs."""

from __future__ import annotations

from enum import Enum

from .errors import UnsupportedMethod


class Method(Enum):
    """Closed set of HTTP methods an endpoint may be bound to.

    Members carry the canonical lowercase token; :meth:`parse` is the only way
    to turn user input into a member.
    """

    GET = 'get'
    POST = 'post'

    @classmethod
    def parse(cls, name: object) -> Method:
        """Return the member matching ``name`` regardless of case."""

        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnsupportedMethod(name)
        try:
            return cls(name.lower())
        except ValueError:
            raise UnsupportedMethod(name) from None

    def __str__(self) -> str:
        return self.value.upper()
