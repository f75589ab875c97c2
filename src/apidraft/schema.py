"""Schema handles consumed by contracts.

The registry treats a schema as an opaque validator exposing ``parse``. The
bundled :class:`TypeSchema` adapts any type pydantic understands (models,
``TypedDict``, annotated primitives) to that capability.
"""

from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from .errors import SchemaViolation

T = TypeVar('T')


@runtime_checkable
class Schema(Protocol):
    """Anything that can validate a value and return its parsed form."""

    def parse(self, data: Any) -> Any:
        """Return the validated value or raise on shape mismatch."""
        ...


class TypeSchema(Generic[T]):
    """:class:`Schema` backed by a pydantic ``TypeAdapter``."""

    __slots__ = ('_adapter', '_type')

    def __init__(self, tp: type[T] | Any) -> None:
        self._type = tp
        self._adapter: TypeAdapter[T] = TypeAdapter(tp)

    @property
    def type(self) -> Any:
        return self._type

    def parse(self, data: Any) -> T:
        try:
            return self._adapter.validate_python(data)
        except ValidationError as exc:
            raise SchemaViolation(str(exc), exc.errors()) from exc

    def __repr__(self) -> str:
        name = getattr(self._type, '__name__', None) or repr(self._type)
        return f'TypeSchema({name})'


def schema(tp: type[T] | Any) -> TypeSchema[T]:
    """Shorthand for :class:`TypeSchema`."""

    return TypeSchema(tp)


ANY: TypeSchema[Any] = TypeSchema(Any)
