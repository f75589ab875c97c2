"""apidraft core package.

Contracts declare endpoint shapes, resolvers implement them, and :class:`Api`
joins the two into validated FastAPI routes.
"""

from __future__ import annotations

__version__ = '0.1.0'

from .api import (  # noqa: E402
    Api,
    api_path,
    compile_rule,
    contracts_from_table,
    resolvers_from_table,
)
from .contract import Contract  # noqa: E402
from .endpoint import Endpoint  # noqa: E402
from .errors import (  # noqa: E402
    ApiDraftError,
    ConstructionError,
    DuplicateEndpoint,
    EndpointMismatch,
    EndpointSetMismatch,
    InvalidContract,
    InvalidEndpoint,
    InvalidResolver,
    InvalidRule,
    OrphanResolvers,
    SchemaViolation,
    UnmatchedContract,
    UnsupportedMethod,
)
from .method import Method  # noqa: E402
from .resolver import Procedure, Resolver  # noqa: E402
from .rule import Rule  # noqa: E402
from .schema import ANY, Schema, TypeSchema, schema  # noqa: E402

__all__: list[str] = [
    'ANY',
    'Api',
    'ApiDraftError',
    'ConstructionError',
    'Contract',
    'DuplicateEndpoint',
    'Endpoint',
    'EndpointMismatch',
    'EndpointSetMismatch',
    'InvalidContract',
    'InvalidEndpoint',
    'InvalidResolver',
    'InvalidRule',
    'Method',
    'OrphanResolvers',
    'Procedure',
    'Resolver',
    'Rule',
    'Schema',
    'SchemaViolation',
    'TypeSchema',
    'UnmatchedContract',
    'UnsupportedMethod',
    '__version__',
    'api_path',
    'compile_rule',
    'contracts_from_table',
    'resolvers_from_table',
    'schema',
]
