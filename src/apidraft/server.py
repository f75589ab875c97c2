"""FastAPI application factory for the apidraft runtime."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from pydantic import BaseModel, PositiveInt

from . import __version__
from .api import Api
from .config import AppConfig, load_config
from .logging import configure_logging
from .schema import ANY, schema

access_logger = logging.getLogger('apidraft.access')

CallNext = Callable[[Request], Awaitable[Response]]


class NewUser(BaseModel):
    name: str


class User(BaseModel):
    id: PositiveInt
    name: str


def _hello(_: object) -> dict[str, str]:
    return {'message': 'world'}


def _create_user(user: NewUser) -> dict[str, object]:
    return {'id': 1, 'name': user.name}


def default_api() -> Api:
    """Return the sample API served when no other table is supplied."""

    return Api.from_table(
        [
            (1, 'get', '/hello', ANY, ANY, _hello),
            (1, 'post', '/user', schema(NewUser), schema(User), _create_user),
        ]
    )


def create_app(config: AppConfig | None = None, api: Api | None = None) -> FastAPI:
    """Instantiate the FastAPI application and install ``api`` onto it."""
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    verbose = cfg.is_development

    app = FastAPI(
        title='apidraft',
        version=__version__,
        summary='Contract-checked API endpoints.',
    )

    @app.middleware('http')
    async def log_access(request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            status_code = response.status_code if response is not None else 500
            line = f'{request.method} {request.url.path} {status_code} {elapsed_ms:.3f} ms'
            if verbose:
                length = '-' if response is None else response.headers.get('content-length', '-')
                line = f'{line} - {length}'
            access_logger.info('%s', line)

    @app.get('/healthz', tags=['Meta'])
    def healthz() -> dict[str, str]:
        """Return a simple health indicator."""
        return {'status': 'ok', 'version': __version__}

    (api if api is not None else default_api()).install(app)
    return app
