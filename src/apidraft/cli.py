"""Command line interface for inspecting and serving apidraft APIs."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any

import typer
import uvicorn
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .api import Api, api_path
from .config import load_config
from .errors import ConstructionError, OrphanResolvers, UnmatchedContract
from .server import create_app, default_api

app = typer.Typer(
    help='Build, check and serve contract-checked APIs.',
    no_args_is_help=False,
)

API_OPTION = typer.Option(
    None,
    '--api',
    '-a',
    help=(
        "Import path 'module:attr' naming an Api, a table of rows, or a callable "
        'returning either (defaults to the bundled sample API).'
    ),
)

HOST_OPTION = typer.Option(None, '--host', help='Interface to bind (overrides APIDRAFT_HOST).')

PORT_OPTION = typer.Option(None, '--port', '-p', help='Port to listen on (overrides PORT).')

ENV_OPTION = typer.Option(
    None,
    '--env',
    help='Runtime environment: development, production, or test.',
    show_default=False,
)

VERSION_OPTION = typer.Option(
    default=False,
    help='Show version and exit.',
)
VERSION_OPTION.param_decls = ('--version', '-v')


@dataclass
class CLIState:
    """Holds the console shared by sub-commands."""

    console: Console


def _get_state(ctx: typer.Context) -> CLIState:
    return ctx.ensure_object(CLIState)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = VERSION_OPTION,  # noqa: FBT001
) -> None:
    """Initialise CLI context."""
    console = Console()
    if version:
        console.print(f'apidraft version {__version__}')
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print('[yellow]No command specified. Use --help to see available commands.[/]')
        raise typer.Exit(0)

    ctx.obj = CLIState(console=console)


def load_api(target: str | None) -> Api:
    """Resolve ``module:attr`` into an :class:`Api`.

    Construction errors from building the API are propagated unchanged.
    """
    if target is None:
        return default_api()
    module_name, _, attr = target.partition(':')
    if not module_name or not attr:
        message = f"Expected 'module:attr', got {target!r}."
        raise typer.BadParameter(message, param_hint='--api')
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        message = f'Cannot import {module_name!r}: {exc}'
        raise typer.BadParameter(message, param_hint='--api') from exc
    try:
        obj: Any = getattr(module, attr)
    except AttributeError as exc:
        message = f'Module {module_name!r} has no attribute {attr!r}.'
        raise typer.BadParameter(message, param_hint='--api') from exc

    if isinstance(obj, Api):
        return obj
    if callable(obj):
        obj = obj()
        if isinstance(obj, Api):
            return obj
    return Api.from_table(obj)


def _render_routes(console: Console, api: Api) -> None:
    table = Table(title='API Routes')
    table.add_column('Method', style='cyan', justify='center')
    table.add_column('Path', style='white', overflow='fold')
    table.add_column('Input', style='magenta')
    table.add_column('Output', style='magenta')
    for rule in api:
        table.add_row(
            str(rule.method),
            escape(api_path(rule.endpoint)),
            repr(rule.input_schema),
            repr(rule.output_schema),
        )
    console.print(table)


def _render_construction_error(console: Console, error: ConstructionError) -> None:
    if not isinstance(error, UnmatchedContract | OrphanResolvers):
        message = f'[red]{escape(str(error))}[/]'
        console.print(Panel(message, title='API construction failed', border_style='red'))
        return
    table = Table(title='Unmatched endpoints')
    table.add_column('Endpoint', style='white', overflow='fold')
    table.add_column('Problem', style='red')
    for key in getattr(error, 'unmatched', ()):
        table.add_row(escape(key), 'contract has no resolver')
    for key in getattr(error, 'orphans', ()):
        table.add_row(escape(key), 'resolver has no contract')
    console.print(table)


@app.command('routes')
def routes(
    ctx: typer.Context,
    api_target: str | None = API_OPTION,
) -> None:
    """List the routes an API installs."""
    state = _get_state(ctx)
    try:
        api = load_api(api_target)
    except ConstructionError as exc:
        _render_construction_error(state.console, exc)
        raise typer.Exit(code=1) from None
    _render_routes(state.console, api)


@app.command('check')
def check(
    ctx: typer.Context,
    api_target: str | None = API_OPTION,
) -> None:
    """Build an API and report whether contracts and resolvers match."""
    state = _get_state(ctx)
    try:
        api = load_api(api_target)
    except ConstructionError as exc:
        _render_construction_error(state.console, exc)
        raise typer.Exit(code=1) from None
    state.console.print(
        Panel(f'[green]{len(api)} endpoint(s) matched.[/]', border_style='green'),
    )


@app.command('serve')
def serve(
    ctx: typer.Context,
    api_target: str | None = API_OPTION,
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    env: str | None = ENV_OPTION,
) -> None:
    """Build the API and serve it with uvicorn."""
    state = _get_state(ctx)
    try:
        config = load_config(host=host, port=port, environment=env)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    try:
        api = load_api(api_target)
    except ConstructionError as exc:
        _render_construction_error(state.console, exc)
        raise typer.Exit(code=1) from None
    state.console.print(
        f'[bold cyan]apidraft[/] v{__version__} listening on '
        f'http://{config.host}:{config.port} ({config.environment})',
    )
    uvicorn.run(create_app(config, api), host=config.host, port=config.port, log_config=None)


def run() -> None:
    """Entry point for the CLI script."""
    app()
