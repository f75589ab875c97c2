"""Integration tests for the command line interface."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest
import typer
from typer.testing import CliRunner

from apidraft import Api
from apidraft import cli as cli_module
from apidraft.cli import app, load_api

runner = CliRunner()

_MODULE_SOURCE = textwrap.dedent(
    """
    from apidraft import ANY, Api, Contract, Endpoint, Method, Resolver

    def _echo(value):
        return value

    TABLE = [
        (1, 'get', '/echo', ANY, ANY, _echo),
        (2, 'post', '/echo', ANY, ANY, _echo),
    ]

    API = Api.from_table(TABLE)

    def build():
        return Api.from_table(TABLE[:1])

    def broken():
        return Api(
            [Contract(Endpoint(1, Method.GET, '/a'), ANY, ANY)],
            [Resolver(Endpoint(1, Method.GET, '/b'), _echo)],
        )

    DUPLICATED = TABLE + TABLE[:1]
    """
)


@pytest.fixture
def api_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / 'sample_api_module.py').write_text(_MODULE_SOURCE, encoding='utf-8')
    monkeypatch.syspath_prepend(str(tmp_path))
    return 'sample_api_module'


def test_cli_version_flag() -> None:
    result = runner.invoke(app, ['--version'], env={'NO_COLOR': '1'})
    assert result.exit_code == 0, result.stdout
    assert 'apidraft version' in result.stdout


def test_cli_without_command_prints_hint() -> None:
    result = runner.invoke(app, [], env={'NO_COLOR': '1'})
    assert result.exit_code == 0
    assert 'No command specified' in result.stdout


def test_cli_routes_lists_sample_api() -> None:
    result = runner.invoke(app, ['routes'], env={'NO_COLOR': '1', 'COLUMNS': '160'})
    assert result.exit_code == 0, result.stdout
    assert '/api/v1/hello' in result.stdout
    assert '/api/v1/user' in result.stdout
    assert 'POST' in result.stdout


def test_cli_check_sample_api() -> None:
    result = runner.invoke(app, ['check'], env={'NO_COLOR': '1'})
    assert result.exit_code == 0, result.stdout
    assert '2 endpoint(s) matched' in result.stdout


@pytest.mark.parametrize(('attr', 'count'), [('API', 2), ('TABLE', 2), ('build', 1)])
def test_load_api_accepts_api_table_or_factory(api_module: str, attr: str, count: int) -> None:
    api = load_api(f'{api_module}:{attr}')
    assert isinstance(api, Api)
    assert len(api) == count


def test_cli_check_reports_unmatched_endpoints(api_module: str) -> None:
    result = runner.invoke(
        app,
        ['check', '--api', f'{api_module}:broken'],
        env={'NO_COLOR': '1', 'COLUMNS': '160'},
    )
    assert result.exit_code == 1
    assert '1:get:/a' in result.stdout
    assert 'contract has no resolver' in result.stdout
    assert '1:get:/b' in result.stdout
    assert 'resolver has no contract' in result.stdout


def test_cli_check_reports_duplicates(api_module: str) -> None:
    result = runner.invoke(
        app,
        ['check', '--api', f'{api_module}:DUPLICATED'],
        env={'NO_COLOR': '1', 'COLUMNS': '160'},
    )
    assert result.exit_code == 1
    assert 'API construction failed' in result.stdout
    assert 'Duplicate resolver' in result.stdout


@pytest.mark.parametrize(
    'target',
    ['no_colon', 'missing_module_for_apidraft_tests:API', 'sample_api_module:MISSING'],
)
def test_load_api_rejects_bad_targets(api_module: str, target: str) -> None:
    with pytest.raises(typer.BadParameter):
        load_api(target)


def test_cli_serve_runs_uvicorn(monkeypatch: pytest.MonkeyPatch, api_module: str) -> None:
    calls: list[dict[str, Any]] = []

    def fake_run(application: Any, **kwargs: Any) -> None:
        calls.append({'app': application, **kwargs})

    monkeypatch.delenv('PORT', raising=False)
    monkeypatch.setattr(cli_module.uvicorn, 'run', fake_run)
    result = runner.invoke(
        app,
        ['serve', '--api', f'{api_module}:API', '--port', '9123', '--env', 'production'],
        env={'NO_COLOR': '1'},
    )
    assert result.exit_code == 0, result.stdout
    assert 'listening on http://127.0.0.1:9123 (production)' in result.stdout
    assert len(calls) == 1
    assert calls[0]['port'] == 9123
    assert calls[0]['host'] == '127.0.0.1'
    paths = {route.path for route in calls[0]['app'].routes}
    assert {'/api/v1/echo', '/api/v2/echo', '/healthz'} <= paths


def test_cli_serve_rejects_invalid_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module.uvicorn, 'run', lambda *args, **kwargs: None)
    result = runner.invoke(app, ['serve', '--env', 'staging'], env={'NO_COLOR': '1'})
    assert result.exit_code != 0


def test_cli_serve_refuses_to_start_with_broken_api(
    monkeypatch: pytest.MonkeyPatch, api_module: str
) -> None:
    calls: list[Any] = []
    monkeypatch.setattr(cli_module.uvicorn, 'run', lambda *args, **kwargs: calls.append(args))
    result = runner.invoke(
        app, ['serve', '--api', f'{api_module}:broken'], env={'NO_COLOR': '1'}
    )
    assert result.exit_code == 1
    assert calls == []
