"""Runtime configuration for the apidraft server.

Values come from ``APIDRAFT_*`` environment variables. ``PORT`` is honoured as
a fallback for the listening port so the server drops into platforms that
inject it.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal['development', 'production', 'test']


class AppConfig(BaseSettings):
    """Pydantic settings container for the HTTP server."""

    model_config = SettingsConfigDict(
        env_prefix='APIDRAFT_',
        extra='ignore',
        populate_by_name=True,
    )

    host: str = Field(
        default='127.0.0.1',
        description='Interface the server binds to.',
    )
    port: int = Field(
        default=8000,
        gt=0,
        lt=65536,
        validation_alias=AliasChoices('APIDRAFT_PORT', 'PORT'),
        description='TCP port the server listens on.',
    )
    environment: Environment = Field(
        default='development',
        validation_alias=AliasChoices('APIDRAFT_ENV', 'APIDRAFT_ENVIRONMENT'),
        description='Selects the access log format; development is verbose.',
    )
    log_level: str = Field(
        default='INFO',
        description='Root log level name.',
    )

    @field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f'unknown log level {value!r}'
            raise ValueError(msg)
        return level

    @property
    def is_development(self) -> bool:
        return self.environment == 'development'


def load_config(**overrides: Any) -> AppConfig:
    """Build configuration from the environment, applying non-``None`` overrides."""

    return AppConfig(**{name: value for name, value in overrides.items() if value is not None})


__all__ = ['AppConfig', 'Environment', 'load_config']
