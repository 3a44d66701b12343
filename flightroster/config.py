"""
Configuration management for FlightRoster.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse '1'/'true'/'yes' style flags, falling back to default when unset."""
    if value is None or value == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _parse_origins(value: str) -> Tuple[str, ...]:
    """Parse a comma-separated list of CORS origins."""
    origins = tuple(o.strip() for o in (value or '').split(',') if o.strip())
    return origins or ('*',)


@dataclass(frozen=True)
class DatabaseConfig:
    """Document store configuration."""
    url: str = field(default_factory=lambda: os.getenv('DATABASE_URL', 'sqlite:///flightroster.db'))


@dataclass(frozen=True)
class ServerConfig:
    """HTTP listener settings."""
    host: str = field(default_factory=lambda: os.getenv('HOST', '0.0.0.0'))
    port: int = field(default_factory=lambda: int(os.getenv('PORT', '3000')))
    cors_origins: Tuple[str, ...] = field(
        default_factory=lambda: _parse_origins(os.getenv('CORS_ORIGINS', '*'))
    )


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    database: DatabaseConfig
    server: ServerConfig

    # Seed the sample flights when the store starts out empty
    seed_sample_data: bool

    # Flask settings
    secret_key: str
    debug: bool
    log_level: str


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    debug = _parse_bool(os.getenv('FLASK_DEBUG', '0'))
    return AppConfig(
        database=DatabaseConfig(),
        server=ServerConfig(),
        seed_sample_data=_parse_bool(os.getenv('SEED_SAMPLE_DATA'), default=True),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=debug,
        log_level=os.getenv('LOG_LEVEL', 'DEBUG' if debug else 'INFO').upper(),
    )


# Singleton instance
config = load_config()
