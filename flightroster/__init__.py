"""
FlightRoster Backend Package.

CRUD service for flights and their embedded passenger lists, built with
Flask, SQLAlchemy and pydantic.

Modules:
    api/         REST endpoints, request schemas and response envelopes
    models/      SQLAlchemy models and the document store handle
    services/    Flight repository, search filters and sample data
    errors.py    Exception hierarchy mapped to HTTP status codes
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
