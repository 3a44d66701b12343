"""
Database models for FlightRoster.

Flights are stored as documents: one row per flight with its passenger
list embedded as JSON.
"""

from flightroster.models.base import Base, FlightStore
from flightroster.models.flight import Flight, FlightCategory

__all__ = [
    'Base',
    'FlightStore',
    'Flight',
    'FlightCategory',
]
