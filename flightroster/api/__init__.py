"""
API module for FlightRoster.

Provides REST endpoints for:
- Flights and their nested passengers
- Cross-flight passenger search
"""

from flightroster.api.flights import flights_bp
from flightroster.api.passengers import passengers_bp

__all__ = ['flights_bp', 'passengers_bp']
