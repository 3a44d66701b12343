"""
Domain services.

Flight and passenger operations on the document store, the search
filters behind them, and the optional sample-data seed.
"""

from flightroster.services.flight_repository import FlightRepository
from flightroster.services.sample_data import SAMPLE_FLIGHTS, seed_sample_flights
from flightroster.services.search import FlightSearchCriteria, PassengerSearchCriteria

__all__ = [
    'FlightRepository',
    'FlightSearchCriteria',
    'PassengerSearchCriteria',
    'SAMPLE_FLIGHTS',
    'seed_sample_flights',
]
