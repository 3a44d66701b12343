"""
Filter logic for flight and passenger searches.

Flight search follows document field-path matching: a passenger-level
criterion such as reservationId matches a flight when *any* of its
passengers has that value. Different criteria are checked independently,
so two criteria may be satisfied by two different passengers.

Passenger search works on the flattened passenger list of every flight.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from flightroster.models.flight import Flight, FlightCategory


@dataclass(frozen=True)
class FlightSearchCriteria:
    """Optional equality constraints for a flight search."""
    flight_code: Optional[str] = None
    reservation_id: Optional[str] = None
    flight_category: Optional[FlightCategory] = None
    has_connections: Optional[bool] = None
    has_checked_baggage: Optional[bool] = None

    def passenger_constraints(self) -> Dict[str, Any]:
        """Provided passenger-level criteria keyed by document field name."""
        fields = {
            'reservationId': self.reservation_id,
            'flightCategory': self.flight_category,
            'hasConnections': self.has_connections,
            'hasCheckedBaggage': self.has_checked_baggage,
        }
        return {k: v for k, v in fields.items() if v is not None}

    @property
    def is_empty(self) -> bool:
        return self.flight_code is None and not self.passenger_constraints()


@dataclass(frozen=True)
class PassengerSearchCriteria:
    """Optional constraints for a cross-flight passenger search."""
    id: Optional[int] = None
    name: Optional[str] = None
    reservation_id: Optional[str] = None
    flight_category: Optional[FlightCategory] = None
    has_connections: Optional[bool] = None
    has_checked_baggage: Optional[bool] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None


def _field_value(value: Any) -> Any:
    # Enum criteria compare against the stored string
    return value.value if isinstance(value, FlightCategory) else value


def flight_matches(flight: Flight, criteria: FlightSearchCriteria) -> bool:
    """Check a flight against every provided criterion."""
    if criteria.flight_code is not None and flight.flight_code != criteria.flight_code:
        return False

    passengers = flight.passengers or []
    for field_name, expected in criteria.passenger_constraints().items():
        expected = _field_value(expected)
        if not any(p.get(field_name) == expected for p in passengers):
            return False
    return True


def passenger_matches(passenger: Dict[str, Any], criteria: PassengerSearchCriteria) -> bool:
    """Check one passenger document against every provided criterion."""
    if criteria.id is not None and passenger.get('id') != criteria.id:
        return False

    if criteria.name is not None:
        name = passenger.get('name') or ''
        if criteria.name.lower() not in name.lower():
            return False

    exact = {
        'reservationId': criteria.reservation_id,
        'flightCategory': _field_value(criteria.flight_category),
        'hasConnections': criteria.has_connections,
        'hasCheckedBaggage': criteria.has_checked_baggage,
    }
    for field_name, expected in exact.items():
        if expected is not None and passenger.get(field_name) != expected:
            return False

    if criteria.min_age is not None or criteria.max_age is not None:
        age = passenger.get('age')
        if age is None:
            return False
        if criteria.min_age is not None and age < criteria.min_age:
            return False
        if criteria.max_age is not None and age > criteria.max_age:
            return False

    return True


def filter_flights(flights: Iterable[Flight], criteria: FlightSearchCriteria) -> List[Flight]:
    return [f for f in flights if flight_matches(f, criteria)]


def filter_passengers(flights: Iterable[Flight], criteria: PassengerSearchCriteria) -> List[Dict[str, Any]]:
    """Flatten the passenger lists of all flights and keep the matches."""
    return [
        dict(passenger)
        for flight in flights
        for passenger in flight.passengers or []
        if passenger_matches(passenger, criteria)
    ]
