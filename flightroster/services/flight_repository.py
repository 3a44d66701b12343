"""
Flight repository - domain operations on the flight document store.

Every mutation is a read-modify-write inside one session:

    fetch by code -> mutate in memory -> flush (version checked) -> commit

The flights table is versioned (see models.flight), so the UPDATE only
lands if nobody else wrote the flight since we read it. The loser of a
race gets ConcurrentModificationError rather than silently overwriting
the winner's change. No retries are attempted here.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from flightroster.errors import (
    ConcurrentModificationError,
    FlightConflictError,
    FlightNotFoundError,
    PassengerConflictError,
    PassengerNotFoundError,
)
from flightroster.models import Flight, FlightStore
from flightroster.services.search import (
    FlightSearchCriteria,
    PassengerSearchCriteria,
    filter_flights,
    filter_passengers,
)

logger = logging.getLogger(__name__)

Passenger = Dict[str, Any]


def _ensure_unique_passenger_ids(flight_code: str, passengers: Iterable[Passenger]) -> None:
    seen = set()
    for passenger in passengers:
        passenger_id = passenger.get('id')
        if passenger_id in seen:
            raise PassengerConflictError(flight_code, passenger_id)
        seen.add(passenger_id)


class FlightRepository:
    """
    Translates flight and passenger operations into store queries.

    Returned Flight objects are detached from their session and safe to
    serialize after the call returns.
    """

    def __init__(self, store: FlightStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @staticmethod
    def _find(session: Session, flight_code: str) -> Optional[Flight]:
        return session.scalars(
            select(Flight).where(Flight.flight_code == flight_code)
        ).first()

    def _get_or_raise(self, session: Session, flight_code: str) -> Flight:
        flight = self._find(session, flight_code)
        if flight is None:
            logger.debug(f'Flight {flight_code} not found')
            raise FlightNotFoundError(flight_code)
        return flight

    def list_all(self) -> List[Flight]:
        """All flights in insertion order."""
        with self.store.session() as session:
            return list(session.scalars(select(Flight).order_by(Flight.id)))

    def count(self) -> int:
        with self.store.session() as session:
            return session.scalar(select(func.count()).select_from(Flight))

    def get_by_code(self, flight_code: str) -> Flight:
        with self.store.session() as session:
            return self._get_or_raise(session, flight_code)

    def list_passengers(self, flight_code: str) -> List[Passenger]:
        flight = self.get_by_code(flight_code)
        return [dict(p) for p in flight.passengers]

    def search_flights(self, criteria: FlightSearchCriteria) -> List[Flight]:
        """
        Flights matching every provided criterion.

        flightCode is pushed down to SQL; passenger-level criteria are
        matched against the embedded documents.
        """
        if criteria.is_empty:
            return self.list_all()

        stmt = select(Flight).order_by(Flight.id)
        if criteria.flight_code is not None:
            stmt = stmt.where(Flight.flight_code == criteria.flight_code)

        with self.store.session() as session:
            flights = list(session.scalars(stmt))
        return filter_flights(flights, criteria)

    def search_passengers(self, criteria: PassengerSearchCriteria) -> List[Passenger]:
        """Passengers of every flight matching all criteria, flight association dropped."""
        return filter_passengers(self.list_all(), criteria)

    # -------------------------------------------------------------------------
    # Flight mutations
    # -------------------------------------------------------------------------

    def create(self, flight_code: str, passengers: List[Passenger]) -> Flight:
        _ensure_unique_passenger_ids(flight_code, passengers)
        try:
            with self.store.session() as session:
                if self._find(session, flight_code) is not None:
                    raise FlightConflictError(flight_code)
                flight = Flight(
                    flight_code=flight_code,
                    passengers=[dict(p) for p in passengers],
                )
                session.add(flight)
                session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent create of the same code
            raise FlightConflictError(flight_code) from e

        logger.info(f'Created flight {flight_code} with {len(passengers)} passengers')
        return flight

    def update(self, flight_code: str, changes: Dict[str, Any]) -> Flight:
        """
        Shallow-merge top-level fields onto a flight.

        Supported keys: flightCode (rename) and passengers (replaced
        wholesale). Keys that are absent or None are left untouched.
        """
        new_code = changes.get('flightCode')
        new_passengers = changes.get('passengers')

        def mutate(session: Session, flight: Flight) -> None:
            if new_code is not None and new_code != flight_code:
                if self._find(session, new_code) is not None:
                    raise FlightConflictError(new_code)
                flight.flight_code = new_code
            if new_passengers is not None:
                _ensure_unique_passenger_ids(flight.flight_code, new_passengers)
                flight.passengers = [dict(p) for p in new_passengers]

        flight = self._modify(flight_code, mutate, renamed_to=new_code)
        if new_code is not None and new_code != flight_code:
            logger.info(f'Renamed flight {flight_code} to {new_code}')
        logger.info(f'Updated flight {flight.flight_code}')
        return flight

    def delete(self, flight_code: str) -> None:
        try:
            with self.store.session() as session:
                flight = self._get_or_raise(session, flight_code)
                session.delete(flight)
                session.flush()
        except StaleDataError as e:
            raise ConcurrentModificationError(flight_code) from e
        logger.info(f'Deleted flight {flight_code}')

    # -------------------------------------------------------------------------
    # Passenger mutations
    # -------------------------------------------------------------------------

    def add_passenger(self, flight_code: str, passenger: Passenger) -> Flight:
        passenger_id = passenger.get('id')

        def mutate(session: Session, flight: Flight) -> None:
            if flight.passenger_index(passenger_id) is not None:
                raise PassengerConflictError(flight_code, passenger_id)
            flight.passengers = [*flight.passengers, dict(passenger)]

        flight = self._modify(flight_code, mutate)
        logger.info(f'Added passenger {passenger_id} to flight {flight_code}')
        return flight

    def update_passenger(self, flight_code: str, passenger_id: int, changes: Dict[str, Any]) -> Flight:
        """Merge fields onto one passenger, keeping its position in the list."""

        def mutate(session: Session, flight: Flight) -> None:
            index = flight.passenger_index(passenger_id)
            if index is None:
                raise PassengerNotFoundError(flight_code, passenger_id)

            merged = {**flight.passengers[index], **changes}
            new_id = merged.get('id')
            if new_id != passenger_id and flight.passenger_index(new_id) is not None:
                raise PassengerConflictError(flight_code, new_id)

            passengers = list(flight.passengers)
            passengers[index] = merged
            flight.passengers = passengers

        flight = self._modify(flight_code, mutate)
        logger.info(f'Updated passenger {passenger_id} on flight {flight_code}')
        return flight

    def remove_passenger(self, flight_code: str, passenger_id: int) -> Flight:

        def mutate(session: Session, flight: Flight) -> None:
            index = flight.passenger_index(passenger_id)
            if index is None:
                raise PassengerNotFoundError(flight_code, passenger_id)
            flight.passengers = flight.passengers[:index] + flight.passengers[index + 1:]

        flight = self._modify(flight_code, mutate)
        logger.info(f'Removed passenger {passenger_id} from flight {flight_code}')
        return flight

    def _modify(
        self,
        flight_code: str,
        mutate: Callable[[Session, Flight], None],
        renamed_to: Optional[str] = None,
    ) -> Flight:
        """Run one versioned read-modify-write of a flight."""
        try:
            with self.store.session() as session:
                flight = self._get_or_raise(session, flight_code)
                mutate(session, flight)
                session.flush()
        except StaleDataError as e:
            logger.warning(f'Concurrent modification of flight {flight_code} detected')
            raise ConcurrentModificationError(flight_code) from e
        except IntegrityError as e:
            # Only the unique flight_code can fail here: a rename raced another write
            raise FlightConflictError(renamed_to or flight_code) from e
        return flight
