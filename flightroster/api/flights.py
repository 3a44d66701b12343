"""
Flight API endpoints.

Provides endpoints for:
- GET    /api/flights                                   - List or search flights
- GET    /api/flights/<flightCode>                      - Get one flight
- POST   /api/flights                                   - Create a flight
- PUT    /api/flights/<flightCode>                      - Partially update a flight
- DELETE /api/flights/<flightCode>                      - Delete a flight
- GET    /api/flights/<flightCode>/passengers           - List a flight's passengers
- POST   /api/flights/<flightCode>/passengers           - Add a passenger
- PUT    /api/flights/<flightCode>/passengers/<id>      - Update a passenger
- DELETE /api/flights/<flightCode>/passengers/<id>      - Remove a passenger

Errors raised here or in the repository are turned into the error
envelope by the handlers registered in the app factory.
"""

import logging

from flask import Blueprint, current_app, request

from flightroster.api.responses import success_response
from flightroster.api.schemas import (
    FlightCreateRequest,
    FlightSearchQuery,
    FlightUpdateRequest,
    PassengerPatch,
    PassengerPayload,
    parse_body,
    parse_passenger_id,
    parse_query,
)
from flightroster.services.flight_repository import FlightRepository

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


def _repository() -> FlightRepository:
    return current_app.config['FLIGHT_REPOSITORY']


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List all flights, or the ones matching the query parameters.

    Query parameters (all optional, combined with AND):
    - flightCode: exact flight code
    - reservationId: some passenger holds this reservation
    - flightCategory: some passenger has this category (Black|Platinum|Gold|Normal)
    - hasConnections: some passenger has this flag (true|false)
    - hasCheckedBaggage: some passenger has this flag (true|false)
    """
    criteria = parse_query(FlightSearchQuery, request.args).to_criteria()

    if criteria.is_empty:
        flights = _repository().list_all()
        message = 'Flights retrieved successfully'
    else:
        flights = _repository().search_flights(criteria)
        message = 'Filtered flights retrieved successfully'
        logger.debug(f'Flight search {criteria} matched {len(flights)} flights')

    return success_response([f.to_dict() for f in flights], message)


@flights_bp.route('/<flight_code>', methods=['GET'])
def get_flight(flight_code: str):
    flight = _repository().get_by_code(flight_code)
    return success_response(flight.to_dict(), 'Flight retrieved successfully')


@flights_bp.route('', methods=['POST'])
def create_flight():
    """
    Create a flight.

    Body: {"flightCode": str, "passengers": [passenger, ...]}
    Every passenger needs id, name, reservationId and a valid flightCategory.
    """
    body = parse_body(FlightCreateRequest, request.get_json(silent=True))
    flight = _repository().create(body.flight_code, body.passenger_documents())
    return success_response(flight.to_dict(), 'Flight created successfully', 201)


@flights_bp.route('/<flight_code>', methods=['PUT'])
def update_flight(flight_code: str):
    """
    Partially update a flight.

    Body may contain flightCode (rename) and/or passengers (replaces the
    whole list).
    """
    body = parse_body(FlightUpdateRequest, request.get_json(silent=True))
    flight = _repository().update(flight_code, body.to_changes())
    return success_response(flight.to_dict(), 'Flight updated successfully')


@flights_bp.route('/<flight_code>', methods=['DELETE'])
def delete_flight(flight_code: str):
    _repository().delete(flight_code)
    return success_response(None, 'Flight deleted successfully')


# -----------------------------------------------------------------------------
# Passengers nested in a flight
# -----------------------------------------------------------------------------

@flights_bp.route('/<flight_code>/passengers', methods=['GET'])
def list_flight_passengers(flight_code: str):
    passengers = _repository().list_passengers(flight_code)
    return success_response(passengers, 'Passengers retrieved successfully')


@flights_bp.route('/<flight_code>/passengers', methods=['POST'])
def add_passenger(flight_code: str):
    body = parse_body(PassengerPayload, request.get_json(silent=True))
    flight = _repository().add_passenger(flight_code, body.to_document())
    return success_response(flight.to_dict(), 'Passenger added successfully')


@flights_bp.route('/<flight_code>/passengers/<passenger_id>', methods=['PUT'])
def update_passenger(flight_code: str, passenger_id: str):
    """Merge the sent fields onto one passenger; its position is kept."""
    pid = parse_passenger_id(passenger_id)
    body = parse_body(PassengerPatch, request.get_json(silent=True))
    flight = _repository().update_passenger(flight_code, pid, body.to_changes())
    return success_response(flight.to_dict(), 'Passenger updated successfully')


@flights_bp.route('/<flight_code>/passengers/<passenger_id>', methods=['DELETE'])
def remove_passenger(flight_code: str, passenger_id: str):
    pid = parse_passenger_id(passenger_id)
    flight = _repository().remove_passenger(flight_code, pid)
    return success_response(flight.to_dict(), 'Passenger removed successfully')
