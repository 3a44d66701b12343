"""
Cross-flight passenger search.

Provides endpoints for:
- GET /api/passengers - Search passengers across every flight
"""

import logging

from flask import Blueprint, current_app, request

from flightroster.api.responses import success_response
from flightroster.api.schemas import PassengerSearchQuery, parse_query

logger = logging.getLogger(__name__)

passengers_bp = Blueprint('passengers', __name__, url_prefix='/api/passengers')


@passengers_bp.route('', methods=['GET'])
def search_passengers():
    """
    Search passengers of all flights.

    Query parameters (all optional, combined with AND):
    - id: exact passenger id
    - name: case-insensitive substring of the name
    - reservationId, flightCategory: exact match
    - hasConnections, hasCheckedBaggage: true|false
    - minAge, maxAge: inclusive age bounds

    Results are bare passenger records; the owning flight is not reported.
    """
    criteria = parse_query(PassengerSearchQuery, request.args).to_criteria()
    passengers = current_app.config['FLIGHT_REPOSITORY'].search_passengers(criteria)
    logger.debug(f'Passenger search matched {len(passengers)} records')
    return success_response(passengers, 'Passengers retrieved successfully')
