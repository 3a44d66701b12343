"""
Sample flights for local development.

Seeding is an explicit bootstrap step and only runs against an empty store.
"""

import logging

from flightroster.models.flight import FlightCategory
from flightroster.services.flight_repository import FlightRepository

logger = logging.getLogger(__name__)


SAMPLE_FLIGHTS = [
    {
        'flightCode': 'LAN123',
        'passengers': [
            {
                'id': 139577,
                'name': 'Martín Alvarez',
                'hasConnections': False,
                'age': 2,
                'flightCategory': FlightCategory.GOLD.value,
                'reservationId': '8ZC5KYVK',
                'hasCheckedBaggage': False,
            },
            {
                'id': 530874,
                'name': 'Jorge Hernández',
                'hasConnections': False,
                'age': 16,
                'flightCategory': FlightCategory.BLACK.value,
                'reservationId': 'O2DQ3SZS',
                'hasCheckedBaggage': False,
            },
        ],
    },
    {
        'flightCode': 'SKY123',
        'passengers': [
            {
                'id': 426098,
                'name': 'Pedro Ruiz',
                'hasConnections': False,
                'age': 33,
                'flightCategory': FlightCategory.BLACK.value,
                'reservationId': 'KSXXOALO',
                'hasCheckedBaggage': True,
            },
        ],
    },
]


def seed_sample_flights(repository: FlightRepository) -> int:
    """
    Insert the sample flights if the store holds no flights yet.

    Returns:
        Number of flights inserted (0 when the store was not empty).
    """
    existing = repository.count()
    if existing > 0:
        logger.info(f'Store already holds {existing} flights, skipping sample data')
        return 0

    for flight in SAMPLE_FLIGHTS:
        repository.create(flight['flightCode'], flight['passengers'])

    logger.info(f'Seeded {len(SAMPLE_FLIGHTS)} sample flights')
    return len(SAMPLE_FLIGHTS)
