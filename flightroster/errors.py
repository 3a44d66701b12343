"""
Exception hierarchy for FlightRoster.

Every error raised by the repository or the request layer carries the
HTTP status it maps to, so the app-level error handlers can turn any of
them into the standard error envelope.
"""


class FlightRosterError(Exception):
    """Base error for the application."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RequestValidationError(FlightRosterError):
    """Malformed or missing request fields, or an invalid enumerated value."""

    status_code = 400


class NotFoundError(FlightRosterError):
    """A flight or passenger does not exist."""

    status_code = 404


class FlightNotFoundError(NotFoundError):

    def __init__(self, flight_code: str):
        super().__init__(f'Flight with code {flight_code} not found')
        self.flight_code = flight_code


class PassengerNotFoundError(NotFoundError):

    def __init__(self, flight_code: str, passenger_id: int):
        super().__init__(f'Passenger with ID {passenger_id} not found on flight {flight_code}')
        self.flight_code = flight_code
        self.passenger_id = passenger_id


class ConflictError(FlightRosterError):
    """A write would break a uniqueness invariant or lost a concurrent race."""

    # Reported like a rejected request, not as a distinct status
    status_code = 400


class FlightConflictError(ConflictError):

    def __init__(self, flight_code: str):
        super().__init__(f'A flight with code {flight_code} already exists')
        self.flight_code = flight_code


class PassengerConflictError(ConflictError):

    def __init__(self, flight_code: str, passenger_id: int):
        super().__init__(f'A passenger with ID {passenger_id} already exists on flight {flight_code}')
        self.flight_code = flight_code
        self.passenger_id = passenger_id


class ConcurrentModificationError(ConflictError):
    """The flight changed between our read and our write."""

    def __init__(self, flight_code: str):
        super().__init__(f'Flight {flight_code} was modified by another request, retry the operation')
        self.flight_code = flight_code


class StoreNotConnectedError(FlightRosterError):
    """The document store was used before connect() or after disconnect()."""
