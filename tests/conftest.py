import pytest

from flightroster.app import create_app
from flightroster.models import FlightStore
from flightroster.services import FlightRepository


@pytest.fixture
def store(tmp_path):
    """Connected store backed by a throwaway SQLite file."""
    store = FlightStore(f"sqlite:///{tmp_path / 'flights.db'}")
    store.connect()
    yield store
    store.disconnect()


@pytest.fixture
def repository(store):
    return FlightRepository(store)


@pytest.fixture
def make_passenger():
    """Builds passenger documents (factory as fixture)."""

    def _factory(
        id: int = 1,
        name: str = "Ana",
        age: int = 30,
        has_connections: bool = False,
        has_checked_baggage: bool = True,
        reservation_id: str = "ABC123",
        flight_category: str = "Gold",
    ) -> dict:
        return {
            "id": id,
            "name": name,
            "hasConnections": has_connections,
            "age": age,
            "flightCategory": flight_category,
            "reservationId": reservation_id,
            "hasCheckedBaggage": has_checked_baggage,
        }

    return _factory


@pytest.fixture
def app(store):
    app = create_app(store=store, seed=False)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
