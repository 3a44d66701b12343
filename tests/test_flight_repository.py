import pytest

from flightroster.errors import (
    ConcurrentModificationError,
    FlightConflictError,
    FlightNotFoundError,
    PassengerConflictError,
    PassengerNotFoundError,
)
from flightroster.services import SAMPLE_FLIGHTS, seed_sample_flights
from flightroster.services.search import FlightSearchCriteria, PassengerSearchCriteria


class TestFlightOperations:
    """Flight-level repository operations"""

    def test_create_then_get_round_trips(self, repository, make_passenger):
        passengers = [make_passenger(id=2, name="Luis"), make_passenger(id=1)]

        repository.create("LAN123", passengers)
        flight = repository.get_by_code("LAN123")

        assert flight.flight_code == "LAN123"
        assert flight.passengers == passengers
        assert flight.created_at is not None

    def test_create_duplicate_code_conflicts_and_keeps_original(self, repository, make_passenger):
        repository.create("LAN123", [make_passenger(id=1)])

        with pytest.raises(FlightConflictError, match="LAN123"):
            repository.create("LAN123", [make_passenger(id=9, name="Other")])

        flight = repository.get_by_code("LAN123")
        assert [p["id"] for p in flight.passengers] == [1]

    def test_create_with_duplicate_passenger_ids_conflicts(self, repository, make_passenger):
        with pytest.raises(PassengerConflictError):
            repository.create("LAN123", [make_passenger(id=1), make_passenger(id=1)])
        assert repository.count() == 0

    def test_create_with_no_passengers(self, repository):
        flight = repository.create("EMPTY1", [])
        assert flight.passengers == []

    def test_get_missing_flight_raises_not_found(self, repository):
        with pytest.raises(FlightNotFoundError, match="DOES_NOT_EXIST"):
            repository.get_by_code("DOES_NOT_EXIST")

    def test_list_all_keeps_insertion_order(self, repository):
        for code in ("C3", "A1", "B2"):
            repository.create(code, [])
        assert [f.flight_code for f in repository.list_all()] == ["C3", "A1", "B2"]

    def test_update_replaces_passengers_wholesale(self, repository, make_passenger):
        repository.create("LAN123", [make_passenger(id=1), make_passenger(id=2)])

        flight = repository.update("LAN123", {"passengers": [make_passenger(id=7, name="Zoe")]})

        assert [p["id"] for p in flight.passengers] == [7]
        assert repository.get_by_code("LAN123").passengers[0]["name"] == "Zoe"

    def test_update_renames_flight(self, repository):
        repository.create("LAN123", [])

        flight = repository.update("LAN123", {"flightCode": "LAN999"})

        assert flight.flight_code == "LAN999"
        with pytest.raises(FlightNotFoundError):
            repository.get_by_code("LAN123")
        assert repository.get_by_code("LAN999").flight_code == "LAN999"

    def test_update_rename_to_existing_code_conflicts(self, repository):
        repository.create("LAN123", [])
        repository.create("SKY123", [])

        with pytest.raises(FlightConflictError, match="SKY123"):
            repository.update("LAN123", {"flightCode": "SKY123"})

        assert repository.get_by_code("LAN123").flight_code == "LAN123"

    def test_update_with_same_code_is_allowed(self, repository):
        repository.create("LAN123", [])
        flight = repository.update("LAN123", {"flightCode": "LAN123"})
        assert flight.flight_code == "LAN123"

    def test_update_missing_flight_raises_not_found(self, repository):
        with pytest.raises(FlightNotFoundError):
            repository.update("NOPE", {"flightCode": "X"})

    def test_delete(self, repository):
        repository.create("LAN123", [])

        repository.delete("LAN123")

        assert repository.count() == 0
        with pytest.raises(FlightNotFoundError):
            repository.delete("LAN123")


class TestPassengerOperations:
    """Passenger operations on a flight's embedded list"""

    @pytest.fixture(autouse=True)
    def flight(self, repository, make_passenger):
        return repository.create(
            "LAN123",
            [make_passenger(id=1, name="Ana"), make_passenger(id=2, name="Luis"), make_passenger(id=3, name="Eva")],
        )

    def test_add_passenger_appends(self, repository, make_passenger):
        flight = repository.add_passenger("LAN123", make_passenger(id=4, name="Tom"))
        assert [p["id"] for p in flight.passengers] == [1, 2, 3, 4]

    def test_add_duplicate_passenger_conflicts_and_keeps_list(self, repository, make_passenger):
        with pytest.raises(PassengerConflictError, match="ID 1"):
            repository.add_passenger("LAN123", make_passenger(id=1, name="Dup"))
        assert len(repository.get_by_code("LAN123").passengers) == 3

    def test_add_passenger_to_missing_flight(self, repository, make_passenger):
        with pytest.raises(FlightNotFoundError):
            repository.add_passenger("NOPE", make_passenger())

    def test_update_passenger_merges_in_place(self, repository):
        before = repository.get_by_code("LAN123").passengers[1]

        repository.update_passenger("LAN123", 2, {"name": "X"})

        passengers = repository.get_by_code("LAN123").passengers
        assert [p["id"] for p in passengers] == [1, 2, 3]
        assert passengers[1] == {**before, "name": "X"}

    def test_update_passenger_id_to_existing_id_conflicts(self, repository):
        with pytest.raises(PassengerConflictError):
            repository.update_passenger("LAN123", 2, {"id": 3})

    def test_update_missing_passenger(self, repository):
        with pytest.raises(PassengerNotFoundError, match="ID 99"):
            repository.update_passenger("LAN123", 99, {"name": "X"})

    def test_remove_passenger_shifts_following(self, repository):
        flight = repository.remove_passenger("LAN123", 2)
        assert [p["id"] for p in flight.passengers] == [1, 3]

    def test_remove_missing_passenger_keeps_list(self, repository):
        with pytest.raises(PassengerNotFoundError):
            repository.remove_passenger("LAN123", 99)
        assert len(repository.get_by_code("LAN123").passengers) == 3

    def test_list_passengers(self, repository):
        assert [p["name"] for p in repository.list_passengers("LAN123")] == ["Ana", "Luis", "Eva"]

    def test_stale_write_is_rejected(self, repository, make_passenger):
        """A write based on an outdated read fails instead of overwriting"""

        def mutate(session, flight):
            # Another request lands between our read and our write
            repository.add_passenger("LAN123", make_passenger(id=10, name="First"))
            flight.passengers = [*flight.passengers, make_passenger(id=11, name="Second")]

        with pytest.raises(ConcurrentModificationError):
            repository._modify("LAN123", mutate)

        ids = [p["id"] for p in repository.get_by_code("LAN123").passengers]
        assert ids == [1, 2, 3, 10]


class TestSearch:
    """Search operations backed by the store"""

    @pytest.fixture(autouse=True)
    def flights(self, repository, make_passenger):
        repository.create("LAN123", [
            make_passenger(id=1, name="Ana", age=10, reservation_id="R1", flight_category="Gold"),
            make_passenger(id=2, name="Luis", age=25, reservation_id="R2", has_connections=True,
                           flight_category="Black"),
        ])
        repository.create("SKY123", [
            make_passenger(id=1, name="Mariana", age=20, reservation_id="R3", has_checked_baggage=False,
                           flight_category="Normal"),
        ])

    def test_empty_criteria_equals_list_all(self, repository):
        searched = repository.search_flights(FlightSearchCriteria())
        assert [f.flight_code for f in searched] == [f.flight_code for f in repository.list_all()]

    def test_search_by_flight_code(self, repository):
        result = repository.search_flights(FlightSearchCriteria(flight_code="SKY123"))
        assert [f.flight_code for f in result] == ["SKY123"]

    def test_search_by_reservation(self, repository):
        result = repository.search_flights(FlightSearchCriteria(reservation_id="R2"))
        assert [f.flight_code for f in result] == ["LAN123"]

    def test_search_combines_flight_code_and_passenger_fields(self, repository):
        result = repository.search_flights(FlightSearchCriteria(flight_code="SKY123", has_connections=True))
        assert result == []

    def test_search_passengers_by_age_range(self, repository):
        result = repository.search_passengers(PassengerSearchCriteria(min_age=10, max_age=20))
        assert sorted(p["name"] for p in result) == ["Ana", "Mariana"]

    def test_search_passengers_by_name_across_flights(self, repository):
        result = repository.search_passengers(PassengerSearchCriteria(name="AN"))
        assert [p["name"] for p in result] == ["Ana", "Mariana"]


class TestSampleData:
    """Explicit sample-data seed"""

    def test_seeds_empty_store(self, repository):
        assert seed_sample_flights(repository) == len(SAMPLE_FLIGHTS)
        assert [f.flight_code for f in repository.list_all()] == ["LAN123", "SKY123"]

    def test_skips_non_empty_store(self, repository):
        repository.create("OWN1", [])
        assert seed_sample_flights(repository) == 0
        assert repository.count() == 1
