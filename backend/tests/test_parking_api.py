import pytest

from parkit.api.deps import get_parking_service
from parkit.core.errors import PersistenceError
from parkit.db.repository import ParkingRepository
from parkit.db.session import SessionLocal
from parkit.main import app
from parkit.services.messages import WELCOME_BACK
from parkit.services.parking_service import ParkingService


@pytest.fixture
def timed_client(client, clock):
    """Client whose parking service runs on the test clock."""
    def _service():
        db = SessionLocal()
        try:
            yield ParkingService(ParkingRepository(db), clock=clock)
        finally:
            db.close()

    app.dependency_overrides[get_parking_service] = _service
    yield client
    app.dependency_overrides.clear()


def park(client, reg="ABCDEF", parking_type="CAR"):
    return client.post("/parking/incoming", json={"parking_type": parking_type, "vehicle_reg_number": reg})


def test_health(client):
    r = client.get("/health/")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_spots(client):
    r = client.get("/parking/spots")
    assert r.status_code == 200
    data = r.json()
    assert [s["id"] for s in data] == [1, 2, 3, 4, 5]
    assert [s["parking_type"] for s in data] == ["CAR", "CAR", "CAR", "BIKE", "BIKE"]
    assert all(s["available"] for s in data)


def test_incoming_vehicle(client):
    r = park(client)
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["parking_number"] == 1
    assert data["welcome_back"] is False
    assert "Generated Ticket and saved in DB" in data["messages"]
    assert "Please park your vehicle in spot number:1" in data["messages"]
    assert any(m.startswith("Recorded in-time for vehicle number:ABCDEF is:") for m in data["messages"])

    spots = client.get("/parking/spots").json()
    assert spots[0]["available"] is False


def test_incoming_with_menu_selection(client):
    r = client.post("/parking/incoming", json={"parking_type": 2, "vehicle_reg_number": "BIKE01"})
    assert r.status_code == 201, r.text
    assert r.json()["parking_number"] == 4


def test_exit_flow_and_returning_user(timed_client, clock):
    assert park(timed_client).status_code == 201
    clock.advance(minutes=90)
    r = timed_client.post("/parking/exiting", json={"vehicle_reg_number": "ABCDEF"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["price"] == pytest.approx(2.25)
    assert "Please pay the parking fare:2.25" in data["messages"]
    assert any(m.startswith("Recorded out-time for vehicle number:ABCDEF is:") for m in data["messages"])

    r = timed_client.get("/parking/returning/ABCDEF")
    assert r.json() == {"vehicle_reg_number": "ABCDEF", "returning_user": True, "message": WELCOME_BACK}

    clock.advance(hours=1)
    again = park(timed_client).json()
    assert again["welcome_back"] is True
    assert again["messages"][0] == WELCOME_BACK


def test_ticket_lookup(client):
    park(client)
    r = client.get("/parking/tickets/ABCDEF")
    assert r.status_code == 200
    data = r.json()
    assert data["vehicle_reg_number"] == "ABCDEF"
    assert data["out_time"] is None
    assert data["price"] == 0
    assert client.get("/parking/tickets/NOBODY").status_code == 404


def test_full_lot_is_a_conflict(client):
    for reg in ("CAR1", "CAR2", "CAR3"):
        assert park(client, reg).status_code == 201
    r = park(client, "CAR4")
    assert r.status_code == 409
    assert "parking lot is full" in r.json()["detail"]


def test_exit_without_session(client):
    r = client.post("/parking/exiting", json={"vehicle_reg_number": "GHOST1"})
    assert r.status_code == 404


def test_unknown_parking_type(client):
    r = park(client, parking_type="TRUCK")
    assert r.status_code == 400


def test_already_parked(client):
    park(client)
    assert park(client).status_code == 409


@pytest.mark.parametrize("reg", ["", "WAYTOOLONG1"])
def test_malformed_registration_number(client, reg):
    assert park(client, reg).status_code == 422


def test_blank_registration_number(client):
    assert park(client, "   ").status_code == 400


def test_padded_registration_number(client):
    assert park(client, " ABC ").status_code == 400


def test_database_failure_is_service_unavailable(client, monkeypatch):
    def broken_save(self, ticket):
        raise PersistenceError("Error while trying to save ticket")

    monkeypatch.setattr(ParkingRepository, "save_ticket", broken_save)
    r = park(client)
    assert r.status_code == 503
    assert r.json()["detail"] == "Unable to update ticket information. Error occurred"

    monkeypatch.undo()
    spots = client.get("/parking/spots").json()
    assert spots[0]["available"] is True
