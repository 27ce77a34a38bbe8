"""REST API: clients, vehicles, appointments and the board endpoint"""

from sqlalchemy.exc import OperationalError

from garagepilot.domain.appointments.repository import AppointmentRepository
from garagepilot.domain.appointments.router import get_appointment_service
from garagepilot.domain.appointments.service import AppointmentService
from garagepilot.domain.appointments.workflow import TransitionPolicy
from garagepilot.main import app


def create_client(client, **overrides):
    payload = {"name": "Priya Shah", "email": "Priya@Example.com", "phone": "555-0199"}
    payload.update(overrides)
    response = client.post("/api/clients", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_vehicle(client, owner_id, **overrides):
    payload = {
        "make": "Subaru",
        "model": "Outback",
        "year": 2021,
        "vin": "4s4btgpd0m3123456",
        "licensePlate": "xyz  987",
        "mileage": 22000,
        "ownerId": owner_id,
    }
    payload.update(overrides)
    response = client.post("/api/vehicles", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_appointment(client, client_id, vehicle_id, **overrides):
    payload = {
        "clientId": client_id,
        "vehicleId": vehicle_id,
        "date": "2026-04-01T10:30:00",
        "serviceType": "Annual service",
        "mechanic": "Sam",
    }
    payload.update(overrides)
    response = client.post("/api/appointments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    def test_root_and_health(self, client):
        assert client.get("/").json() == {"message": "GaragePilot API is running"}
        assert client.get("/health").json() == {"status": "healthy"}

    def test_security_headers_on_api_responses(self, client):
        response = client.get("/api/clients")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "no-store" in response.headers["Cache-Control"]
        assert "X-Frame-Options" not in client.get("/health").headers


class TestClients:
    def test_crud(self, client):
        created = create_client(client)
        assert created["id"].startswith("cli-")
        assert created["email"] == "priya@example.com"

        updated = client.put(f"/api/clients/{created['id']}", json={"address": "12 Mill Lane"})
        assert updated.status_code == 200
        assert updated.json()["address"] == "12 Mill Lane"
        assert updated.json()["name"] == "Priya Shah"

        assert [c["id"] for c in client.get("/api/clients").json()] == [created["id"]]

        assert client.delete(f"/api/clients/{created['id']}").status_code == 204
        assert client.get(f"/api/clients/{created['id']}").status_code == 404

    def test_invalid_email_is_rejected(self, client):
        response = client.post("/api/clients", json={"name": "X", "email": "not-an-email"})
        assert response.status_code == 422

    def test_listed_by_name(self, client):
        create_client(client, name="Zoe Park", email=None)
        create_client(client, name="Amir Haddad", email=None)

        names = [c["name"] for c in client.get("/api/clients").json()]
        assert names == ["Amir Haddad", "Zoe Park"]

    def test_delete_removes_vehicles_and_appointments(self, client):
        owner = create_client(client)
        car = create_vehicle(client, owner["id"])
        create_appointment(client, owner["id"], car["id"])

        client.delete(f"/api/clients/{owner['id']}")

        assert client.get("/api/vehicles").json() == []
        assert client.get("/api/appointments").json() == []


class TestVehicles:
    def test_create_normalises_vin_and_plate(self, client):
        owner = create_client(client)
        car = create_vehicle(client, owner["id"])

        assert car["id"].startswith("veh-")
        assert car["vin"] == "4S4BTGPD0M3123456"
        assert car["licensePlate"] == "XYZ 987"
        assert car["status"] == "Available"

    def test_invalid_vin_is_rejected(self, client):
        owner = create_client(client)
        response = client.post(
            "/api/vehicles",
            json={"make": "Ford", "model": "Focus", "vin": "IOQ123", "ownerId": owner["id"]},
        )
        assert response.status_code == 422

    def test_unknown_owner(self, client):
        response = client.post(
            "/api/vehicles", json={"make": "Ford", "model": "Focus", "ownerId": "cli-missing"}
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Owner client not found"

    def test_update_status_and_mileage(self, client):
        owner = create_client(client)
        car = create_vehicle(client, owner["id"])

        response = client.put(
            f"/api/vehicles/{car['id']}", json={"status": "In Service", "mileage": 23010}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "In Service"
        assert response.json()["mileage"] == 23010
        assert response.json()["make"] == "Subaru"

    def test_delete(self, client):
        owner = create_client(client)
        car = create_vehicle(client, owner["id"])

        assert client.delete(f"/api/vehicles/{car['id']}").status_code == 204
        assert client.get(f"/api/vehicles/{car['id']}").status_code == 404


class TestAppointments:
    def test_new_appointment_is_scheduled(self, client):
        owner = create_client(client)
        car = create_vehicle(client, owner["id"])
        appointment = create_appointment(client, owner["id"], car["id"])

        assert appointment["id"].startswith("apt-")
        assert appointment["status"] == "Scheduled"
        assert appointment["clientId"] == owner["id"]

    def test_unknown_vehicle(self, client):
        owner = create_client(client)
        response = client.post(
            "/api/appointments",
            json={
                "clientId": owner["id"],
                "vehicleId": "veh-missing",
                "date": "2026-04-01T10:30:00",
                "serviceType": "MOT",
            },
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Vehicle not found"

    def test_listed_by_date(self, seeded_garage, client):
        ids = [a["id"] for a in client.get("/api/appointments").json()]
        assert ids == ["apt-1", "apt-2", "apt-3", "apt-4"]

    def test_patch_status(self, seeded_garage, client):
        response = client.patch("/api/appointments/apt-1/status", json={"status": "Quality Check"})

        assert response.status_code == 200
        assert response.json()["status"] == "Quality Check"
        assert client.get("/api/appointments/apt-1").json()["status"] == "Quality Check"

    def test_patch_status_back_from_completed(self, seeded_garage, client):
        client.patch("/api/appointments/apt-3/status", json={"status": "Completed"})
        response = client.patch("/api/appointments/apt-3/status", json={"status": "Scheduled"})

        assert response.status_code == 200
        assert response.json()["status"] == "Scheduled"

    def test_patch_status_unknown_appointment(self, client):
        response = client.patch("/api/appointments/apt-404/status", json={"status": "Completed"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Appointment not found"

    def test_patch_status_rejects_unknown_value(self, seeded_garage, client):
        response = client.patch("/api/appointments/apt-1/status", json={"status": "Archived"})
        assert response.status_code == 422

    def test_patch_status_conflict_under_forward_only(self, seeded_garage, client):
        app.dependency_overrides[get_appointment_service] = lambda: AppointmentService(
            seeded_garage, TransitionPolicy.forward_only()
        )

        response = client.patch("/api/appointments/apt-3/status", json={"status": "Scheduled"})

        assert response.status_code == 409
        assert client.get("/api/appointments/apt-3").json()["status"] == "In Progress"

    def test_put_updates_only_given_fields(self, seeded_garage, client):
        response = client.put(
            "/api/appointments/apt-2", json={"mechanic": "Jo", "notes": "Customer waiting"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["mechanic"] == "Jo"
        assert body["notes"] == "Customer waiting"
        assert body["serviceType"] == "Brake inspection"
        assert body["status"] == "Scheduled"

    def test_delete(self, seeded_garage, client):
        assert client.delete("/api/appointments/apt-2").status_code == 204
        assert client.delete("/api/appointments/apt-2").status_code == 404

    def test_status_summary(self, seeded_garage, client):
        summary = client.get("/api/appointments/status-summary").json()

        assert summary["total"] == 4
        assert summary["counts"] == {
            "Scheduled": 2,
            "In Progress": 1,
            "Waiting for Parts": 0,
            "Quality Check": 0,
            "Completed": 0,
            "Cancelled": 1,
        }


class TestBoardEndpoint:
    def test_columns_in_workflow_order(self, seeded_garage, client):
        board = client.get("/api/board").json()

        assert [c["status"] for c in board["columns"]] == [
            "Scheduled",
            "In Progress",
            "Waiting for Parts",
            "Quality Check",
            "Completed",
        ]
        assert [c["count"] for c in board["columns"]] == [2, 1, 0, 0, 0]
        assert board["total"] == 3
        assert board["error"] is None

    def test_cards_carry_vehicle_and_client(self, seeded_garage, client):
        board = client.get("/api/board").json()

        card = board["columns"][0]["cards"][0]
        assert card["appointment"]["id"] == "apt-1"
        assert card["vehicle"]["licensePlate"] == "ABC 123"
        assert card["client"]["name"] == "Dana Reyes"

    def test_board_follows_status_changes(self, seeded_garage, client):
        client.patch("/api/appointments/apt-2/status", json={"status": "Waiting for Parts"})

        board = client.get("/api/board").json()
        waiting = board["columns"][2]
        assert [c["appointment"]["id"] for c in waiting["cards"]] == ["apt-2"]

    def test_empty_garage(self, client):
        board = client.get("/api/board").json()

        assert board["total"] == 0
        assert all(c["cards"] == [] for c in board["columns"])

    def test_failed_fetch_returns_empty_columns_with_error(self, seeded_garage, client, monkeypatch):
        def broken(db):
            raise OperationalError("SELECT appointments", {}, Exception("database is locked"))

        monkeypatch.setattr(AppointmentRepository, "get_appointments", staticmethod(broken))

        response = client.get("/api/board")
        board = response.json()

        assert response.status_code == 200
        assert board["total"] == 0
        assert [c["count"] for c in board["columns"]] == [0, 0, 0, 0, 0]
        assert "database is locked" in board["error"]
