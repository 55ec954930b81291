# tests/api/v1/test_waitlist.py

from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.api.v1.endpoints import waitlist as waitlist_endpoints
from app.models.waitlist import WaitlistEntry
from app.services.seating.service import seating_service
from tests.utils.seating import create_waitlist_entry, seat_client

ENTRY_DATA = {
    "venue_id": "Loja 3",
    "client_name": "Diego Alves",
    "client_phone": "11999990000",
    "broker_id": "user_broker",
    "broker_name": "Corretor Um",
    "desired_development": "Residencial Aurora",
}


def test_waitlist_lifecycle(test_client_e2e: TestClient, db_session: Session):
    # 1. QUEUE a client
    response = test_client_e2e.post("/api/v1/waitlist", json=ENTRY_DATA)
    assert response.status_code == 201
    entry = response.json()
    assert entry["status"] == "waiting"
    assert entry["client_document"] == "00000000000"
    assert entry["wait_exceeded"] is False

    # 2. LIST the waiting clients
    response = test_client_e2e.get("/api/v1/waitlist", params={"venue_id": "Loja 3"})
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [entry["id"]]

    # 3. CHANGE the broker
    response = test_client_e2e.patch(
        f"/api/v1/waitlist/{entry['id']}/broker",
        json={"broker_id": "user_other", "broker_name": "Corretor Dois"},
    )
    assert response.status_code == 200
    assert response.json()["broker_name"] == "Corretor Dois"

    # 4. PROMOTE to a table
    response = test_client_e2e.post(
        f"/api/v1/waitlist/{entry['id']}/promote", json={"desired_table_number": 4}
    )
    assert response.status_code == 201
    visit = response.json()
    assert visit["table_number"] == 4
    assert visit["client_name"] == "Diego Alves"
    assert visit["broker_id"] == "user_other"

    # 5. The entry left the list and cannot be promoted again
    response = test_client_e2e.get("/api/v1/waitlist")
    assert response.json() == []

    response = test_client_e2e.post(f"/api/v1/waitlist/{entry['id']}/promote", json={})
    assert response.status_code == 409
    assert response.json()["detail"]["outcome"] == "already_seated"

    seated = db_session.get(WaitlistEntry, entry["id"])
    assert seated.status == "seated"
    assert seated.visit_id == visit["id"]


def test_promote_on_full_venue(test_client_e2e: TestClient, db_session: Session):
    visits = [seat_client(db_session, table_number=n) for n in range(1, 11)]
    entry = create_waitlist_entry(db_session)

    response = test_client_e2e.post(f"/api/v1/waitlist/{entry.id}/promote", json={})
    assert response.status_code == 409
    assert response.json()["detail"]["outcome"] == "venue_full"

    test_client_e2e.post(f"/api/v1/visits/{visits[3].id}/finalize")

    response = test_client_e2e.post(f"/api/v1/waitlist/{entry.id}/promote", json={})
    assert response.status_code == 201
    assert response.json()["table_number"] == 4


def test_remove_from_waitlist(test_client_e2e: TestClient, db_session: Session):
    entry = create_waitlist_entry(db_session)

    response = test_client_e2e.delete(f"/api/v1/waitlist/{entry.id}")
    assert response.status_code == 204

    response = test_client_e2e.delete(f"/api/v1/waitlist/{entry.id}")
    assert response.status_code == 404


def test_seated_entry_cannot_be_changed(test_client_e2e: TestClient, db_session: Session):
    entry = create_waitlist_entry(db_session)
    test_client_e2e.post(f"/api/v1/waitlist/{entry.id}/promote", json={})

    response = test_client_e2e.patch(
        f"/api/v1/waitlist/{entry.id}/broker", json={"broker_id": "user_other"}
    )
    assert response.status_code == 409

    response = test_client_e2e.delete(f"/api/v1/waitlist/{entry.id}")
    assert response.status_code == 409


def test_add_to_waitlist_unknown_venue(test_client_e2e: TestClient):
    response = test_client_e2e.post(
        "/api/v1/waitlist", json={**ENTRY_DATA, "venue_id": "Loja 99"}
    )

    assert response.status_code == 400


def test_promote_unknown_entry(test_client_e2e: TestClient):
    response = test_client_e2e.post("/api/v1/waitlist/wle_missing/promote", json={})

    assert response.status_code == 404


def test_long_wait_is_flagged(test_client_e2e: TestClient, db_session: Session):
    entry = create_waitlist_entry(db_session)
    entry.created_at = datetime.now(timezone.utc) - timedelta(minutes=25)
    db_session.commit()

    response = test_client_e2e.get("/api/v1/waitlist")

    assert response.json()[0]["wait_exceeded"] is True


def seat_after_check(monkeypatch):
    """Another receptionist promotes the client right after the status check passes."""
    check_entry = waitlist_endpoints._get_waiting_entry

    def check_then_seat(db, entry_id):
        found = check_entry(db, entry_id)
        seating_service.promote_from_waitlist(db, entry_id=entry_id)
        return found

    monkeypatch.setattr(waitlist_endpoints, "_get_waiting_entry", check_then_seat)


def test_entry_seated_after_the_check_is_kept(
    monkeypatch, test_client_e2e: TestClient, db_session: Session
):
    entry = create_waitlist_entry(db_session)
    seat_after_check(monkeypatch)

    response = test_client_e2e.delete(f"/api/v1/waitlist/{entry.id}")

    assert response.status_code == 409
    seated = db_session.get(WaitlistEntry, entry.id)
    assert seated is not None
    assert seated.status == "seated"


def test_broker_of_entry_seated_after_the_check_is_kept(
    monkeypatch, test_client_e2e: TestClient, db_session: Session
):
    entry = create_waitlist_entry(db_session)
    seat_after_check(monkeypatch)

    response = test_client_e2e.patch(
        f"/api/v1/waitlist/{entry.id}/broker", json={"broker_id": "user_other"}
    )

    assert response.status_code == 409
    assert db_session.get(WaitlistEntry, entry.id).broker_id == "user_broker"
