import asyncio
from datetime import timedelta

import pytest
from httpx import AsyncClient

from clubhub.clock import utcnow
from clubhub.config import settings
from clubhub.database import database
from clubhub.errors import AuthorizationError, NotFoundError, PolicyRejection, RejectionReason
from clubhub.schemas.common import ClubName, RegistrationStatus
from clubhub.schemas.registration import EventRegistrationRequest
from clubhub.services.registration_service import registration_service

from tests.conftest import auth_headers


async def registration_count(event_id) -> int:
    return await database.fetch_val(
        "SELECT COUNT(*) FROM event_registrations WHERE event_id = :event_id",
        {"event_id": str(event_id)}
    )


@pytest.mark.asyncio
async def test_register_for_event(client: AsyncClient, admin, student, make_event):
    """Registration snapshots the student profile"""
    event = await make_event(admin)

    response = await client.post(
        f"/events/{event['id']}/registrations",
        json={"phone": "+91 98765 43210", "additionalInfo": "Vegetarian lunch"},
        headers=auth_headers(student)
    )

    assert response.status_code == 201
    data = response.json()
    assert data["eventId"] == str(event["id"])
    assert data["studentId"] == student["id"]
    assert data["studentName"] == student["name"]
    assert data["rollNumber"] == student["roll_number"]
    assert data["email"] == student["email"]
    assert data["additionalInfo"] == "Vegetarian lunch"
    assert data["status"] == "registered"


@pytest.mark.asyncio
async def test_register_without_body(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin)

    response = await client.post(f"/events/{event['id']}/registrations", headers=auth_headers(student))

    assert response.status_code == 201
    assert response.json()["phone"] is None


@pytest.mark.asyncio
async def test_admin_cannot_register(client: AsyncClient, admin, make_event):
    event = await make_event(admin)

    response = await client.post(f"/events/{event['id']}/registrations", headers=auth_headers(admin))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_register_requires_token(client: AsyncClient, admin, make_event):
    event = await make_event(admin)

    response = await client.post(f"/events/{event['id']}/registrations")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_register_unknown_event(client: AsyncClient, student):
    response = await client.post(
        "/events/00000000-0000-0000-0000-000000000000/registrations",
        headers=auth_headers(student)
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Event not found or inactive"


@pytest.mark.asyncio
async def test_register_inactive_event(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin, is_active=False)

    response = await client.post(f"/events/{event['id']}/registrations", headers=auth_headers(student))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_past_event(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin, event_date=utcnow() - timedelta(hours=1))

    response = await client.post(f"/events/{event['id']}/registrations", headers=auth_headers(student))

    assert response.status_code == 400
    assert response.json() == {"message": "Cannot register for past events", "reason": "already_occurred"}


@pytest.mark.asyncio
async def test_register_after_deadline(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin, registration_deadline=utcnow() - timedelta(minutes=5))

    response = await client.post(f"/events/{event['id']}/registrations", headers=auth_headers(student))

    assert response.status_code == 400
    assert response.json()["reason"] == "deadline_passed"
    assert response.json()["message"] == "Registration deadline has passed"


@pytest.mark.asyncio
async def test_deadline_rejects_after_earlier_success(admin, make_student, make_event):
    """A closed deadline rejects new sign-ups whatever happened before"""
    event = await make_event(admin, registration_deadline=utcnow() + timedelta(days=1))
    first, second = await make_student(), await make_student()

    await registration_service.register_for_event(first, event["id"])
    await database.execute(
        "UPDATE events SET registration_deadline = :deadline WHERE id = :id",
        {"id": str(event["id"]), "deadline": utcnow() - timedelta(seconds=1)}
    )

    with pytest.raises(PolicyRejection) as exc_info:
        await registration_service.register_for_event(second, event["id"])
    assert exc_info.value.reason == RejectionReason.DEADLINE_PASSED


@pytest.mark.asyncio
async def test_capacity_boundary(admin, make_student, make_event):
    event = await make_event(admin, max_participants=2)
    students = [await make_student() for _ in range(3)]

    await registration_service.register_for_event(students[0], event["id"])
    # k - 1 taken: the next one fits
    await registration_service.register_for_event(students[1], event["id"])

    with pytest.raises(PolicyRejection) as exc_info:
        await registration_service.register_for_event(students[2], event["id"])
    assert exc_info.value.reason == RejectionReason.CAPACITY_FULL
    assert exc_info.value.message == "Event is full"


@pytest.mark.asyncio
async def test_confirmed_counts_and_cancelled_frees_a_seat(admin, make_student, make_event):
    event = await make_event(admin, max_participants=1)
    holder, waiting = await make_student(), await make_student()

    registration = await registration_service.register_for_event(holder, event["id"])
    await registration_service.update_registration_status(admin, registration["id"], RegistrationStatus.CONFIRMED)

    with pytest.raises(PolicyRejection):
        await registration_service.register_for_event(waiting, event["id"])

    await registration_service.cancel_registration(holder, event["id"])
    created = await registration_service.register_for_event(waiting, event["id"])
    assert created["status"] == "registered"


@pytest.mark.asyncio
async def test_duplicate_registration(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin)
    url = f"/events/{event['id']}/registrations"

    first = await client.post(url, headers=auth_headers(student))
    second = await client.post(url, headers=auth_headers(student))

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["reason"] == "already_registered"
    assert second.json()["message"] == "Already registered for this event"


@pytest.mark.asyncio
async def test_concurrent_registrations_admit_exactly_one(admin, student, make_event):
    event = await make_event(admin)

    results = await asyncio.gather(
        *[registration_service.register_for_event(student, event["id"]) for _ in range(5)],
        return_exceptions=True
    )

    successes = [r for r in results if isinstance(r, dict)]
    failures = [r for r in results if isinstance(r, PolicyRejection)]
    assert len(successes) == 1
    assert len(failures) == 4
    assert all(f.reason == RejectionReason.ALREADY_REGISTERED for f in failures)
    assert await registration_count(event["id"]) == 1


@pytest.mark.asyncio
async def test_unique_violation_is_reported_as_already_registered(admin, student, make_event, monkeypatch):
    """The unique index catches a duplicate the probe missed"""
    event = await make_event(admin)
    await registration_service.register_for_event(student, event["id"])

    real_fetch_one = database.fetch_one

    async def blind_probe(query, values=None):
        if "SELECT id, status FROM event_registrations" in query:
            return None
        return await real_fetch_one(query, values)

    monkeypatch.setattr(database, "fetch_one", blind_probe)

    with pytest.raises(PolicyRejection) as exc_info:
        await registration_service.register_for_event(student, event["id"])
    assert exc_info.value.reason == RejectionReason.ALREADY_REGISTERED

    monkeypatch.undo()
    assert await registration_count(event["id"]) == 1


@pytest.mark.asyncio
async def test_cancel_registration_twice(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin)
    url = f"/events/{event['id']}/registrations"
    await client.post(url, headers=auth_headers(student))

    first = await client.delete(url, headers=auth_headers(student))
    second = await client.delete(url, headers=auth_headers(student))

    assert first.status_code == 200
    assert first.json()["registration"]["status"] == "cancelled"
    assert second.status_code == 404
    assert second.json()["message"] == "Registration not found"
    # The record is kept
    assert await registration_count(event["id"]) == 1


@pytest.mark.asyncio
async def test_cancel_without_registration(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin)

    response = await client.delete(f"/events/{event['id']}/registrations", headers=auth_headers(student))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cancel_after_event(client: AsyncClient, admin, student, make_event):
    event = await make_event(admin)
    await registration_service.register_for_event(student, event["id"])
    await database.execute(
        "UPDATE events SET event_date = :date WHERE id = :id",
        {"id": str(event["id"]), "date": utcnow() - timedelta(hours=2)}
    )

    response = await client.delete(f"/events/{event['id']}/registrations", headers=auth_headers(student))

    assert response.status_code == 400
    assert response.json() == {
        "message": "Cannot cancel registration for past events",
        "reason": "already_occurred",
    }


@pytest.mark.asyncio
async def test_cancelled_registration_blocks_reregistration(admin, student, make_event):
    event = await make_event(admin)
    await registration_service.register_for_event(student, event["id"])
    await registration_service.cancel_registration(student, event["id"])

    with pytest.raises(PolicyRejection) as exc_info:
        await registration_service.register_for_event(student, event["id"])
    assert exc_info.value.reason == RejectionReason.ALREADY_REGISTERED


@pytest.mark.asyncio
async def test_reregistration_after_cancel_when_enabled(admin, student, make_event, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_REREGISTRATION_AFTER_CANCEL", True)
    event = await make_event(admin)

    original = await registration_service.register_for_event(student, event["id"])
    await registration_service.cancel_registration(student, event["id"])
    again = await registration_service.register_for_event(
        student, event["id"], EventRegistrationRequest(additional_info="Back again")
    )

    assert str(again["id"]) == str(original["id"])
    assert again["status"] == "registered"
    assert again["additional_info"] == "Back again"
    assert await registration_count(event["id"]) == 1


@pytest.mark.asyncio
async def test_snapshot_is_not_resynchronised(admin, student, make_event):
    event = await make_event(admin)
    registration = await registration_service.register_for_event(student, event["id"])

    await database.execute(
        "UPDATE users SET name = 'Renamed Student' WHERE id = :id",
        {"id": student["id"]}
    )

    stored = await registration_service.get_registration(registration["id"])
    assert stored["student_name"] == student["name"]


@pytest.mark.asyncio
async def test_my_registrations(client: AsyncClient, admin, student, make_event):
    kept = await make_event(admin)
    cancelled = await make_event(admin)
    await registration_service.register_for_event(student, kept["id"])
    await registration_service.register_for_event(student, cancelled["id"])
    await registration_service.cancel_registration(student, cancelled["id"])

    response = await client.get("/registrations/events/my", headers=auth_headers(student))

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["totalPages"] == 1
    assert data["currentPage"] == 1
    assert data["registrations"][0]["eventId"] == str(kept["id"])
    assert data["registrations"][0]["event"]["title"] == kept["title"]
    assert data["registrations"][0]["event"]["clubName"] == "CSI"


@pytest.mark.asyncio
async def test_event_registrations_for_owning_club_only(
    client: AsyncClient, admin, make_admin, student, make_event
):
    event = await make_event(admin)
    await registration_service.register_for_event(student, event["id"])
    outsider = await make_admin(ClubName.GDSC)

    own = await client.get(f"/events/{event['id']}/registrations", headers=auth_headers(admin))
    other = await client.get(f"/events/{event['id']}/registrations", headers=auth_headers(outsider))

    assert own.status_code == 200
    assert own.json()["total"] == 1
    assert own.json()["registrations"][0]["studentId"] == student["id"]
    assert other.status_code == 403


@pytest.mark.asyncio
async def test_update_registration_status(client: AsyncClient, admin, make_admin, student, make_event):
    event = await make_event(admin)
    registration = await registration_service.register_for_event(student, event["id"])
    url = f"/registrations/{registration['id']}/status"

    confirmed = await client.patch(url, json={"status": "attended"}, headers=auth_headers(admin))
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "attended"

    outsider = await make_admin(ClubName.APTNUS_GANA)
    denied = await client.patch(url, json={"status": "confirmed"}, headers=auth_headers(outsider))
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_service_rejects_non_students(admin, make_event):
    event = await make_event(admin)

    with pytest.raises(AuthorizationError):
        await registration_service.register_for_event(admin, event["id"])


@pytest.mark.asyncio
async def test_update_missing_registration(admin):
    with pytest.raises(NotFoundError):
        await registration_service.update_registration_status(
            admin, "00000000-0000-0000-0000-000000000000", RegistrationStatus.CONFIRMED
        )
