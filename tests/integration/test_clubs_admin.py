from datetime import timedelta

import pytest
from httpx import AsyncClient

from clubhub.clock import utcnow
from clubhub.schemas.application import ClubApplicationRequest
from clubhub.schemas.common import ClubName
from clubhub.services.application_service import application_service
from clubhub.services.registration_service import registration_service

from tests.conftest import auth_headers


@pytest.mark.asyncio
async def test_club_profile_is_seeded(client: AsyncClient):
    first = await client.get("/clubs/GDSC")
    second = await client.get("/clubs/GDSC")

    assert first.status_code == 200
    data = first.json()
    assert data["name"] == "GDSC"
    assert data["description"].startswith("Google Developer Student Club")
    assert [p["position"] for p in data["popularPeople"]] == ["Faculty Advisor", "Lead", "Co-Lead"]
    assert second.json()["id"] == data["id"]


@pytest.mark.asyncio
async def test_unknown_club(client: AsyncClient):
    response = await client.get("/clubs/Chess")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_club_event_preview(client: AsyncClient, admin, make_event):
    upcoming = [await make_event(admin) for _ in range(6)]
    past = await make_event(admin, event_date=utcnow() - timedelta(days=3))
    await make_event(admin, is_active=False)

    response = await client.get("/clubs/CSI")

    data = response.json()
    assert len(data["upcomingEvents"]) == 5
    assert {e["id"] for e in data["upcomingEvents"]} <= {str(e["id"]) for e in upcoming}
    assert [e["id"] for e in data["pastEvents"]] == [str(past["id"])]


@pytest.mark.asyncio
async def test_club_stats(client: AsyncClient, admin, student, make_event, make_recruitment):
    event = await make_event(admin)
    await make_event(admin, event_date=utcnow() - timedelta(days=1))
    await registration_service.register_for_event(student, event["id"])
    recruitment = await make_recruitment(admin)
    await application_service.apply_to_recruitment(
        student, recruitment["id"],
        ClubApplicationRequest(applied_position="Designer", why_join="Love posters")
    )

    response = await client.get("/admin/stats/CSI", headers=auth_headers(admin))

    assert response.status_code == 200
    data = response.json()
    assert data["clubName"] == "CSI"
    assert data["totalEvents"] == 2
    assert data["upcomingEvents"] == 1
    assert data["totalRegistrations"] == 1
    assert data["membershipApplications"] == 1
    assert data["recentApplications"][0]["recruitment"]["title"] == "Core Team Recruitment"


@pytest.mark.asyncio
async def test_stats_for_other_club(client: AsyncClient, admin):
    response = await client.get("/admin/stats/GDSC", headers=auth_headers(admin))

    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. You can only view stats for your club."


@pytest.mark.asyncio
async def test_stats_for_student(client: AsyncClient, student):
    response = await client.get("/admin/stats/CSI", headers=auth_headers(student))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_club_applications(client: AsyncClient, admin, make_admin, make_student, make_recruitment):
    gdsc_admin = await make_admin(ClubName.GDSC)
    ours = await make_recruitment(admin)
    theirs = await make_recruitment(gdsc_admin)
    request = ClubApplicationRequest(applied_position="Developer", why_join="Learn")
    await application_service.apply_to_recruitment(await make_student(), ours["id"], request)
    await application_service.apply_to_recruitment(await make_student(), theirs["id"], request)

    response = await client.get("/admin/applications/CSI", headers=auth_headers(admin))

    data = response.json()
    assert data["total"] == 1
    assert data["applications"][0]["recruitmentId"] == str(ours["id"])


@pytest.mark.asyncio
async def test_club_event_registrations(client: AsyncClient, admin, make_student, make_event):
    event = await make_event(admin)
    for _ in range(2):
        await registration_service.register_for_event(await make_student(), event["id"])

    response = await client.get("/admin/event-registrations/CSI", headers=auth_headers(admin))

    data = response.json()
    assert data["total"] == 2
    assert all(r["event"]["title"] == event["title"] for r in data["registrations"])
