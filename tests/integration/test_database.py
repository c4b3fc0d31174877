import pytest

from clubhub.database import as_dict, database, nest_prefixed
from clubhub.schemas.common import ClubName
from clubhub.services.club_service import club_service
from clubhub.services.registration_service import registration_service


@pytest.mark.asyncio
async def test_as_dict_converts_fetched_records(db):
    await club_service.get_or_create_profile(ClubName.CSI)

    row = await database.fetch_one("SELECT name, description FROM clubs WHERE name = :name", {"name": "CSI"})
    record = as_dict(row)

    assert isinstance(record, dict)
    assert record["name"] == "CSI"
    assert record == dict(row._mapping)


@pytest.mark.asyncio
async def test_as_dict_of_missing_row(db):
    row = await database.fetch_one("SELECT id FROM clubs WHERE name = :name", {"name": "Nobody"})

    assert as_dict(row) is None


@pytest.mark.asyncio
async def test_as_dict_rows_from_fetch_all_and_joins(db, admin, student, make_event):
    event = await make_event(admin)
    registration = await registration_service.register_for_event(student, event["id"])

    rows = await database.fetch_all(
        """
        SELECT r.id, e.title AS event__title, e.venue AS event__venue
        FROM event_registrations r JOIN events e ON e.id = r.event_id
        """
    )
    records = [nest_prefixed(as_dict(row), "event") for row in rows]

    assert len(records) == 1
    assert str(records[0]["id"]) == str(registration["id"])
    assert records[0]["event"] == {"title": event["title"], "venue": event["venue"]}


def test_nest_prefixed_without_joined_columns():
    assert nest_prefixed({"id": 1}, "recruitment") == {"id": 1, "recruitment": None}
