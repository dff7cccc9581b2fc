"""Event routes — filters, nested aggregation, verification and deletion.

Invariants:
    - hasMedia=false returns only events without media that have a positive reading
    - regions carry nested labels; sensorData carries the sensor type name
    - location is a GeoJSON Point, or null when the event has no coordinates
    - Only an owner of the event's device can delete it
"""

from datetime import datetime, timezone

from sqlalchemy import func, select

from tests.api.factories import (
    auth_headers, seed_device, seed_device_type_with_sensor, seed_event,
)
from wildwatch.models.event import EventMedia, Region, RegionLabel, SensorData


def _at(day: int) -> datetime:
    return datetime(2024, 5, day, 8, 0, tzinfo=timezone.utc)


async def test_has_media_filters(client, test_db):
    device = await seed_device(test_db)
    with_media = await seed_event(test_db, device, media=1, time=_at(1))
    reading_only = await seed_event(test_db, device, readings=(5.0,), time=_at(2))
    await seed_event(test_db, device, readings=(0.0,), time=_at(3))
    both = await seed_event(test_db, device, media=1, readings=(2.0,), time=_at(4))
    await test_db.commit()

    without = (await client.get("/events", params={"hasMedia": "false"})).json()
    assert [e["id"] for e in without["data"]] == [reading_only.id]
    assert without["data"][0]["media"] == []
    assert any(r["value"] > 0 for r in without["data"][0]["sensorData"])
    assert without["pagination"]["totalCount"] == 1

    with_ = (await client.get("/events", params={"hasMedia": "true"})).json()
    assert sorted(e["id"] for e in with_["data"]) == sorted([with_media.id, both.id])
    assert all(e["media"] for e in with_["data"])


async def test_default_sort_is_time_descending(client, test_db):
    device = await seed_device(test_db)
    early = await seed_event(test_db, device, time=_at(1))
    late = await seed_event(test_db, device, time=_at(9))
    await test_db.commit()

    body = (await client.get("/events")).json()

    assert [e["id"] for e in body["data"]] == [late.id, early.id]


async def test_date_range_is_inclusive(client, test_db):
    device = await seed_device(test_db)
    await seed_event(test_db, device, time=_at(1))
    inside = await seed_event(test_db, device, time=_at(5))
    await seed_event(test_db, device, time=_at(10))
    await test_db.commit()

    body = (await client.get(
        "/events",
        params={"startDate": "2024-05-05T08:00:00", "endDate": "2024-05-06T00:00:00"},
    )).json()

    assert [e["id"] for e in body["data"]] == [inside.id]


async def test_device_id_filter(client, test_db):
    first = await seed_device(test_db, name="A")
    second = await seed_device(test_db, name="B")
    await seed_event(test_db, first)
    target = await seed_event(test_db, second)
    await test_db.commit()

    body = (await client.get("/events", params={"deviceId": second.id})).json()

    assert [e["id"] for e in body["data"]] == [target.id]
    assert body["data"][0]["deviceName"] == "B"


async def test_events_by_device_name(client, test_db):
    first = await seed_device(test_db, name="Ridge")
    second = await seed_device(test_db, name="Valley")
    target = await seed_event(test_db, first)
    await seed_event(test_db, second)
    await test_db.commit()

    body = (await client.get("/device/Ridge")).json()

    assert [e["id"] for e in body["data"]] == [target.id]


async def test_events_by_owner(client, test_db):
    mine = await seed_device(test_db, name="Mine", owner="alice")
    theirs = await seed_device(test_db, name="Theirs", owner="bob")
    target = await seed_event(test_db, mine)
    await seed_event(test_db, theirs)
    await test_db.commit()

    body = (await client.get("/events/user/alice")).json()

    assert [e["id"] for e in body["data"]] == [target.id]
    assert body["pagination"]["totalCount"] == 1


async def test_event_detail_aggregates_children(client, test_db):
    device_type, sensor = await seed_device_type_with_sensor(test_db)
    device = await seed_device(test_db, type_id=device_type.id)
    event = await seed_event(
        test_db, device, media=1, readings=(4.5,), sensor=sensor,
        labels=("red fox", "badger"), latitude=52.1, longitude=5.3,
    )
    await test_db.commit()

    res = await client.get(f"/event/{event.id}")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["location"] == {"type": "Point", "coordinates": [5.3, 52.1]}
    assert len(data["regions"]) == 1
    assert sorted(label["name"] for label in data["regions"][0]["labels"]) == [
        "badger", "red fox",
    ]
    assert data["sensorData"][0]["name"] == "temperature"
    assert data["sensorData"][0]["value"] == 4.5
    assert data["media"][0]["fileId"] == f"{event.id}-0.jpg"


async def test_event_without_children_has_empty_arrays(client, test_db):
    event = await seed_event(test_db, await seed_device(test_db))
    await test_db.commit()

    data = (await client.get(f"/event/{event.id}")).json()["data"]

    assert data["regions"] == []
    assert data["sensorData"] == []
    assert data["media"] == []
    assert data["location"] is None


async def test_missing_event_is_404(client):
    res = await client.get("/event/777")
    assert res.status_code == 404
    assert res.json()["details"] == "Event not found"


async def test_delete_event_by_device_owner(client, test_db):
    device = await seed_device(test_db, owner="alice")
    event = await seed_event(test_db, device, media=1, readings=(1.0,), labels=("deer",))
    await test_db.commit()

    res = await client.delete(f"/events/{event.id}", headers=auth_headers("alice"))

    assert res.status_code == 204
    assert (await client.get(f"/event/{event.id}")).status_code == 404
    for model in (EventMedia, SensorData, Region, RegionLabel):
        assert await test_db.scalar(select(func.count()).select_from(model)) == 0


async def test_delete_event_by_non_owner_is_404(client, test_db):
    device = await seed_device(test_db, owner="alice")
    event = await seed_event(test_db, device)
    await test_db.commit()

    res = await client.delete(f"/events/{event.id}", headers=auth_headers("bob"))

    assert res.status_code == 404
    assert (await client.get(f"/event/{event.id}")).status_code == 200


async def test_delete_event_requires_auth(client, session_log):
    res = await client.delete("/events/1")
    assert res.status_code == 401
    assert session_log == []


async def test_verify_event_records_verifier(client, test_db):
    event = await seed_event(test_db, await seed_device(test_db, owner="alice"))
    await test_db.commit()

    res = await client.patch(f"/events/{event.id}/verify", headers=auth_headers("carol"))

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["verifiedBy"] == "carol"
    assert data["verifiedAt"] is not None
    assert data["updatedBy"] == "carol"


async def test_verify_missing_event_is_404(client):
    res = await client.patch("/events/31337/verify", headers=auth_headers("carol"))
    assert res.status_code == 404
