"""Device routes — public listing, filtering, sorting and detail.

Invariants:
    - totalCount always matches the filter used for the page of rows
    - sensors is a JSON array, empty when the device type has no sensors
    - Unknown devices return the {error, details} envelope with 404
"""

from sqlalchemy import func, select

from tests.api.factories import seed_device, seed_device_type_with_sensor
from wildwatch.models.device import Device


async def _seed_numbered_devices(db, count: int, owner: str = "user-1"):
    for i in range(count, 0, -1):
        await seed_device(db, name=f"Device {i:02d}", owner=owner)
    await db.commit()


async def test_second_page_sorted_by_name(client, test_db):
    await _seed_numbered_devices(test_db, 25)

    res = await client.get(
        "/devices", params={"page": 2, "limit": 10, "sortBy": "name", "order": "asc"},
    )

    assert res.status_code == 200
    body = res.json()
    assert [d["name"] for d in body["data"]] == [f"Device {i:02d}" for i in range(11, 21)]
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalCount": 25,
        "hasNextPage": True,
        "hasPrevPage": True,
    }


async def test_unfiltered_total_matches_table_count(client, test_db):
    await _seed_numbered_devices(test_db, 7)

    res = await client.get("/devices", params={"limit": 3})

    total = await test_db.scalar(select(func.count()).select_from(Device))
    assert res.json()["pagination"]["totalCount"] == total == 7
    assert len(res.json()["data"]) == 3


async def test_last_page_has_no_next(client, test_db):
    await _seed_numbered_devices(test_db, 5)

    body = (await client.get("/devices", params={"page": 3, "limit": 2})).json()

    assert len(body["data"]) == 1
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["totalPages"] == 3


async def test_limit_above_maximum_is_capped(client, test_db):
    await _seed_numbered_devices(test_db, 3)

    res = await client.get("/devices", params={"limit": 500})

    assert res.status_code == 200
    assert res.json()["pagination"]["totalPages"] == 1


async def test_page_zero_is_validation_error(client):
    res = await client.get("/devices", params={"page": 0})

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation error"
    assert body["fields"][0]["field"] == "query.page"


async def test_non_numeric_limit_is_validation_error(client):
    res = await client.get("/devices", params={"limit": "ten"})
    assert res.status_code == 400
    assert res.json()["error"] == "Validation error"


async def test_unknown_sort_column_falls_back_to_default(client, test_db):
    await _seed_numbered_devices(test_db, 2)

    res = await client.get("/devices", params={"sortBy": "serial; DROP TABLE devices"})

    assert res.status_code == 200
    assert res.json()["pagination"]["totalCount"] == 2


async def test_name_filter_is_case_insensitive_substring(client, test_db):
    await seed_device(test_db, name="North Ridge Cam")
    await seed_device(test_db, name="South Valley Cam")
    await test_db.commit()

    body = (await client.get("/devices", params={"name": "ridge"})).json()

    assert [d["name"] for d in body["data"]] == ["North Ridge Cam"]
    assert body["pagination"]["totalCount"] == 1


async def test_name_filter_treats_wildcards_literally(client, test_db):
    await seed_device(test_db, name="100% coverage")
    await seed_device(test_db, name="1000 coverage")
    await test_db.commit()

    body = (await client.get("/devices", params={"name": "0%"})).json()

    assert [d["name"] for d in body["data"]] == ["100% coverage"]


async def test_type_filter_and_sensor_aggregation(client, test_db):
    device_type, sensor = await seed_device_type_with_sensor(test_db)
    await seed_device(test_db, name="Typed", type_id=device_type.id)
    await seed_device(test_db, name="Untyped")
    await test_db.commit()

    body = (await client.get("/devices", params={"typeId": device_type.id})).json()

    assert len(body["data"]) == 1
    device = body["data"][0]
    assert device["typeId"] == device_type.id
    assert len(device["sensors"]) == 1
    assert device["sensors"][0]["id"] == sensor.id
    assert device["sensors"][0]["type"] == "temperature"
    assert device["sensors"][0]["lastUpdated"] is not None


async def test_device_without_sensors_has_empty_array(client, test_db):
    device = await seed_device(test_db, name="Bare")
    await test_db.commit()

    res = await client.get(f"/devices/{device.id}")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["sensors"] == []
    assert data["name"] == "Bare"
    assert data["createdBy"] == "user-1"


async def test_missing_device_returns_404_envelope(client):
    res = await client.get("/devices/9999")

    assert res.status_code == 404
    assert res.json() == {"error": "Not found", "details": "Device not found"}


async def test_devices_by_user_lists_only_owned(client, test_db):
    await seed_device(test_db, name="Mine", owner="alice")
    await seed_device(test_db, name="Theirs", owner="bob")
    await test_db.commit()

    body = (await client.get("/devices/user/alice")).json()

    assert [d["name"] for d in body["data"]] == ["Mine"]
    assert body["pagination"]["totalCount"] == 1
