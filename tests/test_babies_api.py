from __future__ import annotations

import httpx
import pytest


@pytest.mark.anyio
async def test_babies_register_list_and_get(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby

    res = await async_client.get(f"/api/babies/{baby_id}")
    assert res.status_code == 200
    baby = res.json()
    assert baby["id"] == baby_id
    assert baby["userId"] == "user-1"
    assert baby["name"] == "Amani"
    assert baby["gender"] == "female"
    assert baby["weightKg"] == 3.4
    assert "createdAt" in baby

    res = await async_client.post(
        "/api/babies",
        json={"userId": "user-1", "name": "Baraka", "birthDate": "2026-09-15T00:00:00Z"},
    )
    assert res.status_code == 201

    res = await async_client.get("/api/babies", params={"userId": "user-1"})
    assert res.status_code == 200
    listed = res.json()
    assert listed["total"] == 2
    assert [b["name"] for b in listed["items"]] == ["Amani", "Baraka"]

    res = await async_client.get("/api/babies", params={"userId": "someone-else"})
    assert res.json()["total"] == 0

    res = await async_client.get("/api/babies/does-not-exist")
    assert res.status_code == 404


@pytest.mark.anyio
async def test_create_baby_validates_name(async_client: httpx.AsyncClient):
    res = await async_client.post(
        "/api/babies",
        json={"userId": "user-1", "name": "  ", "birthDate": "2026-09-15T00:00:00Z"},
    )
    assert res.status_code == 400
    assert "name" in res.text.lower()


@pytest.mark.anyio
async def test_feedings_logged_and_listed_newest_first(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby
    for start in ("2026-10-17T06:00:00Z", "2026-10-17T09:00:00Z", "2026-10-17T03:00:00Z"):
        res = await async_client.post(
            f"/api/babies/{baby_id}/feedings",
            json={"type": "breast-left", "startTime": start, "durationMinutes": 12},
        )
        assert res.status_code == 201, res.text
        assert res.json()["babyId"] == baby_id

    res = await async_client.get(f"/api/babies/{baby_id}/feedings")
    assert res.status_code == 200
    items = res.json()["items"]
    assert [i["startTime"][:16] for i in items] == ["2026-10-17T09:00", "2026-10-17T06:00", "2026-10-17T03:00"]

    res = await async_client.get(f"/api/babies/{baby_id}/feedings", params={"limit": 1})
    assert res.json()["total"] == 1


@pytest.mark.anyio
async def test_sleep_duration_is_derived_and_order_validated(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby
    res = await async_client.post(
        f"/api/babies/{baby_id}/sleeps",
        json={"type": "nap", "startTime": "2026-10-17T13:00:00Z", "endTime": "2026-10-17T14:30:00Z"},
    )
    assert res.status_code == 201, res.text
    assert res.json()["durationMinutes"] == 90.0

    res = await async_client.post(
        f"/api/babies/{baby_id}/sleeps",
        json={"startTime": "2026-10-17T14:30:00Z", "endTime": "2026-10-17T13:00:00Z"},
    )
    assert res.status_code == 400

    res = await async_client.get(f"/api/babies/{baby_id}/sleeps")
    assert res.json()["total"] == 1


@pytest.mark.anyio
async def test_growth_records_listed_most_recent_first(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby
    for date, weight in (("2026-09-01T00:00:00Z", 4.2), ("2026-10-01T00:00:00Z", 5.1)):
        res = await async_client.post(f"/api/babies/{baby_id}/growth", json={"date": date, "weightKg": weight})
        assert res.status_code == 201, res.text

    res = await async_client.get(f"/api/babies/{baby_id}/growth")
    weights = [i["weightKg"] for i in res.json()["items"]]
    assert weights == [5.1, 4.2]


@pytest.mark.anyio
async def test_care_logs_for_unknown_baby_return_404(async_client: httpx.AsyncClient):
    res = await async_client.post(
        "/api/babies/missing/feedings",
        json={"startTime": "2026-10-17T06:00:00Z"},
    )
    assert res.status_code == 404
    res = await async_client.post("/api/babies/missing/sleeps", json={"startTime": "2026-10-17T06:00:00Z"})
    assert res.status_code == 404
    res = await async_client.post("/api/babies/missing/growth", json={"date": "2026-10-17T06:00:00Z"})
    assert res.status_code == 404


@pytest.mark.anyio
async def test_logged_records_feed_the_health_monitor(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby
    for date, weight in (("2026-01-01T00:00:00Z", 5.0), ("2026-01-08T00:00:00Z", 4.8)):
        await async_client.post(f"/api/babies/{baby_id}/growth", json={"date": date, "weightKg": weight})

    res = await async_client.post("/api/health-monitor", json={"babyId": baby_id})
    assert res.status_code == 200
    alerts = res.json()["alerts"]
    assert [a["title"] for a in alerts] == ["Weight Loss Detected"]
    assert "0.20 kg" in alerts[0]["message"]

    res = await async_client.get("/api/notifications", params={"userId": "user-1"})
    assert res.json()["total"] == 1


@pytest.mark.anyio
async def test_update_baby_applies_partial_fields(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby

    res = await async_client.patch(f"/api/babies/{baby_id}", json={"weightKg": 4.1, "photoUrl": "https://img/a.png"})
    assert res.status_code == 200, res.text
    baby = res.json()
    assert baby["weightKg"] == 4.1
    assert baby["photoUrl"] == "https://img/a.png"
    assert baby["name"] == "Amani"
    assert baby["gender"] == "female"

    res = await async_client.get(f"/api/babies/{baby_id}")
    assert res.json()["weightKg"] == 4.1

    res = await async_client.patch(f"/api/babies/{baby_id}", json={"name": " "})
    assert res.status_code == 400

    res = await async_client.patch("/api/babies/missing", json={"name": "Zuri"})
    assert res.status_code == 404


@pytest.mark.anyio
async def test_delete_baby_removes_its_care_logs(async_client: httpx.AsyncClient, create_test_baby: str, fake_mongo):
    baby_id = create_test_baby
    await async_client.post(f"/api/babies/{baby_id}/feedings", json={"startTime": "2026-10-17T06:00:00Z"})
    await async_client.post(
        f"/api/babies/{baby_id}/diapers", json={"type": "wet", "time": "2026-10-17T06:30:00Z"}
    )
    fake_mongo.cols["feedings"].docs.append({"id": "other", "baby_id": "someone-else", "start_time": "x"})

    res = await async_client.delete(f"/api/babies/{baby_id}")
    assert res.status_code == 204

    res = await async_client.get(f"/api/babies/{baby_id}")
    assert res.status_code == 404
    assert [d["id"] for d in fake_mongo.cols["feedings"].docs] == ["other"]
    assert fake_mongo.cols["diapers"].docs == []

    res = await async_client.delete(f"/api/babies/{baby_id}")
    assert res.status_code == 404


@pytest.mark.anyio
async def test_diapers_logged_and_listed_newest_first(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby
    for kind, time in (("wet", "2026-10-17T06:00:00Z"), ("mixed", "2026-10-17T10:00:00Z")):
        res = await async_client.post(f"/api/babies/{baby_id}/diapers", json={"type": kind, "time": time})
        assert res.status_code == 201, res.text
        assert res.json()["babyId"] == baby_id

    res = await async_client.get(f"/api/babies/{baby_id}/diapers")
    assert [d["type"] for d in res.json()["items"]] == ["mixed", "wet"]

    res = await async_client.post(
        f"/api/babies/{baby_id}/diapers", json={"type": "sparkly", "time": "2026-10-17T10:00:00Z"}
    )
    assert res.status_code == 422

    res = await async_client.post("/api/babies/missing/diapers", json={"type": "wet", "time": "2026-10-17T10:00:00Z"})
    assert res.status_code == 404


@pytest.mark.anyio
async def test_milestones_record_list_and_delete(async_client: httpx.AsyncClient, create_test_baby: str):
    baby_id = create_test_baby
    res = await async_client.post(
        f"/api/babies/{baby_id}/milestones",
        json={"title": "First smile", "date": "2026-09-20T00:00:00Z", "category": "social"},
    )
    assert res.status_code == 201, res.text
    first = res.json()
    assert first["photoUrls"] == []

    res = await async_client.post(
        f"/api/babies/{baby_id}/milestones",
        json={"title": "Rolled over", "date": "2026-10-10T00:00:00Z", "photoUrls": ["https://img/roll.png"]},
    )
    assert res.status_code == 201

    res = await async_client.get(f"/api/babies/{baby_id}/milestones")
    items = res.json()["items"]
    assert [m["title"] for m in items] == ["Rolled over", "First smile"]
    assert items[0]["photoUrls"] == ["https://img/roll.png"]

    res = await async_client.delete(f"/api/babies/{baby_id}/milestones/{first['id']}")
    assert res.status_code == 204
    res = await async_client.delete(f"/api/babies/{baby_id}/milestones/{first['id']}")
    assert res.status_code == 404

    res = await async_client.get(f"/api/babies/{baby_id}/milestones")
    assert res.json()["total"] == 1

    res = await async_client.post(
        f"/api/babies/{baby_id}/milestones", json={"title": "", "date": "2026-10-10T00:00:00Z"}
    )
    assert res.status_code == 400
