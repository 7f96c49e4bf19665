"""Integration tests: Students endpoints."""

import asyncio
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from unittest.mock import patch

from tests.conftest import add_students


async def _student_rows(client: AsyncClient, api_base: str):
    resp = await client.get(f"{api_base}/student")
    assert resp.status_code == 200
    return [(s["id"], s["name"]) for s in resp.json()]


@pytest.mark.asyncio
async def test_list_students_empty(async_client: AsyncClient, api_base: str):
    resp = await async_client.get(f"{api_base}/student")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_root_wraps_student_list(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A"])

    resp = await async_client.get(f"{api_base}/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["message"] == "From Backend!!!"
    assert data["studentData"] == [{"id": 1, "name": "A", "roll_number": 1, "class": "5A"}]


@pytest.mark.asyncio
async def test_create_first_student_gets_id_one(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/addstudent",
        json={"name": "X", "rollNo": 10, "class": "5A"},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Data inserted successfully"
    assert body["data"] == {"id": 1, "name": "X", "roll_number": 10, "class": "5A"}


@pytest.mark.asyncio
async def test_create_assigns_max_plus_one(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A", "B", "C"])

    resp = await async_client.post(
        f"{api_base}/addstudent",
        json={"name": "D", "rollNo": 4, "class": "5A"},
    )
    assert resp.json()["data"]["id"] == 4


@pytest.mark.asyncio
async def test_create_student_missing_name(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/addstudent",
        json={"rollNo": 10, "class": "5A"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert [e["field"] for e in body["errors"]] == ["name"]
    assert await _student_rows(async_client, api_base) == []


@pytest.mark.asyncio
async def test_create_student_reports_every_invalid_field(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/addstudent",
        json={"name": "", "rollNo": "abc", "class": ""},
    )
    assert resp.status_code == 400
    assert {e["field"] for e in resp.json()["errors"]} == {"name", "rollNo", "class"}


@pytest.mark.asyncio
async def test_create_student_empty_body(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(f"{api_base}/addstudent", json={})
    assert resp.status_code == 400
    assert {e["field"] for e in resp.json()["errors"]} == {"name", "rollNo", "class"}


@pytest.mark.asyncio
async def test_delete_renumbers_remaining(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A", "B", "C", "D"])

    resp = await async_client.delete(f"{api_base}/student/2")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Student deleted successfully"

    assert await _student_rows(async_client, api_base) == [(1, "A"), (2, "C"), (3, "D")]


@pytest.mark.asyncio
async def test_delete_absent_id_is_success(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A", "B"])

    resp = await async_client.delete(f"{api_base}/student/99")
    assert resp.status_code == 200
    assert await _student_rows(async_client, api_base) == [(1, "A"), (2, "B")]


@pytest.mark.asyncio
async def test_delete_non_integer_id(async_client: AsyncClient, api_base: str):
    resp = await async_client.delete(f"{api_base}/student/abc")
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "student_id"


@pytest.mark.asyncio
async def test_ids_stay_dense_across_operations(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A", "B", "C", "D", "E"])
    for target in (5, 1, 2):
        resp = await async_client.delete(f"{api_base}/student/{target}")
        assert resp.status_code == 200
    await add_students(async_client, api_base, ["F"])

    assert await _student_rows(async_client, api_base) == [(1, "B"), (2, "D"), (3, "F")]


@pytest.mark.asyncio
async def test_concurrent_creates(async_client: AsyncClient, api_base: str):
    responses = await asyncio.gather(*(
        async_client.post(
            f"{api_base}/addstudent",
            json={"name": f"S{i}", "rollNo": i, "class": "5A"},
        )
        for i in range(6)
    ))
    assert all(r.status_code == 200 for r in responses)

    ids = [row[0] for row in await _student_rows(async_client, api_base)]
    assert ids == [1, 2, 3, 4, 5, 6]


@pytest.mark.asyncio
async def test_storage_failure_on_list(async_client: AsyncClient, api_base: str):
    with patch(
        "app.api.endpoints.students.RecordService.list_records",
        side_effect=OperationalError("SELECT", {}, Exception("db down")),
    ):
        resp = await async_client.get(f"{api_base}/student")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Error fetching students"}


@pytest.mark.asyncio
async def test_storage_failure_on_delete_keeps_table(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A", "B", "C"])

    with patch(
        "app.services.record_service.update",
        side_effect=OperationalError("UPDATE", {}, Exception("db down")),
    ):
        resp = await async_client.delete(f"{api_base}/student/1")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Error deleting student"}
    assert await _student_rows(async_client, api_base) == [(1, "A"), (2, "B"), (3, "C")]


@pytest.mark.asyncio
async def test_create_student_boolean_roll(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/addstudent",
        json={"name": "X", "rollNo": True, "class": "5A"},
    )
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["rollNo"]
    assert await _student_rows(async_client, api_base) == []


@pytest.mark.asyncio
async def test_create_student_huge_roll(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/addstudent",
        json={"name": "X", "rollNo": 2 ** 70, "class": "5A"},
    )
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["rollNo"]


@pytest.mark.asyncio
async def test_delete_huge_id(async_client: AsyncClient, api_base: str):
    await add_students(async_client, api_base, ["A"])

    resp = await async_client.delete(f"{api_base}/student/{2 ** 70}")
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "student_id"
    assert await _student_rows(async_client, api_base) == [(1, "A")]
