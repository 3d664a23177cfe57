"""Tests for the teacher self-service endpoints."""

import pytest

from conftest import auth_headers, login


@pytest.fixture
async def teacher_session(client, admin, create_teacher, provision):
    """Login response of a teacher provisioned in the admin's school."""
    teacher = await create_teacher(admin["token"])
    created = (await provision(admin["token"], "guru@sekolah.test", teacher_id=teacher["id"])).json()
    session = await login(client, "guru@sekolah.test", created["temporaryPassword"])
    session["teacher"] = teacher
    return session


class TestProfile:
    async def test_profile(self, client, admin, teacher_session):
        response = await client.get("/teacher/profile", headers=auth_headers(teacher_session["access_token"]))

        assert response.status_code == 200
        body = response.json()
        assert body["teacher_id"] == teacher_session["teacher"]["id"]
        assert body["name"] == "Siti Aminah"
        assert body["rank"] == "III.A"
        assert body["email"] == "guru@sekolah.test"
        assert body["school_name"] == admin["school"]["name"]

    async def test_admin_has_no_profile(self, client, admin):
        response = await client.get("/teacher/profile", headers=auth_headers(admin["token"]))

        assert response.status_code == 403
        assert response.json() == {"error": "Akun guru tidak ditemukan. Silakan hubungi administrator"}


class TestSubmitAdministration:
    async def test_submit(self, client, admin, teacher_session):
        response = await client.post(
            "/teacher/administration",
            json={
                "teaching_hours": "24 JP",
                "semester_class": "Ganjil / VII-A",
                "calendar_link": "https://drive.example.com/kalender",
                "schedule_link": "",
                "school_id": "00000000-0000-0000-0000-000000000000",
            },
            headers=auth_headers(teacher_session["access_token"]),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["calendar_link"] == "https://drive.example.com/kalender"
        assert body["schedule_link"] is None
        assert body["teacher_id"] == teacher_session["teacher"]["id"]
        assert body["school_id"] == admin["school"]["id"]

    async def test_link_must_be_http(self, client, teacher_session):
        response = await client.post(
            "/teacher/administration",
            json={"grade_list_link": "ftp://files.example.com/nilai"},
            headers=auth_headers(teacher_session["access_token"]),
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "grade_list_link", "message": "Value error, Link harus diawali http:// atau https://"}
        ]

    async def test_admin_cannot_submit(self, client, admin):
        response = await client.post(
            "/teacher/administration",
            json={"teaching_hours": "24 JP"},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 403

    async def test_history_newest_first(self, client, teacher_session):
        headers = auth_headers(teacher_session["access_token"])
        for hours in ("20 JP", "22 JP", "24 JP"):
            await client.post("/teacher/administration", json={"teaching_hours": hours}, headers=headers)

        response = await client.get("/teacher/administration", headers=headers)

        assert [r["teaching_hours"] for r in response.json()] == ["24 JP", "22 JP", "20 JP"]
