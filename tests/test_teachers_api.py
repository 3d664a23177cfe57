"""Tests for teacher records and teacher account management."""

import uuid

from sqlalchemy import func, select

from conftest import auth_headers
from services.identity.models.users import AuthUser
from services.school_management.models.teachers import TeacherAccount
from services.supervision_management.models.supervisions import Supervision


class TestCreateTeacher:
    async def test_create(self, admin, create_teacher):
        teacher = await create_teacher(admin["token"], name="  Siti Aminah ")

        assert teacher["name"] == "Siti Aminah"
        assert teacher["school_id"] == admin["school"]["id"]
        assert teacher["rank"] == "III.A"
        assert teacher["employment_type"] == "PNS"

    async def test_nip_must_be_eighteen_digits(self, client, admin):
        response = await client.post(
            "/teachers",
            json={"name": "Siti Aminah", "nip": "12345", "rank": "III.A", "employment_type": "PNS"},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "nip"

    async def test_unknown_rank(self, client, admin):
        response = await client.post(
            "/teachers",
            json={"name": "Siti Aminah", "nip": "198501012010011001", "rank": "V.A", "employment_type": "PNS"},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "rank"

    async def test_honorary_without_rank(self, client, admin):
        response = await client.post(
            "/teachers",
            json={
                "name": "Budi Honorer",
                "nip": "199912122020121001",
                "rank": "Tidak Ada",
                "employment_type": "Guru Honorer",
            },
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 201


class TestTeacherScope:
    async def test_list_only_own_school(self, client, admin, create_teacher, signup_and_login, setup_school):
        await create_teacher(admin["token"])
        other = await signup_and_login("lain@sekolah.test")
        await setup_school(other["access_token"], name="SMP Negeri 2")

        own = await client.get("/teachers", headers=auth_headers(admin["token"]))
        foreign = await client.get("/teachers", headers=auth_headers(other["access_token"]))

        assert len(own.json()) == 1
        assert foreign.json() == []

    async def test_other_school_cannot_update(self, client, admin, create_teacher, signup_and_login, setup_school):
        teacher = await create_teacher(admin["token"])
        other = await signup_and_login("lain@sekolah.test")
        await setup_school(other["access_token"], name="SMP Negeri 2")

        response = await client.put(
            f"/teachers/{teacher['id']}",
            json={"name": "Diganti"},
            headers=auth_headers(other["access_token"]),
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Guru tidak ditemukan"}


class TestUpdateAndDelete:
    async def test_update(self, client, admin, create_teacher):
        teacher = await create_teacher(admin["token"])

        response = await client.put(
            f"/teachers/{teacher['id']}",
            json={"rank": "IV.A", "gender": None},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 200
        assert response.json()["rank"] == "IV.A"
        assert response.json()["gender"] is None
        assert response.json()["name"] == "Siti Aminah"

    async def test_delete_unknown(self, client, admin):
        response = await client.delete(f"/teachers/{uuid.uuid4()}", headers=auth_headers(admin["token"]))

        assert response.status_code == 404

    async def test_delete_removes_dependent_rows(self, client, session_factory, admin, create_teacher, provision):
        """The account link and supervisions go with the teacher; the identity stays."""
        headers = auth_headers(admin["token"])
        teacher = await create_teacher(admin["token"])
        await provision(admin["token"], "guru@sekolah.test", teacher_id=teacher["id"])
        await client.post("/supervisions", json={"teacher_id": teacher["id"]}, headers=headers)

        response = await client.delete(f"/teachers/{teacher['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Guru berhasil dihapus"}
        async with session_factory() as db:
            assert await db.scalar(select(func.count()).select_from(TeacherAccount)) == 0
            assert await db.scalar(select(func.count()).select_from(Supervision)) == 0
            assert await db.scalar(select(func.count()).select_from(AuthUser)) == 2


class TestTeacherAccounts:
    async def test_list_and_available(self, client, admin, create_teacher, provision):
        headers = auth_headers(admin["token"])
        linked = await create_teacher(admin["token"])
        free = await create_teacher(admin["token"], name="Dewi Lestari")
        await provision(admin["token"], "guru@sekolah.test", teacher_id=linked["id"])

        accounts = (await client.get("/teacher-accounts", headers=headers)).json()
        available = (await client.get("/teacher-accounts/available-teachers", headers=headers)).json()

        assert len(accounts) == 1
        assert accounts[0]["teacher_name"] == "Siti Aminah"
        assert accounts[0]["email"] == "guru@sekolah.test"
        assert [t["id"] for t in available] == [free["id"]]

    async def test_delete_link_keeps_identity(self, client, admin, create_teacher, provision):
        headers = auth_headers(admin["token"])
        teacher = await create_teacher(admin["token"])
        await provision(admin["token"], "guru@sekolah.test", teacher_id=teacher["id"])
        account = (await client.get("/teacher-accounts", headers=headers)).json()[0]

        response = await client.delete(f"/teacher-accounts/{account['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Akun guru berhasil dihapus"}

        # The identity can be linked again and keeps its password
        relinked = await provision(admin["token"], "guru@sekolah.test", teacher_id=teacher["id"])
        assert relinked.status_code == 200
        assert relinked.json()["userId"] == account["user_id"]
        assert relinked.json()["temporaryPassword"] is None

    async def test_delete_unknown_link(self, client, admin):
        response = await client.delete(f"/teacher-accounts/{uuid.uuid4()}", headers=auth_headers(admin["token"]))

        assert response.status_code == 404
        assert response.json() == {"error": "Akun guru tidak ditemukan"}
