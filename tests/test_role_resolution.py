"""Tests for post-login role resolution."""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from conftest import auth_headers
from services.identity.role_resolution import resolve_landing
from services.identity.schemas.users import Destination, UserRole
from services.identity.store import IdentityStore
from services.school_management.models.schools import School
from services.school_management.models.teachers import (
    EmploymentType,
    Teacher,
    TeacherAccount,
    TeacherRank,
)


class BrokenSession:
    """Session stand-in whose every query fails."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))


@pytest.fixture
async def identity(db):
    return await IdentityStore(db).create_identity("orang@sekolah.test", "rahasia123", preconfirmed=True)


async def own_school(db, owner_id):
    school = School(owner_id=owner_id, name="SMA Negeri 3", principal_name="Joko", principal_nip="3")
    db.add(school)
    await db.commit()
    return school


async def link_teacher(db, school, user):
    teacher = Teacher(
        school_id=school.id,
        name="Rina Wati",
        nip="198703032011012003",
        rank=TeacherRank.III_B,
        employment_type=EmploymentType.PPPK,
    )
    db.add(teacher)
    await db.commit()
    db.add(TeacherAccount(teacher_id=teacher.id, user_id=user.id, email=user.email))
    await db.commit()


class TestResolveLanding:
    async def test_new_identity_goes_to_setup(self, db, identity):
        landing = await resolve_landing(db, identity.id)

        assert landing.role == UserRole.ADMIN
        assert landing.destination == Destination.SETUP_SCHOOL
        assert landing.path == "/setup-school"

    async def test_school_owner_goes_to_admin_dashboard(self, db, identity):
        await own_school(db, identity.id)

        landing = await resolve_landing(db, identity.id)

        assert landing.role == UserRole.ADMIN
        assert landing.destination == Destination.ADMIN_DASHBOARD
        assert landing.path == "/dashboard"

    async def test_linked_teacher_goes_to_teacher_dashboard(self, db, identity):
        other = await IdentityStore(db).create_identity("admin@sekolah.test", "rahasia123", preconfirmed=True)
        school = await own_school(db, other.id)
        await link_teacher(db, school, identity)

        landing = await resolve_landing(db, identity.id)

        assert landing.role == UserRole.TEACHER
        assert landing.destination == Destination.TEACHER_DASHBOARD
        assert landing.path == "/teacher/dashboard"

    async def test_teacher_link_wins_over_ownership(self, db, identity):
        """An identity that is both owner and teacher is a teacher."""
        school = await own_school(db, identity.id)
        await link_teacher(db, school, identity)

        landing = await resolve_landing(db, identity.id)

        assert landing.destination == Destination.TEACHER_DASHBOARD

    async def test_repeated_calls_agree(self, db, identity):
        await own_school(db, identity.id)

        first = await resolve_landing(db, identity.id)
        second = await resolve_landing(db, identity.id)

        assert first == second

    async def test_unknown_identity_goes_to_setup(self, db):
        landing = await resolve_landing(db, uuid.uuid4())

        assert landing.destination == Destination.SETUP_SCHOOL

    async def test_lookup_failure_falls_back_to_landing(self):
        landing = await resolve_landing(BrokenSession(), uuid.uuid4())

        assert landing.role is None
        assert landing.destination == Destination.LANDING
        assert landing.path == "/"


class TestLandingEndpoint:
    async def test_requires_token(self, client):
        response = await client.get("/auth/landing")

        assert response.status_code == 401

    async def test_follows_onboarding(self, client, signup_and_login, setup_school):
        session = await signup_and_login("admin@sekolah.test")
        headers = auth_headers(session["access_token"])

        before = (await client.get("/auth/landing", headers=headers)).json()
        await setup_school(session["access_token"])
        after = (await client.get("/auth/landing", headers=headers)).json()

        assert before == {"role": "admin", "destination": "setup-school", "path": "/setup-school"}
        assert after == {"role": "admin", "destination": "admin-dashboard", "path": "/dashboard"}
