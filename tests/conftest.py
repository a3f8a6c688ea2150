# tests/conftest.py
import logging
from types import SimpleNamespace

import pytest

from deskkit import configure_structlog
from recruitdesk.db import DbManager
from recruitdesk.db.models import (
    Candidate,
    DbBaseModel,
    Document,
    Employer,
    InterviewTracking,
    JobOrder,
    MedicalTracking,
    PassportMovement,
    PassportTracking,
    Payment,
    Placement,
    TravelTracking,
    VisaTracking,
)
from recruitdesk.db.schemas import UserContext
from recruitdesk.services.v1 import build_services


@pytest.fixture(scope="session", autouse=True)
def _structlog():
    configure_structlog(logging.DEBUG, json_output=False)


@pytest.fixture
async def db_manager(tmp_path):
    manager = DbManager(f"sqlite+aiosqlite:///{tmp_path / 'recruitdesk.db'}")
    async with manager.engine.begin() as conn:
        await conn.run_sync(DbBaseModel.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def services(db_manager):
    return build_services(db_manager)


async def _create(services, username, role, actor=None, supervisor_id=None):
    result = await services.users.create_user(
        username, role, supervisor_id=supervisor_id, actor=actor
    )
    assert result.success, result
    return UserContext(**result.data)


@pytest.fixture
async def users(services):
    """Super admin, two admins and one staff member under each admin."""
    owner = await _create(services, "owner", "super_admin")
    admin_a = await _create(services, "admin_a", "admin", actor=owner)
    admin_b = await _create(services, "admin_b", "admin", actor=owner)
    staff_s = await _create(services, "staff_s", "staff", actor=admin_a)
    staff_t = await _create(services, "staff_t", "staff", actor=admin_b)
    return SimpleNamespace(
        owner=owner,
        admin_a=admin_a,
        admin_b=admin_b,
        staff_s=staff_s,
        staff_t=staff_t,
    )


@pytest.fixture
async def records(db_manager):
    """
    cand-1 with one row in every dependent table, placed on job-1 of emp-1.
    cand-2 owns doc-2 and must never be touched by cand-1 operations.
    """
    async with db_manager.session() as session:
        session.add_all(
            [
                Employer(id="emp-1", company_name="Gulf Builders LLC"),
                JobOrder(id="job-1", employer_id="emp-1", position_title="Welder"),
                Candidate(id="cand-1", name="Asha", passport_no="P0000001"),
                Candidate(id="cand-2", name="Ravi", passport_no="P0000002"),
                Document(id="doc-1", candidate_id="cand-1", file_name="cv.pdf"),
                Document(id="doc-2", candidate_id="cand-2", file_name="cv.pdf"),
                Placement(id="pl-1", candidate_id="cand-1", job_order_id="job-1"),
                VisaTracking(id="visa-1", candidate_id="cand-1", country="UAE"),
                Payment(
                    id="pay-1",
                    candidate_id="cand-1",
                    description="Processing fee",
                    total_amount=1500.0,
                ),
                MedicalTracking(id="med-1", candidate_id="cand-1"),
                InterviewTracking(
                    id="int-1",
                    candidate_id="cand-1",
                    job_order_id="job-1",
                    interview_date="2026-01-10",
                ),
                TravelTracking(id="trv-1", candidate_id="cand-1", pnr="ABC123"),
                PassportTracking(
                    id="pp-1",
                    candidate_id="cand-1",
                    movement_type=PassportMovement.RECEIVE,
                ),
            ]
        )


@pytest.fixture
def deleted_flag(services):
    """Read one row's is_deleted flag; None when the row is gone."""

    async def _read(table, row_id):
        row = await services.storage.query_one(
            f"SELECT is_deleted FROM {table} WHERE id = :id", {"id": row_id}
        )
        return None if row is None else bool(row["is_deleted"])

    return _read
