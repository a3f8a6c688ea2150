# tests/test_routers.py
import httpx
import pytest

from deskkit import AppConfig, EnvLogFormat, EnvLogLevel, LoggingConfig
from recruitdesk.api import create_app


@pytest.fixture
def app_config():
    return AppConfig(
        app_title="RecruitDesk",
        app_version="0.1.0",
        environment="development",
        logging=LoggingConfig(EnvLogLevel.DEBUG, EnvLogFormat.CONSOLE),
    )


@pytest.fixture
async def client(app_config, db_manager):
    app = create_app(app_config, db_manager=db_manager)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def as_user(user):
    return {"X-User-Id": user.id}


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Healthy"
    assert body["version"] == "0.1.0"
    assert body["database"]["healthy"] is True
    assert "X-Request-ID" in response.headers


async def test_missing_or_unknown_user_is_unauthenticated(client, users):
    missing = await client.get("/api/v1/permissions/me")
    unknown = await client.get("/api/v1/permissions/me", headers={"X-User-Id": "nope"})

    assert missing.status_code == 401
    assert missing.json()["code"] == "UNAUTHENTICATED"
    assert missing.json()["success"] is False
    assert unknown.status_code == 401


async def test_bootstrap_super_admin_over_http(client):
    response = await client.post(
        "/api/v1/users", json={"username": "owner", "role": "super_admin"}
    )

    assert response.status_code == 201
    assert response.json()["data"]["role"] == "super_admin"


async def test_create_user_forbidden_for_staff(client, users):
    response = await client.post(
        "/api/v1/users",
        json={"username": "x_staff", "role": "staff"},
        headers=as_user(users.staff_s),
    )

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


async def test_list_and_get_users(client, users):
    listed = await client.get("/api/v1/users", headers=as_user(users.owner))
    found = await client.get(
        f"/api/v1/users/{users.admin_a.id}", headers=as_user(users.owner)
    )
    missing = await client.get("/api/v1/users/missing", headers=as_user(users.owner))

    assert listed.status_code == 200
    assert len(listed.json()["data"]) == 5
    assert found.json()["data"]["username"] == "admin_a"
    assert missing.status_code == 404


async def test_global_policy_round_trip(client, users):
    saved = await client.put(
        "/api/v1/permissions/global",
        json={"flags": {"canViewReports": False}},
        headers=as_user(users.owner),
    )
    fetched = await client.get("/api/v1/permissions/global", headers=as_user(users.admin_a))

    assert saved.status_code == 200
    assert fetched.json()["data"]["canViewReports"] is False


async def test_global_policy_rejects_unknown_keys(client, users):
    response = await client.put(
        "/api/v1/permissions/global",
        json={"flags": {"canFly": True}},
        headers=as_user(users.owner),
    )

    assert response.status_code == 422
    assert response.json()["errors"] == {"canFly": "Unknown feature key."}


async def test_admin_assignment_and_effective_flags(client, users):
    response = await client.put(
        f"/api/v1/permissions/admins/{users.admin_a.id}/features/canViewReports",
        json={"enabled": False},
        headers=as_user(users.owner),
    )
    effective = await client.get(
        f"/api/v1/permissions/admins/{users.admin_a.id}/effective",
        headers=as_user(users.owner),
    )

    assert response.status_code == 200
    assert effective.json()["data"]["canViewReports"] is False


async def test_staff_grants_and_my_features(client, users):
    saved = await client.put(
        f"/api/v1/permissions/staff/{users.staff_s.id}",
        json={"flags": {"isDocumentsEnabled": True}},
        headers=as_user(users.admin_a),
    )
    grants = await client.get(
        f"/api/v1/permissions/staff/{users.staff_s.id}",
        headers=as_user(users.admin_a),
    )
    mine = await client.get("/api/v1/permissions/me", headers=as_user(users.staff_s))

    assert saved.status_code == 200
    assert grants.json()["data"] == {"isDocumentsEnabled": True}
    assert mine.json()["data"]["isDocumentsEnabled"] is True
    assert mine.json()["data"]["canViewReports"] is False


@pytest.mark.usefixtures("records")
async def test_recycle_bin_flow(client, users):
    deleted = await client.delete(
        "/api/v1/recycle-bin/candidate/cand-1", headers=as_user(users.admin_a)
    )
    listed = await client.get(
        "/api/v1/recycle-bin/candidate", headers=as_user(users.admin_a)
    )
    restored = await client.post(
        "/api/v1/recycle-bin/candidate/cand-1/restore", headers=as_user(users.admin_a)
    )

    assert deleted.status_code == 200
    assert deleted.json()["data"]["changes"]["documents"] == 1
    assert [row["id"] for row in listed.json()["data"]] == ["cand-1"]
    assert restored.status_code == 200


@pytest.mark.usefixtures("records")
async def test_recycle_bin_error_statuses(client, users):
    unknown = await client.get(
        "/api/v1/recycle-bin/spaceship", headers=as_user(users.owner)
    )
    denied = await client.delete(
        "/api/v1/recycle-bin/document/doc-1", headers=as_user(users.staff_s)
    )
    purge_by_admin = await client.delete(
        "/api/v1/recycle-bin/document/doc-1/permanent", headers=as_user(users.admin_a)
    )
    purge_missing = await client.delete(
        "/api/v1/recycle-bin/document/missing/permanent", headers=as_user(users.owner)
    )

    assert unknown.status_code == 400
    assert denied.status_code == 403
    assert denied.json()["details"]["reason"] == "not_delegated"
    assert purge_by_admin.status_code == 403
    assert purge_by_admin.json()["code"] == "FORBIDDEN"
    assert purge_missing.status_code == 404


async def test_admins_and_staff_cannot_read_each_others_permissions(client, users):
    await client.put(
        f"/api/v1/permissions/staff/{users.staff_t.id}",
        json={"flags": {"canViewReports": True}},
        headers=as_user(users.admin_b),
    )

    other_admin = await client.get(
        f"/api/v1/permissions/admins/{users.admin_b.id}/effective",
        headers=as_user(users.admin_a),
    )
    other_staff = await client.get(
        f"/api/v1/permissions/staff/{users.staff_t.id}",
        headers=as_user(users.staff_s),
    )
    own_staff = await client.get(
        f"/api/v1/permissions/staff/{users.staff_t.id}",
        headers=as_user(users.staff_t),
    )

    assert other_admin.status_code == 403
    assert other_admin.json()["data"] is None
    assert other_staff.status_code == 403
    assert other_staff.json()["data"] is None
    assert own_staff.json()["data"] == {"canViewReports": True}
