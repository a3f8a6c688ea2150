# tests/test_resolver.py
import pytest

from deskkit import AccessDenied
from recruitdesk.db.schemas import DenialReason, FeatureKey, UserContext
from recruitdesk.permissions import PermissionResolver

REPORTS = FeatureKey.VIEW_REPORTS.value


class InMemoryFeatureStore:
    """
    policy:      {key: bool}
    admin:       {admin_id: {key: bool}}
    staff:       {staff_id: {key: (granting_admin_id, bool)}}
    supervisors: {staff_id: admin_id}
    """

    def __init__(self, policy=None, admin=None, staff=None, supervisors=None):
        self.policy = dict(policy or {})
        self.admin = admin or {}
        self.staff = staff or {}
        self.supervisors = supervisors or {}
        self.reads = 0

    async def get_global_policy(self):
        self.reads += 1
        return dict(self.policy)

    async def get_admin_assignments(self, admin_id):
        return dict(self.admin.get(admin_id, {}))

    async def get_staff_grants(self, staff_id, admin_id=None):
        return {
            key: enabled
            for key, (granted_by, enabled) in self.staff.get(staff_id, {}).items()
            if admin_id is None or granted_by == admin_id
        }

    async def get_supervisor_id(self, staff_id):
        return self.supervisors.get(staff_id)


OWNER = UserContext(id="owner", username="owner", role="super_admin")
ADMIN_A = UserContext(id="A", username="admin_a", role="admin")
ADMIN_B = UserContext(id="B", username="admin_b", role="admin")
STAFF_S = UserContext(id="S", username="staff_s", role="staff", supervisor_id="A")


def make_resolver(**kwargs):
    kwargs.setdefault("supervisors", {"S": "A"})
    store = InMemoryFeatureStore(**kwargs)
    return PermissionResolver(store), store


async def test_admin_without_assignment_row_is_allowed_and_granted_staff_is_allowed():
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        staff={"S": {REPORTS: ("A", True)}},
    )

    assert await resolver.can_access(ADMIN_A, REPORTS) is True
    assert await resolver.can_access(STAFF_S, REPORTS) is True


async def test_staff_without_grant_row_is_denied_while_admin_passes():
    resolver, _ = make_resolver(policy={REPORTS: True})

    assert await resolver.can_access(ADMIN_A, REPORTS) is True
    decision = await resolver.check(STAFF_S, REPORTS)
    assert decision.allowed is False
    assert decision.reason is DenialReason.NOT_DELEGATED


async def test_super_admin_is_always_allowed():
    resolver, store = make_resolver(policy={REPORTS: False})

    assert await resolver.can_access(OWNER, REPORTS) is True
    assert await resolver.can_access(OWNER, "notARealFeature") is True
    assert store.reads == 0


@pytest.mark.parametrize("user", [ADMIN_A, STAFF_S], ids=["admin", "staff"])
async def test_key_missing_from_policy_is_denied(user):
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        admin={"A": {"canViewReprots": True}},
        staff={"S": {"canViewReprots": ("A", True)}},
    )

    decision = await resolver.check(user, "canViewReprots")
    assert decision.allowed is False
    assert decision.reason is DenialReason.POLICY_DISABLED


async def test_policy_disabled_beats_explicit_admin_assignment():
    resolver, _ = make_resolver(
        policy={REPORTS: False},
        admin={"A": {REPORTS: True}},
    )

    decision = await resolver.check(ADMIN_A, REPORTS)
    assert decision.reason is DenialReason.POLICY_DISABLED


async def test_admin_assignment_false_is_not_delegated():
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        admin={"A": {REPORTS: False}},
    )

    decision = await resolver.check(ADMIN_A, REPORTS)
    assert decision.allowed is False
    assert decision.reason is DenialReason.NOT_DELEGATED


async def test_admins_do_not_see_each_others_assignments():
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        admin={"A": {REPORTS: False}},
    )

    assert await resolver.can_access(ADMIN_A, REPORTS) is False
    assert await resolver.can_access(ADMIN_B, REPORTS) is True


async def test_staff_is_capped_by_supervisor_assignment():
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        admin={"A": {REPORTS: False}},
        staff={"S": {REPORTS: ("A", True)}},
    )

    assert await resolver.can_access(STAFF_S, REPORTS) is False


async def test_staff_grant_from_a_previous_supervisor_does_not_count():
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        staff={"S": {REPORTS: ("B", True)}},
    )

    assert await resolver.can_access(STAFF_S, REPORTS) is False


async def test_staff_without_supervisor_is_denied():
    resolver, _ = make_resolver(
        policy={REPORTS: True},
        staff={"S": {REPORTS: ("A", True)}},
        supervisors={},
    )

    assert await resolver.can_access(STAFF_S, REPORTS) is False


@pytest.mark.parametrize(
    "user",
    [
        None,
        UserContext(id="A", role=None),
        UserContext(id=None, role="admin"),
        UserContext(id="X", role="auditor"),
    ],
    ids=["no-user", "no-role", "no-id", "unknown-role"],
)
async def test_incomplete_or_unknown_users_are_denied(user):
    resolver, _ = make_resolver(policy={REPORTS: True})

    assert await resolver.can_access(user, REPORTS) is False


async def test_enforce_raises_access_denied_with_reason():
    resolver, _ = make_resolver(policy={REPORTS: False})

    with pytest.raises(AccessDenied) as exc_info:
        await resolver.enforce(ADMIN_A, FeatureKey.VIEW_REPORTS)

    err = exc_info.value
    assert err.code == "ACCESS_DENIED"
    assert err.status_code == 403
    assert err.payload() == {
        "role": "admin",
        "feature_key": REPORTS,
        "reason": "policy_disabled",
    }
    assert 'Feature "canViewReports" is disabled by Super Admin policy' in err.message


async def test_enforce_passes_silently_when_allowed():
    resolver, _ = make_resolver(policy={REPORTS: True})

    assert await resolver.enforce(ADMIN_A, REPORTS) is None


async def test_authorize_returns_result_instead_of_raising():
    resolver, _ = make_resolver(policy={REPORTS: True})

    denied = await resolver.authorize(STAFF_S, REPORTS)
    assert denied.success is False
    assert denied.code == "ACCESS_DENIED"
    assert denied.details["reason"] == "not_delegated"
    assert "not granted to this staff" in denied.error

    allowed = await resolver.authorize(ADMIN_A, REPORTS)
    assert allowed.success is True


async def test_compute_effective_flags_ands_policy_with_assignments():
    resolver, _ = make_resolver(
        policy={
            REPORTS: True,
            "isDocumentsEnabled": True,
            "isTravelEnabled": False,
        },
        admin={"A": {"isDocumentsEnabled": False, "isTravelEnabled": True}},
    )

    assert await resolver.compute_effective_flags("A") == {
        REPORTS: True,
        "isDocumentsEnabled": False,
        "isTravelEnabled": False,
    }


async def test_policy_changes_apply_on_the_next_check():
    resolver, store = make_resolver(policy={REPORTS: True})
    assert await resolver.can_access(ADMIN_A, REPORTS) is True

    store.policy[REPORTS] = False

    assert await resolver.can_access(ADMIN_A, REPORTS) is False
