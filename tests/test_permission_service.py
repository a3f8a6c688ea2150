# tests/test_permission_service.py
from recruitdesk.db.schemas import FeatureKey

REPORTS = FeatureKey.VIEW_REPORTS.value
DOCUMENTS = FeatureKey.DOCUMENTS.value


async def test_global_policy_lists_every_key_enabled_after_bootstrap(services, users):
    result = await services.permissions.get_global_policy()

    assert result.success is True
    assert result.data == {key: True for key in FeatureKey.values()}


async def test_only_super_admin_saves_global_policy(services, users):
    result = await services.permissions.save_global_policy(
        users.admin_a, {REPORTS: False}
    )

    assert result.code == "FORBIDDEN"
    policy = await services.permissions.get_global_policy()
    assert policy.data[REPORTS] is True


async def test_unknown_keys_are_rejected_per_key(services, users):
    result = await services.permissions.save_global_policy(
        users.owner, {REPORTS: False, "canFly": True}
    )

    assert result.code == "VALIDATION_ERROR"
    assert result.errors == {"canFly": "Unknown feature key."}
    policy = await services.permissions.get_global_policy()
    assert policy.data[REPORTS] is True


async def test_saving_policy_merges_and_takes_effect(services, users):
    result = await services.permissions.save_global_policy(
        users.owner, {REPORTS: False}
    )

    assert result.success is True
    assert result.data[REPORTS] is False
    assert result.data[DOCUMENTS] is True
    assert await services.resolver.can_access(users.admin_a, REPORTS) is False
    assert await services.resolver.can_access(users.owner, REPORTS) is True


async def test_admin_assignment_is_scoped_to_one_admin(services, users):
    result = await services.permissions.set_admin_assignment(
        users.owner, users.admin_a.id, REPORTS, False
    )
    assert result.success is True

    flags_a = await services.permissions.get_admin_effective_flags(
        users.owner, users.admin_a.id
    )
    flags_b = await services.permissions.get_admin_effective_flags(
        users.owner, users.admin_b.id
    )

    assert flags_a.data[REPORTS] is False
    assert flags_b.data[REPORTS] is True


async def test_admin_assignment_can_be_flipped_back(services, users):
    await services.permissions.set_admin_assignment(
        users.owner, users.admin_a.id, REPORTS, False
    )
    await services.permissions.set_admin_assignment(
        users.owner, users.admin_a.id, REPORTS, True
    )

    assert await services.resolver.can_access(users.admin_a, REPORTS) is True


async def test_admin_assignment_validation(services, users):
    by_admin = await services.permissions.set_admin_assignment(
        users.admin_a, users.admin_b.id, REPORTS, False
    )
    missing = await services.permissions.set_admin_assignment(
        users.owner, "missing", REPORTS, False
    )
    not_admin = await services.permissions.set_admin_assignment(
        users.owner, users.staff_s.id, REPORTS, False
    )
    bad_key = await services.permissions.set_admin_assignment(
        users.owner, users.admin_a.id, "canFly", False
    )

    assert by_admin.code == "FORBIDDEN"
    assert missing.code == "NOT_FOUND"
    assert not_admin.code == "VALIDATION_ERROR"
    assert bad_key.code == "VALIDATION_ERROR"


async def test_supervising_admin_grants_staff_features(services, users):
    assert await services.resolver.can_access(users.staff_s, DOCUMENTS) is False

    result = await services.permissions.save_staff_grants(
        users.admin_a, users.staff_s.id, {DOCUMENTS: True}
    )

    assert result.success is True
    assert result.data == {DOCUMENTS: True}
    assert await services.resolver.can_access(users.staff_s, DOCUMENTS) is True
    assert await services.resolver.can_access(users.staff_s, REPORTS) is False


async def test_other_admin_cannot_grant_to_staff_they_do_not_supervise(
    services, users
):
    result = await services.permissions.save_staff_grants(
        users.admin_b, users.staff_s.id, {DOCUMENTS: True}
    )

    assert result.code == "FORBIDDEN"
    grants = await services.permissions.get_staff_grants(
        users.owner, users.staff_s.id
    )
    assert grants.data == {}


async def test_super_admin_grant_is_recorded_against_the_supervisor(services, users):
    await services.permissions.save_staff_grants(
        users.owner, users.staff_s.id, {DOCUMENTS: True}
    )

    row = await services.storage.query_one(
        "SELECT admin_id FROM staff_feature_grants WHERE staff_id = :id",
        {"id": users.staff_s.id},
    )
    assert row["admin_id"] == users.admin_a.id
    assert await services.resolver.can_access(users.staff_s, DOCUMENTS) is True


async def test_grants_stop_counting_when_staff_changes_supervisor(services, users):
    await services.permissions.save_staff_grants(
        users.admin_a, users.staff_s.id, {DOCUMENTS: True}
    )

    await services.storage.execute(
        "UPDATE users SET supervisor_id = :admin WHERE id = :id",
        {"admin": users.admin_b.id, "id": users.staff_s.id},
    )

    assert await services.resolver.can_access(users.staff_s, DOCUMENTS) is False
    listed = await services.permissions.get_staff_grants(
        users.owner, users.staff_s.id
    )
    assert listed.data == {}

    saved = await services.permissions.save_staff_grants(
        users.admin_b, users.staff_s.id, {REPORTS: True}
    )
    assert saved.data == {REPORTS: True}


async def test_revoking_supervisor_assignment_caps_staff(services, users):
    await services.permissions.save_staff_grants(
        users.admin_a, users.staff_s.id, {DOCUMENTS: True}
    )
    await services.permissions.set_admin_assignment(
        users.owner, users.admin_a.id, DOCUMENTS, False
    )

    assert await services.resolver.can_access(users.staff_s, DOCUMENTS) is False


async def test_user_features_for_menu(services, users):
    await services.permissions.save_staff_grants(
        users.admin_a, users.staff_s.id, {DOCUMENTS: True}
    )

    result = await services.permissions.get_user_features(users.staff_s)

    assert result.success is True
    assert [key for key, on in result.data.items() if on] == [DOCUMENTS]


async def test_policy_changes_are_audited(services, users):
    await services.permissions.save_global_policy(users.owner, {REPORTS: False})
    await services.permissions.set_admin_assignment(
        users.owner, users.admin_a.id, DOCUMENTS, False
    )
    await services.permissions.save_staff_grants(
        users.admin_a, users.staff_s.id, {REPORTS: True}
    )

    entries = await services.audit.list_entries(limit=3)

    assert [e["action"] for e in entries] == [
        "update_user_permissions",
        "update_admin_features",
        "update_feature_flags",
    ]


async def test_effective_flags_are_visible_to_owner_and_the_admin_only(
    services, users
):
    own = await services.permissions.get_admin_effective_flags(
        users.admin_a, users.admin_a.id
    )
    other_admin = await services.permissions.get_admin_effective_flags(
        users.admin_a, users.admin_b.id
    )
    staff = await services.permissions.get_admin_effective_flags(
        users.staff_s, users.admin_a.id
    )
    not_an_admin = await services.permissions.get_admin_effective_flags(
        users.owner, users.staff_s.id
    )

    assert own.success is True
    assert other_admin.code == "FORBIDDEN"
    assert staff.code == "FORBIDDEN"
    assert not_an_admin.code == "NOT_FOUND"


async def test_staff_grants_are_visible_to_owner_supervisor_and_the_staff_member(
    services, users
):
    await services.permissions.save_staff_grants(
        users.admin_a, users.staff_s.id, {DOCUMENTS: True}
    )

    readers = (users.owner, users.admin_a, users.staff_s)
    for reader in readers:
        result = await services.permissions.get_staff_grants(reader, users.staff_s.id)
        assert result.data == {DOCUMENTS: True}, reader.username

    other_admin = await services.permissions.get_staff_grants(
        users.admin_b, users.staff_s.id
    )
    other_staff = await services.permissions.get_staff_grants(
        users.staff_t, users.staff_s.id
    )
    missing = await services.permissions.get_staff_grants(users.owner, "missing")

    assert other_admin.code == "FORBIDDEN"
    assert other_staff.code == "FORBIDDEN"
    assert missing.code == "NOT_FOUND"


async def test_policy_values_other_than_true_are_disabled(services, users):
    await services.storage.execute(
        "UPDATE users SET features = :features WHERE role = 'super_admin'",
        {"features": f'{{"{REPORTS}": "false", "{DOCUMENTS}": true}}'},
    )

    policy = await services.permissions.get_global_policy()

    assert policy.data[REPORTS] is False
    assert policy.data[DOCUMENTS] is True
    assert await services.resolver.can_access(users.admin_a, REPORTS) is False
    assert await services.resolver.can_access(users.admin_a, DOCUMENTS) is True
