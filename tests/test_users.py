"""Tests for user administration, principals and the audit trail."""

import pytest

from troopfund.domain.audit import AuditService, USER_CREATE, USER_DELETE
from troopfund.domain.authorization import Principal, Role, can_write, require_role
from troopfund.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class TestRoles:
    """Tests for role parsing and checks."""

    @pytest.mark.parametrize(
        "value,expected",
        [("admin", Role.ADMIN), ("Editor", Role.EDITOR), (" viewer ", Role.VIEWER)],
    )
    def test_parse(self, value, expected):
        assert Role.parse(value) is expected

    def test_parse_invalid(self):
        with pytest.raises(ValidationError):
            Role.parse("owner")

    def test_can_write(self):
        assert can_write(Principal(1, Role.ADMIN))
        assert can_write(Principal(1, Role.EDITOR))
        assert not can_write(Principal(1, Role.VIEWER))

    def test_require_role_message(self):
        with pytest.raises(AuthorizationError, match="viewer"):
            require_role(Principal(1, Role.VIEWER), Role.ADMIN, action="manage users")


class TestUserService:
    """Tests for UserService."""

    def test_bootstrap_admin(self, user_service):
        user = user_service.bootstrap_admin("alice")

        assert user.username == "alice"
        assert user.role == "admin"
        assert user_service.principal_for("alice") == Principal(user.id, Role.ADMIN)

    def test_bootstrap_only_once(self, user_service, admin):
        with pytest.raises(ConflictError):
            user_service.bootstrap_admin("mallory")

    def test_create_user(self, user_service, admin):
        user = user_service.create_user(admin, "bob", "editor")

        assert user.role == "editor"
        assert [u.username for u in user_service.list_users(admin)] == ["admin", "bob"]

    def test_create_duplicate_username(self, user_service, admin):
        user_service.create_user(admin, "bob", Role.VIEWER)
        with pytest.raises(ConflictError):
            user_service.create_user(admin, "bob", Role.EDITOR)

    def test_create_user_empty_name(self, user_service, admin):
        with pytest.raises(ValidationError):
            user_service.create_user(admin, " ", Role.VIEWER)

    def test_non_admin_cannot_manage_users(self, user_service, editor, viewer):
        with pytest.raises(AuthorizationError):
            user_service.create_user(editor, "carol", Role.VIEWER)
        with pytest.raises(AuthorizationError):
            user_service.delete_user(editor, viewer.id)
        with pytest.raises(AuthorizationError):
            user_service.list_users(viewer)

    def test_delete_user(self, user_service, admin, viewer):
        user_service.delete_user(admin, viewer.id)

        with pytest.raises(NotFoundError):
            user_service.principal_for("viewer")

    def test_delete_missing_user(self, user_service, admin):
        with pytest.raises(NotFoundError):
            user_service.delete_user(admin, 999)

    def test_admin_cannot_delete_self(self, user_service, admin):
        with pytest.raises(ValidationError):
            user_service.delete_user(admin, admin.id)

    def test_principal_for_unknown(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.principal_for("ghost")


class TestAudit:
    """Tests for the audit trail."""

    def test_user_changes_are_audited(self, user_service, audit_service, admin, viewer):
        user_service.delete_user(admin, viewer.id)

        entries = audit_service.list_entries(admin)
        actions = [e.action_type for e in entries]

        assert actions[0] == USER_DELETE
        assert actions.count(USER_CREATE) == 2
        assert entries[0].principal_id == admin.id
        assert "viewer" in entries[0].details

    def test_bootstrap_audited_without_principal(self, user_service, audit_service, admin):
        entries = audit_service.list_entries(admin)

        assert len(entries) == 1
        assert entries[0].principal_id is None
        assert entries[0].action_type == USER_CREATE

    def test_list_entries_limit(self, audit_service, admin):
        for i in range(5):
            audit_service.record(admin.id, "TEST", f"entry {i}")

        assert len(audit_service.list_entries(admin, limit=3)) == 3

    def test_list_entries_admin_only(self, audit_service, editor):
        with pytest.raises(AuthorizationError):
            audit_service.list_entries(editor)

    def test_record_failure_does_not_propagate(self, temp_db, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "add_audit_entry", broken)
        service = AuditService(temp_db)

        service.record(1, "TEST", "details")

        assert "Failed to record audit entry TEST" in caplog.text

    def test_failed_audit_does_not_undo_user_change(self, user_service, admin, temp_db, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "add_audit_entry", broken)

        user = user_service.create_user(admin, "dana", Role.EDITOR)

        assert temp_db.get_user(user.id) is not None
