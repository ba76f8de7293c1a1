from defect_tracker.core.policy import (
    PROJECT_EDITORS,
    SITE_EDITORS,
    SITE_DELETERS,
    DEFECT_EDITORS,
    has_role,
    can_update_defect,
)
from defect_tracker.db.models.defect import Defect
from defect_tracker.db.models.user import User, Role


def _user(uid: int, role: str) -> User:
    return User(id=uid, email=f"u{uid}@example.com", password_hash="x", role=role)


def test_only_managers_edit_projects():
    assert has_role(_user(1, Role.manager.value), PROJECT_EDITORS)
    assert not has_role(_user(2, Role.engineer.value), PROJECT_EDITORS)
    assert not has_role(_user(3, "FOREMAN"), PROJECT_EDITORS)


def test_site_delete_is_narrower_than_site_update():
    engineer = _user(2, Role.engineer.value)
    assert has_role(engineer, SITE_EDITORS)
    assert not has_role(engineer, SITE_DELETERS)


def test_unknown_roles_cannot_edit_defects():
    assert not has_role(_user(4, "FOREMAN"), DEFECT_EDITORS)
    assert not has_role(_user(5, Role.observer.value), DEFECT_EDITORS)


def test_assignee_may_update_defect():
    observer = _user(7, Role.observer.value)
    assert can_update_defect(observer, Defect(assignee_id=7))
    assert not can_update_defect(observer, Defect(assignee_id=8))
    assert not can_update_defect(observer, Defect(assignee_id=None))


def test_editors_may_update_any_defect():
    assert can_update_defect(_user(1, Role.manager.value), Defect(assignee_id=None))
    assert can_update_defect(_user(2, Role.engineer.value), Defect(assignee_id=99))
