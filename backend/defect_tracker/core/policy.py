"""Who may change what.

Reads are open to any authenticated user. Writes are gated by role, and a
defect may additionally be updated by whoever it is assigned to. Deletion of a
project or site with children is refused by the crud layer, not here.
"""
from defect_tracker.db.models.user import Role, User
from defect_tracker.db.models.defect import Defect

PROJECT_EDITORS = (Role.manager,)
SITE_EDITORS = (Role.manager, Role.engineer)
# narrower than SITE_EDITORS: engineers may rename a site but not remove it
SITE_DELETERS = (Role.manager,)
DEFECT_EDITORS = (Role.manager, Role.engineer)
REPORT_EXPORTERS = (Role.manager, Role.engineer)
USER_ADMINS = (Role.manager,)


def has_role(user: User, roles) -> bool:
    return user.role in roles


def can_update_defect(user: User, defect: Defect) -> bool:
    if has_role(user, DEFECT_EDITORS):
        return True
    return defect.assignee_id is not None and defect.assignee_id == user.id
