# import all models for Alembic
from defect_tracker.db.models.user import User, Role
from defect_tracker.db.models.project import Project
from defect_tracker.db.models.site import ConstructionSite
from defect_tracker.db.models.defect import Defect, DefectStatus, DefectPriority
from defect_tracker.db.models.comment import Comment
from defect_tracker.db.models.attachment import Attachment
