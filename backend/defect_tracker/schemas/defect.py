import datetime as dt

from defect_tracker.db.models.defect import DefectStatus, DefectPriority
from defect_tracker.schemas._base import CamelModel, NonBlankStr
from defect_tracker.schemas.auth import UserBrief
from defect_tracker.schemas.comment import CommentOut


class ProjectRef(CamelModel):
    id: int
    name: str


class SiteRef(CamelModel):
    id: int
    name: str
    project_id: int
    project: ProjectRef


class DefectCreate(CamelModel):
    title: NonBlankStr
    site_id: int
    description: str | None = None
    priority: DefectPriority = DefectPriority.medium
    assignee_id: int | None = None
    deadline: dt.date | None = None


class DefectUpdate(CamelModel):
    """Partial update. Keys left out are untouched; description, assigneeId
    and deadline may be sent as null to clear them."""

    title: NonBlankStr | None = None
    description: str | None = None
    status: DefectStatus | None = None
    priority: DefectPriority | None = None
    assignee_id: int | None = None
    deadline: dt.date | None = None


class AttachmentOut(CamelModel):
    id: int
    file_name: str
    content_type: str | None = None
    created_at: dt.datetime


class DefectOut(CamelModel):
    id: int
    title: str
    description: str | None = None
    status: DefectStatus
    priority: DefectPriority
    deadline: dt.date | None = None
    created_at: dt.datetime
    updated_at: dt.datetime | None = None
    site_id: int
    site: SiteRef
    creator_id: int
    creator: UserBrief
    assignee_id: int | None = None
    assignee: UserBrief | None = None
    comment_count: int = 0
    attachment_count: int = 0

    @classmethod
    def from_model(cls, d):
        out = cls.model_validate(d)
        return out.model_copy(update={"comment_count": len(d.comments), "attachment_count": len(d.attachments)})


class DefectDetailOut(DefectOut):
    comments: list[CommentOut] = []
    attachments: list[AttachmentOut] = []
