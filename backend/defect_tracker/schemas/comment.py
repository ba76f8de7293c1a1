import datetime as dt

from defect_tracker.schemas._base import CamelModel, NonBlankStr
from defect_tracker.schemas.auth import UserBrief

class CommentCreate(CamelModel):
    content: NonBlankStr

class CommentOut(CamelModel):
    id: int
    content: str
    defect_id: int
    author_id: int
    author: UserBrief
    created_at: dt.datetime
