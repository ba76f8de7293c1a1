from pydantic import BaseModel

from defect_tracker.schemas._base import CamelModel

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class LoginIn(BaseModel):
    email: str
    password: str

class UserOut(CamelModel):
    id: int
    email: str
    name: str | None = None
    role: str

class UserBrief(CamelModel):
    id: int
    name: str | None = None
    email: str
