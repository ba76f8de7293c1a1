from pydantic import Field

from defect_tracker.schemas._base import CamelModel

class UserCreateIn(CamelModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)
    role: str = Field(..., min_length=1, max_length=32)
    name: str | None = None

class SetupOut(CamelModel):
    created: bool
    message: str
