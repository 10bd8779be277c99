from pydantic import BaseModel
from typing import Optional


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class User(BaseSchema):
    uid: str
    display_name: Optional[str] = None


class SessionRequest(BaseSchema):
    token: str


class SessionResponse(BaseModel):
    user: User
    owned_count: int = 0
