from jrl.auth.schemas import User
from pydantic import BaseModel


class NetworkStatus(BaseModel):
    status: str
    quality: str = "unknown"
    speed: float = 0
    latency: float = 0


class TimeStats(BaseModel):
    daily: int = 0
    weekly: int = 0
    monthly: int = 0
    yearly: int = 0
    total: int = 0


class DevLoginResponse(BaseModel):
    token: str
    user: User

    class Config:
        from_attributes = True
