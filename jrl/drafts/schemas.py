from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class DraftBase(BaseModel):
    title: str = ""
    content: str = ""
    tags: str = ""
    journal_id: str = ""


class Draft(DraftBase):
    saved_at: datetime


class DraftResponse(BaseModel):
    draft: Optional[Draft] = None
    saved: bool = False
