from enum import Enum
from typing import Dict, List, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class Tier(str, Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"
    SAMPLE = "sample"


class JournalRef(BaseModel):
    """Where a journal lives. Decided at creation; only a downgrade changes ``tier``."""

    tier: Tier
    id: str
    origin: Optional[Tier] = None

    class Config:
        frozen = True

    @property
    def downgraded(self) -> bool:
        return self.origin == Tier.REMOTE and self.tier == Tier.FALLBACK


class Translation(BaseSchema):
    title: str = ""
    content: str = ""
    tags: List[str] = Field(default_factory=list)


class Journal(BaseSchema):
    ref: JournalRef
    user_id: Optional[str] = None
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    translations: Dict[str, Translation] = Field(default_factory=dict)

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Remote stamps may come back naive; compare everything in UTC.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def id(self) -> str:
        return self.ref.id

    @property
    def tier(self) -> Tier:
        return self.ref.tier


class JournalForm(BaseSchema):
    """Create-or-edit form. Empty ``id`` creates, anything else updates."""

    id: Optional[str] = None
    title: str = ""
    content: str = ""
    tags: str = ""


class SaveResult(BaseModel):
    journal: Journal
    stored_in: Tier
    message: str


class JournalView(BaseModel):
    id: str
    tier: Tier
    user_id: Optional[str] = None
    title: str
    content: str
    excerpt: str
    is_long: bool
    read_time: str
    tags: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_owner: bool = False
    language: str
