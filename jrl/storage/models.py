from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from jrl.core.database import LocalBase


class LocalItem(LocalBase):
    __tablename__ = "local_items"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
