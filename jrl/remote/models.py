from sqlalchemy import Column, String, DateTime, JSON
from jrl.core.database import RemoteBase


class Document(RemoteBase):
    __tablename__ = "documents"

    id = Column(String, primary_key=True, index=True)
    collection = Column(String, index=True, nullable=False)
    user_id = Column(String, index=True, nullable=True)

    data = Column(JSON, nullable=False, default=dict)

    # Assigned by the store, never by the client
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
