from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session
from jrl.remote.models import Document

COLUMN_FIELDS = {"id", "user_id", "created_at", "updated_at"}


# Helper
def to_record(document: Document) -> Dict[str, Any]:
    record = dict(document.data or {})
    record.update(
        id=document.id,
        user_id=document.user_id,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )
    return record


def _split(record: Dict[str, Any]):
    data = {k: v for k, v in record.items() if k not in COLUMN_FIELDS}
    return record.get("user_id"), data


# Document CRUD
def get_document(db: Session, collection: str, doc_id: str) -> Optional[Document]:
    return db.query(Document).filter(
        Document.collection == collection,
        Document.id == doc_id
    ).first()

def create_document(db: Session, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    user_id, data = _split(record)
    document = Document(
        id=uuid4().hex,
        collection=collection,
        user_id=user_id,
        data=data,
        created_at=now,
        updated_at=now,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return to_record(document)

def put_document(db: Session, collection: str, doc_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    user_id, data = _split(record)
    document = get_document(db, collection, doc_id)
    if document:
        document.user_id = user_id
        document.data = data
        document.updated_at = now
    else:
        document = Document(
            id=doc_id,
            collection=collection,
            user_id=user_id,
            data=data,
            created_at=now,
            updated_at=now,
        )
        db.add(document)
    db.commit()
    db.refresh(document)
    return to_record(document)

def _owned_document(db: Session, doc_id: str, user_id: str) -> Document:
    document = db.query(Document).filter(
        Document.id == doc_id,
        Document.user_id == user_id
    ).first()
    if document is None:
        raise LookupError(f"No document with id {doc_id} for user {user_id}")
    return document

def update_document(db: Session, doc_id: str, patch: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    document = _owned_document(db, doc_id, user_id)
    _, data = _split(patch)
    # Reassign so the JSON column is flagged dirty
    document.data = {**(document.data or {}), **data}
    document.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(document)
    return to_record(document)

def delete_document(db: Session, doc_id: str, user_id: str) -> None:
    document = _owned_document(db, doc_id, user_id)
    db.delete(document)
    db.commit()

def query_documents(
    db: Session,
    collection: str,
    order_by: str = "created_at",
    direction: str = "desc",
    where: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    query = db.query(Document).filter(Document.collection == collection)
    where = dict(where or {})
    if "user_id" in where:
        query = query.filter(Document.user_id == where.pop("user_id"))

    descending = direction == "desc"
    if order_by in ("created_at", "updated_at"):
        column = getattr(Document, order_by)
        query = query.order_by(column.desc() if descending else column.asc())

    records = [to_record(document) for document in query.all()]
    if where:
        records = [r for r in records if all(r.get(k) == v for k, v in where.items())]
    if order_by not in ("created_at", "updated_at"):
        records.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by)), reverse=descending)
    return records
