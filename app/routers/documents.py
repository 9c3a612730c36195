import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user, get_optional_user
from app.core.deps import get_db
from app.core.lookups import get_course_or_404, get_document_or_404
from app.core.permissions import ensure_owner, is_owner
from app.core.timeutil import utcnow
from app.models.document import Document
from app.models.user import User
from app.schemas.common import Message, ReorderResult
from app.schemas.document import DocumentCreate, DocumentRead, DocumentReorder, DocumentUpdate
from app.services import content

logger = logging.getLogger(__name__)

router = APIRouter()


def _course_documents(db: Session, course_id: int, published_only: bool) -> list[Document]:
    query = db.query(Document).filter(Document.course_id == course_id)
    if published_only:
        query = query.filter(Document.is_published.is_(True))
    return query.order_by(Document.order.asc(), Document.id.asc()).all()


@router.post("", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
def create_document(
    payload: DocumentCreate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, payload.course_id)
    ensure_owner(course, me, "Only course educator can add documents")

    data = payload.model_dump()
    if data["order"] is None:
        data["order"] = content.next_order(course.documents)

    document = Document(**data, is_published=False)
    db.add(document)
    db.commit()
    db.refresh(document)
    return document


@router.get("/course/{course_id}", response_model=list[DocumentRead])
def list_published_documents(course_id: int, db: Session = Depends(get_db)):
    get_course_or_404(db, course_id)
    return _course_documents(db, course_id, published_only=True)


@router.get("/course/{course_id}/all", response_model=list[DocumentRead])
def list_all_documents(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me)
    return _course_documents(db, course_id, published_only=False)


@router.patch("/course/{course_id}/reorder", response_model=ReorderResult)
def reorder_documents(
    course_id: int,
    payload: DocumentReorder,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = get_course_or_404(db, course_id)
    ensure_owner(course, me)

    skipped = content.apply_order(course.documents, payload.document_ids)
    db.commit()
    return {"message": "Documents reordered successfully", "skipped_ids": skipped}


@router.get("/{document_id}", response_model=DocumentRead)
def get_document(
    document_id: int,
    db: Session = Depends(get_db),
    me: Optional[User] = Depends(get_optional_user),
):
    document = get_document_or_404(db, document_id)
    if not document.is_published and (me is None or not is_owner(document.course, me.id)):
        # unpublished content does not exist for anyone but the owner
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.put("/{document_id}", response_model=DocumentRead)
def update_document(
    document_id: int,
    payload: DocumentUpdate,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    document = get_document_or_404(db, document_id)
    ensure_owner(document.course, me, "Not authorized to update this document")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(document, field, value)
    document.updated_at = utcnow()

    db.commit()
    db.refresh(document)
    return document


@router.delete("/{document_id}", response_model=Message)
def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    document = get_document_or_404(db, document_id)
    ensure_owner(document.course, me, "Not authorized to delete this document")

    db.delete(document)
    db.commit()
    return {"message": "Document deleted successfully"}


@router.patch("/{document_id}/publish", response_model=DocumentRead)
def toggle_document_publish(
    document_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    document = get_document_or_404(db, document_id)
    ensure_owner(document.course, me)

    content.toggle_publish(document)
    db.commit()
    db.refresh(document)
    logger.info(content.publish_message("Document", document))
    return document
