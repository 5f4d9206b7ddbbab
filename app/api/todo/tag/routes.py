from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.security import get_current_user
from app.db.models.user import User
from app.api.schemas import DeletedOut, Envelope, success
from . import schemas, services

router = APIRouter()

@router.get("", response_model=Envelope[list[schemas.TagOut]])
def get_my_tags(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.list_tags(db, current_user.id))

@router.get("/{tag_id}", response_model=Envelope[schemas.TagOut])
def get_tag(
    tag_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.get_tag(db, tag_id, current_user.id))

@router.post("", response_model=Envelope[schemas.TagOut], status_code=status.HTTP_201_CREATED)
def create_tag(
    tag: schemas.TagCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.create_tag(db, current_user.id, tag))

@router.put("/{tag_id}", response_model=Envelope[schemas.TagOut])
def update_tag(
    tag_id: int,
    tag: schemas.TagUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.update_tag(db, tag_id, current_user.id, tag))

@router.delete("/{tag_id}", response_model=Envelope[DeletedOut])
def delete_tag(
    tag_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.delete_tag(db, tag_id, current_user.id))
