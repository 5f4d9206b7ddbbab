import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.db.models.todo.tag import Tag, DEFAULT_TAG_COLOR
from app.db.models.todo.task_tag import TaskTag
from app.db.session import is_storable_id
from . import schemas

logger = logging.getLogger(__name__)

TAG_NAME_IN_USE = "Tag name already in use"


def _get_owned_tag(db: Session, tag_id: int, user_id: int) -> Tag:
    tag = db.get(Tag, tag_id) if is_storable_id(tag_id) else None
    if tag is None:
        raise NotFoundError("Tag not found")
    if tag.user_id != user_id:
        raise ForbiddenError("You do not have permission to access this tag")
    return tag


def _commit_unique_name(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(TAG_NAME_IN_USE)


def list_tags(db: Session, user_id: int):
    return db.query(Tag).filter(Tag.user_id == user_id).order_by(Tag.name.asc()).all()


def get_tag(db: Session, tag_id: int, user_id: int) -> Tag:
    return _get_owned_tag(db, tag_id, user_id)


def create_tag(db: Session, user_id: int, tag: schemas.TagCreate) -> Tag:
    db_tag = Tag(name=tag.name, color=tag.color or DEFAULT_TAG_COLOR, user_id=user_id)
    db.add(db_tag)
    _commit_unique_name(db)
    db.refresh(db_tag)

    logger.info("Tag created", extra={"tag_id": db_tag.id, "user_id": user_id})
    return db_tag


def update_tag(db: Session, tag_id: int, user_id: int, tag: schemas.TagUpdate) -> Tag:
    db_tag = _get_owned_tag(db, tag_id, user_id)
    for key, value in tag.model_dump(exclude_unset=True).items():
        setattr(db_tag, key, value)
    _commit_unique_name(db)
    db.refresh(db_tag)

    logger.info("Tag updated", extra={"tag_id": tag_id, "user_id": user_id})
    return db_tag


def delete_tag(db: Session, tag_id: int, user_id: int) -> dict:
    _get_owned_tag(db, tag_id, user_id)

    # Tasks keep existing; they just lose this tag.
    db.query(TaskTag).filter(TaskTag.tag_id == tag_id).delete(synchronize_session="fetch")
    db.query(Tag).filter(Tag.id == tag_id).delete(synchronize_session="fetch")
    db.commit()

    logger.info("Tag deleted", extra={"tag_id": tag_id, "user_id": user_id})
    return {"id": tag_id}
