import logging
from typing import Iterable, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session, selectinload

from app.core.errors import ForbiddenError, NotFoundError
from app.db.session import is_storable_id
from app.db.models.todo.tag import Tag
from app.db.models.todo.task import Task, PRIORITY_RANK
from app.db.models.todo.task_tag import TaskTag
from . import schemas

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "createdAt": Task.created_at,
    "dueDate": Task.due_date,
    "priority": case(
        *((Task.priority == level, rank) for level, rank in PRIORITY_RANK.items()),
    ),
}


def _get_owned_task(db: Session, task_id: int, user_id: int) -> Task:
    # Existence first, then ownership: 404 and 403 never get mixed up.
    task = db.get(Task, task_id) if is_storable_id(task_id) else None
    if task is None:
        raise NotFoundError("Task not found")
    if task.user_id != user_id:
        raise ForbiddenError("You do not have permission to access this task")
    return task


def _owned_tag_ids(db: Session, tag_ids: Iterable[int], user_id: int) -> list[int]:
    """Keep only ids of tags that exist and belong to ``user_id``."""
    wanted = {tag_id for tag_id in tag_ids if is_storable_id(tag_id)}
    if not wanted:
        return []
    rows = db.query(Tag.id).filter(Tag.id.in_(wanted), Tag.user_id == user_id).all()
    return sorted(row.id for row in rows)


def _attach_tags(db: Session, task_id: int, user_id: int, tag_ids: Iterable[int]) -> None:
    valid_ids = _owned_tag_ids(db, tag_ids, user_id)
    db.add_all(TaskTag(task_id=task_id, tag_id=tag_id) for tag_id in valid_ids)
    db.commit()


def list_tasks(db: Session, user_id: int, filters: Optional[schemas.TaskFilters] = None):
    filters = filters or schemas.TaskFilters()

    query = db.query(Task).filter(Task.user_id == user_id)

    if filters.status == "completed":
        query = query.filter(Task.completed.is_(True))
    elif filters.status == "incomplete":
        query = query.filter(Task.completed.is_(False))

    if filters.search:
        query = query.filter(Task.title.icontains(filters.search, autoescape=True))

    if filters.tag_ids:
        # Ids that cannot exist match nothing; an empty IN keeps the filter in place.
        tag_ids = [tag_id for tag_id in filters.tag_ids if is_storable_id(tag_id)]
        query = query.filter(Task.tag_links.any(TaskTag.tag_id.in_(tag_ids)))

    total = query.count()

    sort_column = _SORT_COLUMNS[filters.sort_by]
    if filters.sort_order == "asc":
        query = query.order_by(sort_column.asc(), Task.id.asc())
    else:
        query = query.order_by(sort_column.desc(), Task.id.desc())

    tasks = query.options(selectinload(Task.tags)).all()
    return tasks, total


def get_task(db: Session, task_id: int, user_id: int) -> Task:
    return _get_owned_task(db, task_id, user_id)


def create_task(db: Session, user_id: int, task: schemas.TaskCreate) -> Task:
    data = task.model_dump(exclude={"tag_ids"})
    db_task = Task(**data, user_id=user_id)
    db.add(db_task)
    db.commit()
    db.refresh(db_task)

    # Not atomic with the insert above: a failure here leaves the task untagged.
    if task.tag_ids:
        _attach_tags(db, db_task.id, user_id, task.tag_ids)

    logger.info("Task created", extra={"task_id": db_task.id, "user_id": user_id})
    return get_task(db, db_task.id, user_id)


def update_task(db: Session, task_id: int, user_id: int, task: schemas.TaskUpdate) -> Task:
    db_task = _get_owned_task(db, task_id, user_id)

    changes = task.model_dump(exclude_unset=True)
    tag_ids = changes.pop("tag_ids", None)
    for key, value in changes.items():
        setattr(db_task, key, value)
    db.commit()

    if "tag_ids" in task.model_fields_set:
        db.query(TaskTag).filter(TaskTag.task_id == task_id).delete(synchronize_session="fetch")
        db.commit()
        _attach_tags(db, task_id, user_id, tag_ids or [])

    logger.info("Task updated", extra={"task_id": task_id, "user_id": user_id})
    return get_task(db, task_id, user_id)


def delete_task(db: Session, task_id: int, user_id: int) -> dict:
    _get_owned_task(db, task_id, user_id)

    db.query(TaskTag).filter(TaskTag.task_id == task_id).delete(synchronize_session="fetch")
    db.query(Task).filter(Task.id == task_id).delete(synchronize_session="fetch")
    db.commit()

    logger.info("Task deleted", extra={"task_id": task_id, "user_id": user_id})
    return {"id": task_id}


def toggle_task_completion(db: Session, task_id: int, user_id: int) -> Task:
    db_task = _get_owned_task(db, task_id, user_id)

    db_task.completed = not db_task.completed
    db.commit()

    logger.info(
        "Task completion toggled to %s", db_task.completed,
        extra={"task_id": task_id, "user_id": user_id},
    )
    return get_task(db, task_id, user_id)
