from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.errors import ValidationError
from app.core.security import get_current_user
from app.db.models.user import User
from app.api.schemas import DeletedOut, Envelope, success
from . import schemas, services

router = APIRouter()


def _parse_tag_ids(raw: Optional[str]) -> Optional[list[int]]:
    """``tagIds`` arrives as a comma-separated list, e.g. ``?tagIds=1,4``."""
    if raw is None:
        return None
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise ValidationError(errors=[{"path": "tagIds", "message": "Tag ids must be integers"}])


def task_filters(
    status: schemas.TaskStatus = Query("all"),
    search: Optional[str] = Query(None),
    sort_by: schemas.SortField = Query("createdAt", alias="sortBy"),
    sort_order: schemas.SortOrder = Query("desc", alias="sortOrder"),
    tag_ids: Optional[str] = Query(None, alias="tagIds"),
) -> schemas.TaskFilters:
    return schemas.TaskFilters(
        status=status,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        tag_ids=_parse_tag_ids(tag_ids),
    )


@router.get("", response_model=Envelope[schemas.TaskListOut])
def get_my_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    filters: schemas.TaskFilters = Depends(task_filters),
):
    tasks, total = services.list_tasks(db, current_user.id, filters)
    return success({"tasks": tasks, "total": total})

@router.get("/{task_id}", response_model=Envelope[schemas.TaskOut])
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.get_task(db, task_id, current_user.id))

@router.post("", response_model=Envelope[schemas.TaskOut], status_code=status.HTTP_201_CREATED)
def create_task(
    task: schemas.TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.create_task(db, current_user.id, task))

@router.put("/{task_id}", response_model=Envelope[schemas.TaskOut])
def update_task(
    task_id: int,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.update_task(db, task_id, current_user.id, task))

@router.delete("/{task_id}", response_model=Envelope[DeletedOut])
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.delete_task(db, task_id, current_user.id))

@router.patch("/{task_id}/toggle", response_model=Envelope[schemas.TaskOut])
def toggle_task_completion(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(services.toggle_task_completion(db, task_id, current_user.id))
