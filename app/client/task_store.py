"""Client-side task state.

Mutations are applied locally only after the server confirms them, with one
exception: ``toggle_task_completion`` flips the task immediately and flips it
back if the request fails.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

import requests

from app.api.todo.task.schemas import TaskOut
from app.client.api import ApiError

logger = logging.getLogger(__name__)


@dataclass
class TaskFilters:
    status: Optional[str] = "all"
    search: Optional[str] = None
    sort_by: Optional[str] = "createdAt"
    sort_order: Optional[str] = "desc"
    tag_ids: Optional[list[int]] = None

    def to_params(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "search": self.search,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
            "tagIds": self.tag_ids,
        }


@dataclass
class TaskState:
    tasks: list[TaskOut] = field(default_factory=list)
    total: int = 0
    is_loading: bool = False
    error: Optional[str] = None
    filters: TaskFilters = field(default_factory=TaskFilters)


def _error_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    return fallback


class TaskStore:
    def __init__(self, api):
        self.api = api
        self.state = TaskState()

    def _fail(self, message: str) -> None:
        self.state.error = message
        self.state.is_loading = False

    def _start(self) -> None:
        self.state.is_loading = True
        self.state.error = None

    def _flip_local(self, task_id: int) -> None:
        self.state.tasks = [
            t.model_copy(update={"completed": not t.completed}) if t.id == task_id else t
            for t in self.state.tasks
        ]

    def _replace_local(self, task: TaskOut) -> None:
        self.state.tasks = [task if t.id == task.id else t for t in self.state.tasks]

    def fetch_tasks(self) -> None:
        self._start()
        try:
            response = self.api.get_tasks(self.state.filters.to_params())
        except (ApiError, requests.RequestException) as e:
            self._fail(_error_message(e, "An error occurred while fetching tasks"))
            return

        if response.get("status") != "success":
            self._fail(response.get("message") or "Failed to fetch tasks")
            return

        data = response["data"]
        self.state.tasks = [TaskOut.model_validate(t) for t in data["tasks"]]
        self.state.total = data["total"]
        self.state.is_loading = False

    def create_task(self, data: dict) -> Optional[TaskOut]:
        self._start()
        try:
            response = self.api.create_task(data)
        except (ApiError, requests.RequestException) as e:
            self._fail(_error_message(e, "An error occurred while creating the task"))
            return None

        if response.get("status") != "success":
            self._fail(response.get("message") or "Failed to create task")
            return None

        task = TaskOut.model_validate(response["data"])
        self.state.tasks = [task, *self.state.tasks]
        self.state.total += 1
        self.state.is_loading = False
        return task

    def update_task(self, task_id: int, data: dict) -> Optional[TaskOut]:
        self._start()
        try:
            response = self.api.update_task(task_id, data)
        except (ApiError, requests.RequestException) as e:
            self._fail(_error_message(e, "An error occurred while updating the task"))
            return None

        if response.get("status") != "success":
            self._fail(response.get("message") or "Failed to update task")
            return None

        task = TaskOut.model_validate(response["data"])
        self._replace_local(task)
        self.state.is_loading = False
        return task

    def delete_task(self, task_id: int) -> bool:
        self._start()
        try:
            response = self.api.delete_task(task_id)
        except (ApiError, requests.RequestException) as e:
            self._fail(_error_message(e, "An error occurred while deleting the task"))
            return False

        if response.get("status") != "success":
            self._fail(response.get("message") or "Failed to delete task")
            return False

        self.state.tasks = [t for t in self.state.tasks if t.id != task_id]
        self.state.total -= 1
        self.state.is_loading = False
        return True

    def toggle_task_completion(self, task_id: int) -> Optional[TaskOut]:
        self._start()
        # Optimistic: show the new state before the server answers.
        self._flip_local(task_id)
        try:
            response = self.api.toggle_task_completion(task_id)
        except (ApiError, requests.RequestException) as e:
            logger.warning("Toggle failed for task %s, rolling back", task_id)
            self._flip_local(task_id)
            self._fail(_error_message(e, "An error occurred while changing the task status"))
            return None

        if response.get("status") != "success":
            self._flip_local(task_id)
            self._fail(response.get("message") or "Failed to change the task status")
            return None

        task = TaskOut.model_validate(response["data"])
        self._replace_local(task)
        self.state.is_loading = False
        return task

    def set_filters(self, **changes) -> None:
        self.state.filters = replace(self.state.filters, **changes)
        self.fetch_tasks()

    def reset_filters(self) -> None:
        self.state.filters = TaskFilters()
        self.fetch_tasks()
