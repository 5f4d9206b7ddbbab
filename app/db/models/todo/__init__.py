# app/db/models/todo/__init__.py
from .task import Task
from .tag import Tag
from .task_tag import TaskTag
