"""Today's task list.

Kept in memory for the lifetime of the timer view.  The most recently
added task becomes the current one; its text is attached to the focus
sessions logged while it is current.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class Task:
    id: str
    text: str
    completed: bool = False


class TaskList:
    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._current_id: Optional[str] = None

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def current_label(self) -> Optional[str]:
        task = self.get(self._current_id) if self._current_id else None
        return task.text if task else None

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add(self, text: str) -> Optional[Task]:
        """Append a task and make it current.  Blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        task = Task(id=uuid.uuid4().hex, text=text)
        self._tasks.append(task)
        self._current_id = task.id
        return task

    def toggle(self, task_id: str) -> Optional[Task]:
        task = self.get(task_id)
        if task is not None:
            task.completed = not task.completed
        return task

    def delete(self, task_id: str) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        self._tasks.remove(task)
        if self._current_id == task_id:
            self._current_id = None
        return True

    def __len__(self) -> int:
        return len(self._tasks)
