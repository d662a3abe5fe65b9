"""Task list panel shown under the timer."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit,
    QCheckBox,
)

from ..tasks import Task, TaskList


class TaskPanel(QWidget):
    """Add, tick off and remove today's tasks.

    ``current_task_changed(str)`` fires with the new current label (empty
    string when there is none).
    """

    current_task_changed = pyqtSignal(str)

    def __init__(self, tasks: TaskList, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._tasks = tasks
        self._row_widgets: list[QWidget] = []
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(6)

        header = QLabel("Tasks")
        layout.addWidget(header)

        input_row = QHBoxLayout()
        self._input = QLineEdit(self)
        self._input.setPlaceholderText("What are you studying?")
        self._input.setMaxLength(200)
        self._input.returnPressed.connect(self._on_add)
        self._add_btn = QPushButton("Add", self)
        self._add_btn.clicked.connect(self._on_add)
        input_row.addWidget(self._input)
        input_row.addWidget(self._add_btn)
        layout.addLayout(input_row)

        self._current_label = QLabel("")
        self._current_label.setObjectName("mutedLabel")
        layout.addWidget(self._current_label)

        self._rows = QVBoxLayout()
        self._rows.setSpacing(4)
        layout.addLayout(self._rows)

        self._empty_label = QLabel("No tasks yet. Add one to get started!")
        self._empty_label.setObjectName("mutedLabel")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

    def refresh(self) -> None:
        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()

        for task in self._tasks.tasks:
            row = self._make_row(task)
            self._rows.addWidget(row)
            self._row_widgets.append(row)

        self._empty_label.setVisible(len(self._tasks) == 0)
        label = self._tasks.current_label
        self._current_label.setText(f"Working on: {label}" if label else "")

    def _make_row(self, task: Task) -> QWidget:
        row = QWidget(self)
        h = QHBoxLayout(row)
        h.setContentsMargins(0, 0, 0, 0)

        check = QCheckBox(task.text, row)
        check.setChecked(task.completed)
        check.toggled.connect(lambda _on, tid=task.id: self._on_toggle(tid))
        h.addWidget(check, 1)

        remove = QPushButton("✕", row)
        remove.setObjectName("dangerButton")
        remove.setFixedWidth(32)
        remove.clicked.connect(lambda _checked=False, tid=task.id: self._on_delete(tid))
        h.addWidget(remove)
        return row

    # ── slots ─────────────────────────────────────────────────────────

    def _on_add(self) -> None:
        if self._tasks.add(self._input.text()) is None:
            return
        self._input.clear()
        self.refresh()
        self.current_task_changed.emit(self._tasks.current_label or "")

    def _on_toggle(self, task_id: str) -> None:
        self._tasks.toggle(task_id)

    def _on_delete(self, task_id: str) -> None:
        before = self._tasks.current_label
        self._tasks.delete(task_id)
        self.refresh()
        if self._tasks.current_label != before:
            self.current_task_changed.emit(self._tasks.current_label or "")

    # ── test hooks ────────────────────────────────────────────────────

    def add_task(self, text: str) -> None:
        self._input.setText(text)
        self._on_add()

    @property
    def row_count(self) -> int:
        return len(self._row_widgets)
