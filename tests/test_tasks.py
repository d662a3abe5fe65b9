"""Tests for the in-memory task list."""

from __future__ import annotations

from studytimer.tasks import TaskList


class TestTaskList:
    def test_empty(self):
        tasks = TaskList()
        assert len(tasks) == 0
        assert tasks.current_label is None

    def test_add_becomes_current(self):
        tasks = TaskList()
        tasks.add("Read chapter 4")
        tasks.add("Flashcards")
        assert tasks.current_label == "Flashcards"
        assert [t.text for t in tasks.tasks] == ["Read chapter 4", "Flashcards"]

    def test_add_strips(self):
        task = TaskList().add("  Essay outline  ")
        assert task.text == "Essay outline"

    def test_blank_ignored(self):
        tasks = TaskList()
        assert tasks.add("   ") is None
        assert len(tasks) == 0

    def test_toggle(self):
        tasks = TaskList()
        task = tasks.add("Problem set")
        tasks.toggle(task.id)
        assert tasks.get(task.id).completed is True
        tasks.toggle(task.id)
        assert tasks.get(task.id).completed is False

    def test_toggle_unknown(self):
        assert TaskList().toggle("missing") is None

    def test_delete_current_clears_label(self):
        tasks = TaskList()
        task = tasks.add("Revise notes")
        assert tasks.delete(task.id) is True
        assert tasks.current_label is None
        assert len(tasks) == 0

    def test_delete_other_keeps_current(self):
        tasks = TaskList()
        first = tasks.add("First")
        tasks.add("Second")
        tasks.delete(first.id)
        assert tasks.current_label == "Second"

    def test_delete_unknown(self):
        assert TaskList().delete("missing") is False

    def test_tasks_is_a_copy(self):
        tasks = TaskList()
        tasks.add("One")
        tasks.tasks.clear()
        assert len(tasks) == 1
