"""
In-memory task collection behind the board and calendar views.

The collection is flat. Container contents are filtered out of it on every
call and never stored, so there is only one copy of each task to keep in
sync with the server.
"""
import logging
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .containers import CalendarMapping, ColumnMapping, ContainerMapping
from .exceptions import StoreError
from .models import Task, TaskDraft, TaskUpdate

logger = logging.getLogger(__name__)


@dataclass
class TaskFilter:
    """Status/priority/search filter from the calendar's filter panel.

    Empty criteria match everything.
    """
    statuses: List[str] = field(default_factory=list)
    priorities: List[str] = field(default_factory=list)
    search: str = ""

    def matches(self, task: Task) -> bool:
        if self.statuses and task.status not in self.statuses:
            return False
        if self.priorities and task.priority not in self.priorities:
            return False
        if self.search:
            needle = self.search.lower()
            return needle in task.title.lower() or needle in task.description.lower()
        return True

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        return [task for task in tasks if self.matches(task)]


class ViewState:
    """Base view state: subclasses say where tasks come from and how they group."""
    mapping: ContainerMapping

    def __init__(self, store):
        self.store = store
        self.filter = TaskFilter()
        self._tasks: List[Task] = []

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    def find(self, task_id) -> Optional[Task]:
        if not task_id:
            return None
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def tasks_for_container(self, container_id) -> List[Task]:
        key = self.mapping.key(container_id)
        if key is None:
            return []
        return [
            task for task in self._tasks
            if task.has_identity
            and self.mapping.container_for(task) == key
            and self.filter.matches(task)
        ]

    def replace_all(self, payloads: Iterable[Dict[str, Any]]) -> None:
        """Drop the current collection and adopt the server's."""
        self._tasks = self._ingest(payloads)

    def replace_task(self, updated: Task) -> None:
        self._tasks = [updated if task.id == updated.id else task for task in self._tasks]

    def refresh(self) -> bool:
        """
        Full re-fetch. Failures are logged and the old state kept whole:
        the fetched data is parsed completely before anything is swapped.
        """
        try:
            source = self._fetch()
            tasks = self._ingest(self._task_payloads(source))
            self._adopt(source)
        except (StoreError, ValueError, KeyError, TypeError, AttributeError) as e:
            # Malformed payloads land here as well as failed requests
            logger.error(f"Error fetching tasks: {type(e).__name__}: {e}")
            return False
        self._tasks = tasks
        return True

    def create_task(self, draft: TaskDraft) -> Dict[str, Any]:
        """Create, then re-fetch. Errors reach the caller so the form can show them."""
        created = self.store.create_task(draft)
        self.refresh()
        return created

    def update_task(self, task_id: str, update: TaskUpdate) -> bool:
        try:
            self.store.update_task(task_id, update)
        except StoreError as e:
            logger.error(f"Error updating task {task_id}: {e}")
            return False
        return self.refresh()

    def delete_task(self, task_id: str) -> bool:
        try:
            self.store.delete_task(task_id)
        except StoreError as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            return False
        return self.refresh()

    def _fetch(self):
        raise NotImplementedError

    def _task_payloads(self, source) -> List[Dict[str, Any]]:
        return source

    def _adopt(self, source) -> None:
        """Take over anything besides tasks from a fetch; must not half-apply."""

    @staticmethod
    def _ingest(payloads: Iterable[Dict[str, Any]]) -> List[Task]:
        return [Task.from_payload(payload) for payload in payloads]


class BoardViewState(ViewState):
    """Tasks of one board, grouped into its columns by status."""

    def __init__(self, store, board_id: str):
        super().__init__(store)
        self.board_id = board_id
        self.board: Optional[Dict[str, Any]] = None
        self.mapping = ColumnMapping()

    @property
    def columns(self) -> List[str]:
        return list(self.mapping.columns)

    def _fetch(self) -> Dict[str, Any]:
        return self.store.fetch_board(self.board_id)

    def _task_payloads(self, board) -> List[Dict[str, Any]]:
        return board.get("tasks", [])

    def _adopt(self, board) -> None:
        mapping = ColumnMapping(column["name"] for column in board.get("columns", []))
        self.board = board
        self.mapping = mapping


class CalendarViewState(ViewState):
    """All of the user's tasks, grouped into days by due date."""

    def __init__(self, store, tz: tzinfo = timezone.utc):
        super().__init__(store)
        self.mapping = CalendarMapping(tz)

    def _fetch(self) -> List[Dict[str, Any]]:
        return self.store.fetch_tasks()
