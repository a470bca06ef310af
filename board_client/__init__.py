"""
Client-side state for the board and calendar views: the task collection,
drop-container mapping, drag coordination and the HTTP store behind them.
"""
from .containers import CalendarMapping, ColumnMapping, calendar_days
from .coordinator import DragCoordinator, DragSession
from .exceptions import NotFoundError, StoreError, UnauthorizedError, ValidationFailed
from .models import UNSET, SubtaskDraft, Task, TaskDraft, TaskUpdate
from .store import RemoteTaskStore
from .view_state import BoardViewState, CalendarViewState, TaskFilter, ViewState

__all__ = [
    "BoardViewState",
    "CalendarMapping",
    "CalendarViewState",
    "ColumnMapping",
    "DragCoordinator",
    "DragSession",
    "NotFoundError",
    "RemoteTaskStore",
    "StoreError",
    "SubtaskDraft",
    "Task",
    "TaskDraft",
    "TaskFilter",
    "TaskUpdate",
    "UNSET",
    "UnauthorizedError",
    "ValidationFailed",
    "ViewState",
    "calendar_days",
]
