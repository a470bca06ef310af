"""
Client-side task records and the update/creation payloads sent to the API.

A ``Task`` is an immutable snapshot of what the server returned. Its id is
turned into a ``str`` in ``Task.from_payload`` and nowhere else, so every
comparison downstream is plain string equality.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from django.utils.dateparse import parse_datetime

from task.choices import Priority, Recurrence, Status


class _Unset:
    """Marks a TaskUpdate field that was not given."""

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET: Any = _Unset()


def _parse_due_date(value) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid due date: {value!r}")
    return parsed


def _format_due_date(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Attachment:
    id: str
    name: str
    url: str
    type: str = ""

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Attachment":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            url=data.get("url", ""),
            type=data.get("type") or "",
        )


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    status: Status = Status.TODO
    due_date: Optional[datetime] = None
    recurring: Optional[Recurrence] = None
    progress: int = 0
    subtasks: Tuple["Task", ...] = ()
    attachments: Tuple[Attachment, ...] = ()

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from its JSON form; unknown enum values raise ValueError."""
        raw_id = data.get("id")
        recurring = data.get("recurring")

        return cls(
            id="" if raw_id is None else str(raw_id),
            title=data.get("title", ""),
            description=data.get("description") or "",
            priority=Priority(data.get("priority") or Priority.MEDIUM),
            status=Status(data.get("status") or Status.TODO),
            due_date=_parse_due_date(data.get("dueDate")),
            recurring=Recurrence(recurring) if recurring else None,
            progress=int(data.get("progress") or 0),
            subtasks=tuple(cls.from_payload(sub) for sub in data.get("subtasks") or ()),
            attachments=tuple(Attachment.from_payload(a) for a in data.get("attachments") or ()),
        )

    @property
    def has_identity(self) -> bool:
        return bool(self.id)


@dataclass(frozen=True)
class SubtaskDraft:
    title: str
    completed: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {"title": self.title, "completed": self.completed}


@dataclass(frozen=True)
class TaskUpdate:
    """
    Sparse update of one task.

    A field left as ``UNSET`` is not sent and not touched; any other value,
    ``None`` included, replaces the stored one. ``subtasks`` is a full
    replacement of the subtask list on the server.
    """
    title: Any = UNSET
    description: Any = UNSET
    priority: Any = UNSET
    due_date: Any = UNSET
    recurring: Any = UNSET
    status: Any = UNSET
    progress: Any = UNSET
    subtasks: Any = UNSET

    WIRE_NAMES: ClassVar[Dict[str, str]] = {
        "title": "title",
        "description": "description",
        "priority": "priority",
        "due_date": "dueDate",
        "recurring": "recurring",
        "status": "status",
        "progress": "progress",
        "subtasks": "subtasks",
    }

    def present(self) -> Dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.WIRE_NAMES
            if getattr(self, name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.present()

    def to_payload(self) -> Dict[str, Any]:
        payload = {}
        for name, value in self.present().items():
            if name == "due_date":
                value = _format_due_date(value)
            elif name == "subtasks":
                value = [draft.to_payload() for draft in value]
            payload[self.WIRE_NAMES[name]] = value
        return payload

    def apply(self, task: Task) -> Task:
        """Copy of ``task`` with the present fields replaced.

        Subtasks are left alone: their ids only exist once the server has
        recreated them.
        """
        changes = self.present()
        changes.pop("subtasks", None)
        return replace(task, **changes)


@dataclass(frozen=True)
class TaskDraft:
    """Body of a task creation request."""
    title: str
    board_id: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None
    recurring: Optional[Recurrence] = None
    subtasks: List[SubtaskDraft] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "boardId": self.board_id,
            "description": self.description,
            "priority": self.priority,
            "dueDate": _format_due_date(self.due_date),
            "recurring": self.recurring,
            "subtasks": [draft.to_payload() for draft in self.subtasks],
        }
