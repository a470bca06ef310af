"""
Mapping between drop containers and task fields.

A board column is keyed by its name and stands for one status; a calendar
cell is keyed by an ISO date and stands for every due date on that day.
Both directions must exist for every container the UI renders, otherwise a
drop onto it resolves to ``None`` and is ignored.
"""
import calendar
import logging
from datetime import date, datetime, time, timezone, tzinfo
from typing import Iterable, List, Optional

from task.choices import COLUMN_TO_STATUS, STATUS_TO_COLUMN, Status
from .models import Task, TaskUpdate

logger = logging.getLogger(__name__)


class ContainerMapping:
    """Base class: ``field`` names the Task attribute a drop rewrites."""
    field = None

    def key(self, container_id) -> Optional[str]:
        """Canonical key for a container id, or None if it is not a container."""
        raise NotImplementedError

    def resolve(self, container_id):
        """Field value a task takes when dropped on the container."""
        raise NotImplementedError

    def container_for(self, task: Task) -> Optional[str]:
        """Key of the container the task currently sits in."""
        raise NotImplementedError

    def as_update(self, value) -> TaskUpdate:
        return TaskUpdate(**{self.field: value})


class ColumnMapping(ContainerMapping):
    field = "status"

    def __init__(self, columns: Optional[Iterable[str]] = None):
        names = list(columns) if columns is not None else list(COLUMN_TO_STATUS)
        for name in names:
            if name not in COLUMN_TO_STATUS:
                logger.warning(f"Column {name!r} has no status; drops onto it are ignored")
        self.columns = [name for name in names if name in COLUMN_TO_STATUS]

    def key(self, container_id) -> Optional[str]:
        return container_id if container_id in self.columns else None

    def resolve(self, container_id) -> Optional[Status]:
        if self.key(container_id) is None:
            return None
        return COLUMN_TO_STATUS[container_id]

    def container_for(self, task: Task) -> Optional[str]:
        return self.key(STATUS_TO_COLUMN.get(task.status))


class CalendarMapping(ContainerMapping):
    field = "due_date"

    def __init__(self, tz: tzinfo = timezone.utc):
        self.tz = tz

    def key(self, container_id) -> Optional[str]:
        day = self._parse(container_id)
        return day.isoformat() if day is not None else None

    def resolve(self, container_id) -> Optional[datetime]:
        day = self._parse(container_id)
        if day is None:
            return None
        # Midnight at the start of the day in the calendar's timezone
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def container_for(self, task: Task) -> Optional[str]:
        if task.due_date is None:
            return None
        due = task.due_date
        if due.tzinfo is not None:
            due = due.astimezone(self.tz)
        return due.date().isoformat()

    def _parse(self, container_id) -> Optional[date]:
        if not isinstance(container_id, str):
            return None
        try:
            return date.fromisoformat(container_id)
        except ValueError:
            return None


def calendar_days(year: int, month: int) -> List[Optional[date]]:
    """Cells of a Sunday-first month grid: None pads the days before the 1st."""
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # monthrange counts Monday as 0
    padding = (first_weekday + 1) % 7
    return [None] * padding + [date(year, month, day) for day in range(1, days_in_month + 1)]
