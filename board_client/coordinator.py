"""
Turns a drag gesture into a one-field task update.

The drop is applied to the local collection first and then persisted. If
persisting fails the local copy is thrown away by a full refresh from the
server; the optimistic patch is never undone by hand.

Two drags may overlap: the second can start while the first one's request
is still in flight. Both patches land on the shared collection in call
order, and a refresh triggered by the first failure also discards the
second patch until its own request completes. The last response to arrive
wins.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import StoreError
from .models import Task

logger = logging.getLogger(__name__)


@dataclass
class DragSession:
    task: Task
    origin: Optional[str]
    hovered: Optional[str] = None


class DragCoordinator:

    def __init__(self, view):
        self.view = view
        self.session: Optional[DragSession] = None

    @property
    def active_task(self) -> Optional[Task]:
        return self.session.task if self.session else None

    @property
    def active_container(self) -> Optional[str]:
        return self.session.origin if self.session else None

    @property
    def hovered_container(self) -> Optional[str]:
        return self.session.hovered if self.session else None

    def begin_drag(self, task_id) -> Optional[DragSession]:
        """Start a session for a known task; ids that are empty or unknown start nothing."""
        if not task_id:
            return None

        task = self.view.find(task_id)
        if task is None:
            return None

        self.session = DragSession(task=task, origin=self.view.mapping.container_for(task))
        return self.session

    def hover(self, container_id) -> None:
        if self.session is not None:
            self.session.hovered = container_id

    def end_drag(self, task_id, target_container=None) -> bool:
        """
        Finish the gesture. Returns True only when a move was persisted.

        The session is cleared before anything else, whatever the outcome,
        so no drag stays visible while the request is in flight.
        """
        self.session = None

        if target_container is None:
            return False

        mapping = self.view.mapping
        target = mapping.key(target_container)
        value = mapping.resolve(target_container)
        if target is None or value is None:
            return False

        task = self.view.find(task_id)
        if task is None:
            return False

        # Dropped back where it came from: nothing to write
        if mapping.container_for(task) == target:
            return False

        update = mapping.as_update(value)
        logger.info(f"Moving task {task.id} from {mapping.container_for(task)} to {target}")
        self.view.replace_task(update.apply(task))

        try:
            self.view.store.update_task(task.id, update)
        except StoreError as e:
            logger.error(f"Error updating task {task.id}: {e}")
            self.view.refresh()
            return False

        return True
