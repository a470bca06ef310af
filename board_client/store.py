"""
HTTP client for the task API.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from .exceptions import NotFoundError, StoreError, UnauthorizedError, ValidationFailed
from .models import TaskDraft, TaskUpdate

logger = logging.getLogger(__name__)

_ERRORS_BY_STATUS = {
    400: ValidationFailed,
    401: UnauthorizedError,
    404: NotFoundError,
}


class RemoteTaskStore:
    """
    Reads and writes boards and tasks over the JSON API.

    The ``requests.Session`` is the client's session context: it carries the
    auth cookies set by ``login`` and is shared by every call made through
    this store.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "auth/login/", json={"email": email, "password": password})

    def fetch_tasks(self, **filters) -> List[Dict[str, Any]]:
        """Top-level tasks of the signed-in user, newest first."""
        return self._request("GET", "tasks/", params=filters or None)

    def fetch_boards(self) -> List[Dict[str, Any]]:
        return self._request("GET", "boards/")

    def fetch_board(self, board_id: str) -> Dict[str, Any]:
        return self._request("GET", f"boards/{board_id}/")

    def create_task(self, draft: TaskDraft) -> Dict[str, Any]:
        response = self._request("POST", "tasks/", json=draft.to_payload())
        return response["data"]

    def update_task(self, task_id: str, update: TaskUpdate) -> Dict[str, Any]:
        return self._request("PATCH", f"tasks/{task_id}/", json=update.to_payload())

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"tasks/{task_id}/")

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}/api/{path}"

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StoreError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            message = self._error_message(response)
            error_class = _ERRORS_BY_STATUS.get(response.status_code, StoreError)
            logger.debug(f"{method} {url} -> {response.status_code}: {message}")
            raise error_class(message, status_code=response.status_code)

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict) and "error" in body:
            return str(body["error"])
        return str(body)
