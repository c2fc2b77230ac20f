"""
Todoist data client - fetches projects and tasks through the sync endpoint.
"""
import json
from typing import Any, Dict, List, Optional, Protocol

import requests

from .errors import SyncError
from .logger import get_logger
from .state import Project, Task

TODOIST_API_BASE = "https://api.todoist.com/api/v1"
RESOURCE_TYPES = ["projects", "items"]

logger = get_logger(__name__)


class DataClient(Protocol):
    def sync(self) -> None:
        """Refresh the local store. Raises SyncError on failure."""
        ...

    def projects(self) -> List[Project]:
        ...

    def tasks(self) -> List[Task]:
        ...


def _project_from_dict(data: dict) -> Project:
    return Project(
        id=str(data["id"]),
        name=data.get("name", ""),
        color=data.get("color"),
        order=data.get("child_order", 0) or 0,
        parent_id=str(data["parent_id"]) if data.get("parent_id") else None,
        is_archived=bool(data.get("is_archived", False)),
    )


def _task_from_dict(data: dict) -> Task:
    return Task(
        id=str(data["id"]),
        content=data.get("content", ""),
        project_id=str(data.get("project_id", "")),
        checked=bool(data.get("checked", False)),
        priority=data.get("priority", 1) or 1,
        order=data.get("child_order", 0) or 0,
    )


class TodoistClient:
    """
    Client for the Todoist sync API.

    Every sync() is a full sync: the project and task lists are rebuilt from
    the response and replace the previous ones.
    """

    def __init__(self, token: str, base_url: str = TODOIST_API_BASE,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.sync_token: Optional[str] = None
        self._projects: List[Project] = []
        self._tasks: List[Task] = []

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }

    def _request(self, endpoint: str, data: Dict[str, Any]) -> dict:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.post(url, headers=self._get_headers(), data=data, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise SyncError(f"HTTP {status} from {url}") from e
        except requests.RequestException as e:
            raise SyncError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise SyncError(f"invalid JSON from {url}") from e

    def sync(self) -> None:
        payload = self._request("/sync", {
            "sync_token": "*",
            "resource_types": json.dumps(RESOURCE_TYPES),
        })
        try:
            projects = [
                _project_from_dict(p) for p in payload.get("projects", [])
                if not p.get("is_deleted") and not p.get("is_archived")
            ]
            tasks = [
                _task_from_dict(i) for i in payload.get("items", [])
                if not i.get("is_deleted")
            ]
        except (AttributeError, KeyError, TypeError) as e:
            raise SyncError(f"unexpected sync payload: {e!r}") from e
        projects.sort(key=lambda p: p.order)
        tasks.sort(key=lambda t: (t.project_id, t.order))

        self._projects, self._tasks = projects, tasks
        self.sync_token = payload.get("sync_token")
        logger.info("synced %d projects, %d tasks", len(projects), len(tasks))

    def projects(self) -> List[Project]:
        return list(self._projects)

    def tasks(self) -> List[Task]:
        return list(self._tasks)
