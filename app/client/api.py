"""HTTP client for the TODO API.

Wraps a ``requests.Session``: attaches the bearer token held by the auth
store, logs the user out on any 401, and turns non-2xx responses into
``ApiError`` carrying the server's error envelope.
"""

import logging
from typing import Any, Optional

import requests

from app.client.config import client_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[list] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors
        super().__init__(f"{status_code}: {message}")


class ApiClient:
    def __init__(self, auth_store=None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.auth_store = auth_store
        self.base_url = (base_url or client_settings.API_URL).rstrip("/")
        self.timeout = timeout or client_settings.REQUEST_TIMEOUT_SECONDS
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _headers(self) -> dict:
        token = self.auth_store.state.token if self.auth_store else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def request(self, method: str, path: str, **kwargs) -> dict:
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs,
        )

        if response.status_code == 401 and self.auth_store is not None:
            logger.info("Received 401 from %s, logging out", path)
            self.auth_store.logout()

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            raise ApiError(
                response.status_code,
                body.get("message") or response.reason or "Request failed",
                body.get("errors"),
            )
        return body

    # Auth

    def register(self, email: str, password: str, name: str) -> dict:
        return self.request("POST", "/api/auth/register", json={
            "email": email,
            "password": password,
            "name": name,
        })

    def login(self, email: str, password: str) -> dict:
        return self.request("POST", "/api/auth/login", json={"email": email, "password": password})

    def get_current_user(self) -> dict:
        return self.request("GET", "/api/auth/me")

    # Tasks

    def get_tasks(self, filters: Optional[dict[str, Any]] = None) -> dict:
        params = {}
        for key, value in (filters or {}).items():
            if value is None:
                continue
            if key == "tagIds":
                if not value:
                    continue
                value = ",".join(str(v) for v in value)
            params[key] = value
        return self.request("GET", "/api/tasks", params=params)

    def get_task(self, task_id: int) -> dict:
        return self.request("GET", f"/api/tasks/{task_id}")

    def create_task(self, data: dict) -> dict:
        return self.request("POST", "/api/tasks", json=data)

    def update_task(self, task_id: int, data: dict) -> dict:
        return self.request("PUT", f"/api/tasks/{task_id}", json=data)

    def delete_task(self, task_id: int) -> dict:
        return self.request("DELETE", f"/api/tasks/{task_id}")

    def toggle_task_completion(self, task_id: int) -> dict:
        return self.request("PATCH", f"/api/tasks/{task_id}/toggle")

    # Tags

    def get_tags(self) -> dict:
        return self.request("GET", "/api/tags")

    def get_tag(self, tag_id: int) -> dict:
        return self.request("GET", f"/api/tags/{tag_id}")

    def create_tag(self, data: dict) -> dict:
        return self.request("POST", "/api/tags", json=data)

    def update_tag(self, tag_id: int, data: dict) -> dict:
        return self.request("PUT", f"/api/tags/{tag_id}", json=data)

    def delete_tag(self, tag_id: int) -> dict:
        return self.request("DELETE", f"/api/tags/{tag_id}")
