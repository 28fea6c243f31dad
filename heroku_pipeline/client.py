"""Heroku Platform API client."""

from __future__ import annotations

import logging

import requests

from heroku_pipeline.logging_utils import LOGGER_NAME
from heroku_pipeline.models import API_ACCEPT, DEFAULT_API_URL, GIT_URL_TEMPLATE


def git_url(app: str) -> str:
    """Git endpoint the platform builds ``app`` from."""
    return GIT_URL_TEMPLATE.format(app=app)


class PlatformClient:
    """Thin wrapper around the Heroku Platform API v3 for app provisioning.

    Each operation is a single request. Non-2xx responses raise
    ``requests.HTTPError``; callers decide whether that stops the workflow.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": API_ACCEPT,
                "Content-Type": "application/json",
                "Authorization": f"Bearer {token}",
            }
        )
        self.logger = logging.getLogger(LOGGER_NAME)

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('json', '')}")
        resp = self.session.request(method, url, **kwargs)
        if resp.status_code >= 400:
            self.logger.error(f"API error {resp.status_code}: {resp.text[:500]}")
        resp.raise_for_status()
        return resp

    def post(self, endpoint: str, data: dict | None = None) -> requests.Response:
        return self._request("POST", endpoint, json=data)

    def delete(self, endpoint: str) -> requests.Response:
        return self._request("DELETE", endpoint)

    # -- App operations --

    def create_app(self, name: str) -> requests.Response:
        return self.post("/apps", data={"name": name})

    def add_collaborator(self, app: str, user: str) -> requests.Response:
        return self.post(f"/apps/{app}/collaborators", data={"user": user})

    def delete_app(self, name: str) -> requests.Response:
        return self.delete(f"/apps/{name}")
