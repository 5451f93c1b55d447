"""
GitHub REST client for project export.

Covers the handful of endpoints export needs: list and fetch repositories,
create one, look up the token's owner, and create-or-update file contents.
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from typing import Any

import httpx
import structlog

from dapp0.config import get_settings

logger = structlog.get_logger()

REPO_FIELDS = (
    "id",
    "name",
    "full_name",
    "description",
    "html_url",
    "clone_url",
    "private",
    "created_at",
    "updated_at",
)


class GitHubError(Exception):
    """A GitHub API call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _repo_summary(data: dict[str, Any]) -> dict[str, Any]:
    return {key: data.get(key) for key in REPO_FIELDS}


class GitHubClient:
    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        allow_404: bool = False,
    ) -> Any:  # noqa: ANN401
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            msg = f"GitHub request failed: {method} {path}: {e}"
            raise GitHubError(msg) from e

        if allow_404 and response.status_code == 404:
            return None
        if response.is_error:
            msg = f"GitHub API error: {method} {path} returned {response.status_code}"
            raise GitHubError(msg, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            msg = f"GitHub returned a non-JSON body for {method} {path}"
            raise GitHubError(msg, status_code=response.status_code) from e

    async def list_repos(self) -> list[dict[str, Any]]:
        """Repositories of the authenticated user, most recently updated first."""
        data = await self._request("GET", "/user/repos", params={"sort": "updated", "per_page": 100})
        return [_repo_summary(repo) for repo in data]

    async def get_authenticated_user(self) -> dict[str, Any]:
        return await self._request("GET", "/user")

    async def create_repo(self, name: str, description: str, private: bool = False) -> dict[str, Any]:
        data = await self._request(
            "POST",
            "/user/repos",
            json={"name": name, "description": description, "private": private, "auto_init": True},
        )
        logger.info("github_repo_created", repo=data.get("full_name"))
        return _repo_summary(data)

    async def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        return _repo_summary(await self._request("GET", f"/repos/{owner}/{repo}"))

    async def put_file(self, owner: str, repo: str, path: str, content: str, message: str) -> None:
        """Create or update a file. An existing file's sha is looked up first."""
        existing = await self._request("GET", f"/repos/{owner}/{repo}/contents/{path}", allow_404=True)
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if isinstance(existing, dict) and existing.get("sha"):
            payload["sha"] = existing["sha"]
        await self._request("PUT", f"/repos/{owner}/{repo}/contents/{path}", json=payload)


GitHubClientFactory = Callable[[str], GitHubClient]


def get_github_client_factory() -> GitHubClientFactory:
    """FastAPI dependency: builds a client per user token from settings."""
    settings = get_settings()

    def factory(token: str) -> GitHubClient:
        return GitHubClient(token, base_url=settings.github_api_url, timeout=settings.github_timeout_seconds)

    return factory
