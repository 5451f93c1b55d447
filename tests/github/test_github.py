"""GitHub repo listing and project export, against a mocked GitHub API."""

from __future__ import annotations

import base64
import json

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from dapp0.chains.registry import ChainType
from dapp0.db.models import ProjectType
from dapp0.github.client import GitHubClient, get_github_client_factory
from dapp0.github.service import source_extension

REPO = {
    "id": 1,
    "name": "my-dapp",
    "full_name": "octocat/my-dapp",
    "description": "demo",
    "html_url": "https://github.com/octocat/my-dapp",
    "clone_url": "https://github.com/octocat/my-dapp.git",
    "private": False,
    "created_at": "2026-01-01T00:00:00Z",
    "updated_at": "2026-01-02T00:00:00Z",
    "owner": {"login": "octocat"},
}


class FakeGitHub:
    """Minimal stand-in for the endpoints export uses. Records every request."""

    def __init__(self, existing_files: dict[str, str] | None = None, fail_on: str | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.files: dict[str, dict] = {}
        self.existing_files = existing_files or {}
        self.fail_on = fail_on

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.fail_on and self.fail_on in path:
            return httpx.Response(500, json={"message": "boom"})
        if request.method == "GET" and path == "/user/repos":
            return httpx.Response(200, json=[REPO])
        if request.method == "POST" and path == "/user/repos":
            body = json.loads(request.content)
            return httpx.Response(201, json={**REPO, "name": body["name"], "full_name": f"octocat/{body['name']}",
                                             "html_url": f"https://github.com/octocat/{body['name']}"})
        if request.method == "GET" and path == "/user":
            return httpx.Response(200, json={"login": "octocat"})
        if request.method == "GET" and path == "/repos/octocat/my-dapp":
            return httpx.Response(200, json=REPO)
        if "/contents/" in path:
            file_path = path.split("/contents/", 1)[1]
            if request.method == "GET":
                sha = self.existing_files.get(file_path)
                return httpx.Response(200, json={"sha": sha}) if sha else httpx.Response(404, json={})
            self.files[file_path] = json.loads(request.content)
            return httpx.Response(201, json={"content": {"path": file_path}})
        return httpx.Response(404, json={"message": "Not Found"})


def _install(app: FastAPI, fake: FakeGitHub) -> None:
    def factory(token: str) -> GitHubClient:
        return GitHubClient(token, base_url="https://api.github.test", transport=httpx.MockTransport(fake))

    app.dependency_overrides[get_github_client_factory] = lambda: factory


async def _link_github(client: AsyncClient) -> None:
    response = await client.put("/api/users/me/github", json={"githubUsername": "octocat", "accessToken": "gho_x"})
    assert response.status_code == 200


async def _project(client: AsyncClient, **overrides) -> dict:
    body = {"name": "Vault", "type": "agent", "chain": "solana", "generatedCode": "pub fn vault() {}", **overrides}
    response = await client.post("/api/projects", json=body)
    assert response.status_code == 201
    return response.json()


class TestRepos:
    async def test_requires_linked_github(self, app: FastAPI, authed_client: AsyncClient):
        _install(app, FakeGitHub())
        response = await authed_client.get("/api/github/repos")
        assert response.status_code == 400
        assert response.json()["detail"] == "GitHub not connected"

    async def test_lists_repos(self, app: FastAPI, authed_client: AsyncClient):
        fake = FakeGitHub()
        _install(app, fake)
        await _link_github(authed_client)

        response = await authed_client.get("/api/github/repos")
        assert response.status_code == 200
        repos = response.json()["repos"]
        assert repos[0]["fullName"] == "octocat/my-dapp"
        assert repos[0]["htmlUrl"] == "https://github.com/octocat/my-dapp"
        assert fake.requests[0].headers["authorization"] == "Bearer gho_x"
        assert fake.requests[0].url.params["sort"] == "updated"
        assert fake.requests[0].url.params["per_page"] == "100"

    async def test_github_failure_is_500(self, app: FastAPI, authed_client: AsyncClient):
        _install(app, FakeGitHub(fail_on="/user/repos"))
        await _link_github(authed_client)
        response = await authed_client.get("/api/github/repos")
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch repositories"


class TestExport:
    async def test_export_to_new_repo(self, app: FastAPI, authed_client: AsyncClient):
        fake = FakeGitHub()
        _install(app, fake)
        await _link_github(authed_client)
        project = await _project(authed_client)

        response = await authed_client.post("/api/github/export", json={
            "projectId": project["id"],
            "repoName": "vault-agent",
            "createNewRepo": True,
            "isPrivate": True,
        })
        assert response.status_code == 200, response.text
        assert response.json()["repoUrl"] == "https://github.com/octocat/vault-agent"

        create = next(r for r in fake.requests if r.method == "POST")
        body = json.loads(create.content)
        assert body == {
            "name": "vault-agent",
            "description": "Generated agent for solana",
            "private": True,
            "auto_init": True,
        }

        assert set(fake.files) == {"README.md", "src/main.rs"}
        main = base64.b64decode(fake.files["src/main.rs"]["content"]).decode()
        assert main == "pub fn vault() {}"
        readme = base64.b64decode(fake.files["README.md"]["content"]).decode()
        assert readme.startswith("# Vault")
        assert fake.files["README.md"]["message"] == "Initial commit: Vault"

        stored = (await authed_client.get(f"/api/projects/{project['id']}")).json()
        assert stored["githubRepoUrl"] == "https://github.com/octocat/vault-agent"

    async def test_export_to_existing_repo_updates_files(self, app: FastAPI, authed_client: AsyncClient):
        fake = FakeGitHub(existing_files={"README.md": "abc123"})
        _install(app, fake)
        await _link_github(authed_client)
        project = await _project(authed_client, type="frontend", chain="polygon", generatedCode="export default 1")

        response = await authed_client.post("/api/github/export", json={
            "projectId": project["id"],
            "repoName": "my-dapp",
        })
        assert response.status_code == 200
        assert response.json()["repoUrl"] == "https://github.com/octocat/my-dapp"
        assert fake.files["README.md"]["sha"] == "abc123"
        assert "sha" not in fake.files["src/main.tsx"]

    async def test_project_without_code_exports_readme_only(self, app: FastAPI, authed_client: AsyncClient):
        fake = FakeGitHub()
        _install(app, fake)
        await _link_github(authed_client)
        project = await _project(authed_client, generatedCode=None)

        response = await authed_client.post("/api/github/export", json={
            "projectId": project["id"], "repoName": "my-dapp",
        })
        assert response.status_code == 200
        assert set(fake.files) == {"README.md"}

    async def test_unowned_project_is_404(self, app: FastAPI, authed_client: AsyncClient):
        _install(app, FakeGitHub())
        await _link_github(authed_client)
        response = await authed_client.post("/api/github/export", json={
            "projectId": "00000000-0000-0000-0000-000000000000", "repoName": "my-dapp",
        })
        assert response.status_code == 404

    async def test_github_failure_is_500_and_url_not_stored(self, app: FastAPI, authed_client: AsyncClient):
        _install(app, FakeGitHub(fail_on="/contents/"))
        await _link_github(authed_client)
        project = await _project(authed_client)

        response = await authed_client.post("/api/github/export", json={
            "projectId": project["id"], "repoName": "my-dapp",
        })
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to export project"

        stored = (await authed_client.get(f"/api/projects/{project['id']}")).json()
        assert stored["githubRepoUrl"] is None


@pytest.mark.parametrize(
    ("project_type", "chain", "ext"),
    [
        (ProjectType.FRONTEND, ChainType.XRP, "tsx"),
        (ProjectType.AGENT, ChainType.SOLANA, "rs"),
        (ProjectType.AGENT, ChainType.ETHEREUM, "sol"),
        (ProjectType.AGENT, ChainType.POLYGON, "sol"),
        (ProjectType.AGENT, ChainType.AVALANCHE, "sol"),
        (ProjectType.AGENT, ChainType.SUI, "move"),
        (ProjectType.AGENT, ChainType.XRP, "js"),
    ],
)
def test_source_extension(project_type: ProjectType, chain: ChainType, ext: str):
    assert source_extension(project_type, chain) == ext
