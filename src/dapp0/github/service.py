"""Export a project's generated code into a GitHub repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from dapp0.chains.registry import ChainType, is_evm
from dapp0.db.models import ProjectType

if TYPE_CHECKING:
    from dapp0.db.models import Project, User
    from dapp0.github.client import GitHubClient

logger = structlog.get_logger()

_AGENT_EXTENSIONS = {
    ChainType.SOLANA: "rs",
    ChainType.SUI: "move",
    ChainType.XRP: "js",
}

_FENCE_LANGUAGES = {"tsx": "tsx", "rs": "rust", "sol": "solidity", "move": "move", "js": "javascript"}


@dataclass(frozen=True)
class ExportFile:
    path: str
    content: str


def source_extension(project_type: ProjectType, chain: ChainType) -> str:
    """File extension for a project's generated source."""
    if project_type is ProjectType.FRONTEND:
        return "tsx"
    if is_evm(chain):
        return "sol"
    return _AGENT_EXTENSIONS[chain]


def build_export_files(project: Project) -> list[ExportFile]:
    """README plus ``src/main.<ext>`` when the project has code."""
    ext = source_extension(project.type, project.chain)
    code = project.generated_code or "// No code generated yet"
    readme = "\n".join(
        [
            f"# {project.name}",
            "",
            "Generated with dApp0",
            "",
            "## Description",
            "",
            f"This is a {project.type.value} project for {project.chain.value}.",
            "",
            "## Generated Code",
            "",
            f"```{_FENCE_LANGUAGES[ext]}",
            code,
            "```",
            "",
        ]
    )
    files = [ExportFile("README.md", readme)]
    if project.generated_code:
        files.append(ExportFile(f"src/main.{ext}", project.generated_code))
    return files


async def export_project(
    client: GitHubClient,
    user: User,
    project: Project,
    repo_name: str,
    create_new_repo: bool,
    repo_description: str | None = None,
    is_private: bool = False,
) -> str:
    """
    Push a project's files to GitHub.

    Returns:
        The repository's html URL.

    Raises:
        GitHubError: If any GitHub call fails.
    """
    if create_new_repo:
        description = repo_description or f"Generated {project.type.value} for {project.chain.value}"
        repo = await client.create_repo(repo_name, description, private=is_private)
    else:
        owner = user.github_username or (await client.get_authenticated_user())["login"]
        repo = await client.get_repo(owner, repo_name)

    owner, name = repo["full_name"].split("/", 1)
    message = f"Initial commit: {project.name}"
    for file in build_export_files(project):
        await client.put_file(owner, name, file.path, file.content, message)

    logger.info("project_exported", project_id=str(project.id), repo=repo["full_name"], created=create_new_repo)
    return repo["html_url"]
