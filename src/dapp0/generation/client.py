"""HTTP client for the external code-generation service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from dapp0.config import get_settings

if TYPE_CHECKING:
    from dapp0.chains.registry import ChainType
    from dapp0.db.models import ProjectType

logger = structlog.get_logger()


class GenerationError(Exception):
    """The generation service could not produce code."""


class GenerationClient:
    """
    Thin wrapper over the generation API.

    One POST per call, no retries. ``transport`` lets tests swap in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str, project_type: ProjectType, chain: ChainType) -> str:
        """
        Request code for an already-enriched prompt.

        Raises:
            GenerationError: Not configured, transport failure, timeout,
                non-2xx status, or a body without a non-empty ``code`` string.
        """
        if not self.configured:
            msg = "Generation API key not configured"
            raise GenerationError(msg)

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/api/generate",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json={"prompt": prompt, "chain": chain.value, "type": project_type.value},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            msg = f"Generation API error: {e.response.status_code}"
            raise GenerationError(msg) from e
        except (httpx.HTTPError, ValueError) as e:
            msg = f"Generation API request failed: {e}"
            raise GenerationError(msg) from e

        code = data.get("code") if isinstance(data, dict) else None
        if not isinstance(code, str) or not code.strip():
            msg = "Generation API returned no code"
            raise GenerationError(msg)
        return code


def get_generation_client() -> GenerationClient:
    """FastAPI dependency: a client built from settings."""
    settings = get_settings()
    return GenerationClient(
        base_url=settings.generation_api_url,
        api_key=settings.generation_api_key,
        timeout=settings.generation_timeout_seconds,
    )
