"""Code generation endpoint: upstream success, fallback, project persistence."""

from __future__ import annotations

import json
import uuid

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from dapp0.chains.registry import ChainType
from dapp0.db.models import ProjectType
from dapp0.generation.client import GenerationClient, GenerationError, get_generation_client
from dapp0.generation.prompts import build_enhanced_prompt
from dapp0.generation.templates import fallback_code
from dapp0.generation.ui import UIType, build_ui_prompt, extract_component_names

ALL_PAIRS = [(t, c) for t in ProjectType for c in ChainType]


def _client_with(handler) -> GenerationClient:  # noqa: ANN001
    return GenerationClient(
        base_url="https://gen.test",
        api_key="test-key",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def _use(app: FastAPI, client: GenerationClient) -> None:
    app.dependency_overrides[get_generation_client] = lambda: client


class TestGenerateEndpoint:
    async def test_upstream_code_returned(self, app: FastAPI, authed_client: AsyncClient):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["authorization"]
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"code": "contract Generated {}"})

        _use(app, _client_with(handler))
        response = await authed_client.post(
            "/api/generate", json={"prompt": "an NFT mint", "type": "agent", "chain": "ethereum"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == "contract Generated {}"
        assert data["chain"] == "ethereum"
        assert data["type"] == "agent"
        assert "warning" not in data
        assert data["timestamp"]

        assert seen["auth"] == "Bearer test-key"
        assert seen["url"] == "https://gen.test/api/generate"
        assert seen["body"]["chain"] == "ethereum"
        assert seen["body"]["type"] == "agent"
        assert "User Request: an NFT mint" in seen["body"]["prompt"]

    @pytest.mark.parametrize(("project_type", "chain"), ALL_PAIRS)
    async def test_upstream_failure_falls_back(
        self, app: FastAPI, authed_client: AsyncClient, project_type: ProjectType, chain: ChainType
    ):
        _use(app, _client_with(lambda _request: httpx.Response(502, text="bad gateway")))
        response = await authed_client.post(
            "/api/generate", json={"prompt": "staking pool", "type": project_type.value, "chain": chain.value}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["warning"] == "Using fallback code generation"
        assert data["code"] == fallback_code("staking pool", project_type, chain)
        assert data["chain"] == chain.value

    async def test_unconfigured_client_falls_back(self, app: FastAPI, authed_client: AsyncClient):
        _use(app, GenerationClient(base_url="https://gen.test", api_key=""))
        response = await authed_client.post(
            "/api/generate", json={"prompt": "wallet ui", "type": "frontend", "chain": "sui"}
        )
        assert response.status_code == 200
        assert response.json()["warning"] == "Using fallback code generation"

    async def test_transport_error_falls_back(self, app: FastAPI, authed_client: AsyncClient):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        _use(app, _client_with(handler))
        response = await authed_client.post(
            "/api/generate", json={"prompt": "dex", "type": "agent", "chain": "xrp"}
        )
        assert response.status_code == 200
        assert response.json()["warning"] == "Using fallback code generation"

    async def test_stores_code_on_owned_project(self, app: FastAPI, authed_client: AsyncClient):
        _use(app, _client_with(lambda _request: httpx.Response(200, json={"code": "fn main() {}"})))
        project = (
            await authed_client.post("/api/projects", json={"name": "p", "type": "agent", "chain": "solana"})
        ).json()

        response = await authed_client.post(
            "/api/generate",
            json={"prompt": "vault", "type": "agent", "chain": "solana", "projectId": project["id"]},
        )
        assert response.status_code == 200
        assert response.json()["projectId"] == project["id"]

        stored = (await authed_client.get(f"/api/projects/{project['id']}")).json()
        assert stored["generatedCode"] == "fn main() {}"
        assert [m["role"] for m in stored["messages"]] == ["user", "assistant"]
        assert stored["messages"][0]["content"] == "vault"

    async def test_unowned_project_is_404(self, app: FastAPI, authed_client: AsyncClient):
        _use(app, _client_with(lambda _request: httpx.Response(200, json={"code": "x"})))
        response = await authed_client.post(
            "/api/generate",
            json={"prompt": "vault", "type": "agent", "chain": "solana", "projectId": str(uuid.uuid4())},
        )
        assert response.status_code == 404

    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/generate", json={"prompt": "x", "type": "agent", "chain": "sui"})
        assert response.status_code == 401

    async def test_empty_prompt_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/generate", json={"prompt": "", "type": "agent", "chain": "sui"})
        assert response.status_code == 400


class TestGenerationClient:
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json={"code": ""}),
            httpx.Response(200, json={"other": "field"}),
            httpx.Response(200, json=["not", "an", "object"]),
            httpx.Response(200, text="<html>not json</html>"),
            httpx.Response(401, json={"error": "unauthorized"}),
        ],
    )
    async def test_bad_responses_raise(self, response: httpx.Response):
        client = _client_with(lambda _request: response)
        with pytest.raises(GenerationError):
            await client.generate("p", ProjectType.FRONTEND, ChainType.SOLANA)

    async def test_timeout_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(GenerationError):
            await _client_with(handler).generate("p", ProjectType.AGENT, ChainType.SUI)


class TestPromptsAndTemplates:
    def test_enhanced_prompt_carries_chain_context(self):
        prompt = build_enhanced_prompt("a lending market", ProjectType.AGENT, ChainType.SUI)
        assert "Generate an AI agent/smart contract for sui" in prompt
        assert "Chain: Sui (Move)" in prompt
        assert "Framework: Sui CLI" in prompt
        assert "User Request: a lending market" in prompt
        assert prompt.endswith("Please generate the complete, working code:")

    def test_frontend_prompt_lists_ui_features(self):
        prompt = build_enhanced_prompt("a swap page", ProjectType.FRONTEND, ChainType.SOLANA)
        assert "Generate a React frontend component for a solana dApp" in prompt
        assert "- Modern UI with Tailwind CSS" in prompt

    @pytest.mark.parametrize(("project_type", "chain"), ALL_PAIRS)
    def test_every_pair_has_fallback(self, project_type: ProjectType, chain: ChainType):
        code = fallback_code("airdrop tool", project_type, chain)
        assert "airdrop tool" in code
        assert "$prompt" not in code
        assert "$chain_name" not in code

    def test_evm_templates_name_the_chain(self):
        assert "Polygon dApp" in fallback_code("x", ProjectType.FRONTEND, ChainType.POLYGON)
        assert "Avalanche agent contract" in fallback_code("x", ProjectType.AGENT, ChainType.AVALANCHE)
        assert "pragma solidity" in fallback_code("x", ProjectType.AGENT, ChainType.ETHEREUM)


class TestGenerateUIEndpoint:
    async def test_returns_code_and_component_names(self, app: FastAPI, authed_client: AsyncClient):
        seen: dict = {}
        code = "export default function PriceCard() {}\nexport const PriceRow = () => null\n"

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"code": code})

        _use(app, _client_with(handler))
        response = await authed_client.post(
            "/api/generate-ui", json={"prompt": "a price card", "type": "component", "context": "dark dashboard"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == code
        assert data["components"] == ["PriceCard", "PriceRow"]
        assert data["timestamp"]

        assert seen["body"]["type"] == "frontend"
        assert seen["body"]["chain"] == "solana"
        assert "a price card" in seen["body"]["prompt"]
        assert "Context: dark dashboard" in seen["body"]["prompt"]

    async def test_upstream_failure_is_500(self, app: FastAPI, authed_client: AsyncClient):
        _use(app, _client_with(lambda _request: httpx.Response(503, text="down")))
        response = await authed_client.post("/api/generate-ui", json={"prompt": "navbar", "type": "page"})
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to generate UI component"}

    async def test_unknown_type_is_400(self, authed_client: AsyncClient):
        response = await authed_client.post("/api/generate-ui", json={"prompt": "x", "type": "layout"})
        assert response.status_code == 400

    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/generate-ui", json={"prompt": "x", "type": "component"})
        assert response.status_code == 401


class TestUIPrompt:
    def test_component_prompt(self):
        prompt = build_ui_prompt("a token table", UIType.COMPONENT)
        assert prompt.startswith("Create a modern React component with the following requirements:")
        assert "\na token table\n" in prompt
        assert "- Use Tailwind CSS for styling" in prompt
        assert "Context:" not in prompt
        assert prompt.endswith("Please generate a complete, production-ready component:")

    def test_page_prompt_gets_layout_framing(self):
        prompt = build_ui_prompt("a staking dashboard", UIType.PAGE)
        assert "Create a complete page layout for: a staking dashboard" in prompt
        assert "Context: v0.dev inspired layout with sidebar" in prompt

    def test_styling_prompt_keeps_explicit_context(self):
        prompt = build_ui_prompt("buttons", UIType.STYLING, context="brand colors: teal")
        assert "Create CSS styles and Tailwind classes for: buttons" in prompt
        assert "Context: brand colors: teal" in prompt
        assert "design system" not in prompt

    @pytest.mark.parametrize(
        ("code", "names"),
        [
            ("export default function App() {}", ["App"]),
            ("export function Header() {}\nexport const Footer = () => null", ["Header", "Footer"]),
            ("export const helper = 1\nfunction Local() {}", []),
            ("export default App", []),
            ("", []),
        ],
    )
    def test_extract_component_names(self, code: str, names: list[str]):
        assert extract_component_names(code) == names
