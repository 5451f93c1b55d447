"""
Prompt enrichment for the code-generation service.

The user's request is wrapped with the project type's feature list, the
target chain's language and framework, and a fixed set of requirements.
"""

from __future__ import annotations

from dataclasses import dataclass

from dapp0.chains.registry import ChainType, get_chain_config
from dapp0.db.models import ProjectType


@dataclass(frozen=True)
class ChainContext:
    name: str
    language: str
    framework: str
    wallet: str
    features: str


_WALLETS: dict[ChainType, str] = {
    ChainType.SOLANA: "Phantom/Solflare",
    ChainType.ETHEREUM: "MetaMask",
    ChainType.SUI: "Sui Wallet",
    ChainType.XRP: "XRP Wallet",
    ChainType.POLYGON: "MetaMask",
    ChainType.AVALANCHE: "MetaMask",
}

_FEATURES: dict[ChainType, str] = {
    ChainType.SOLANA: "high-speed transactions, low fees, NFT support",
    ChainType.ETHEREUM: "smart contracts, DeFi, ERC standards",
    ChainType.SUI: "object-oriented, parallel execution, gas optimization",
    ChainType.XRP: "fast payments, low fees, built-in DEX",
    ChainType.POLYGON: "EVM compatible, low fees, fast transactions",
    ChainType.AVALANCHE: "EVM compatible, subnets, high throughput",
}

_FRONTEND_FEATURES = (
    "Modern UI with Tailwind CSS",
    "Wallet connection functionality",
    "Responsive design",
    "Error handling",
    "Loading states",
    "TypeScript support",
)

_AGENT_FEATURES = (
    "On-chain logic implementation",
    "Security best practices",
    "Event emission",
    "Access control",
    "Gas optimization",
    "Comprehensive documentation",
)


def chain_context(chain: ChainType) -> ChainContext:
    config = get_chain_config(chain)
    return ChainContext(
        name=config.name,
        language=config.language,
        framework=config.framework,
        wallet=_WALLETS[chain],
        features=_FEATURES[chain],
    )


def type_context(project_type: ProjectType, chain: ChainType) -> str:
    if project_type is ProjectType.FRONTEND:
        header = f"Generate a React frontend component for a {chain.value} dApp with the following features:"
        features = _FRONTEND_FEATURES
    else:
        header = f"Generate an AI agent/smart contract for {chain.value} with the following features:"
        features = _AGENT_FEATURES
    return "\n".join([header, *(f"- {feature}" for feature in features)])


def build_enhanced_prompt(prompt: str, project_type: ProjectType, chain: ChainType) -> str:
    """Wrap a user request with type and chain context for the generator."""
    ctx = chain_context(chain)
    requirements = [
        f"Generate {project_type.value} code for {ctx.name}",
        f"Use {ctx.language} programming language",
        f"Include proper wallet integration for {ctx.name} ({ctx.wallet})",
        "Add necessary imports and dependencies",
        "Include error handling and best practices",
        "Make the code production-ready",
        "Add comments explaining the functionality",
    ]
    return "\n".join(
        [
            type_context(project_type, chain),
            "",
            f"Chain: {ctx.name} ({ctx.language})",
            f"Framework: {ctx.framework}",
            f"Chain features: {ctx.features}",
            "",
            f"User Request: {prompt}",
            "",
            "Requirements:",
            *(f"- {item}" for item in requirements),
            "",
            "Please generate the complete, working code:",
        ]
    )
