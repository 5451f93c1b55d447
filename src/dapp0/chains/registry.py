"""
Static chain registry.

Maps each supported blockchain to its network metadata: RPC and explorer
endpoints, the language and framework used for generated code, and the
signature scheme its wallets use to prove ownership.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChainType(str, Enum):
    """Blockchain networks a wallet or project can target."""

    SOLANA = "solana"
    ETHEREUM = "ethereum"
    SUI = "sui"
    XRP = "xrp"
    POLYGON = "polygon"
    AVALANCHE = "avalanche"


class SignatureScheme(str, Enum):
    """How a wallet on a given chain signs a login message."""

    ED25519 = "ed25519"
    EIP191 = "eip191"
    SUI_PERSONAL_MESSAGE = "sui_personal_message"
    XRPL = "xrpl"


@dataclass(frozen=True)
class ChainConfig:
    id: ChainType
    name: str
    symbol: str
    rpc_url: str
    testnet_rpc_url: str
    explorer_url: str
    testnet_explorer_url: str
    color: str
    icon: str
    language: str
    framework: str
    wallet_required: bool
    signature_scheme: SignatureScheme


CHAIN_CONFIGS: dict[ChainType, ChainConfig] = {
    ChainType.SOLANA: ChainConfig(
        id=ChainType.SOLANA,
        name="Solana",
        symbol="SOL",
        rpc_url="https://api.mainnet-beta.solana.com",
        testnet_rpc_url="https://api.devnet.solana.com",
        explorer_url="https://explorer.solana.com",
        testnet_explorer_url="https://explorer.solana.com/?cluster=devnet",
        color="#9945FF",
        icon="\U0001f7e3",
        language="Rust",
        framework="Anchor",
        wallet_required=True,
        signature_scheme=SignatureScheme.ED25519,
    ),
    ChainType.ETHEREUM: ChainConfig(
        id=ChainType.ETHEREUM,
        name="Ethereum",
        symbol="ETH",
        rpc_url="https://eth-mainnet.g.alchemy.com/v2/",
        testnet_rpc_url="https://eth-sepolia.g.alchemy.com/v2/",
        explorer_url="https://etherscan.io",
        testnet_explorer_url="https://sepolia.etherscan.io",
        color="#627EEA",
        icon="\U0001f537",
        language="Solidity",
        framework="Foundry",
        wallet_required=True,
        signature_scheme=SignatureScheme.EIP191,
    ),
    ChainType.SUI: ChainConfig(
        id=ChainType.SUI,
        name="Sui",
        symbol="SUI",
        rpc_url="https://fullnode.mainnet.sui.io:443",
        testnet_rpc_url="https://fullnode.testnet.sui.io:443",
        explorer_url="https://suiexplorer.com",
        testnet_explorer_url="https://suiexplorer.com/?network=testnet",
        color="#4FA8FF",
        icon="\U0001f535",
        language="Move",
        framework="Sui CLI",
        wallet_required=True,
        signature_scheme=SignatureScheme.SUI_PERSONAL_MESSAGE,
    ),
    ChainType.XRP: ChainConfig(
        id=ChainType.XRP,
        name="XRP Ledger",
        symbol="XRP",
        rpc_url="wss://xrplcluster.com",
        testnet_rpc_url="wss://s.altnet.rippletest.net:51233",
        explorer_url="https://xrpscan.com",
        testnet_explorer_url="https://testnet.xrpscan.com",
        color="#23292F",
        icon="\U0001f4a7",
        language="JavaScript",
        framework="xrpl.js",
        wallet_required=False,
        signature_scheme=SignatureScheme.XRPL,
    ),
    ChainType.POLYGON: ChainConfig(
        id=ChainType.POLYGON,
        name="Polygon",
        symbol="MATIC",
        rpc_url="https://polygon-rpc.com",
        testnet_rpc_url="https://rpc-mumbai.maticvigil.com",
        explorer_url="https://polygonscan.com",
        testnet_explorer_url="https://mumbai.polygonscan.com",
        color="#8247E5",
        icon="\U0001f7e3",
        language="Solidity",
        framework="Foundry",
        wallet_required=True,
        signature_scheme=SignatureScheme.EIP191,
    ),
    ChainType.AVALANCHE: ChainConfig(
        id=ChainType.AVALANCHE,
        name="Avalanche",
        symbol="AVAX",
        rpc_url="https://api.avax.network/ext/bc/C/rpc",
        testnet_rpc_url="https://api.avax-test.network/ext/bc/C/rpc",
        explorer_url="https://snowtrace.io",
        testnet_explorer_url="https://testnet.snowtrace.io",
        color="#E84142",
        icon="\U0001f534",
        language="Solidity",
        framework="Foundry",
        wallet_required=True,
        signature_scheme=SignatureScheme.EIP191,
    ),
}

# Chains offered in the chain selector. The rest are accepted everywhere else.
SUPPORTED_CHAINS: tuple[ChainType, ...] = (
    ChainType.SOLANA,
    ChainType.ETHEREUM,
    ChainType.SUI,
    ChainType.XRP,
)


def get_chain_config(chain: ChainType | str) -> ChainConfig:
    """
    Look up the configuration for a chain.

    Raises:
        ValueError: If the chain identifier is unknown.
    """
    return CHAIN_CONFIGS[ChainType(chain)]


def is_evm(chain: ChainType) -> bool:
    """True for chains whose wallets sign with EIP-191 (Ethereum and its L1/L2 siblings)."""
    return CHAIN_CONFIGS[chain].signature_scheme == SignatureScheme.EIP191
