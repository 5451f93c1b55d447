"""Chain registry endpoints — /api/chains/*."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from dapp0.chains.registry import CHAIN_CONFIGS, SUPPORTED_CHAINS, ChainConfig, ChainType
from dapp0.schemas import ApiModel

router = APIRouter(prefix="/api/chains", tags=["Chains"])


class ChainResponse(ApiModel):
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
    supported: bool


def _to_response(config: ChainConfig) -> ChainResponse:
    return ChainResponse(
        id=config.id,
        name=config.name,
        symbol=config.symbol,
        rpc_url=config.rpc_url,
        testnet_rpc_url=config.testnet_rpc_url,
        explorer_url=config.explorer_url,
        testnet_explorer_url=config.testnet_explorer_url,
        color=config.color,
        icon=config.icon,
        language=config.language,
        framework=config.framework,
        wallet_required=config.wallet_required,
        supported=config.id in SUPPORTED_CHAINS,
    )


@router.get("", response_model=list[ChainResponse])
async def list_chains() -> list[ChainResponse]:
    """All known chains. ``supported`` marks the ones offered for new projects."""
    return [_to_response(config) for config in CHAIN_CONFIGS.values()]


@router.get("/{chain}", response_model=ChainResponse)
async def get_chain(chain: str) -> ChainResponse:
    try:
        chain_type = ChainType(chain)
    except ValueError as e:
        raise HTTPException(status_code=404, detail="Unknown chain") from e
    return _to_response(CHAIN_CONFIGS[chain_type])
