"""Wallet signature verification, dispatched on the chain's signature scheme."""

from __future__ import annotations

from collections.abc import Callable

import structlog
from eth_utils import to_checksum_address

from dapp0.auth.evm import is_evm_address, verify_evm_signature
from dapp0.auth.solana import verify_solana_signature
from dapp0.auth.sui import is_sui_address, normalize_sui_address, verify_sui_signature
from dapp0.auth.xrp import verify_xrp_signature
from dapp0.chains.registry import ChainType, SignatureScheme, get_chain_config, is_evm

logger = structlog.get_logger()

_Verifier = Callable[[str, str, str, "str | None"], bool]

_VERIFIERS: dict[SignatureScheme, _Verifier] = {
    SignatureScheme.ED25519: lambda addr, msg, sig, _pk: verify_solana_signature(addr, msg, sig),
    SignatureScheme.EIP191: lambda addr, msg, sig, _pk: verify_evm_signature(addr, msg, sig),
    SignatureScheme.SUI_PERSONAL_MESSAGE: lambda addr, msg, sig, _pk: verify_sui_signature(addr, msg, sig),
    SignatureScheme.XRPL: verify_xrp_signature,
}


def verify_signature(
    address: str,
    signature: str,
    message: str,
    chain: ChainType,
    public_key: str | None = None,
) -> bool:
    """
    Check that ``signature`` over ``message`` was made by the key behind ``address``.

    Never raises; malformed input is reported as an invalid signature.
    """
    scheme = get_chain_config(chain).signature_scheme
    valid = _VERIFIERS[scheme](address, message, signature, public_key)
    if not valid:
        logger.info("signature_rejected", chain=chain.value, scheme=scheme.value, wallet_address=address)
    return valid


def canonical_address(address: str, chain: ChainType | None = None) -> str:
    """
    The single stored spelling of a wallet address.

    EVM addresses are case-insensitive and kept in EIP-55 checksum form; Sui
    addresses are lowercased and padded to 32 bytes. Base58 addresses (Solana,
    XRP) are case-sensitive and returned as given. Without a chain the form is
    inferred from the address shape.
    """
    if chain is None:
        if is_evm_address(address):
            chain = ChainType.ETHEREUM
        elif is_sui_address(address):
            chain = ChainType.SUI
        else:
            return address

    if is_evm(chain):
        return to_checksum_address(address) if is_evm_address(address) else address
    if chain == ChainType.SUI:
        return normalize_sui_address(address)
    return address
