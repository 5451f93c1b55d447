"""EIP-191 personal_sign verification for Ethereum, Polygon and Avalanche C-Chain."""

from __future__ import annotations

import re

from eth_account import Account
from eth_account.messages import encode_defunct

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_evm_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(address))


def verify_evm_signature(address: str, message: str, signature_hex: str) -> bool:
    """
    Recover the signer of a personal_sign message and compare it to the claimed address.

    Args:
        address: 0x-prefixed hex address (any checksum casing).
        message: The original message that was signed.
        signature_hex: 65-byte r||s||v signature, hex encoded.

    Returns:
        True if the recovered signer matches the address.
    """
    if not is_evm_address(address):
        return False

    try:
        recovered = Account.recover_message(encode_defunct(text=message), signature=signature_hex)
    except Exception:  # noqa: BLE001 - eth_account raises assorted types for malformed input
        return False
    return recovered.lower() == address.lower()
