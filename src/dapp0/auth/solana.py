"""
Solana message signing verification.

A Solana address is the base58 encoding of a 32-byte Ed25519 public key, and
wallets (Phantom, Solflare, ...) return a detached Ed25519 signature over the
raw UTF-8 message bytes, also base58 encoded.
"""

from __future__ import annotations

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey


def verify_solana_signature(address: str, message: str, signature_b58: str) -> bool:
    """
    Verify a detached Ed25519 signature.

    Args:
        address: Base58 public key.
        message: The original message that was signed.
        signature_b58: Base58-encoded 64-byte signature.

    Returns:
        True if the signature is valid for the given address.
    """
    try:
        public_key = base58.b58decode(address)
        signature = base58.b58decode(signature_b58)
    except ValueError:
        return False

    if len(public_key) != 32 or len(signature) != 64:
        return False

    try:
        VerifyKey(public_key).verify(message.encode("utf-8"), signature)
    except (BadSignatureError, ValueError):
        return False
    return True
