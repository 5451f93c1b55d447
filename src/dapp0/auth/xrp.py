"""
XRP Ledger message signature verification.

XRPL signatures cannot be recovered to a key, so the client supplies the
signer's public key. The key must derive the claimed classic address, then:

  - Ed25519 keys (33 bytes, 0xED prefix) verify a raw signature over the message.
  - secp256k1 keys (33-byte compressed) verify a DER signature over
    SHA-512Half of the message.

Uses coincurve for secp256k1 operations, PyNaCl for Ed25519.
"""

from __future__ import annotations

import hashlib

import base58
from coincurve import PublicKey
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

ED25519_PREFIX = 0xED
ACCOUNT_ID_PREFIX = b"\x00"


def _sha512_half(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()[:32]


def classic_address_from_public_key(public_key: bytes) -> str:
    """Public key -> XRPL classic address (base58check, XRP alphabet)."""
    sha256_hash = hashlib.sha256(public_key).digest()
    account_id = hashlib.new("ripemd160", sha256_hash).digest()
    return base58.b58encode_check(ACCOUNT_ID_PREFIX + account_id, alphabet=base58.XRP_ALPHABET).decode("ascii")


def verify_xrp_signature(
    address: str,
    message: str,
    signature_hex: str,
    public_key_hex: str | None,
) -> bool:
    """
    Verify an XRPL-signed message.

    Args:
        address: Classic address (r...).
        message: The original message that was signed.
        signature_hex: Hex signature (64-byte Ed25519 or DER secp256k1).
        public_key_hex: Hex public key of the signer.

    Returns:
        True if the key matches the address and the signature is valid.
    """
    if not public_key_hex:
        return False

    try:
        public_key = bytes.fromhex(public_key_hex)
        signature = bytes.fromhex(signature_hex)
        derived = classic_address_from_public_key(public_key)
    except ValueError:
        return False

    if len(public_key) != 33 or derived != address:
        return False

    msg_bytes = message.encode("utf-8")

    if public_key[0] == ED25519_PREFIX:
        try:
            VerifyKey(public_key[1:]).verify(msg_bytes, signature)
        except (BadSignatureError, ValueError):
            return False
        return True

    try:
        return PublicKey(public_key).verify(signature, _sha512_half(msg_bytes), hasher=None)  # type: ignore[no-any-return]
    except Exception:  # noqa: BLE001 - coincurve raises ValueError/TypeError on malformed DER
        return False
