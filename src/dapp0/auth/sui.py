"""
Sui personal-message signature verification.

Sui wallets sign ``BLAKE2b-256(intent || BCS(message))`` where the intent for
personal messages is ``[3, 0, 0]`` and ``BCS(vector<u8>)`` is the ULEB128
length followed by the bytes. The serialized signature is
``flag || signature || public_key``, base64 encoded. Only the Ed25519 flag
(0x00) is accepted.

A Sui address is ``0x`` + hex of ``BLAKE2b-256(flag || public_key)``.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import re

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

ED25519_FLAG = 0x00
PERSONAL_MESSAGE_INTENT = bytes([3, 0, 0])
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{1,64}$")


def _uleb128(n: int) -> bytes:
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def personal_message_digest(message: str) -> bytes:
    """The 32-byte digest a Sui wallet signs for a personal message."""
    msg_bytes = message.encode("utf-8")
    return _blake2b_256(PERSONAL_MESSAGE_INTENT + _uleb128(len(msg_bytes)) + msg_bytes)


def is_sui_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(address))


def normalize_sui_address(address: str) -> str:
    """Lowercase and left-pad to 32 bytes; wallets may drop leading zeros."""
    if not is_sui_address(address):
        return address
    return "0x" + address[2:].lower().zfill(64)


def sui_address_from_public_key(public_key: bytes, flag: int = ED25519_FLAG) -> str:
    return "0x" + _blake2b_256(bytes([flag]) + public_key).hex()


def verify_sui_signature(address: str, message: str, signature_b64: str) -> bool:
    """
    Verify a Sui serialized personal-message signature.

    Returns:
        True if the embedded key signed the message and derives the given address.
    """
    try:
        serialized = base64.b64decode(signature_b64, validate=True)
    except (binascii.Error, ValueError):
        return False

    if len(serialized) != 1 + 64 + 32 or serialized[0] != ED25519_FLAG:
        return False

    signature = serialized[1:65]
    public_key = serialized[65:]

    if sui_address_from_public_key(public_key) != normalize_sui_address(address):
        return False

    try:
        VerifyKey(public_key).verify(personal_message_digest(message), signature)
    except (BadSignatureError, ValueError):
        return False
    return True
