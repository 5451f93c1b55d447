"""Small helpers shared by test modules."""

import base58
from nacl.signing import SigningKey


def solana_address() -> str:
    """A fresh, valid Solana address."""
    return base58.b58encode(bytes(SigningKey.generate().verify_key)).decode()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
