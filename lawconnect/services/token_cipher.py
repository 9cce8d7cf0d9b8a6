"""Seal refresh tokens before they reach the tokens table."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken


class TokenCipherService:
    """Fernet envelope for refresh tokens, keyed from a configured secret.

    Sealed values carry a version prefix so rows written before encryption
    was introduced (plain Google refresh tokens) can still be read.
    """

    PREFIX = "fernet:v1:"

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(digest))

    def is_sealed(self, value: str) -> bool:
        return value.startswith(self.PREFIX)

    def seal(self, plaintext: str) -> str:
        token = self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")
        return f"{self.PREFIX}{token}"

    def unseal(self, stored: str) -> str:
        """Return the plaintext for a sealed value; legacy values pass through."""
        if not self.is_sealed(stored):
            return stored
        ciphertext = stored[len(self.PREFIX):]
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError("Failed to decrypt token; invalid ciphertext provided.") from exc
        return plaintext.decode("utf-8")


__all__ = ["TokenCipherService"]
