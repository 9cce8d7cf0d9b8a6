import pytest

from lawconnect.services.token_cipher import TokenCipherService


def test_seal_roundtrip() -> None:
    cipher = TokenCipherService(secret="super-secret-key")

    sealed = cipher.seal("1//refresh-token")
    assert sealed.startswith(TokenCipherService.PREFIX)
    assert "refresh-token" not in sealed
    assert cipher.unseal(sealed) == "1//refresh-token"


def test_unseal_passes_legacy_plaintext_through() -> None:
    cipher = TokenCipherService(secret="super-secret-key")

    assert cipher.unseal("1//legacy-refresh") == "1//legacy-refresh"


def test_unseal_rejects_tampered_ciphertext() -> None:
    cipher = TokenCipherService(secret="another-secret")

    with pytest.raises(ValueError):
        cipher.unseal(f"{TokenCipherService.PREFIX}not-valid")


def test_unseal_with_wrong_secret_fails() -> None:
    sealed = TokenCipherService(secret="one").seal("value")

    with pytest.raises(ValueError):
        TokenCipherService(secret="two").unseal(sealed)


def test_requires_secret() -> None:
    with pytest.raises(ValueError):
        TokenCipherService(secret="")
