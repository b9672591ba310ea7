"""Tests for secret lookup and credential decryption."""

from __future__ import annotations

from pathlib import Path

import pytest

from mlpublish.security import (
    ChainedSecretProvider,
    DecryptionError,
    EnvSecretProvider,
    FernetDecryptor,
    FileSecretProvider,
    MappingSecretProvider,
    PlaintextDecryptor,
    SecretNotFoundError,
    default_secret_provider,
)


def test_env_provider_maps_dotted_keys_to_variables() -> None:
    provider = EnvSecretProvider({"MARKLOGIC_SECRET_KEY": "from-env"})

    assert provider.variable_for("marklogic.secret_key") == "MARKLOGIC_SECRET_KEY"
    assert provider.get_secret("marklogic.secret_key") == "from-env"
    with pytest.raises(SecretNotFoundError):
        provider.get_secret("marklogic.other")


def test_file_provider_reads_ini_sections(tmp_path: Path) -> None:
    secrets = tmp_path / "secrets.ini"
    secrets.write_text("[marklogic]\nsecret_key = from-file\nempty =\n", encoding="utf-8")
    provider = FileSecretProvider(secrets)

    assert provider.get_secret("marklogic.secret_key") == "from-file"
    for key in ("marklogic.empty", "marklogic", "other.secret_key"):
        with pytest.raises(SecretNotFoundError):
            provider.get_secret(key)


def test_chained_provider_prefers_first_match(tmp_path: Path) -> None:
    secrets = tmp_path / "secrets.ini"
    secrets.write_text("[marklogic]\nsecret_key = from-file\n", encoding="utf-8")

    assert default_secret_provider(secrets, env={}).get_secret("marklogic.secret_key") == "from-file"
    assert (
        default_secret_provider(secrets, env={"MARKLOGIC_SECRET_KEY": "from-env"}).get_secret(
            "marklogic.secret_key"
        )
        == "from-env"
    )
    with pytest.raises(SecretNotFoundError):
        ChainedSecretProvider([MappingSecretProvider({})]).get_secret("marklogic.secret_key")


def test_fernet_decryptor_recovers_encrypted_credentials() -> None:
    decryptor = FernetDecryptor(FernetDecryptor.generate_key())
    token = decryptor.encrypt("s3cret")

    assert token != "s3cret"
    assert decryptor.decrypt("password", token) == "s3cret"
    assert decryptor.decrypt("password", token.encode("ascii")) == "s3cret"


def test_fernet_decryptor_rejects_foreign_tokens() -> None:
    token = FernetDecryptor(FernetDecryptor.generate_key()).encrypt("s3cret")
    decryptor = FernetDecryptor(FernetDecryptor.generate_key())

    with pytest.raises(DecryptionError) as excinfo:
        decryptor.decrypt("password", token)
    assert excinfo.value.key == "password"

    with pytest.raises(DecryptionError):
        decryptor.decrypt("username", None)


def test_fernet_decryptor_rejects_malformed_key() -> None:
    with pytest.raises(DecryptionError):
        FernetDecryptor("not-a-key")


def test_plaintext_decryptor_passes_values_through() -> None:
    decryptor = PlaintextDecryptor()

    assert decryptor.decrypt("username", "admin") == "admin"
    assert decryptor.decrypt("password", b"secret") == "secret"
    with pytest.raises(DecryptionError):
        decryptor.decrypt("password", None)
