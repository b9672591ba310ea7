"""Tests for MarkLogic URI and credential helpers."""

from __future__ import annotations

from typing import Any

import pytest
from requests.auth import HTTPBasicAuth

from mlpublish.channels.marklogic import InvalidTargetURIError, MarkLogicPublishingHelper
from mlpublish.security import DecryptionError


class RecordingDecryptor:
    def __init__(self, *, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.fail_on = fail_on

    def decrypt(self, key: str, value: Any) -> str:
        self.calls.append((key, value))
        if key == self.fail_on:
            raise DecryptionError("boom", key=key)
        return f"plain-{value}"


def _properties(**overrides: Any) -> dict[str, Any]:
    props: dict[str, Any] = {
        "host": "ml.example.com",
        "port": 8080,
        "username": "u",
        "password": "cipher",
    }
    props.update(overrides)
    return props


def test_target_uri_for_workspace_node() -> None:
    helper = MarkLogicPublishingHelper(RecordingDecryptor())

    uri = helper.build_target_uri("workspace://SpacesStore/abc-123", _properties())

    assert uri == "http://ml.example.com:8080/store?uri=workspace://SpacesStore/abc-123"


def test_target_uri_accepts_bracketed_ipv6_host() -> None:
    helper = MarkLogicPublishingHelper(RecordingDecryptor())

    uri = helper.build_target_uri("doc", _properties(host="[::1]", port=" 8000 "))

    assert uri == "http://[::1]:8000/store?uri=doc"


@pytest.mark.parametrize(
    ("document_id", "expected_query"),
    [
        ("doc 1.xml", "uri=doc%201.xml"),
        ("a&b=c", "uri=a%26b%3Dc"),
        ("über#1", "uri=%C3%BCber%231"),
    ],
)
def test_target_uri_percent_encodes_query_delimiters(document_id: str, expected_query: str) -> None:
    helper = MarkLogicPublishingHelper(RecordingDecryptor())

    uri = helper.build_target_uri(document_id, _properties(host="localhost", port="8000"))

    assert uri == f"http://localhost:8000/store?{expected_query}"


@pytest.mark.parametrize(
    "overrides",
    [
        {"host": None},
        {"host": "  "},
        {"host": "bad host"},
        {"host": "ml.example.com/path"},
        {"port": None},
        {"port": "eighty"},
        {"port": 0},
        {"port": 70000},
        {"port": True},
        {"port": "²"},
        {"port": "٤٠"},
        {"host": "[::1]:9000"},
        {"host": "[::1"},
        {"host": "::1]"},
        {"host": "[not-an-ip]"},
        {"host": "::1"},
    ],
)
def test_target_uri_rejects_missing_or_malformed_address(overrides: dict[str, Any]) -> None:
    helper = MarkLogicPublishingHelper(RecordingDecryptor())

    with pytest.raises(InvalidTargetURIError):
        helper.build_target_uri("doc", _properties(**overrides))


def test_auth_context_decrypts_each_field_once() -> None:
    decryptor = RecordingDecryptor()
    helper = MarkLogicPublishingHelper(decryptor)

    context = helper.build_auth_context(_properties())

    assert decryptor.calls == [("username", "u"), ("password", "cipher")]
    assert context.username == "plain-u"
    assert context.password == "plain-cipher"
    assert context.auth == HTTPBasicAuth("plain-u", "plain-cipher")
    assert "plain-cipher" not in repr(context)


def test_auth_context_propagates_decryption_errors() -> None:
    helper = MarkLogicPublishingHelper(RecordingDecryptor(fail_on="password"))

    with pytest.raises(DecryptionError) as excinfo:
        helper.build_auth_context(_properties())

    assert excinfo.value.key == "password"
