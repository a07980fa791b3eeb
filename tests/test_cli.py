# tests/test_cli.py
import base64
import json

import pytest

from simple_token.cli import main


@pytest.fixture
def env_key(monkeypatch, aes_key):
    monkeypatch.setenv("SIMPLE_TOKEN_ENCRYPTION_KEY", aes_key)
    monkeypatch.delenv("SIMPLE_TOKEN_SERIALIZER", raising=False)
    monkeypatch.delenv("SIMPLE_TOKEN_DEFAULT_TTL", raising=False)
    return aes_key


def _run(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


def test_generate_key(capsys):
    code, out = _run(capsys, ["generate-key", "--key-size", "128"])

    assert code == 0
    assert out["ok"] is True
    assert out["key_size"] == 128
    assert len(base64.b64decode(out["key"])) == 16


def test_issue_then_validate(capsys, env_key):
    code, issued = _run(capsys, ["issue", "user=42", "role=admin", "--ttl", "30"])
    assert code == 0

    code, validated = _run(capsys, ["validate", issued["token"]])
    assert code == 0
    assert validated["data"] == {"user": "42", "role": "admin"}


def test_validate_failure_exits_non_zero(capsys, env_key):
    code, out = _run(capsys, ["validate", "not-base64!!"])

    assert code == 1
    assert out == {"ok": False, "error": "MalformedTokenError", "detail": "Token is not valid base64"}


def test_issue_rejects_bad_pair(capsys, env_key):
    code, out = _run(capsys, ["issue", "novalue"])

    assert code == 1
    assert out["ok"] is False


def test_missing_key_is_reported(capsys, monkeypatch):
    monkeypatch.delenv("SIMPLE_TOKEN_ENCRYPTION_KEY", raising=False)
    code, out = _run(capsys, ["issue", "a=b"])

    assert code == 1
    assert out["error"] == "RuntimeError"
