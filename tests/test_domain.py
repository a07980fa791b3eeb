# tests/test_domain.py
import base64
from datetime import datetime, timedelta, timezone

import pytest

from simple_token import (
    CipherMode,
    EncryptionConfiguration,
    EncryptionConfigurationError,
    InvalidArgumentError,
    PaddingMode,
    SecureToken,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# --- SecureToken ---------------------------------------------------------


def test_token_create():
    issued = _now()
    expires = issued + timedelta(seconds=60)
    token = SecureToken.create(issued, expires, {"user": "42"})

    assert token.issued == issued
    assert token.expires == expires
    assert token.data == {"user": "42"}
    assert token.ttl_seconds == 60
    assert not token.is_expired


def test_token_empty_data_is_valid():
    issued = _now()
    token = SecureToken.create(issued, issued, {})
    assert dict(token.data) == {}


def test_token_rejects_issued_after_expires():
    t = _now()
    with pytest.raises(InvalidArgumentError):
        SecureToken.create(t + timedelta(seconds=10), t, {})


def test_token_rejects_missing_data():
    t = _now()
    with pytest.raises(InvalidArgumentError):
        SecureToken.create(t, t, None)


def test_token_data_has_no_default():
    t = _now()
    with pytest.raises(TypeError):
        SecureToken(t, t)


def test_token_rejects_naive_datetimes():
    t = datetime.now()
    with pytest.raises(InvalidArgumentError):
        SecureToken.create(t, t + timedelta(seconds=1), {})


def test_token_rejects_non_string_values():
    t = _now()
    with pytest.raises(InvalidArgumentError):
        SecureToken.create(t, t, {"n": 1})


def test_token_is_immutable():
    source = {"role": "admin"}
    t = _now()
    token = SecureToken.create(t, t + timedelta(seconds=5), source)

    # caller's mapping is copied
    source["role"] = "guest"
    assert token.data["role"] == "admin"

    with pytest.raises(TypeError):
        token.data["role"] = "guest"  # type: ignore[index]

    with pytest.raises(AttributeError):
        token.expires = t  # type: ignore[misc]


def test_token_expiry_is_evaluated_on_each_access():
    t = _now()
    token = SecureToken.create(t - timedelta(seconds=10), t - timedelta(seconds=1), {})
    assert token.is_expired

    fresh = SecureToken.create(t, t + timedelta(hours=1), {})
    assert not fresh.is_expired


def test_token_is_expired_is_a_property():
    t = _now()
    token = SecureToken.create(t, t + timedelta(hours=1), {})

    assert isinstance(SecureToken.is_expired, property)
    assert token.is_expired is False


# --- EncryptionConfiguration ---------------------------------------------


def test_configuration_defaults(aes_key):
    config = EncryptionConfiguration(encryption_key=aes_key)
    assert config.key_size == 256
    assert config.cipher_mode is CipherMode.CBC
    assert config.padding is PaddingMode.PKCS7
    assert len(config.key) == 32


@pytest.mark.parametrize("key", ["", "   ", None])
def test_configuration_requires_key(key):
    with pytest.raises(EncryptionConfigurationError):
        EncryptionConfiguration(encryption_key=key)


def test_configuration_rejects_illegal_key_size(aes_key):
    with pytest.raises(EncryptionConfigurationError):
        EncryptionConfiguration(encryption_key=aes_key, key_size=512)


def test_configuration_rejects_wrong_key_length():
    short_key = base64.b64encode(b"\x01" * 16).decode()
    with pytest.raises(EncryptionConfigurationError):
        EncryptionConfiguration(encryption_key=short_key, key_size=256)

    # the same key is fine once the declared size matches
    EncryptionConfiguration(encryption_key=short_key, key_size=128)


def test_configuration_rejects_non_base64_key():
    with pytest.raises(EncryptionConfigurationError):
        EncryptionConfiguration(encryption_key="not a base64 key!")


def test_configuration_rejects_block_mode_without_padding(aes_key):
    with pytest.raises(EncryptionConfigurationError):
        EncryptionConfiguration(
            encryption_key=aes_key,
            cipher_mode=CipherMode.CBC,
            padding=PaddingMode.NONE,
        )


@pytest.mark.parametrize("key_size", [128, 192, 256])
def test_generate_key(key_size):
    key = EncryptionConfiguration.generate_key(key_size)

    assert len(base64.b64decode(key)) == key_size // 8
    # should not raise
    EncryptionConfiguration(encryption_key=key, key_size=key_size)

    assert EncryptionConfiguration.generate_key(key_size) != key


def test_generate_key_rejects_illegal_size():
    with pytest.raises(EncryptionConfigurationError):
        EncryptionConfiguration.generate_key(100)
