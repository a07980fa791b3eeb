# tests/conftest.py
import pytest

from simple_token import (
    AESTokenProtector,
    EncryptionConfiguration,
    JsonTokenSerializer,
    MsgpackTokenSerializer,
    SecureTokenProvider,
)

AES_KEY = "3q2+796tvu/erb7v3q2+796tvu/erb7v3q2+796tvu8="


@pytest.fixture
def aes_key() -> str:
    return AES_KEY


@pytest.fixture
def payload() -> dict:
    return {"Foo": "12", "Bar": "test"}


@pytest.fixture
def aes_config(aes_key) -> EncryptionConfiguration:
    return EncryptionConfiguration(encryption_key=aes_key)


@pytest.fixture
def protector(aes_config) -> AESTokenProtector:
    return AESTokenProtector(aes_config)


@pytest.fixture(params=["json", "msgpack"])
def provider(request, protector) -> SecureTokenProvider:
    serializer = JsonTokenSerializer() if request.param == "json" else MsgpackTokenSerializer()
    return SecureTokenProvider(serializer=serializer, protector=protector)
