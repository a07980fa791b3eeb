# src/simple_token/domain/value_objects.py

from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass

from .constants import (
    AES_LEGAL_KEY_SIZES,
    DEFAULT_KEY_SIZE,
    CipherMode,
    PaddingMode,
)
from .exceptions import EncryptionConfigurationError


# Modes that operate on whole blocks and therefore need a padding scheme.
_BLOCK_MODES = frozenset({CipherMode.CBC, CipherMode.ECB})


@dataclass(frozen=True, slots=True)
class EncryptionConfiguration:
    """
    AES settings consumed by the protector.

    - encryption_key: base64 text of the raw key; decoded length must be
                      exactly key_size / 8 bytes
    - key_size:       key size in bits (128, 192 or 256)
    - cipher_mode:    block cipher mode of operation
    - padding:        padding applied to the plaintext

    Validated on construction, so an instance is always usable.
    """

    encryption_key: str
    key_size: int = DEFAULT_KEY_SIZE
    cipher_mode: CipherMode = CipherMode.CBC
    padding: PaddingMode = PaddingMode.PKCS7

    def __post_init__(self) -> None:
        if not self.encryption_key or not str(self.encryption_key).strip():
            raise EncryptionConfigurationError("Encryption key is missing.")

        if self.key_size not in AES_LEGAL_KEY_SIZES:
            raise EncryptionConfigurationError(
                f"Invalid key size {self.key_size!r}. The recommended value is: {DEFAULT_KEY_SIZE}"
            )

        if not isinstance(self.cipher_mode, CipherMode):
            raise EncryptionConfigurationError(f"Unsupported cipher mode: {self.cipher_mode!r}")
        if not isinstance(self.padding, PaddingMode):
            raise EncryptionConfigurationError(f"Unsupported padding mode: {self.padding!r}")
        if self.cipher_mode in _BLOCK_MODES and self.padding is PaddingMode.NONE:
            raise EncryptionConfigurationError(
                f"Cipher mode {self.cipher_mode.value} requires a padding mode"
            )

        if len(self.key) != self.key_size // 8:
            raise EncryptionConfigurationError(
                f"Encryption key has wrong length. "
                f"Please ensure that it is *EXACTLY* {self.key_size} bits long"
            )

    @property
    def key(self) -> bytes:
        try:
            return base64.b64decode(self.encryption_key, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise EncryptionConfigurationError("Encryption key is not valid base64") from exc

    @staticmethod
    def generate_key(key_size: int = DEFAULT_KEY_SIZE) -> str:
        """Return a fresh random base64 key usable as `encryption_key`."""
        if key_size not in AES_LEGAL_KEY_SIZES:
            raise EncryptionConfigurationError(
                f"Invalid key size {key_size!r}. The recommended value is: {DEFAULT_KEY_SIZE}"
            )
        return base64.b64encode(os.urandom(key_size // 8)).decode("ascii")
