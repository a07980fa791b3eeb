from __future__ import annotations

import base64
import binascii
import os
from typing import Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ...domain.constants import (
    AES_BLOCK_SIZE_BITS,
    CIPHER_TEXT_IV_SEPARATOR,
    MAC_KEY_INFO,
    MAC_SIZE_BYTES,
    CipherMode,
    PaddingMode,
)
from ...domain.exceptions import DecryptionFailedError, EncryptionConfigurationError
from ...domain.value_objects import EncryptionConfiguration
from ...helpers import b64decode_canonical

IV_SIZE_BYTES = AES_BLOCK_SIZE_BITS // 8


class AESMessageHandler:
    """
    Encrypts and decrypts text with AES and frames the result as

        base64(ciphertext) + "??" + base64(iv)

    A new random IV is generated for every encryption and travels in
    plaintext next to the ciphertext; only the key is secret.

    The encrypted message is the UTF-8 text followed by an HMAC-SHA256 tag
    over `iv + text`. The MAC key is derived from the encryption key with
    HKDF. Any change to the ciphertext or the IV fails tag verification,
    for every cipher mode.

    Empty input short-circuits to empty output in both directions without
    touching the cipher.
    """

    def __init__(self, configuration: EncryptionConfiguration) -> None:
        if configuration is None:
            raise EncryptionConfigurationError("configuration is required")
        self._configuration = configuration
        self._key = configuration.key
        self._mac_key = HKDF(
            algorithm=hashes.SHA256(),
            length=MAC_SIZE_BYTES,
            salt=None,
            info=MAC_KEY_INFO,
        ).derive(self._key)

    # ------------------------------------------------------------------ #
    # Framed text API
    # ------------------------------------------------------------------ #

    def encrypt(self, source: str) -> str:
        if not source:
            return ""

        cipher_text, iv = self.encrypt_to_bytes(source)
        return "{0}{1}{2}".format(
            base64.b64encode(cipher_text).decode("ascii"),
            CIPHER_TEXT_IV_SEPARATOR,
            base64.b64encode(iv).decode("ascii"),
        )

    def decrypt(self, cipher_text: str) -> str:
        """
        Decrypt a framed string produced by `encrypt`.

        Raises:
            DecryptionFailedError
        """
        if not cipher_text:
            return ""

        parts = [p for p in cipher_text.split(CIPHER_TEXT_IV_SEPARATOR) if p]
        if len(parts) != 2:
            raise DecryptionFailedError(
                "Invalid cipher text. Unable to determine the IV used for the encryption; "
                f"expected 'cipher text'{CIPHER_TEXT_IV_SEPARATOR}'IV'"
            )

        try:
            raw_cipher_text = b64decode_canonical(parts[0])
            iv = b64decode_canonical(parts[1])
        except (binascii.Error, ValueError) as exc:
            raise DecryptionFailedError("Cipher text or IV is not valid base64") from exc

        return self.decrypt_from_bytes(raw_cipher_text, iv)

    # ------------------------------------------------------------------ #
    # Raw byte API
    # ------------------------------------------------------------------ #

    def encrypt_to_bytes(self, plain_text: str) -> Tuple[bytes, bytes]:
        """Return (ciphertext, iv) for the UTF-8 encoding of `plain_text`."""
        iv = os.urandom(IV_SIZE_BYTES)
        message = plain_text.encode("utf-8")

        encryptor = self._build_cipher(iv).encryptor()
        padded = self._pad(message + self._sign(iv, message))
        cipher_text = encryptor.update(padded) + encryptor.finalize()
        return cipher_text, iv

    def decrypt_from_bytes(self, cipher_text: bytes, iv: bytes) -> str:
        if not cipher_text:
            raise DecryptionFailedError("cipher text is empty")
        if not iv:
            raise DecryptionFailedError("IV is empty")

        try:
            decryptor = self._build_cipher(iv).decryptor()
            padded = decryptor.update(cipher_text) + decryptor.finalize()
            signed = self._unpad(padded)
        except ValueError as exc:
            # wrong IV length, partial block or bad padding
            raise DecryptionFailedError("Unable to decrypt cipher text") from exc

        if len(signed) <= MAC_SIZE_BYTES:
            raise DecryptionFailedError("Unable to decrypt cipher text")
        message, tag = signed[:-MAC_SIZE_BYTES], signed[-MAC_SIZE_BYTES:]

        try:
            self._verifier(iv, message).verify(tag)
            return message.decode("utf-8")
        except (InvalidSignature, UnicodeDecodeError) as exc:
            raise DecryptionFailedError("Unable to decrypt cipher text") from exc

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _verifier(self, iv: bytes, message: bytes) -> hmac.HMAC:
        h = hmac.HMAC(self._mac_key, hashes.SHA256())
        h.update(iv)
        h.update(message)
        return h

    def _sign(self, iv: bytes, message: bytes) -> bytes:
        return self._verifier(iv, message).finalize()

    def _build_cipher(self, iv: bytes) -> Cipher:
        mode = self._configuration.cipher_mode
        if mode is CipherMode.CBC:
            cipher_mode = modes.CBC(iv)
        elif mode is CipherMode.ECB:
            # ECB ignores the IV; it is still generated so the framing is uniform
            cipher_mode = modes.ECB()
        elif mode is CipherMode.CFB:
            cipher_mode = modes.CFB(iv)
        elif mode is CipherMode.OFB:
            cipher_mode = modes.OFB(iv)
        else:
            raise EncryptionConfigurationError(f"Unsupported cipher mode: {mode!r}")

        return Cipher(algorithms.AES(self._key), cipher_mode)

    def _padding(self):
        scheme = self._configuration.padding
        if scheme is PaddingMode.PKCS7:
            return padding.PKCS7(AES_BLOCK_SIZE_BITS)
        if scheme is PaddingMode.ANSIX923:
            return padding.ANSIX923(AES_BLOCK_SIZE_BITS)
        return None

    def _pad(self, data: bytes) -> bytes:
        scheme = self._padding()
        if scheme is None:
            return data
        padder = scheme.padder()
        return padder.update(data) + padder.finalize()

    def _unpad(self, data: bytes) -> bytes:
        scheme = self._padding()
        if scheme is None:
            return data
        unpadder = scheme.unpadder()
        return unpadder.update(data) + unpadder.finalize()
