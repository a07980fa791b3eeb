from __future__ import annotations

import base64
import binascii

from ...domain.exceptions import DecryptionFailedError
from ...domain.ports import TokenProtector
from ...domain.value_objects import EncryptionConfiguration
from ...helpers import b64decode_canonical
from .message_handler import AESMessageHandler


class AESTokenProtector(TokenProtector):
    """
    Adapter implementing TokenProtector with AES.

    The bytes are base64-encoded before encryption and the framed
    result is returned as UTF-8 bytes, which keeps tokens readable by
    any implementation of the same framing.
    """

    def __init__(self, configuration: EncryptionConfiguration) -> None:
        self._handler = AESMessageHandler(configuration)

    def protect(self, raw: bytes) -> bytes:
        token_string = base64.b64encode(raw).decode("ascii")
        encrypted = self._handler.encrypt(token_string)
        return encrypted.encode("utf-8")

    def unprotect(self, protected: bytes) -> bytes:
        try:
            encrypted = bytes(protected).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionFailedError("Protected data is not valid UTF-8") from exc

        decrypted = self._handler.decrypt(encrypted)

        try:
            return b64decode_canonical(decrypted)
        except (binascii.Error, ValueError) as exc:
            raise DecryptionFailedError("Decrypted data has an unexpected format") from exc
