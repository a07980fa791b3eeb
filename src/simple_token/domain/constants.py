from enum import Enum


class CipherMode(Enum):
    CBC = "CBC"
    ECB = "ECB"
    CFB = "CFB"
    OFB = "OFB"


class PaddingMode(Enum):
    PKCS7 = "PKCS7"
    ANSIX923 = "ANSIX923"
    NONE = "NONE"


# Separates base64(ciphertext) from base64(iv) inside a protected blob.
CIPHER_TEXT_IV_SEPARATOR = "??"

AES_BLOCK_SIZE_BITS = 128
AES_LEGAL_KEY_SIZES = (128, 192, 256)

DEFAULT_KEY_SIZE = 256
DEFAULT_TTL_SECONDS = 60

# HMAC-SHA256 tag appended to the plaintext before encryption.
MAC_SIZE_BYTES = 32
MAC_KEY_INFO = b"simple-token hmac-sha256"
