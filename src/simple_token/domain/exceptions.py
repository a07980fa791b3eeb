class SecureTokenError(Exception):
    """Base class for every error raised by simple_token."""
    pass


class InvalidArgumentError(SecureTokenError, ValueError):
    """Raised on caller misuse (missing input, non-positive TTL, issued after expires)."""
    pass


class EncryptionConfigurationError(SecureTokenError, ValueError):
    """Raised when an encryption configuration is missing or inconsistent."""
    pass


class InvalidTokenError(SecureTokenError):
    """
    Raised when a token string cannot be accepted.

    Integrations should catch this class and report a single
    "unauthorized" outcome, whatever the concrete subclass.
    """
    pass


class MalformedTokenError(InvalidTokenError):
    """Raised when bytes do not parse into the expected token shape."""
    pass


class DecryptionFailedError(InvalidTokenError):
    """Raised when ciphertext, key and IV do not fit together."""
    pass


class ProtectionFailedError(InvalidTokenError):
    """Raised when the protector produced no usable output."""
    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when token has expired."""
    pass
