"""Exception hierarchy for PKCE verifier and challenge errors."""

from typing import Optional


class PKCEError(Exception):
    """Base exception for all PKCE related errors."""

    pass


class VerifierValidationError(PKCEError):
    """Raised when a code verifier violates RFC 7636 constraints."""

    def __init__(self, message: str, length: int):
        super().__init__(message)
        self.length = length


class VerifierTooShort(VerifierValidationError):
    """Raised when a code verifier has fewer than 43 characters."""

    def __init__(self, length: int, minimum: int):
        super().__init__(
            f"codeVerifier must be >= {minimum} characters (got {length})",
            length,
        )
        self.minimum = minimum


class VerifierTooLong(VerifierValidationError):
    """Raised when a code verifier has more than 128 characters."""

    def __init__(self, length: int, maximum: int):
        super().__init__(
            f"codeVerifier must be <= {maximum} characters (got {length})",
            length,
        )
        self.maximum = maximum


class VerifierInvalidCharset(VerifierValidationError):
    """Raised when a code verifier holds a character outside the unreserved set."""

    def __init__(self, length: int, pattern: str, character: Optional[str] = None, position: Optional[int] = None):
        message = f"codeVerifier MUST match regexp pattern {pattern}"
        if character is not None:
            message += f" (invalid character {character!r} at position {position})"
        super().__init__(message, length)
        self.pattern = pattern
        self.character = character
        self.position = position


class EntropyError(PKCEError):
    """Raised when verifier generation is asked for an unusable entropy size."""

    pass


class EntropyOutOfRange(EntropyError):
    """Raised when the requested entropy lies outside [32, 96] bytes."""

    def __init__(self, entropy_bytes, minimum: int, maximum: int):
        super().__init__(
            f"entropy must be >= {minimum} and <= {maximum} bytes (got {entropy_bytes})"
        )
        self.entropy_bytes = entropy_bytes
        self.minimum = minimum
        self.maximum = maximum


class CryptoUnavailableError(PKCEError):
    """Raised when SHA-256 or the secure random source is missing from the runtime."""

    pass
