"""
PKCE (Proof Key for Code Exchange) code verifier and S256 challenge.

RFC 7636: https://tools.ietf.org/html/rfc7636
RFC 3986 section 2.3 (unreserved characters): https://tools.ietf.org/html/rfc3986
"""

import base64
import hashlib
import re
import secrets
from typing import Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict
from typing_extensions import Annotated

from .errors import (
    CryptoUnavailableError,
    EntropyOutOfRange,
    VerifierInvalidCharset,
    VerifierTooLong,
    VerifierTooShort,
)

MINIMUM_ENTROPY = 32
MAXIMUM_ENTROPY = 96
DEFAULT_ENTROPY = 64

MINIMUM_LENGTH = 43
MAXIMUM_LENGTH = 128

CHALLENGE_METHOD = "S256"

VERIFIER_PATTERN = r"^[0-9a-zA-Z\-\.\_\~]{43,128}$"
_UNRESERVED = re.compile(r"[0-9a-zA-Z\-._~]*")


def _check_verifier(value: str) -> str:
    """Length first, then charset. The value is returned untouched."""
    length = len(value)
    if length < MINIMUM_LENGTH:
        raise VerifierTooShort(length, MINIMUM_LENGTH)
    if length > MAXIMUM_LENGTH:
        raise VerifierTooLong(length, MAXIMUM_LENGTH)
    # fullmatch: "$" would also accept a trailing newline
    if _UNRESERVED.fullmatch(value) is None:
        position = _UNRESERVED.match(value).end()
        raise VerifierInvalidCharset(length, VERIFIER_PATTERN, value[position], position)
    return value


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


class CodeVerifier(BaseModel):
    """A code verifier that is known to satisfy RFC 7636 section 4.1."""

    model_config = ConfigDict(frozen=True)

    value: Annotated[str, AfterValidator(_check_verifier)]

    def __str__(self) -> str:
        return self.value

    def model_copy(self, *, update=None, deep: bool = False) -> "CodeVerifier":
        """Copies go through the same checks as construction."""
        copied = super().model_copy(update=update, deep=deep)
        return CodeVerifier(value=copied.value)


class CodeChallenge(BaseModel):
    """BASE64URL(SHA256(ASCII(code_verifier)))"""

    model_config = ConfigDict(frozen=True)

    value: str
    method: Literal["S256"] = CHALLENGE_METHOD

    def __str__(self) -> str:
        return self.value


def validate(value: str) -> CodeVerifier:
    """
    Check a string against the code verifier rules.
    Args:
        value: Candidate verifier, used as-is (no trimming or normalization)
    Returns:
        The wrapped CodeVerifier
    Raises:
        VerifierTooShort, VerifierTooLong, VerifierInvalidCharset
    """
    return CodeVerifier(value=value)


def encoded_length(entropy_bytes: int) -> int:
    """Length of unpadded base64url output for entropy_bytes input bytes: ceil(n*8/6)."""
    return (entropy_bytes * 8 + 5) // 6


def generate(entropy_bytes: int = DEFAULT_ENTROPY) -> CodeVerifier:
    """
    Generate a code verifier from cryptographically secure random bytes.

    32 bytes encode to 43 characters and 96 bytes to 128, so every size in
    range yields a verifier of legal length using only [A-Za-z0-9-_].
    Args:
        entropy_bytes: Number of random bytes to encode (default: 64)
    Returns:
        A new CodeVerifier
    """
    if isinstance(entropy_bytes, bool) or not isinstance(entropy_bytes, int):
        raise TypeError(f"entropy_bytes must be an int, not {type(entropy_bytes).__name__}")
    if not MINIMUM_ENTROPY <= entropy_bytes <= MAXIMUM_ENTROPY:
        raise EntropyOutOfRange(entropy_bytes, MINIMUM_ENTROPY, MAXIMUM_ENTROPY)

    try:
        random_bytes = secrets.token_bytes(entropy_bytes)
    except NotImplementedError as e:
        raise CryptoUnavailableError(f"No secure random source available: {e}") from e

    return CodeVerifier(value=_b64url(random_bytes))


def derive(verifier: Union[CodeVerifier, str]) -> CodeChallenge:
    """
    Derive the S256 code challenge for a verifier.

    The verifier is hashed as ISO-8859-1 bytes, one byte per character.
    Plain strings are validated first.
    """
    if not isinstance(verifier, CodeVerifier):
        verifier = validate(verifier)
    try:
        sha256 = hashlib.new("sha256")
    except ValueError as e:
        raise CryptoUnavailableError(f"SHA-256 is unavailable: {e}") from e
    sha256.update(verifier.value.encode("latin-1"))
    return CodeChallenge(value=_b64url(sha256.digest()))


def verify_challenge(
    verifier: Union[CodeVerifier, str], challenge: Union[CodeChallenge, str]
) -> bool:
    """
    Check that a verifier matches a previously issued S256 challenge.
    Args:
        verifier: The code_verifier presented at token exchange
        challenge: The code_challenge sent with the authorization request
    Returns:
        True if the verifier is well-formed and hashes to the challenge
    """
    if isinstance(challenge, CodeChallenge):
        challenge = challenge.value
    if not challenge or not challenge.isascii():
        return False
    try:
        computed = derive(verifier)
    except (VerifierTooShort, VerifierTooLong, VerifierInvalidCharset):
        return False
    return secrets.compare_digest(computed.value.encode("ascii"), challenge.encode("ascii"))


class PKCEPair(BaseModel):
    """
    A code verifier together with its S256 challenge.
    """

    model_config = ConfigDict(frozen=True)

    verifier: CodeVerifier
    challenge: CodeChallenge

    @classmethod
    def create(cls, entropy_bytes: int = DEFAULT_ENTROPY) -> "PKCEPair":
        verifier = generate(entropy_bytes)
        return cls(verifier=verifier, challenge=derive(verifier))

    @classmethod
    def from_verifier(cls, value: str) -> "PKCEPair":
        verifier = validate(value)
        return cls(verifier=verifier, challenge=derive(verifier))

    @property
    def auth_params(self) -> dict:
        """
        Get the parameters needed for the authorization request.
        Returns:
            Dictionary containing code_challenge and code_challenge_method
        """
        return {
            "code_challenge": self.challenge.value,
            "code_challenge_method": self.challenge.method,
        }

    @property
    def token_params(self) -> dict:
        """
        Get the parameters needed for the token request.
        Returns:
            Dictionary containing code_verifier
        """
        return {
            "code_verifier": self.verifier.value
        }
