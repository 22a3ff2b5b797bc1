"""
Exceptions raised by the online-mode login handshake.

Every step of the handshake raises at the first failure; nothing is retried
here. Callers decide whether a failure is worth another attempt:
``NetworkFailure`` may succeed later, everything else will not.
"""

import json
from typing import Optional


class HandshakeError(Exception):
    """Base class for every error raised by mcauth."""


class ConfigError(HandshakeError):
    """A configuration value is missing or invalid."""


class MalformedPacket(HandshakeError):
    """Incoming packet bytes do not match the expected framing.

    Raised when a declared length runs past the end of the buffer, a VarInt
    is too long, a string is not valid UTF-8 or unexpected data trails the
    last field.
    """


class InvalidServerKey(HandshakeError):
    """The server's public key is not a DER encoded RSA SubjectPublicKeyInfo."""


class CryptoError(HandshakeError):
    """RSA encryption of the shared secret or verify token failed."""


class InvariantViolation(HandshakeError, ValueError):
    """A caller passed a value the handshake can never accept (a bug, not a runtime condition)."""


class NetworkFailure(HandshakeError):
    """The session server could not be reached (DNS, TLS, timeout, reset).

    Unlike ``AuthRejected`` this may succeed on a later attempt.
    """


class AuthRejected(HandshakeError):
    """The session server answered the join request with anything but 204.

    Args:
        status (int): the HTTP status code
        body (str): the response body, verbatim
    """

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Session server rejected join ({status}): {body}")

    @property
    def error_message(self) -> Optional[str]:
        """The ``errorMessage`` field of a JSON error body, if there is one."""
        try:
            payload = json.loads(self.body)
        except (TypeError, ValueError):
            return None
        if isinstance(payload, dict):
            return payload.get("errorMessage")
        return None
