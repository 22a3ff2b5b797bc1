import os
from typing import Callable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.padding import PKCS1v15
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from cryptography.hazmat.primitives.serialization import load_der_public_key

try:
    from cryptography.hazmat.decrepit.ciphers.modes import CFB8
except ImportError:
    # older cryptography releases only ship it in modes
    from cryptography.hazmat.primitives.ciphers.modes import CFB8

from .exceptions import CryptoError, InvalidServerKey, InvariantViolation
from .logger import Logger
from .packets import Login

SHARED_SECRET_LENGTH = 16

RandomSource = Callable[[int], bytes]


def generate_shared_secret(random_source: RandomSource = os.urandom) -> bytes:
    """Generate a fresh shared secret for one connection attempt

    Args:
        random_source (callable, optional): returns n random bytes. Defaults to os.urandom.

    Returns:
        bytes: 16 random bytes
    """
    secret = bytes(random_source(SHARED_SECRET_LENGTH))
    if len(secret) != SHARED_SECRET_LENGTH:
        raise InvariantViolation(
            f"Random source returned {len(secret)} bytes, expected {SHARED_SECRET_LENGTH}"
        )
    return secret


class CipherPair:
    """AES/CFB8 streams for a connection after the encryption response is sent.

    The shared secret is both key and IV, as the protocol requires. The two
    streams keep independent feedback state; every byte passed through one
    advances only that stream.
    """

    __slots__ = ("encryptor", "decryptor")

    def __init__(self, shared_secret: bytes):
        if len(shared_secret) != SHARED_SECRET_LENGTH:
            raise InvariantViolation(
                f"Shared secret must be {SHARED_SECRET_LENGTH} bytes, got {len(shared_secret)}"
            )
        cipher = Cipher(
            # key
            algorithms.AES(shared_secret),
            # iv
            CFB8(shared_secret),
        )
        self.encryptor = cipher.encryptor()
        self.decryptor = cipher.decryptor()

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt outgoing bytes"""
        return self.encryptor.update(data)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt incoming bytes"""
        return self.decryptor.update(data)


def make_cipher_pair(shared_secret: bytes) -> CipherPair:
    return CipherPair(shared_secret)


class KeyExchangeResponder:
    """Builds the encryption response from the server's public key"""

    def __init__(self, logger: Logger = None):
        self.logger = logger or Logger()

    @staticmethod
    def load_public_key(public_key: bytes) -> RSAPublicKey:
        """Load the server's DER encoded public key

        Raises:
            InvalidServerKey: if the bytes are not an RSA SubjectPublicKeyInfo
        """
        try:
            key = load_der_public_key(public_key)
        except (ValueError, UnsupportedAlgorithm) as err:
            raise InvalidServerKey(f"Could not decode server public key: {err}") from err

        if not isinstance(key, RSAPublicKey):
            raise InvalidServerKey(
                f"Server public key is {type(key).__name__}, expected RSA"
            )
        return key

    def respond(
        self, shared_secret: bytes, public_key: bytes, verify_token: bytes
    ) -> Login.C2S_0x01:
        """
        Encrypt the shared secret and verify token for the server.

        :param shared_secret: The shared secret of this connection
        :param public_key: The server's DER encoded public key
        :param verify_token: The verify token from the encryption request

        :return: The encryption response packet

        :raises InvalidServerKey: If the public key can not be used
        :raises CryptoError: If encryption fails
        """
        pubKey = self.load_public_key(public_key)
        self.logger.debug(f"Loaded {pubKey.key_size} bit server key")

        try:
            encryptedSharedSecret = pubKey.encrypt(shared_secret, PKCS1v15())
            encryptedVerifyToken = pubKey.encrypt(verify_token, PKCS1v15())
        except ValueError as err:
            raise CryptoError(f"RSA encryption failed: {err}") from err

        return Login.C2S_0x01(
            shared_secret=encryptedSharedSecret,
            verify_token=encryptedVerifyToken,
        )
