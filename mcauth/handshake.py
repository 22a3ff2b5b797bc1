import os
from dataclasses import dataclass

from .digest import auth_digest
from .encryption import (
    CipherPair,
    KeyExchangeResponder,
    RandomSource,
    generate_shared_secret,
    make_cipher_pair,
)
from .logger import Logger
from .packets import Login
from .session import SessionAuthClient


@dataclass(frozen=True)
class HandshakeResult:
    """What the connection layer needs to finish logging in.

    ``packet`` must be sent with the plain framing; ``ciphers`` are installed
    only after that send completes.
    """

    request: Login.EncryptionRequest
    packet: Login.C2S_0x01
    ciphers: CipherPair


class OnlineHandshake:
    """
    Answers the server's encryption request.

    Steps:
    1. Parse the encryption request
    2. Generate the shared secret
    3. Compute the server hash
    4. Tell the session server we are joining (skipped when the server asks not to)
    5. Encrypt the shared secret and verify token for the server
    6. Derive the cipher pair
    """

    def __init__(
        self,
        session: SessionAuthClient = None,
        responder: KeyExchangeResponder = None,
        logger: Logger = None,
        random_source: RandomSource = os.urandom,
    ):
        self.logger = logger or Logger()
        self.session = session or SessionAuthClient(logger=self.logger)
        self.responder = responder or KeyExchangeResponder(logger=self.logger)
        self.random_source = random_source

    def _prepare(self, payload: bytes):
        request = Login.S2C_0x01.parse(payload)
        self.logger.debug(
            f"Encryption requested: server id {request.server_id!r}, "
            f"{len(request.public_key)} byte key, {len(request.verify_token)} byte token"
        )
        shared_secret = generate_shared_secret(self.random_source)
        digest = auth_digest(request.server_id, shared_secret, request.public_key)
        return request, shared_secret, digest

    def _finish(self, request, shared_secret: bytes) -> HandshakeResult:
        packet = self.responder.respond(
            shared_secret, request.public_key, request.verify_token
        )
        ciphers = make_cipher_pair(shared_secret)
        self.logger.debug("Encryption response ready")
        return HandshakeResult(request=request, packet=packet, ciphers=ciphers)

    async def run_async(
        self, payload: bytes, access_token: str, profile_id: str, profile_name: str
    ) -> HandshakeResult:
        """
        Run the handshake for one encryption request.

        :param payload: The encryption request payload, packet id stripped
        :param access_token: The minecraft access token of the account
        :param profile_id: The uuid of the account's profile
        :param profile_name: The name of the account's profile

        :return: The encryption response packet and the cipher pair
        """
        request, shared_secret, digest = self._prepare(payload)
        if request.should_authenticate:
            await self.session.join_async(access_token, profile_id, profile_name, digest)
        else:
            self.logger.debug("Server does not require authentication, skipping join")
        return self._finish(request, shared_secret)

    def run(
        self, payload: bytes, access_token: str, profile_id: str, profile_name: str
    ) -> HandshakeResult:
        """Blocking version of :meth:`run_async`"""
        request, shared_secret, digest = self._prepare(payload)
        if request.should_authenticate:
            self.session.join(access_token, profile_id, profile_name, digest)
        else:
            self.logger.debug("Server does not require authentication, skipping join")
        return self._finish(request, shared_secret)
