from .config import Config
from .digest import auth_digest
from .encryption import (
    CipherPair,
    KeyExchangeResponder,
    generate_shared_secret,
    make_cipher_pair,
)
from .exceptions import (
    AuthRejected,
    ConfigError,
    CryptoError,
    HandshakeError,
    InvalidServerKey,
    InvariantViolation,
    MalformedPacket,
    NetworkFailure,
)
from .handshake import HandshakeResult, OnlineHandshake
from .logger import Logger
from .packets import Handshake, Login
from .session import SessionAuthClient


class MCAuth:
    """A class to hold all the mcauth classes"""

    def __init__(self, config: Config = None, log: Logger = None):
        """Initializes the mcauth class

        Args:
            config (Config, optional): The config to use. Defaults to Config.from_module()
            log (Logger, optional): The logger to use. Defaults to one built from the config
        """
        self.config = config if config is not None else Config.from_module()
        self.logger = log if log is not None else Logger.from_config(self.config)

        self.session = SessionAuthClient(config=self.config, logger=self.logger)
        self.responder = KeyExchangeResponder(logger=self.logger)
        self.handshake = OnlineHandshake(
            session=self.session,
            responder=self.responder,
            logger=self.logger,
        )

    @staticmethod
    def login_packets(
        protocol_version: int, host: str, port: int, name: str, uuid: str = None
    ):
        """The handshake and login start packets that open a login"""
        return (
            Handshake.C2S_0x00.login(protocol_version, host, port),
            Login.C2S_0x00(name, uuid),
        )


__all__ = [
    "MCAuth",
    "Config",
    "Logger",
    "OnlineHandshake",
    "HandshakeResult",
    "SessionAuthClient",
    "KeyExchangeResponder",
    "CipherPair",
    "make_cipher_pair",
    "generate_shared_secret",
    "auth_digest",
    "Handshake",
    "Login",
    "HandshakeError",
    "ConfigError",
    "MalformedPacket",
    "InvalidServerKey",
    "AuthRejected",
    "NetworkFailure",
    "CryptoError",
    "InvariantViolation",
]
