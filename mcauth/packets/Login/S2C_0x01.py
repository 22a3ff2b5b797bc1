from dataclasses import dataclass

from ...exceptions import MalformedPacket
from ..packet import Packet, States, DataTypes


@dataclass(frozen=True)
class EncryptionRequest:
    server_id: str
    public_key: bytes
    verify_token: bytes
    should_authenticate: bool = True


class S2C_0x01:
    """
    Encryption Request (0x01) sent by the server in online mode.

    Data:
        - Server ID | String(20) | Empty on vanilla servers
        - Public Key | Byte Array | DER encoded RSA SubjectPublicKeyInfo
        - Verify Token | Byte Array | Random bytes chosen by the server
        - Should Authenticate | Boolean | 1.20.5+ only, whether to call the session server
    """

    @staticmethod
    def _info():
        return {
            "name": "Encryption Request (0x01)",
            "id": 0x01,
            "state": States.LOGIN,
        }

    @staticmethod
    def _dataTypes():
        return {
            "server_id": DataTypes.STRING,
            "public_key": DataTypes.BYTE_ARRAY,
            "verify_token": DataTypes.BYTE_ARRAY,
            "should_authenticate": DataTypes.BOOL,
        }

    @classmethod
    def parse(cls, payload: bytes) -> EncryptionRequest:
        """Decode the packet payload (packet id already stripped).

        Raises:
            MalformedPacket: if a length runs past the buffer, the server id
                is not utf-8, or unexpected bytes follow the last field
        """
        buf = Packet(payload)
        server_id = buf.read_string()
        public_key = buf.read_byte_array()
        verify_token = buf.read_byte_array()

        should_authenticate = True
        if buf.remaining() == 1:
            should_authenticate = buf.read_bool()
        elif buf.remaining():
            raise MalformedPacket(
                f"{buf.remaining()} unexpected bytes after the verify token"
            )

        return EncryptionRequest(
            server_id=server_id,
            public_key=public_key,
            verify_token=verify_token,
            should_authenticate=should_authenticate,
        )

    @classmethod
    def from_packet(cls, data: bytes) -> EncryptionRequest:
        """Decode a packet body that still starts with its VarInt id."""
        buf = Packet(data)
        _id = buf.read_varint()
        if _id != cls._info()["id"]:
            raise MalformedPacket(
                f"Expected encryption request (0x01), got 0x{_id & 0xFFFFFFFF:02x}"
            )
        return cls.parse(buf.read(buf.remaining()))
