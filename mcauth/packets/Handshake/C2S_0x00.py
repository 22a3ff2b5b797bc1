from ..packet import C2SPacket, States, DataTypes


class C2S_0x00(C2SPacket):
    """
    Handshake packet (0x00) sent by the client to the server.

    Data:
        - protocol_version | VarInt | See protocol version numbers (765 in Minecraft 1.20.4).
        - server_address | String (255) | Hostname or IP that was used to connect.
        - server_port | Unsigned Short | Default is 25565.
        - next_state | Unsigned Byte | 1 for Status, 2 for Login.
    """

    def _info(self):
        return {
            "name": "Handshake (0x00)",
            "id": 0x00,
            "state": States.HANDSHAKE,
        }

    def _dataTypes(self):
        return {
            "protocol_version": DataTypes.VARINT,
            "server_address": DataTypes.STRING,
            "server_port": DataTypes.USHORT,
            "next_state": DataTypes.UBYTE,
        }

    @classmethod
    def login(cls, protocol_version: int, host: str, port: int = 25565) -> "C2S_0x00":
        """Handshake announcing a login attempt"""
        return cls(
            protocol_version=protocol_version,
            server_address=host,
            server_port=port,
            next_state=States.LOGIN,
        )
