from ..packet import C2SPacket, States, DataTypes


class C2S_0x01(C2SPacket):
    """
    Encryption Response (0x01) Packet

    Data:
        - shared_secret | Byte Array | Shared secret, RSA encrypted with the server's key
        - verify_token | Byte Array | Verify token, RSA encrypted with the server's key
    """

    def _info(self):
        return {
            "name": "Encryption Response",
            "id": 0x01,
            "state": States.LOGIN,
        }

    def _dataTypes(self):
        return {
            "shared_secret": DataTypes.BYTE_ARRAY,
            "verify_token": DataTypes.BYTE_ARRAY,
        }
