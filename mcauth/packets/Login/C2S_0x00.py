from ..packet import C2SPacket, States, DataTypes


class C2S_0x00(C2SPacket):
    """
    Login Start (0x00)

    Data:
        - name | String(16) | The player's username
        - uuid | 128 bit int | The player's UUID, only sent when given
    """

    MAX_NAME_LENGTH = 16

    def __init__(self, name: str, uuid: str = None):
        if len(name) > self.MAX_NAME_LENGTH:
            raise ValueError(f"Username too long: {name!r}")

        self._schema = {"name": DataTypes.STRING}
        fields = {"name": name}
        if uuid is not None:
            self._schema["uuid"] = DataTypes.UUID
            fields["uuid"] = uuid

        super().__init__(**fields)

    def _info(self):
        return {
            "name": "Login Start",
            "id": 0x00,
            "state": States.LOGIN,
        }

    def _dataTypes(self):
        return self._schema
