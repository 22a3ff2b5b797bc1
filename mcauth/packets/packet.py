import struct
from ctypes import c_int32 as signed_int32
from ctypes import c_uint32 as unsigned_int32

from ..exceptions import MalformedPacket


class States:
    HANDSHAKE = 0
    STATUS = 1
    LOGIN = 2
    CONFIGURATION = 3
    PLAY = 4


class DataTypes:
    VARINT = "VarInt"
    STRING = "String"
    USHORT = "Unsigned Short"
    UBYTE = "Unsigned Byte"
    ULONG = "Unsigned Long"
    UUID = "UUID"
    BOOL = "Boolean"
    BYTE_ARRAY = "Byte Array"


# https://wiki.vg/Protocol#Data_types
class Packet:
    """A byte buffer with the protocol's encoders and strict decoders.

    Every ``read_*`` raises ``MalformedPacket`` instead of returning short
    data when the buffer runs out.
    """

    __slots__ = ("__data",)

    def __init__(self, data: bytes = b""):
        self.__data = bytes(data)

    def __repr__(self):
        return f"Packet({self.__data!r})"

    def __len__(self):
        return len(self.__data)

    def remaining(self) -> int:
        return len(self.__data)

    def read(self, length: int) -> bytes:
        if length < 0:
            raise MalformedPacket(f"Negative length {length}")
        if length > len(self.__data):
            raise MalformedPacket(
                f"Expected {length} bytes but only {len(self.__data)} remain"
            )
        result = self.__data[:length]
        self.__data = self.__data[length:]
        return result

    @staticmethod
    def encode_varint(value: int) -> bytes:
        """Encode ``value`` as a varint.

        :param value: The Maximum is ``2 ** 31-1 `` the minimum is ``-(2 ** 31)``.
        :raises ValueError: If value is out of range.
        """
        if value > 2**31 - 1 or value < -(2**31):
            raise ValueError(f'The value "{value}" is too big to send in a varint')
        remaining = unsigned_int32(value).value
        out = b""
        for _ in range(5):
            if not remaining & -0x80:  # remaining & ~0x7F == 0:
                return out + struct.pack("!B", remaining)
            out += struct.pack("!B", remaining & 0x7F | 0x80)
            remaining >>= 7
        raise ValueError(f'The value "{value}" is too big to send in a varint')

    def encode_string(self, string: str) -> bytes:
        """Encode a utf-8 string prefixed with its byte length.

        :param string: The string to write.
        """
        data = string.encode("utf-8")
        return self.encode_varint(len(data)) + data

    def encode_byte_array(self, data: bytes) -> bytes:
        return self.encode_varint(len(data)) + bytes(data)

    @staticmethod
    def encode_ushort(value: int) -> bytes:
        """Encode an unsigned short.

        :param value: The Maximum is 2 ** 16-1 `` the minimum is 0.
        :raises ValueError: If value is out of range.
        """
        if value < 0 or value > 2**16 - 1:
            raise ValueError(f"The value {value} is out of range for an unsigned short")
        return struct.pack("!H", value)

    @staticmethod
    def encode_ubyte(value: int) -> bytes:
        if value < 0 or value > 2**8 - 1:
            raise ValueError(f"The value {value} is out of range for an unsigned byte")
        return struct.pack("!B", value)

    @staticmethod
    def encode_ulong(value: int) -> bytes:
        """Encode an unsigned long.

        :param value: The Maximum is 2 ** 64-1 `` the minimum is 0.
        :raises ValueError: If value is out of range.
        """
        if value < 0 or value > 2**64 - 1:
            raise ValueError(f"The value {value} is out of range for an unsigned long")
        return struct.pack("!Q", value)

    def encode_uuid(self, value: str) -> bytes:
        """Encode a 128-bit UUID given as 32 hex digits, dashes allowed.

        :param value: The value to write.
        """
        uuid = value.replace("-", "")
        if len(uuid) != 32:
            raise ValueError(f"Invalid uuid: {value}")

        uuid1 = int(uuid[:16], 16)
        uuid2 = int(uuid[16:], 16)

        return self.encode_ulong(uuid1) + self.encode_ulong(uuid2)

    @staticmethod
    def encode_bool(value: bool) -> bytes:
        return struct.pack("!?", value)

    def read_varint(self) -> int:
        result = 0
        for i in range(5):
            part = self.read(1)[0]
            result |= (part & 0x7F) << 7 * i
            if not part & 0x80:
                return signed_int32(result).value
        raise MalformedPacket("VarInt is too big")

    def read_byte_array(self) -> bytes:
        length = self.read_varint()
        return self.read(length)

    def read_string(self) -> str:
        data = self.read_byte_array()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as err:
            raise MalformedPacket(f"String is not valid utf-8: {err}") from err

    def read_ushort(self) -> int:
        return struct.unpack("!H", self.read(2))[0]

    def read_ulong(self) -> int:
        return struct.unpack("!Q", self.read(8))[0]

    def read_uuid(self) -> str:
        uuid1 = self.read_ulong()
        uuid2 = self.read_ulong()

        return f"{uuid1:016x}{uuid2:016x}"

    def read_bool(self) -> bool:
        return struct.unpack("!?", self.read(1))[0]


class C2SPacket(Packet):
    """Base for packets the client builds and sends.

    Subclasses describe themselves with ``_info`` (name, id, state) and
    ``_dataTypes`` (ordered field name -> data type); the field values are
    passed as keyword arguments.
    """

    __slots__ = ("fields", "name", "id", "state")

    def __init__(self, **kwargs):
        super().__init__(b"")
        info = self._info()
        self.fields = kwargs
        self.name = info["name"]
        self.id = info["id"]
        self.state = info["state"]

        missing = [k for k in self._dataTypes() if k not in self.fields]
        if missing:
            raise TypeError(f"{self.name} is missing fields: {', '.join(missing)}")

    def _info(self):
        raise NotImplementedError

    def _dataTypes(self):
        raise NotImplementedError

    def __str__(self):
        return f"{self.name}({', '.join(self._dataTypes())})"

    def __getitem__(self, key):
        return self.fields[key]

    def payload(self) -> bytes:
        b = b""

        for k, v in self._dataTypes().items():
            value = self.fields[k]
            match v:
                case DataTypes.VARINT:
                    b += self.encode_varint(value)
                case DataTypes.STRING:
                    b += self.encode_string(value)
                case DataTypes.USHORT:
                    b += self.encode_ushort(value)
                case DataTypes.UBYTE:
                    b += self.encode_ubyte(value)
                case DataTypes.ULONG:
                    b += self.encode_ulong(value)
                case DataTypes.UUID:
                    b += self.encode_uuid(value)
                case DataTypes.BOOL:
                    b += self.encode_bool(value)
                case DataTypes.BYTE_ARRAY:
                    b += self.encode_byte_array(value)
                case _:
                    raise ValueError(f"Unknown data type: {v}")

        return b

    def toBytes(self) -> bytes:
        """Packet id followed by the payload, before length framing"""
        return self.encode_varint(self.id) + self.payload()

    def frame(self) -> bytes:
        """Uncompressed wire form: length, packet id, payload"""
        body = self.toBytes()
        return self.encode_varint(len(body)) + body
