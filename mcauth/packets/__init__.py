from . import Handshake, Login
from .packet import C2SPacket, DataTypes, Packet, States

__all__ = ["Handshake", "Login", "C2SPacket", "DataTypes", "Packet", "States"]
