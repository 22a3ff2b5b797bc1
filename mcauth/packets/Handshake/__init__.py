from .C2S_0x00 import C2S_0x00

__all__ = ["C2S_0x00"]
