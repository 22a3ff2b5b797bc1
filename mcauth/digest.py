"""
Server hash sent to the session server when joining an online-mode server.

The session server does not take a plain hex SHA-1. It wants the digest read
as a signed (two's complement) big-endian integer and printed in hex with a
leading ``-`` for negative values and no leading zeros.

https://wiki.vg/Protocol_Encryption#Client
"""

from hashlib import sha1


def twos_complement(data: bytes) -> bytes:
    """Negate a big-endian two's complement number.

    Returns a new byte string; ``data`` is left untouched.
    """
    out = bytearray(~b & 0xFF for b in data)
    for i in range(len(out) - 1, -1, -1):
        out[i] = (out[i] + 1) & 0xFF
        if out[i] != 0:
            break
    return bytes(out)


def signed_hex(digest: bytes) -> str:
    """Render ``digest`` the way the session server expects.

    An all-zero digest renders as an empty string.
    """
    negative = bool(digest) and digest[0] & 0x80 == 0x80
    if negative:
        digest = twos_complement(digest)

    res = digest.hex().lstrip("0")
    if negative:
        res = "-" + res
    return res


def auth_digest(server_id: str, shared_secret: bytes, public_key: bytes) -> str:
    """
    Compute the server hash for a join request.

    :param server_id: The server id from the encryption request, usually empty
    :param shared_secret: The 16 byte shared secret of this connection
    :param public_key: The server's DER encoded public key, as received

    :return: The signed hex digest
    """
    shaHash = sha1()  # skipcq: PTC-W1003
    shaHash.update(server_id.encode("utf-8"))
    shaHash.update(shared_secret)
    shaHash.update(public_key)
    return signed_hex(shaHash.digest())
