import os

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.padding import PKCS1v15
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from mcauth.encryption import (
    CipherPair,
    KeyExchangeResponder,
    generate_shared_secret,
    make_cipher_pair,
)
from mcauth.exceptions import CryptoError, InvalidServerKey, InvariantViolation
from mcauth.packets import Packet


def test_generate_shared_secret():
    secret = generate_shared_secret()
    assert len(secret) == 16
    assert secret != generate_shared_secret()


def test_generate_shared_secret_injected_source():
    assert generate_shared_secret(lambda n: b"\x07" * n) == b"\x07" * 16


def test_generate_shared_secret_short_source():
    with pytest.raises(InvariantViolation):
        generate_shared_secret(lambda n: b"\x00" * (n - 1))


@pytest.mark.parametrize("length", [0, 1, 16, 1000])
def test_cipher_pair_round_trip(length):
    secret = os.urandom(16)
    sender = make_cipher_pair(secret)
    receiver = make_cipher_pair(secret)

    data = os.urandom(length)
    encrypted = sender.encrypt(data)
    assert len(encrypted) == length
    assert receiver.decrypt(encrypted) == data


def test_cipher_pair_streams_are_stateful():
    secret = bytes(16)
    sender = make_cipher_pair(secret)
    receiver = make_cipher_pair(secret)

    data = os.urandom(64)
    # byte-at-a-time and all-at-once must agree, CFB8 works on single bytes
    encrypted = b"".join(sender.encrypt(data[i : i + 1]) for i in range(len(data)))
    assert encrypted == make_cipher_pair(secret).encrypt(data)
    assert receiver.decrypt(encrypted[:10]) + receiver.decrypt(encrypted[10:]) == data


def test_cipher_pair_directions_are_independent():
    expected = make_cipher_pair(bytes(range(16))).encrypt(b"hello")

    pair = make_cipher_pair(bytes(range(16)))
    pair.decrypt(b"\x00" * 32)
    assert pair.encrypt(b"hello") == expected


@pytest.mark.parametrize("length", [0, 15, 17, 32])
def test_cipher_pair_bad_key_length(length):
    with pytest.raises(InvariantViolation):
        CipherPair(b"\x00" * length)


def read_response(packet):
    buf = Packet(packet.toBytes())
    assert buf.read_varint() == 0x01
    secret = buf.read_byte_array()
    token = buf.read_byte_array()
    assert buf.remaining() == 0
    return secret, token


def test_respond_decrypts_with_private_key(private_key, public_key_der, logger):
    secret = os.urandom(16)
    token = os.urandom(4)

    packet = KeyExchangeResponder(logger).respond(secret, public_key_der, token)
    enc_secret, enc_token = read_response(packet)

    assert len(enc_secret) == 256
    assert len(enc_token) == 256
    assert private_key.decrypt(enc_secret, PKCS1v15()) == secret
    assert private_key.decrypt(enc_token, PKCS1v15()) == token


def test_respond_uses_random_padding(public_key_der, logger):
    responder = KeyExchangeResponder(logger)
    secret = bytes(16)
    first = responder.respond(secret, public_key_der, b"tok")
    second = responder.respond(secret, public_key_der, b"tok")
    assert first["shared_secret"] != second["shared_secret"]


def test_respond_garbage_key(logger):
    with pytest.raises(InvalidServerKey):
        KeyExchangeResponder(logger).respond(bytes(16), b"not a key", b"tok")


def test_respond_non_rsa_key(logger):
    ec_key = (
        ec.generate_private_key(ec.SECP256R1())
        .public_key()
        .public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    )
    with pytest.raises(InvalidServerKey):
        KeyExchangeResponder(logger).respond(bytes(16), ec_key, b"tok")


def test_respond_oversized_token(public_key_der, logger):
    with pytest.raises(CryptoError):
        KeyExchangeResponder(logger).respond(bytes(16), public_key_der, b"\x00" * 300)
