import pytest

from authotp.errors import ConfigurationError, DecodingError
from authotp.keys import (
    decode_key,
    encode_key,
    random_base32,
    random_hex,
    secret_bytes,
    secret_key,
    secret_text,
)

RFC_KEY = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_encode_key():
    assert encode_key(b"12345678901234567890") == RFC_KEY
    assert encode_key("12345678901234567890") == RFC_KEY


def test_encode_key_strips_padding():
    assert encode_key(b"f") == "MY"
    assert encode_key(b"foobar") == "MZXW6YTBOI"


def test_decode_key_restores_padding():
    assert decode_key("MY") == b"f"
    assert decode_key("MY======") == b"f"
    assert decode_key("MZXW6YTBOI") == b"foobar"


def test_decode_key_is_case_insensitive():
    assert decode_key("gezdGNBVgy3tqojqGEZDGNBVGY3TQOJQ") == decode_key(RFC_KEY)


def test_decode_key_ignores_grouping():
    assert decode_key("GEZD GNBV GY3T QOJQ GEZD GNBV GY3T QOJQ") == b"12345678901234567890"
    assert decode_key("GEZD-GNBV-GY3T-QOJQ-GEZD-GNBV-GY3T-QOJQ") == b"12345678901234567890"


@pytest.mark.parametrize("key", ["GEZD1NBV", "GEZD!NBV", "A"])
def test_decode_key_rejects_invalid(key):
    with pytest.raises(DecodingError):
        decode_key(key)


@pytest.mark.parametrize("raw", [b"", b"\x00", b"\xff\x00\x10\x80abc", bytes(range(256))])
def test_key_round_trip(raw):
    assert decode_key(encode_key(raw)) == raw


@pytest.mark.parametrize(
    "encoding,text",
    [
        ("ascii", "12345678901234567890"),
        ("hex", "3132333435363738393031323334353637383930"),
        ("base32", RFC_KEY),
        ("base64", "MTIzNDU2Nzg5MDEyMzQ1Njc4OTA="),
    ],
)
def test_secret_encodings(encoding, text):
    assert secret_bytes(text, encoding) == b"12345678901234567890"
    assert secret_text(b"12345678901234567890", encoding) == text


def test_secret_bytes_passes_bytes_through():
    assert secret_bytes(b"\xff", "hex") == b"\xff"


@pytest.mark.parametrize("encoding,text", [("hex", "zz"), ("base64", "***"), ("ascii", "café")])
def test_secret_bytes_invalid(encoding, text):
    with pytest.raises(DecodingError):
        secret_bytes(text, encoding)


def test_unknown_encoding():
    with pytest.raises(ConfigurationError):
        secret_bytes("abc", "rot13")
    with pytest.raises(ConfigurationError):
        secret_text(b"abc", "rot13")


def test_secret_key():
    assert len(secret_key(20)) == 20
    assert len(secret_key(1)) == 1
    assert secret_key(20) != secret_key(20)


@pytest.mark.parametrize("length", [0, None])
def test_secret_key_empty(length):
    assert secret_key(length) == b""


def test_secret_key_negative():
    with pytest.raises(ConfigurationError):
        secret_key(-1)


def test_random_base32():
    key = random_base32()
    assert len(key) == 32
    assert len(decode_key(key)) == 20
    with pytest.raises(ConfigurationError):
        random_base32(31)


def test_random_hex():
    key = random_hex()
    assert len(key) == 40
    assert len(secret_bytes(key, "hex")) == 20
    with pytest.raises(ConfigurationError):
        random_hex(39)
