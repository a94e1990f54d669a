import hmac
from typing import Any

from .errors import ConfigurationError


def generate_otp(key: bytes, counter: int, digest: Any, digits: int = 6) -> str:
    """
    Computes the HOTP value for ``counter`` (RFC 4226, section 5.3).

    :param key: raw secret bytes
    :param counter: the HMAC counter value to use as the OTP input.
        Usually either an event counter, or the time step derived from the Unix timestamp
    :param digest: hashlib constructor used for the HMAC
    :param digits: length of the returned code
    :returns: ``digits`` decimal characters, zero padded
    """
    if digits <= 0:
        raise ConfigurationError("digits must be a positive integer")
    if digits > 10:
        raise ConfigurationError("digits must be no greater than 10")
    if counter < 0:
        raise ConfigurationError("counter must be a non-negative integer")

    hasher = hmac.new(key, int_to_bytestring(counter), digest)
    if hasher.digest_size < 18:
        raise ConfigurationError("digest size is lower than 18 bytes, which will trigger error on otp generation")
    hmac_hash = bytearray(hasher.digest())

    # Dynamic truncation: the low nibble of the last byte picks where the
    # 4 byte window starts.
    offset = hmac_hash[-1] & 0xF
    # 0x7F drops the top bit so the window reads as a 31 bit positive integer.
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    # code % 10**6 = 42 -> 10000000042 -> last 6 chars "000042"
    str_code = str(10_000_000_000 + (code % 10**digits))
    return str_code[-digits:]


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Encodes the counter as the big-endian, zero padded HMAC message
    (8 bytes for HOTP).

    int_to_bytestring(12345) -> b"\\x00\\x00\\x00\\x00\\x00\\x00\\x30\\x39"
    """
    result = bytearray()
    while i != 0:
        # low byte first, reversed below
        result.append(i & 0xFF)
        i >>= 8
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))
