import base64
import binascii
import secrets
from typing import Optional, Sequence, Union

from .errors import ConfigurationError, DecodingError

BASE32_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
HEX_CHARS = "ABCDEF0123456789"


def secret_bytes(secret: Union[str, bytes], encoding: str = "ascii") -> bytes:
    """
    Turns a secret into the raw bytes fed to the HMAC.

    Bytes are used as they are; text is decoded according to ``encoding``.

    :param secret: the shared secret
    :param encoding: one of ascii, latin-1, utf-8, hex, base32, base64
    :returns: raw key bytes
    """
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)

    encoding = encoding.lower()
    if encoding == "base32":
        return decode_key(secret)
    try:
        if encoding in ("ascii", "latin-1", "utf-8"):
            return secret.encode(encoding)
        if encoding == "hex":
            return bytes.fromhex(secret)
        if encoding == "base64":
            return base64.b64decode(secret, validate=True)
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise DecodingError("secret is not valid {}".format(encoding)) from e
    raise ConfigurationError("unsupported secret encoding: {}".format(encoding))


def secret_text(raw: bytes, encoding: str = "ascii") -> str:
    """
    Inverse of :func:`secret_bytes`: renders raw key bytes as text.
    """
    encoding = encoding.lower()
    try:
        if encoding in ("ascii", "latin-1", "utf-8"):
            return raw.decode(encoding)
        if encoding == "hex":
            return raw.hex()
        if encoding == "base32":
            return encode_key(raw)
        if encoding == "base64":
            return base64.b64encode(raw).decode("ascii")
    except UnicodeError as e:
        raise DecodingError("secret cannot be represented as {}".format(encoding)) from e
    raise ConfigurationError("unsupported secret encoding: {}".format(encoding))


def encode_key(raw: Union[str, bytes]) -> str:
    """
    Encodes a secret as base32 the way authenticator apps expect it:
    uppercase RFC 4648 alphabet without ``=`` padding.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def decode_key(key: str) -> bytes:
    """
    Decodes a base32 key into raw bytes.

    Case does not matter, missing padding is restored, and the spaces or
    hyphens apps use to group keys for display are ignored.

    :param key: base32 text
    :returns: raw key bytes
    :raises DecodingError: on characters outside the base32 alphabet
    """
    key = "".join(key.split()).replace("-", "").rstrip("=")
    missing_padding = len(key) % 8
    if missing_padding != 0:
        key += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(key, casefold=True)
    except (binascii.Error, ValueError) as e:
        raise DecodingError("Invalid base32 key") from e


def secret_key(length: Optional[int] = 20) -> bytes:
    """
    Returns ``length`` bytes from the operating system CSPRNG.

    A falsy length gives an empty secret.
    """
    if not length:
        return b""
    if length < 0:
        raise ConfigurationError("secret length must not be negative")
    return secrets.token_bytes(length)


def random_base32(length: int = 32, chars: Sequence[str] = BASE32_CHARS) -> str:
    # otpauth secrets are not padded; lengths that are not a multiple of 8
    # still decode since decode_key restores the padding.
    if length < 32:
        raise ConfigurationError("Secrets should be at least 160 bits")
    return "".join(secrets.choice(chars) for _ in range(length))


def random_hex(length: int = 40, chars: Sequence[str] = HEX_CHARS) -> str:
    if length < 40:
        raise ConfigurationError("Secrets should be at least 160 bits")
    return "".join(secrets.choice(chars) for _ in range(length))
