from typing import Any, Dict
from urllib.parse import parse_qsl, unquote, urlparse

from . import hotp as hotp
from . import totp as totp
from .authenticator import Authenticator as Authenticator
from .errors import ConfigurationError as ConfigurationError
from .errors import DecodingError as DecodingError
from .errors import InputError as InputError
from .errors import OTPError as OTPError
from .keys import decode_key as decode_key
from .keys import encode_key as encode_key
from .keys import random_base32 as random_base32
from .keys import random_hex as random_hex
from .keys import secret_key as secret_key
from .options import Options as Options
from .options import merge_options as merge_options
from .utils import build_uri as build_uri

__version__ = "1.0.0"

default_authenticator = Authenticator()


def parse_uri(uri: str) -> Authenticator:
    """
    Parses a TOTP provisioning URI into an Authenticator with the secret
    pinned in its options.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the totp URI to parse
    :returns: Authenticator
    """
    secret = None
    issuer = None
    digits = None
    options: Dict[str, Any] = {}

    # Parse before unquoting: an escaped ":" or "&" inside a label or value
    # must not act as a separator.
    parsed_uri = urlparse(uri)

    if parsed_uri.scheme != "otpauth":
        raise InputError("Not an otpauth URI")
    if parsed_uri.netloc != "totp":
        raise InputError("Not a supported OTP type")

    accountinfo_parts = parsed_uri.path[1:].split(":", 1)
    if len(accountinfo_parts) == 2:
        issuer = unquote(accountinfo_parts[0])

    for key, value in parse_qsl(parsed_uri.query):
        if key == "secret":
            secret = value
        elif key == "issuer":
            if issuer is not None and issuer != value:
                raise InputError("If issuer is specified in both label and parameters, it should be equal.")
            issuer = value
        elif key == "algorithm":
            if value.upper() not in ("SHA1", "SHA256", "SHA512"):
                raise ConfigurationError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512")
            options["algorithm"] = value.lower()
        elif key == "digits":
            digits = _int_param(key, value)
            options["digits"] = digits
        elif key == "period":
            options["step"] = _int_param(key, value)

    if digits is not None and digits not in [6, 7, 8]:
        raise ConfigurationError("Digits may only be 6, 7, or 8")
    if not secret:
        raise InputError("No secret found in URI")

    return Authenticator(secret=secret, **options)


def _int_param(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InputError("{} must be an integer, got {!r}".format(key, value)) from e
