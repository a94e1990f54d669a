"""
Counter based one-time passwords (RFC 4226).

Secrets given as text are read with ``Options.encoding``, which is ``ascii``
for plain HOTP so the RFC test secret ``"12345678901234567890"`` works as is.
"""
from typing import Any, Mapping, Optional, Union

from . import utils
from .errors import InputError
from .keys import secret_bytes
from .options import HOTP_DEFAULTS, Options, merge_options
from .otp import generate_otp

Secret = Union[str, bytes]


def resolve_options(options: Union[None, Options, Mapping[str, Any]], defaults: Options = HOTP_DEFAULTS) -> Options:
    if isinstance(options, Options):
        return options
    return merge_options(defaults, options)


def resolve_secret(secret: Optional[Secret], opts: Options) -> bytes:
    """
    Returns the raw key for ``secret``, falling back to ``opts.secret``.

    An empty secret is allowed and gives a deterministic code; only a
    missing one is an error.
    """
    if secret is None:
        secret = opts.secret
    if secret is None:
        raise InputError("a secret is required")
    return secret_bytes(secret, opts.encoding)


def token(secret: Optional[Secret], counter: int, options: Union[None, Options, Mapping[str, Any]] = None) -> str:
    """
    Generates the OTP for the given counter.

    :param secret: shared secret, bytes or text in ``options.encoding``
    :param counter: the OTP HMAC counter
    :param options: Options record or mapping of overrides
    :returns: OTP
    """
    opts = resolve_options(options)
    return generate_otp(resolve_secret(secret, opts), counter, opts.digest(), opts.digits)


def check(
    otp: Union[str, int],
    secret: Optional[Secret],
    counter: int,
    options: Union[None, Options, Mapping[str, Any]] = None,
) -> bool:
    """
    Verifies the OTP passed in against the OTP for ``counter``.

    :param otp: the OTP to check against
    :param secret: shared secret
    :param counter: the OTP HMAC counter
    """
    return utils.strings_equal(str(otp), token(secret, counter, options))
