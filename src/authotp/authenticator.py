"""
Google Authenticator compatible TOTP.

Keys are exchanged as unpadded base32 text and handed to the TOTP functions
as raw bytes, so ``Options.encoding`` only applies when ``authenticator.options``
is passed to those functions with a text secret (``hex`` by default).
"""
from typing import Any, Optional, Union

from . import totp, utils
from .errors import InputError
from .keys import decode_key, encode_key, secret_key
from .options import AUTHENTICATOR_DEFAULTS, Options, merge_options


class Authenticator(object):
    """
    Generates and checks Google Authenticator codes for base32 keys.

    Keyword arguments are option overrides, see :class:`authotp.options.Options`.

    >>> auth = Authenticator(window=1)
    >>> key = auth.generate_secret()
    >>> auth.check(auth.generate(key), key)
    True
    """

    def __init__(self, **options: Any) -> None:
        self._options = merge_options(AUTHENTICATOR_DEFAULTS, options)

    @property
    def options(self) -> Options:
        return self._options

    @options.setter
    def options(self, overrides: Any) -> None:
        # Options is frozen, the record is replaced rather than mutated.
        self._options = merge_options(self._options, overrides)

    def reset_options(self) -> None:
        self._options = AUTHENTICATOR_DEFAULTS

    def with_options(self, **overrides: Any) -> "Authenticator":
        return Authenticator(**merge_options(self._options, overrides).as_dict())

    def _secret(self, key: Union[None, str, bytes], opts: Options) -> bytes:
        key = key or opts.secret
        if key is None:
            raise InputError("a secret is required")
        if isinstance(key, (bytes, bytearray)):
            return bytes(key)
        return decode_key(key)

    def encode(self, raw: Union[str, bytes]) -> str:
        return encode_key(raw)

    def decode(self, key: str) -> bytes:
        return decode_key(key)

    def generate_secret(self, length: Optional[int] = 20) -> str:
        """
        Generates a random key.

        :param length: secret length in bytes, not the length of the encoded key
        :returns: base32 encoded key, empty for a falsy length
        """
        if not length:
            return ""
        return encode_key(secret_key(length))

    def generate(self, secret: Optional[str] = None, for_time: totp.ForTime = None) -> str:
        """
        :param secret: base32 encoded key, defaults to ``options.secret``
        :param for_time: time to generate the code for, defaults to now
        :returns: the current code
        """
        opts = self._options
        return totp.token(self._secret(secret, opts), opts, for_time)

    def check(self, otp: Union[str, int], secret: Optional[str] = None, for_time: totp.ForTime = None) -> bool:
        return self.check_delta(otp, secret, for_time) is not None

    def check_delta(
        self, otp: Union[str, int], secret: Optional[str] = None, for_time: totp.ForTime = None
    ) -> Optional[int]:
        """
        Checks validity of the code.

        :param otp: the code to check
        :param secret: base32 encoded key, defaults to ``options.secret``
        :param for_time: time to check against, defaults to now
        :returns: the step offset within ``options.window`` at which the code
            matched, or None
        """
        opts = self._options
        return totp.check_delta(otp, self._secret(secret, opts), opts, for_time)

    def keyuri(self, user: str = "user", service: str = "service", secret: str = "") -> str:
        """
        :param user: the name/id of your user
        :param service: the name of your service
        :param secret: base32 encoded key
        :returns: otpauth uri, e.g. otpauth://totp/service:user?secret=NKEIBAOUFA&issuer=service
        """
        opts = self._options
        return utils.build_uri(
            secret,
            name=user,
            issuer=service,
            algorithm=opts.algorithm,
            digits=opts.digits,
            period=opts.step,
        )

    def __repr__(self) -> str:
        opts = self._options
        return "Authenticator(algorithm={!r}, digits={}, step={}, window={})".format(
            opts.algorithm, opts.digits, opts.step, opts.window
        )
