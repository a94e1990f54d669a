"""
Time based one-time passwords (RFC 6238) and windowed verification.
"""
import calendar
import datetime
import logging
import time
from typing import Any, Iterator, Mapping, Optional, Union

from . import hotp, utils
from .options import TOTP_DEFAULTS, Options

logger = logging.getLogger(__name__)

ForTime = Union[None, int, float, datetime.datetime]


def _seconds(for_time: ForTime) -> float:
    if for_time is None:
        return time.time()
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            return calendar.timegm(for_time.utctimetuple())
        return time.mktime(for_time.timetuple())
    return for_time


def timecode(for_time: ForTime = None, options: Union[None, Options, Mapping[str, Any]] = None) -> int:
    """
    Returns the number of whole steps elapsed between ``options.epoch`` and
    ``for_time``.

    A time before the epoch gives counter 0 rather than a negative counter.

    :param for_time: unix seconds or a datetime; None reads the clock once
    :param options: Options record or mapping of overrides
    """
    opts = hotp.resolve_options(options, TOTP_DEFAULTS)
    elapsed = _seconds(for_time) - (opts.epoch or 0)
    return max(0, int(elapsed // opts.step))


def token(
    secret: Optional[hotp.Secret],
    options: Union[None, Options, Mapping[str, Any]] = None,
    for_time: ForTime = None,
) -> str:
    """
    Generates the OTP for the time step containing ``for_time``.
    """
    opts = hotp.resolve_options(options, TOTP_DEFAULTS)
    return hotp.token(secret, timecode(for_time, opts), opts)


def offsets(window: int) -> Iterator[int]:
    """
    Yields 0, -1, 1, -2, 2, ... up to +/- ``window``, nearest first.
    """
    yield 0
    for distance in range(1, window + 1):
        yield -distance
        yield distance


def check_delta(
    otp: Union[str, int],
    secret: Optional[hotp.Secret],
    options: Union[None, Options, Mapping[str, Any]] = None,
    for_time: ForTime = None,
) -> Optional[int]:
    """
    Verifies the OTP against the current time step and up to
    ``options.window`` steps on either side of it.

    :param otp: the OTP to check against
    :param secret: shared secret
    :param options: Options record or mapping of overrides
    :param for_time: time to check against, defaults to now
    :returns: offset of the matching step, or None when nothing in the window matches
    """
    opts = hotp.resolve_options(options, TOTP_DEFAULTS)
    key = hotp.resolve_secret(secret, opts)
    counter = timecode(for_time, opts)
    otp = str(otp)

    for delta in offsets(opts.window):
        if counter + delta < 0:
            continue
        expected = hotp.token(key, counter + delta, opts)
        if utils.strings_equal(otp, expected):
            logger.debug("otp matched at counter %d (delta %d)", counter + delta, delta)
            return delta

    logger.debug("otp did not match within %d step(s) of counter %d", opts.window, counter)
    return None


def check(
    otp: Union[str, int],
    secret: Optional[hotp.Secret],
    options: Union[None, Options, Mapping[str, Any]] = None,
    for_time: ForTime = None,
) -> bool:
    return check_delta(otp, secret, options, for_time) is not None
