class OTPError(Exception):
    """
    Base class for errors raised by authotp.
    """


class ConfigurationError(OTPError, ValueError):
    """
    An option is out of range or unsupported: non-positive digits or step,
    negative window, unknown algorithm or encoding.
    """


class DecodingError(OTPError, ValueError):
    """
    A secret could not be decoded from its text encoding.
    """


class InputError(OTPError, ValueError):
    """
    A required input, such as the secret, is missing.
    """
