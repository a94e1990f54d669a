import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode, urlparse

from .errors import InputError


def build_uri(
    secret: str,
    name: str,
    issuer: Optional[str] = None,
    algorithm: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
    **kwargs,
) -> str:
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the base32 encoded secret, never the raw bytes
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param algorithm: the algorithm used in the OTP generation.
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :param kwargs: other query string parameters to include in the URI
    :returns: provisioning uri
    """
    if isinstance(secret, (bytes, bytearray)):
        raise InputError("secret must be the encoded key, not raw bytes")

    # Only values that differ from what authenticator apps assume are included.
    is_algorithm_set = algorithm is not None and algorithm.lower() != "sha1"
    is_digits_set = digits is not None and digits != 6
    is_period_set = period is not None and period != 30

    base_uri = "otpauth://totp/{0}?{1}"
    url_args: Dict[str, Union[None, int, str]] = {"secret": secret}

    # ":" separates issuer and account and "/" would start a new path segment,
    # so neither may appear unescaped in a label part.
    label = quote(name, safe="")
    if issuer is not None:
        label = quote(issuer, safe="") + ":" + label
        url_args["issuer"] = issuer

    if is_algorithm_set:
        url_args["algorithm"] = algorithm.upper()  # type: ignore
    if is_digits_set:
        url_args["digits"] = digits
    if is_period_set:
        url_args["period"] = period
    for k, v in kwargs.items():
        if not isinstance(v, str):
            raise InputError("All otpauth uri parameters must be strings")
        if k == "image":
            image_uri = urlparse(v)
            if image_uri.scheme != "https" or not image_uri.netloc or not image_uri.path:
                raise InputError("{} is not a valid url".format(image_uri))
        url_args[k] = v

    return base_uri.format(label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Compares two codes in constant time.

    Both sides are NFKC normalized first, so full-width or styled digits
    typed on a phone compare equal to ASCII ones. Only a length mismatch is
    observable through timing.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
