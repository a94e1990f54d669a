import dataclasses
import hashlib
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .errors import ConfigurationError

ALGORITHMS: Dict[str, Callable[..., Any]] = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}

ENCODINGS = ("ascii", "latin-1", "utf-8", "hex", "base32", "base64")

# Fields where an explicit None is a real value rather than "keep the default".
NULLABLE_FIELDS = ("epoch", "secret")


@dataclasses.dataclass(frozen=True)
class Options:
    """
    Settings shared by every OTP operation.

    :param algorithm: name of the HMAC digest, one of sha1, sha256, sha512
    :param digits: length of the generated code
    :param encoding: text encoding of secrets given as ``str``
    :param epoch: reference instant (unix seconds) counters are measured from;
        None means 0
    :param step: seconds per counter increment
    :param window: number of counters checked on each side during verification
    :param secret: secret used when a call does not pass one
    """

    algorithm: str = "sha1"
    digits: int = 6
    encoding: str = "ascii"
    epoch: Optional[float] = None
    step: int = 30
    window: int = 0
    # kept out of repr so logging an Options record never prints the key
    secret: Union[None, str, bytes] = dataclasses.field(default=None, repr=False)

    def __post_init__(self) -> None:
        algorithm = str(self.algorithm).lower().replace("-", "")
        if algorithm not in ALGORITHMS:
            raise ConfigurationError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512")
        object.__setattr__(self, "algorithm", algorithm)

        encoding = str(self.encoding).lower()
        if encoding not in ENCODINGS:
            raise ConfigurationError("unsupported secret encoding: {}".format(self.encoding))
        object.__setattr__(self, "encoding", encoding)

        if not _is_int(self.digits) or self.digits <= 0:
            raise ConfigurationError("digits must be a positive integer")
        if self.digits > 10:
            raise ConfigurationError("digits must be no greater than 10")
        if not _is_int(self.step) or self.step <= 0:
            raise ConfigurationError("step must be a positive integer")
        if not _is_int(self.window) or self.window < 0:
            raise ConfigurationError("window must be a non-negative integer")

    def digest(self) -> Callable[..., Any]:
        return ALGORITHMS[self.algorithm]

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


FIELDS = tuple(f.name for f in dataclasses.fields(Options))

HOTP_DEFAULTS = Options()
TOTP_DEFAULTS = HOTP_DEFAULTS
AUTHENTICATOR_DEFAULTS = Options(encoding="hex")


def merge_options(defaults: Options, overrides: Optional[Mapping[str, Any]] = None) -> Options:
    """
    Returns ``defaults`` with the fields named in ``overrides`` replaced.

    The merge is shallow and field-by-field: a name present in ``overrides``
    wins over ``defaults``, anything else is kept. ``None`` keeps the default
    except for ``epoch`` and ``secret``, where it is a meaningful value.
    Unknown names raise ConfigurationError instead of being carried along.

    :param defaults: options to start from
    :param overrides: mapping of field name to value, or an Options instance
    :returns: a new Options record
    """
    if overrides is None:
        return defaults
    if isinstance(overrides, Options):
        overrides = overrides.as_dict()

    unknown = sorted(set(overrides) - set(FIELDS))
    if unknown:
        raise ConfigurationError("unknown option(s): {}".format(", ".join(unknown)))

    changes = {k: v for k, v in overrides.items() if v is not None or k in NULLABLE_FIELDS}
    return dataclasses.replace(defaults, **changes)
