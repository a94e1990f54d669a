"""
Command line access to the Authenticator.

    authotp secret [--length 20]
    authotp token --secret KEY [--digits 8] [--step 60]
    authotp check CODE --secret KEY [--window 1]
    authotp uri --user alice@example.com --service MyService --secret KEY

The secret can also be given through the AUTHOTP_SECRET environment variable.
"""
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .authenticator import Authenticator
from .errors import InputError, OTPError
from .options import ALGORITHMS

logger = logging.getLogger(__name__)

SECRET_ENV = "AUTHOTP_SECRET"


def _authenticator(args: argparse.Namespace) -> Authenticator:
    overrides: Dict[str, Any] = {
        "algorithm": args.algorithm,
        "digits": args.digits,
        "step": args.step,
    }
    if args.epoch is not None:
        overrides["epoch"] = args.epoch
    if getattr(args, "window", None) is not None:
        overrides["window"] = args.window
    return Authenticator(**overrides)


def _secret(args: argparse.Namespace) -> str:
    secret = args.secret or os.environ.get(SECRET_ENV)
    if not secret:
        raise InputError("no secret given; pass --secret or set {}".format(SECRET_ENV))
    return secret


def cmd_secret(args: argparse.Namespace) -> int:
    print(_authenticator(args).generate_secret(args.length))
    return 0


def cmd_token(args: argparse.Namespace) -> int:
    print(_authenticator(args).generate(_secret(args)))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    delta = _authenticator(args).check_delta(args.code, _secret(args))
    if delta is None:
        print("invalid")
        return 1
    print("valid (delta {:+d})".format(delta))
    return 0


def cmd_uri(args: argparse.Namespace) -> int:
    print(_authenticator(args).keyuri(args.user, args.service, _secret(args)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--algorithm", choices=sorted(ALGORITHMS), help="HMAC digest (default sha1)")
    common.add_argument("--digits", type=int, help="Number of OTP digits (default 6)")
    common.add_argument("--step", type=int, help="Seconds per time step (default 30)")
    common.add_argument("--epoch", type=int, help="Unix time counters are measured from (default 0)")
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    keyed = argparse.ArgumentParser(add_help=False)
    keyed.add_argument("--secret", help="Base32 key, defaults to ${}".format(SECRET_ENV))

    p = argparse.ArgumentParser(prog="authotp", description="Google Authenticator compatible TOTP codes")
    p.add_argument("--version", action="version", version="%(prog)s " + __version__)
    sub = p.add_subparsers(dest="cmd")

    ps = sub.add_parser("secret", parents=[common], help="Generate a random base32 key")
    ps.add_argument("--length", type=int, default=20, help="Key length in bytes")
    ps.set_defaults(func=cmd_secret)

    pt = sub.add_parser("token", parents=[common, keyed], help="Print the current code")
    pt.set_defaults(func=cmd_token)

    pc = sub.add_parser("check", parents=[common, keyed], help="Check a code")
    pc.add_argument("code", help="Code to check")
    pc.add_argument("--window", type=int, help="Allowed +/- step window (default 0)")
    pc.set_defaults(func=cmd_check)

    pu = sub.add_parser("uri", parents=[common, keyed], help="Print the otpauth URI for a key")
    pu.add_argument("--user", default="user", help="Account label")
    pu.add_argument("--service", default="service", help="Issuer label")
    pu.set_defaults(func=cmd_uri)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except OTPError as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print("error: {}".format(e), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
