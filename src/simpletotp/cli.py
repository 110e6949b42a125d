import argparse
import logging
import sys
from typing import List, Optional

from . import build_enrollment_uri, decode_secret, generate_secret, generate_totp
from .exceptions import InvalidArgument
from .otp import DEFAULT_DIGITS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simpletotp", description="Simple TOTP secret and token generator.")
    parser.add_argument("-v", "--verbose", help="Log debug messages.", action="store_true")
    commands = parser.add_subparsers(dest="command", required=True)

    secret = commands.add_parser("secret", help="Print a new base32 secret.")
    secret.add_argument("--seed", help="Seed text to encode instead of random bytes.")

    code = commands.add_parser("code", help="Print the TOTP code for a secret.")
    code.add_argument("secret", help="Base32 secret.")
    code.add_argument("-t", "--time", dest="time", help="Time step counter, defaults to the current one.")
    code.add_argument("-d", "--digits", help="Length of the one-time password.", default=DEFAULT_DIGITS, type=int)

    uri = commands.add_parser("uri", help="Print the otpauth:// enrollment URI.")
    uri.add_argument("secret", help="Base32 secret.")
    uri.add_argument("username", help="Account name shown in the authenticator app.")
    uri.add_argument("issuer", help="Organization shown in the authenticator app.")

    decode = commands.add_parser("decode", help="Print the raw secret as hex.")
    decode.add_argument("secret", help="Base32 secret.")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == "secret":
            print(generate_secret(args.seed))
        elif args.command == "code":
            print(generate_totp(args.secret, args.time, args.digits))
        elif args.command == "uri":
            print(build_enrollment_uri(args.secret, args.username, args.issuer))
        elif args.command == "decode":
            print(decode_secret(args.secret).hex())
    except InvalidArgument as exc:
        logger.debug("Command %s failed: %s", args.command, exc.kind)
        print("error: {}".format(exc), file=sys.stderr)
        return 2
    return 0
