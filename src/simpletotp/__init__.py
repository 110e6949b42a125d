from typing import Union

from . import base32, utils
from .exceptions import InvalidArgument as InvalidArgument
from .otp import DEFAULT_DIGITS
from .otp import OTP as OTP
from .totp import TOTP as TOTP


def generate_secret(seed: Union[bytes, str, None] = None) -> str:
    """
    Creates a base32 secret for a TOTP app.

    :param seed: raw secret; text is encoded as UTF-8. When omitted a
        random 5 byte seed is used, giving a 16 character secret.
    :returns: unpadded base32 secret
    """
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    return base32.encode(seed or b"")


def decode_secret(encoded: str) -> bytes:
    """
    Recovers the raw secret bytes from a base32 secret.

    :raises InvalidArgument: if the secret is empty or malformed
    """
    return base32.decode(encoded)


def generate_totp(secret: str, time: Union[int, str, None] = None, digits: int = DEFAULT_DIGITS) -> str:
    """
    Generates the TOTP code of ``secret``.

    :param secret: base32 secret
    :param time: time step counter, None for the current time step
    :param digits: code length, 1 to 9
    :returns: zero padded numeric code
    """
    return TOTP(secret, digits=digits).at(time)


def build_enrollment_uri(secret: str, username: str, issuer: str) -> str:
    """
    Builds the ``otpauth://totp/...`` URI authenticator apps enroll from.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format
    """
    return utils.build_uri(secret, name=username, issuer=issuer)
