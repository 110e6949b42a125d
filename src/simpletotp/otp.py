import hashlib
import hmac
from typing import Optional

from . import base32
from .exceptions import InvalidArgument

DEFAULT_DIGITS = 6
MIN_DIGITS = 1
# 10**9 is the largest power of ten below the 31 bit truncated value
MAX_DIGITS = 9
MAX_COUNTER = 2**64 - 1


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param digits: number of integers in the OTP, between 1 and 9
        :param name: account name
        :param issuer: issuer
        """
        if not s or not s.strip():
            raise InvalidArgument("Secret string cannot be empty", "empty_secret")
        if isinstance(digits, bool) or not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
            raise InvalidArgument(
                "OTP length must be between {} and {}".format(MIN_DIGITS, MAX_DIGITS), "digits_range"
            )
        self.secret = s
        self.digits = digits
        self.digest = hashlib.sha1
        self.name = name or "Secret"
        self.issuer = issuer

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually the integer computed from the Unix timestamp
        """
        # Implements RFC 4226
        if input < 0:
            raise InvalidArgument("Time must be greater than or equal to 0", "negative_time")
        if input > MAX_COUNTER:
            raise InvalidArgument("Time counter must fit in 64 bits", "time_range")

        hasher = hmac.new(self.byte_secret(), self.int_to_bytestring(input), self.digest)
        hmac_hash = bytearray(hasher.digest())
        # dynamic truncation: the low nibble of the last byte picks a 4 byte window
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        return str(code % 10**self.digits).rjust(self.digits, "0")

    def byte_secret(self) -> bytes:
        return base32.decode(self.secret)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        result = bytearray()
        while i != 0:
            result.append(i & 0xFF)
            i >>= 8
        # bytes were collected least significant first
        return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))
