import datetime
import logging
import re
import time
from typing import Optional, Union

from . import utils
from .exceptions import InvalidArgument
from .otp import DEFAULT_DIGITS, OTP

logger = logging.getLogger(__name__)

INTERVAL = 30

_INTEGER_RE = re.compile(r"-?\d+", re.ASCII)


def resolve_counter(value: Union[int, str, None] = None) -> int:
    """
    Turns the caller's notion of "time" into a TOTP counter.

    ``None`` means the current time step; integers and integer-looking
    strings are taken as the counter itself.

    :param value: explicit counter, or None for the clock
    :returns: non-negative counter
    :raises InvalidArgument: for floats, non numeric strings or negative values
    """
    if value is None:
        return int(time.time()) // INTERVAL

    # bool is an int subclass but never a meaningful counter
    if isinstance(value, int) and not isinstance(value, bool):
        counter = value
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        counter = int(value)
    else:
        logger.debug("Rejected time value of type %s", type(value).__name__)
        raise InvalidArgument("Time value must be an integer or null", "time_type")

    if counter < 0:
        raise InvalidArgument("Time must be greater than or equal to 0", "negative_time")
    return counter


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
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
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param name: account name
        :param issuer: issuer
        """
        self.interval = INTERVAL
        super().__init__(s=s, digits=digits, name=name, issuer=issuer)

    def at(self, counter: Union[int, str, None] = None) -> str:
        """
        Generates the OTP for the given time step counter.

        :param counter: the time step counter, None for the current one
        :returns: OTP
        """
        return self.generate_otp(resolve_counter(counter))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.generate_otp(self.timecode(time.time()))

    def verify(self, otp: str, counter: Union[int, str, None] = None) -> bool:
        """
        Verifies the OTP passed in against a single time step, the current
        one by default. No neighbouring steps are accepted.

        :param otp: the OTP to check against
        :param counter: the time step counter to check, None for the current one
        """
        return utils.strings_equal(str(otp), self.at(counter))

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :param name: name of the user account
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        issuer = issuer_name if issuer_name else self.issuer
        return utils.build_uri(self.secret, name=name if name else self.name, issuer=issuer or "")

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Accepts either a timezone aware datetime or a Unix timestamp.
        Naive datetimes are taken as local time.
        """
        if isinstance(for_time, datetime.datetime):
            for_time = for_time.timestamp()
        return int(for_time // self.interval)
