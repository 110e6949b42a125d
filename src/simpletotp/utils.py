import logging
import unicodedata
from hmac import compare_digest
from urllib.parse import quote

from . import base32
from .exceptions import InvalidArgument

logger = logging.getLogger(__name__)


def build_uri(secret: str, name: str, issuer: str) -> str:
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app.

    For module-internal use.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the totp secret, formatting spaces and hyphens allowed
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :returns: provisioning uri
    :raises InvalidArgument: if a field is empty or the secret is not valid base32
    """
    secret = base32.normalize(secret)
    name = name.strip()
    issuer = issuer.strip()

    if not secret:
        raise InvalidArgument("Secret string cannot be empty", "empty_secret")
    if not name:
        raise InvalidArgument("Username cannot be empty", "empty_username")
    if not issuer:
        raise InvalidArgument("Issuer cannot be empty", "empty_issuer")

    # only validating here, the URI carries the base32 text
    base32.decode(secret)

    encoded_issuer = quote(issuer, safe="")
    label = encoded_issuer + ":" + quote(name, safe="")
    uri = "otpauth://totp/{0}?secret={1}&issuer={2}".format(label, quote(secret, safe=""), encoded_issuer)
    logger.debug("Built provisioning URI for issuer %r", issuer)
    return uri


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
