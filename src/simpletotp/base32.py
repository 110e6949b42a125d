import functools
import logging
import re
import secrets
from types import MappingProxyType
from typing import Mapping

from .exceptions import InvalidArgument

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
DEFAULT_SEED_BYTES = 5

# RFC 4648: the only "=" runs that complete an 8 character block
PADDING_LENGTHS = (1, 3, 4, 6)
# Block remainders an unpadded encoding can end with
UNPADDED_REMAINDERS = (0, 2, 4, 5, 7)

_ALPHABET_RE = re.compile(r"[A-Z2-7]+")


@functools.lru_cache(maxsize=None)
def alphabet_map() -> Mapping[str, int]:
    """
    Returns the read-only character -> 5 bit value table, built on first use.
    """
    return MappingProxyType({char: value for value, char in enumerate(ALPHABET)})


def normalize(secret: str) -> str:
    """
    Strips the formatting aids people type into secrets: surrounding
    whitespace, inner spaces and hyphens. ASCII input is uppercased.

    >>> normalize(" gjqt-cobs mi2t-gztd ")
    'GJQTCOBSMI2TGZTD'
    """
    cleaned = secret.strip().replace(" ", "").replace("-", "")
    # non-ASCII is left as is so that it fails the alphabet check
    return cleaned.upper() if cleaned.isascii() else cleaned


def _reject(message: str, kind: str) -> InvalidArgument:
    logger.debug("Rejected base32 secret: %s", kind)
    return InvalidArgument(message, kind)


def encode(data: bytes = b"") -> str:
    """
    Encodes bytes as unpadded base32.

    An empty input is replaced by a fresh random seed: the hex text of
    ``DEFAULT_SEED_BYTES`` random bytes, which always encodes to 16 characters.

    :param data: raw secret bytes
    :returns: base32 string over ``A-Z2-7`` without "=" padding
    """
    if not data:
        logger.debug("No seed supplied, generating a random one")
        data = secrets.token_hex(DEFAULT_SEED_BYTES).encode("ascii")

    buffer = 0
    bit_count = 0
    chars = []
    for byte in data:
        buffer = (buffer << 8) | byte
        bit_count += 8
        while bit_count >= 5:
            bit_count -= 5
            chars.append(ALPHABET[(buffer >> bit_count) & 0x1F])
        # keep only the bits not yet emitted
        buffer &= (1 << bit_count) - 1

    if bit_count > 0:
        chars.append(ALPHABET[(buffer << (5 - bit_count)) & 0x1F])

    return "".join(chars)


def decode(secret: str) -> bytes:
    """
    Decodes a base32 secret, validating it strictly against RFC 4648.

    Spaces, hyphens and lowercase letters are tolerated. Padding is optional,
    but when present it has to be a well-formed suffix.

    :param secret: base32 encoded secret
    :returns: raw secret bytes
    :raises InvalidArgument: if the secret is empty or malformed
    """
    if not secret.strip():
        raise _reject("Secret string cannot be empty", "empty_secret")

    value = normalize(secret)

    padding_length = 0
    first_padding = value.find("=")
    if first_padding != -1:
        padding_length = len(value) - first_padding
        if value[first_padding:] != "=" * padding_length:
            raise _reject("Padding is allowed only at the end", "padding_position")
        if len(value) % 8 != 0:
            raise _reject("Invalid padded secret length", "padded_length")
        if padding_length not in PADDING_LENGTHS:
            raise _reject("Invalid padding symbols count", "padding_count")
        value = value[:first_padding]

    if not value:
        raise _reject("Secret string cannot be empty", "empty_secret")

    if not _ALPHABET_RE.fullmatch(value):
        raise _reject("Invalid secret symbol", "alphabet")

    if padding_length == 0 and len(value) % 8 not in UNPADDED_REMAINDERS:
        raise _reject("Invalid secret symbols count", "length_remainder")

    table = alphabet_map()
    buffer = 0
    bit_count = 0
    decoded = bytearray()
    for char in value:
        buffer = (buffer << 5) | table[char]
        bit_count += 5
        if bit_count >= 8:
            bit_count -= 8
            decoded.append((buffer >> bit_count) & 0xFF)
        buffer &= (1 << bit_count) - 1

    # a canonical encoding fills the last character with zero bits
    if buffer != 0:
        raise _reject("Invalid trailing bits in secret", "trailing_bits")

    return bytes(decoded)
