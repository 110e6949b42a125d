import pytest

from simpletotp import build_enrollment_uri
from simpletotp.exceptions import InvalidArgument
from simpletotp.utils import strings_equal

SECRET = "GJQTCOBSMI2TGZTD"


def test_builds_expected_uri():
    uri = build_enrollment_uri(SECRET, "user@example.com", "My Service")
    assert uri == "otpauth://totp/My%20Service:user%40example.com?secret=GJQTCOBSMI2TGZTD&issuer=My%20Service"


def test_normalizes_secret():
    uri = build_enrollment_uri(" gjqt-cobs mi2t-gztd ", "client-1", "ACME")
    assert "secret=" + SECRET in uri
    assert uri.startswith("otpauth://totp/ACME:client-1?")


def test_trims_username_and_issuer():
    uri = build_enrollment_uri(SECRET, "  alice  ", "\tACME ")
    assert uri == "otpauth://totp/ACME:alice?secret=GJQTCOBSMI2TGZTD&issuer=ACME"


def test_encodes_reserved_characters():
    uri = build_enrollment_uri(SECRET, "a:b/c?d", "A&B=C")
    assert uri == "otpauth://totp/A%26B%3DC:a%3Ab%2Fc%3Fd?secret=GJQTCOBSMI2TGZTD&issuer=A%26B%3DC"


def test_keeps_padding_percent_encoded():
    uri = build_enrollment_uri("MZXW6===", "alice", "ACME")
    assert "secret=MZXW6%3D%3D%3D&" in uri


@pytest.mark.parametrize(
    "secret,username,issuer,kind",
    [
        ("", "user", "issuer", "empty_secret"),
        (" - ", "user", "issuer", "empty_secret"),
        ("ABCD1", "user", "issuer", "alphabet"),
        ("MZ", "user", "issuer", "trailing_bits"),
        (SECRET, "   ", "issuer", "empty_username"),
        (SECRET, "", "issuer", "empty_username"),
        (SECRET, "user", "   ", "empty_issuer"),
    ],
)
def test_rejects_invalid_arguments(secret, username, issuer, kind):
    with pytest.raises(InvalidArgument) as excinfo:
        build_enrollment_uri(secret, username, issuer)
    assert excinfo.value.kind == kind


def test_strings_equal():
    assert strings_equal("046352", "046352")
    assert not strings_equal("046352", "046353")
    # fullwidth digits normalize to ASCII
    assert strings_equal("０４６３５２", "046352")
