"""Tests for the otpauth:// provisioning URI codec."""

import pytest

from hotp_core.algorithms import HMACAlgorithm
from hotp_core.config import build_config
from hotp_core.errors import ErrorKind, InvalidArgument, InvalidEncoding, MalformedURI
from hotp_core.otpauth import build_uri, config_from_uri, parse_uri

SECRET = b"JBSWY3DPEHPK3PXP"


def test_build_uri_with_account():
    uri = build_uri(build_config(SECRET), 5, "ACME", "alice@example.com")
    assert uri == (
        "otpauth://hotp/ACME:alice@example.com"
        "?secret=JBSWY3DPEHPK3PXP&digits=6&algorithm=SHA1&issuer=ACME&counter=5"
    )


def test_build_uri_without_account_drops_suffix():
    uri = build_uri(build_config(SECRET, digits=8, algorithm="sha256"), 0, "ACME")
    assert uri.startswith("otpauth://hotp/ACME?")
    assert "digits=8" in uri
    assert "algorithm=SHA256" in uri


def test_build_uri_percent_encodes_label_and_query():
    uri = build_uri(build_config(SECRET), 0, "My Service", "bob")
    assert uri.startswith("otpauth://hotp/My%20Service:bob?")
    assert "issuer=My%20Service" in uri


@pytest.mark.parametrize("counter", [-1, "0", None])
def test_build_uri_rejects_bad_counter(counter):
    with pytest.raises(InvalidArgument):
        build_uri(build_config(SECRET), counter, "ACME")


@pytest.mark.parametrize("digits", [6, 7, 8])
@pytest.mark.parametrize("algorithm", list(HMACAlgorithm))
def test_round_trip(digits, algorithm):
    config = build_config(SECRET, digits=digits, algorithm=algorithm)
    parsed = parse_uri(build_uri(config, 42, "My Service", "alice@example.com"))
    assert parsed.config == config
    assert parsed.issuer == "My Service"
    assert parsed.account == "alice@example.com"
    assert parsed.counter == "42"


def test_round_trip_without_account():
    config = build_config(SECRET)
    parsed = parse_uri(build_uri(config, 0, "ACME"))
    assert parsed.config == config
    assert parsed.issuer == "ACME"
    assert parsed.account == ""


def test_parse_defaults_when_optional_fields_absent():
    config = config_from_uri("otpauth://hotp/ACME:alice?secret=JBSWY3DPEHPK3PXP&counter=3")
    assert config.digits == 6
    assert config.algorithm is HMACAlgorithm.SHA1
    assert config.secret == SECRET


def test_parse_algorithm_is_case_insensitive():
    config = config_from_uri("otpauth://hotp/ACME?secret=JBSWY3DPEHPK3PXP&algorithm=sha512")
    assert config.algorithm is HMACAlgorithm.SHA512


def test_parse_issuer_falls_back_to_label():
    parsed = parse_uri("otpauth://hotp/ACME:alice?secret=JBSWY3DPEHPK3PXP")
    assert parsed.issuer == "ACME"
    assert parsed.account == "alice"
    assert parsed.counter is None


def test_missing_secret_is_invalid_argument():
    with pytest.raises(InvalidArgument, match="Secret query parameter must be set") as exc:
        parse_uri("otpauth://hotp/ACME?digits=6&counter=0")
    assert not isinstance(exc.value, MalformedURI)


def test_empty_secret_is_rejected():
    with pytest.raises(InvalidArgument):
        parse_uri("otpauth://hotp/ACME?secret=&counter=0")


@pytest.mark.parametrize("query", [
    "digits=abc",
    "digits=9",
    "digits=5",
    "algorithm=md5",
    "digits=6&algorithm=",
])
def test_bad_optional_fields_are_malformed_uri(query):
    uri = f"otpauth://hotp/ACME?secret=JBSWY3DPEHPK3PXP&{query}"
    with pytest.raises(MalformedURI) as exc:
        parse_uri(uri)
    assert exc.value.uri == uri
    assert exc.value.kind is ErrorKind.MALFORMED_URI
    assert exc.value.__cause__ is not None
    assert uri in str(exc.value)


@pytest.mark.parametrize("uri", [
    "https://hotp/ACME?secret=JBSWY3DPEHPK3PXP",
    "JBSWY3DPEHPK3PXP",
    "otpauth://[hotp/ACME?secret=JBSWY3DPEHPK3PXP",
])
def test_wrong_scheme_is_malformed_uri(uri):
    with pytest.raises(MalformedURI):
        parse_uri(uri)


def test_counter_is_not_validated():
    parsed = parse_uri("otpauth://hotp/ACME?secret=JBSWY3DPEHPK3PXP&counter=not-a-number")
    assert parsed.counter == "not-a-number"


def test_unbalanced_bracket_keeps_cause():
    uri = "otpauth://[hotp/ACME?secret=JBSWY3DPEHPK3PXP"
    with pytest.raises(MalformedURI) as exc:
        parse_uri(uri)
    assert isinstance(exc.value.__cause__, ValueError)
    assert exc.value.uri == uri


def test_build_uri_rejects_non_ascii_secret():
    with pytest.raises(InvalidEncoding):
        build_uri(build_config(b"JBSWY3DP\xff\xfe"), 0, "ACME")
    with pytest.raises(InvalidEncoding):
        build_uri(build_config("JBSWY3DPÉ"), 0, "ACME")


@pytest.mark.parametrize("issuer,account", [
    ("ACME:EU", "alice"),
    ("ACME:EU", "alice:work"),
    ("ACME:EU", ""),
    ("ACME", "a:b"),
])
def test_issuer_with_colon_round_trips(issuer, account):
    parsed = parse_uri(build_uri(build_config(SECRET), 0, issuer, account))
    assert parsed.issuer == issuer
    assert parsed.account == account


def test_label_prefix_not_matching_issuer_param():
    parsed = parse_uri("otpauth://hotp/Other:bob?secret=JBSWY3DPEHPK3PXP&issuer=ACME")
    assert parsed.issuer == "ACME"
    assert parsed.account == "bob"
