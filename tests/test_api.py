"""Tests for the Flask REST API."""

import hashlib

from hotp_core.otpauth import parse_uri


def test_index_lists_endpoints(client):
    resp = client.get("/")
    assert resp.status_code == 200
    endpoints = resp.get_json()["endpoints"]
    assert "POST /api/hotp" in endpoints
    assert "POST /api/verify_hotp" in endpoints


def test_hotp(client, rfc_secret, rfc_codes):
    resp = client.post("/api/hotp", json={"secret": rfc_secret, "counter": 0})
    assert resp.status_code == 200
    assert resp.get_json() == {"code": rfc_codes[0]}


def test_hotp_requires_counter(client, rfc_secret):
    resp = client.post("/api/hotp", json={"secret": rfc_secret})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_argument"


def test_hotp_requires_json_body(client):
    resp = client.post("/api/hotp", data="nope", content_type="text/plain")
    assert resp.status_code == 400


def test_hotp_invalid_base32(client):
    resp = client.post("/api/hotp", json={"secret": "JBSWY3DPEHPK3PX1", "counter": 0})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "invalid_encoding"


def test_hotp_invalid_digits(client, rfc_secret):
    resp = client.post("/api/hotp", json={"secret": rfc_secret, "counter": 0, "digits": 9})
    assert resp.status_code == 400


def test_hotp_algorithm_unavailable(client, monkeypatch, rfc_secret):
    monkeypatch.setattr(hashlib, "algorithms_available", frozenset())
    resp = client.post("/api/hotp", json={"secret": rfc_secret, "counter": 0})
    assert resp.status_code == 500
    assert resp.get_json()["kind"] == "algorithm_unavailable"


def test_verify_hotp(client, rfc_secret, rfc_codes):
    resp = client.post("/api/verify_hotp", json={
        "secret": rfc_secret, "code": rfc_codes[2], "counter": 1, "window": 1,
    })
    assert resp.get_json() == {"valid": True}

    resp = client.post("/api/verify_hotp", json={
        "secret": rfc_secret, "code": rfc_codes[2], "counter": 1,
    })
    assert resp.get_json() == {"valid": False}


def test_verify_hotp_fullwidth_digits_are_invalid(client, rfc_secret):
    resp = client.post("/api/verify_hotp", json={
        "secret": rfc_secret, "code": "７５５２２４", "counter": 0,
    })
    assert resp.status_code == 200
    assert resp.get_json() == {"valid": False}


def test_verify_hotp_window_limit(app, client, rfc_secret, rfc_codes):
    app.config["HOTP_MAX_WINDOW"] = 2
    resp = client.post("/api/verify_hotp", json={
        "secret": rfc_secret, "code": rfc_codes[2], "counter": 1, "window": 3,
    })
    assert resp.status_code == 400


def test_otpauth_uri_and_parse(client, rfc_secret):
    resp = client.post("/api/otpauth_uri", json={
        "secret": rfc_secret, "counter": 3, "issuer": "ACME", "account": "alice", "digits": 8,
    })
    uri = resp.get_json()["otp_uri"]
    assert uri.startswith("otpauth://hotp/ACME:alice?")

    resp = client.post("/api/parse_uri", json={"uri": uri})
    assert resp.get_json() == {
        "issuer": "ACME", "account": "alice", "digits": 8, "algorithm": "SHA1", "counter": "3",
    }


def test_otpauth_uri_uses_configured_issuer(rfc_secret):
    from hotp_backend import create_app

    client = create_app({"TESTING": True, "HOTP_ISSUER": "Corp"}).test_client()
    uri = client.post("/api/otpauth_uri", json={"secret": rfc_secret}).get_json()["otp_uri"]
    assert parse_uri(uri).issuer == "Corp"


def test_parse_uri_malformed(client):
    resp = client.post("/api/parse_uri", json={"uri": "otpauth://hotp/A?secret=JBSWY3DPEHPK3PXP&digits=x"})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "malformed_uri"


def test_parse_uri_unbalanced_bracket(client):
    resp = client.post("/api/parse_uri", json={"uri": "otpauth://[hotp/ACME?secret=JBSWY3DPEHPK3PXP"})
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "malformed_uri"


def test_generate_secret(client):
    resp = client.post("/api/generate_secret", json={"algorithm": "sha256", "issuer": "ACME"})
    data = resp.get_json()
    assert resp.status_code == 200
    assert len(data["secret"]) == 32
    parsed = parse_uri(data["otp_uri"])
    assert parsed.config.secret.decode() == data["secret"]
    assert parsed.config.algorithm.value == "SHA256"


def test_qr_code(client, rfc_secret):
    resp = client.post("/api/qr_code", json={"secret": rfc_secret, "issuer": "ACME"})
    data = resp.get_json()
    assert resp.status_code == 200
    assert data["qr_code"].startswith("data:image/png;base64,")
    assert data["otp_uri"].startswith("otpauth://hotp/ACME?")


def test_qr_code_rejects_bad_uri(client):
    resp = client.post("/api/qr_code", json={"uri": "otpauth://hotp/ACME?digits=6"})
    assert resp.status_code == 400
