import base64

import pytest

from hotp_backend import create_app
from hotp_core.config import build_config

# RFC 4226 Appendix D: secret = "12345678901234567890" (ASCII)
RFC4226_SECRET = base64.b32encode(b"12345678901234567890").decode()
RFC4226_CODES = [
    "755224", "287082", "359152", "969429", "338314",
    "254676", "287922", "162583", "399871", "520489",
]


@pytest.fixture
def rfc_secret():
    """Base32 text của secret RFC 4226."""
    return RFC4226_SECRET


@pytest.fixture
def rfc_codes():
    """Mã 6 chữ số cho counter 0..9."""
    return list(RFC4226_CODES)


@pytest.fixture
def rfc_config(rfc_secret):
    return build_config(rfc_secret)


@pytest.fixture
def app():
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
