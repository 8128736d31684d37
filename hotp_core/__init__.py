"""
hotp_core package
=================

Công cụ tạo và xác minh HOTP theo chuẩn RFC 4226, kèm tạo / đọc otpauth:// URI
cho các ứng dụng Authenticator.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-<SHA1|SHA256|SHA512>(key=secret, msg=counter)) mod 10^digits
  → Counter tăng dần (token event-based).

- Dynamic Truncation:
  Lấy 4 byte từ HMAC dựa vào offset (last byte & 0x0F), clear bit cao nhất.

- TOTP không nằm trong package này: chỉ cần truyền
  counter = (timestamp - T0) // timestep vào generate().

──────────────────────────────────────────────
Ví dụ sử dụng nhanh
──────────────────────────────────────────────
>>> from hotp_core import build_config, generate, verify
>>> cfg = build_config(b"GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
>>> generate(cfg, 0)
'755224'
>>> verify(cfg, "287082", 0, window=1)
True
"""

from .algorithms import HMACAlgorithm, parse_algorithm
from .codecs import decode_base32_secret, generate_base32_secret, int_to_bytes
from .config import HOTPConfig, build_config
from .errors import (
    AlgorithmUnavailable,
    ErrorKind,
    GenerationError,
    InvalidArgument,
    InvalidEncoding,
    InvalidKey,
    MalformedURI,
    OTPError,
)
from .otp_core import HOTPGenerator, dynamic_truncate, generate, verify
from .otpauth import ProvisioningURI, build_uri, config_from_uri, parse_uri

__all__ = [
    "AlgorithmUnavailable",
    "ErrorKind",
    "GenerationError",
    "HMACAlgorithm",
    "HOTPConfig",
    "HOTPGenerator",
    "InvalidArgument",
    "InvalidEncoding",
    "InvalidKey",
    "MalformedURI",
    "OTPError",
    "ProvisioningURI",
    "build_config",
    "build_uri",
    "config_from_uri",
    "decode_base32_secret",
    "dynamic_truncate",
    "generate",
    "generate_base32_secret",
    "int_to_bytes",
    "parse_algorithm",
    "parse_uri",
    "verify",
]
