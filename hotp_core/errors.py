"""
errors.py — Các loại lỗi của thư viện HOTP.

Mỗi exception mang thuộc tính `kind` (ErrorKind) để caller có thể rẽ nhánh
theo loại lỗi mà không cần bắt theo cây class:

    try:
        code = generate(cfg, counter)
    except OTPError as e:
        if e.kind is ErrorKind.INVALID_ENCODING:
            ...
"""

from enum import Enum


class ErrorKind(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_ENCODING = "invalid_encoding"
    ALGORITHM_UNAVAILABLE = "algorithm_unavailable"
    INVALID_KEY = "invalid_key"
    MALFORMED_URI = "malformed_uri"


class OTPError(Exception):
    """Base class cho mọi lỗi của hotp_core."""

    kind: ErrorKind


class InvalidArgument(OTPError, ValueError):
    """Giá trị do caller truyền vào vi phạm điều kiện (secret rỗng, digits sai, counter âm...)."""

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidEncoding(OTPError, ValueError):
    """Secret không phải Base32 hợp lệ."""

    kind = ErrorKind.INVALID_ENCODING


class GenerationError(OTPError):
    """Môi trường không thực hiện được HMAC dù input hợp lệ."""


class AlgorithmUnavailable(GenerationError):
    kind = ErrorKind.ALGORITHM_UNAVAILABLE


class InvalidKey(GenerationError):
    kind = ErrorKind.INVALID_KEY


class MalformedURI(OTPError, ValueError):
    """otpauth URI không parse được thành cấu hình hợp lệ."""

    kind = ErrorKind.MALFORMED_URI

    def __init__(self, uri: str, reason: str = "URI could not be parsed"):
        super().__init__(f"{reason}: {uri}")
        self.uri = uri
        self.reason = reason
