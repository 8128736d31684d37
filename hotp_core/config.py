"""
config.py — Cấu hình bất biến (immutable) cho bộ sinh HOTP.

HOTPConfig được validate toàn bộ lúc khởi tạo: không có trạng thái "nửa hợp lệ"
nào lọt ra ngoài. Muốn đổi digits/algorithm thì tạo config mới qua
with_digits() / with_algorithm().
"""

import dataclasses
from dataclasses import dataclass
from typing import Union

from .algorithms import HMACAlgorithm, parse_algorithm
from .errors import InvalidArgument

DEFAULT_DIGITS = 6
DEFAULT_ALGORITHM = HMACAlgorithm.SHA1
MIN_DIGITS = 6
MAX_DIGITS = 8


def _validate_digits(digits) -> int:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidArgument(f"Password length must be an integer, got {digits!r}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidArgument(f"Password length must be between {MIN_DIGITS} and {MAX_DIGITS} digits")
    return digits


@dataclass(frozen=True)
class HOTPConfig:
    """
    secret    : Base32 secret (bytes, không rỗng)
    digits    : số chữ số của mã, trong khoảng 6..8 (mặc định 6)
    algorithm : SHA1 / SHA256 / SHA512 (mặc định SHA1)
    """

    secret: bytes
    digits: int = DEFAULT_DIGITS
    algorithm: HMACAlgorithm = DEFAULT_ALGORITHM

    def __post_init__(self):
        secret = self.secret
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not isinstance(secret, (bytes, bytearray)):
            raise InvalidArgument(f"Secret must be bytes or str, got {type(secret).__name__}")
        if len(secret) == 0:
            raise InvalidArgument("Secret must not be empty")
        # frozen dataclass -> phải dùng object.__setattr__ để chuẩn hóa field
        object.__setattr__(self, "secret", bytes(secret))
        object.__setattr__(self, "digits", _validate_digits(self.digits))
        object.__setattr__(self, "algorithm", parse_algorithm(self.algorithm))

    def __repr__(self) -> str:
        # không in secret ra log
        return f"HOTPConfig(digits={self.digits}, algorithm={self.algorithm.value})"

    @classmethod
    def with_defaults(cls, secret: Union[bytes, str]) -> "HOTPConfig":
        return cls(secret)

    def with_digits(self, digits: int) -> "HOTPConfig":
        return dataclasses.replace(self, digits=digits)

    def with_algorithm(self, algorithm: Union[str, HMACAlgorithm]) -> "HOTPConfig":
        return dataclasses.replace(self, algorithm=algorithm)


def build_config(
    secret: Union[bytes, str],
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[str, HMACAlgorithm] = DEFAULT_ALGORITHM,
) -> HOTPConfig:
    """
    Validate và tạo HOTPConfig trong một bước.

    Arguments:
        secret: Base32 secret (bytes hoặc str)
        digits: số chữ số OTP (6..8)
        algorithm: HMACAlgorithm hoặc tên thuật toán (không phân biệt hoa/thường)

    Raises:
        InvalidArgument: secret rỗng, digits ngoài [6, 8], algorithm không hỗ trợ
    """
    return HOTPConfig(secret=secret, digits=digits, algorithm=algorithm)
