"""
otp_core.py — Core library cho HOTP (RFC 4226).

Mục tiêu:
- Chứa các hàm thuần (pure functions) để dùng trực tiếp bởi CLI / REST API.
- Không chứa argparse / Flask: CLI ở otp_cli.py, API ở package hotp_backend.
- Không giữ trạng thái giữa các lần gọi: mỗi lần generate tạo HMAC object mới,
  nên nhiều thread có thể dùng chung một HOTPConfig.

Lưu ý bảo mật:
- Không log secret hay mã OTP; chỉ log algorithm + counter ở mức DEBUG.
- So sánh mã bằng hmac.compare_digest để tránh timing attack.
"""

import hmac
import logging
from typing import Union

from .algorithms import HMACAlgorithm, hashlib_name
from .codecs import MAX_COUNTER, decode_base32_secret, int_to_bytes
from .config import DEFAULT_ALGORITHM, DEFAULT_DIGITS, HOTPConfig
from .errors import AlgorithmUnavailable, InvalidArgument, InvalidKey
from .otpauth import build_uri, config_from_uri

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_ISSUER = "otp-tool"
DEFAULT_WINDOW = 0
SECRET_FILE = "otp_secret.json"

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_DIGITS",
    "DEFAULT_ISSUER",
    "DEFAULT_WINDOW",
    "SECRET_FILE",
    "HOTPGenerator",
    "dynamic_truncate",
    "generate",
    "verify",
]


# --- RFC helpers -----------------------------------------------------------
def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Áp dụng dynamic truncation theo RFC4226.

    - Lấy offset = last_byte & 0x0F
    - Lấy 4 bytes từ offset, đọc big-endian, clear MSB (& 0x7FFFFFFF)
    - Trả về integer 31-bit (unsigned)

    Arguments:
        hmac_digest: digest của HMAC (SHA1 -> 20, SHA256 -> 32, SHA512 -> 64 bytes)
    """
    # offset tối đa 15 -> cần >= 19 bytes, luôn đúng với SHA1/256/512
    offset = hmac_digest[-1] & 0x0F
    code = int.from_bytes(hmac_digest[offset:offset + 4], "big")
    return code & 0x7FFFFFFF


def _hmac_digest(key: bytes, msg: bytes, algorithm: HMACAlgorithm) -> bytes:
    if not key:
        raise InvalidKey("Decoded secret is empty and cannot be used as an HMAC key")
    digestmod = hashlib_name(algorithm)
    try:
        return hmac.new(key, msg, digestmod).digest()
    except ValueError as e:
        # hashlib có thể từ chối digest lúc chạy (ví dụ OpenSSL ở chế độ FIPS)
        raise AlgorithmUnavailable(f"HMAC-{algorithm.value} is not available: {e}") from e


def generate(config: HOTPConfig, counter: int) -> str:
    """
    Sinh mã HOTP theo RFC4226.

    Steps:
    1. Base32-decode secret -> raw key bytes
    2. Message = 8-byte counter (big-endian)
    3. HMAC-<algorithm>(key, message)
    4. Dynamic truncate -> dbc
    5. otp = dbc % 10^digits
    6. Zero-pad để có đúng "digits" chữ số

    Arguments:
        config: HOTPConfig (secret, digits, algorithm)
        counter: integer counter (0 <= counter < 2^64)

    Trả về:
        str: mã HOTP dạng zero-padded

    Raises:
        InvalidArgument: counter âm / không phải int
        InvalidEncoding: secret Base32 không hợp lệ
        AlgorithmUnavailable: môi trường không có digest được chọn
        InvalidKey: secret sau khi decode rỗng
    """
    msg = int_to_bytes(counter)
    key = decode_base32_secret(config.secret)

    logger.debug("HOTP: HMAC-%s(key=secret, msg=counter=%d)", config.algorithm.value, counter)
    digest = _hmac_digest(key, msg, config.algorithm)

    dbc = dynamic_truncate(digest)
    return str(dbc % (10 ** config.digits)).zfill(config.digits)


def verify(config: HOTPConfig, code: str, counter: int, window: int = DEFAULT_WINDOW) -> bool:
    """
    Xác minh mã HOTP do user nhập, cho phép lệch counter trong [-window, +window].

    - Mã sai độ dài -> False ngay, không tính HMAC.
    - Counter ngoài miền [0, 2^64 - 1] trong cửa sổ bị bỏ qua, không raise.
    - Mã chứa ký tự không phải ASCII (ví dụ chữ số full-width) -> False.
    - Chỉ trả về bool, không cho biết offset nào khớp.

    Raises:
        InvalidArgument: window âm
        InvalidEncoding / GenerationError: lỗi khi sinh mã (không bị nuốt)
    """
    if isinstance(window, bool) or not isinstance(window, int) or window < 0:
        raise InvalidArgument("Delay window must be a non-negative integer")
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidArgument(f"Counter must be an integer, got {type(counter).__name__}")
    if not isinstance(code, str) or len(code) != config.digits:
        return False

    # compare_digest chỉ nhận str ASCII -> so sánh trên bytes
    candidate = code.encode("utf-8")
    for offset in range(-window, window + 1):
        test_counter = counter + offset
        if not 0 <= test_counter <= MAX_COUNTER:
            continue
        expected = generate(config, test_counter)
        if hmac.compare_digest(expected.encode("ascii"), candidate):
            return True
    return False


class HOTPGenerator:
    """
    Bộ sinh HOTP gắn với một HOTPConfig.

    Ví dụ:
        gen = HOTPGenerator.with_defaults(b"JBSWY3DPEHPK3PXP")
        code = gen.generate(0)
        gen.verify(code, 0)  # True
    """

    def __init__(self, config: HOTPConfig):
        self._config = config

    @classmethod
    def with_defaults(cls, secret: Union[bytes, str]) -> "HOTPGenerator":
        return cls(HOTPConfig.with_defaults(secret))

    @classmethod
    def from_uri(cls, uri: str) -> "HOTPGenerator":
        return cls(config_from_uri(uri))

    @property
    def config(self) -> HOTPConfig:
        return self._config

    @property
    def digits(self) -> int:
        return self._config.digits

    @property
    def algorithm(self) -> HMACAlgorithm:
        return self._config.algorithm

    def generate(self, counter: int) -> str:
        return generate(self._config, counter)

    def verify(self, code: str, counter: int, window: int = DEFAULT_WINDOW) -> bool:
        return verify(self._config, code, counter, window)

    def get_uri(self, counter: int, issuer: str, account: str = "") -> str:
        return build_uri(self._config, counter, issuer, account)

    def __repr__(self) -> str:
        return f"HOTPGenerator({self._config!r})"
