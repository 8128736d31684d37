"""
codecs.py — Secret codec (Base32) và counter codec (8-byte big-endian).
"""

import base64
import binascii
import struct
from typing import Union

import pyotp

from .errors import InvalidArgument, InvalidEncoding

MAX_COUNTER = 2 ** 64 - 1   # counter được mã hóa thành unsigned 64-bit


def generate_base32_secret(length: int = 32) -> str:
    """
    Sinh một secret ngẫu nhiên dạng Base32 (chữ in hoa, không có padding).

    - Dùng pyotp.random_base32 (CSPRNG, bảng chữ A-Z2-7).
    - length=32 ký tự tương ứng 160-bit secret.

    Trả về:
        str: Base32 secret (ví dụ "JBSWY3DPEHPK3PXPJBSWY3DPEHPK3PXP")
    """
    return pyotp.random_base32(length=length)


def decode_base32_secret(secret: Union[bytes, str]) -> bytes:
    """
    Giải mã Base32 secret thành raw key bytes.

    - Không phân biệt hoa/thường (casefold).
    - Tự bù padding '=' nếu secret bị cắt padding (Google Authenticator thường bỏ '=').

    Raises:
        InvalidEncoding: secret chứa ký tự ngoài bảng chữ Base32 hoặc padding sai
    """
    if isinstance(secret, str):
        try:
            secret = secret.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidEncoding("Invalid Base32 secret") from e
    missing_padding = len(secret) % 8
    if missing_padding:
        secret += b"=" * (8 - missing_padding)
    try:
        return base64.b32decode(secret, casefold=True)
    except binascii.Error as e:
        raise InvalidEncoding("Invalid Base32 secret") from e


def int_to_bytes(counter: int) -> bytes:
    """
    Chuyển counter sang 8-byte big-endian như RFC4226 yêu cầu.

    Ví dụ: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        InvalidArgument: counter không phải int, âm, hoặc vượt quá 64-bit
    """
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidArgument(f"Counter must be an integer, got {type(counter).__name__}")
    if counter < 0:
        raise InvalidArgument("Counter must be greater than or equal to 0")
    if counter > MAX_COUNTER:
        raise InvalidArgument("Counter must fit in 64 bits")
    return struct.pack(">Q", counter)
