"""HMAC algorithm registry: closed set of supported hashes and their hashlib names."""

import hashlib
from enum import Enum
from typing import Union

from .errors import AlgorithmUnavailable, InvalidArgument


class HMACAlgorithm(Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


# tag -> tên digest trong hashlib
_HASHLIB_NAMES = {
    HMACAlgorithm.SHA1: "sha1",
    HMACAlgorithm.SHA256: "sha256",
    HMACAlgorithm.SHA512: "sha512",
}


def parse_algorithm(value: Union[str, HMACAlgorithm]) -> HMACAlgorithm:
    """
    Chuyển tên thuật toán (không phân biệt hoa/thường) sang HMACAlgorithm.

    Raises:
        InvalidArgument: tên không thuộc {SHA1, SHA256, SHA512}
    """
    if isinstance(value, HMACAlgorithm):
        return value
    if not isinstance(value, str):
        raise InvalidArgument(f"Unsupported HMAC algorithm: {value!r}")
    try:
        return HMACAlgorithm[value.strip().upper()]
    except KeyError:
        raise InvalidArgument(f"Unsupported HMAC algorithm: {value!r}") from None


def hashlib_name(algorithm: HMACAlgorithm) -> str:
    """
    Trả về tên digest dùng cho hmac.new(), kiểm tra runtime có hỗ trợ hay không.

    Raises:
        AlgorithmUnavailable: hashlib của môi trường hiện tại không có digest này
    """
    name = _HASHLIB_NAMES[algorithm]
    if name not in hashlib.algorithms_available:
        raise AlgorithmUnavailable(f"HMAC-{algorithm.value} is not available in this environment")
    return name
