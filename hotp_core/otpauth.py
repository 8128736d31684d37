"""
otpauth.py — Tạo / đọc otpauth:// URI cho HOTP để import vào Authenticator apps.

Format:
    otpauth://hotp/{issuer}[:{account}]?secret=...&digits=...&algorithm=...&issuer=...&counter=...

- Label và query được percent-encode bằng urllib.parse.
- Thứ tự tham số cố định (secret, digits, algorithm, issuer, counter) để dễ test;
  với authenticator thì thứ tự không quan trọng.
"""

from typing import NamedTuple, Optional
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

from .algorithms import parse_algorithm
from .codecs import MAX_COUNTER
from .config import HOTPConfig, build_config
from .errors import InvalidArgument, InvalidEncoding, MalformedURI, OTPError

URL_SCHEME = "otpauth"
OTP_TYPE = "hotp"

SECRET = "secret"
DIGITS = "digits"
ALGORITHM = "algorithm"
ISSUER = "issuer"
COUNTER = "counter"


class ProvisioningURI(NamedTuple):
    config: HOTPConfig
    issuer: str
    account: str
    counter: Optional[str]


def build_uri(config: HOTPConfig, counter: int, issuer: str, account: str = "") -> str:
    """
    Tạo otpauth URI cho HOTP.

    Arguments:
        config: HOTPConfig cần provision
        counter: giá trị counter hiện tại (>= 0)
        issuer: tên dịch vụ (ví dụ 'MyService')
        account: tên tài khoản (ví dụ 'alice@example.com'); rỗng -> label chỉ có issuer

    Raises:
        InvalidArgument: counter âm hoặc không phải int
        InvalidEncoding: secret có byte không phải ASCII
    """
    if isinstance(counter, bool) or not isinstance(counter, int) or not 0 <= counter <= MAX_COUNTER:
        raise InvalidArgument("Counter must be a non-negative 64-bit integer")

    try:
        secret = config.secret.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidEncoding("Secret must be Base32 text to be put in a URI") from e

    label = issuer if not account else f"{issuer}:{account}"
    query = (
        (SECRET, secret),
        (DIGITS, str(config.digits)),
        (ALGORITHM, config.algorithm.value),
        (ISSUER, issuer),
        (COUNTER, str(counter)),
    )
    return f"{URL_SCHEME}://{OTP_TYPE}/{quote(label, safe=':@')}?{urlencode(query, quote_via=quote)}"


def _query_items(query: str) -> dict:
    # chỉ giữ giá trị đầu tiên của mỗi key
    return {key: values[0] for key, values in parse_qs(query, keep_blank_values=True).items()}


def parse_uri(uri: str) -> ProvisioningURI:
    """
    Đọc otpauth URI -> ProvisioningURI(config, issuer, account, counter).

    - `secret` bắt buộc; thiếu -> InvalidArgument.
    - `digits` / `algorithm` nếu có thì được parse + validate; mọi lỗi ở đây
      được gói thành MalformedURI (kèm URI gốc), caller không cần biết field nào sai.
    - `counter` trả về nguyên dạng chuỗi (hoặc None), không validate.

    Raises:
        InvalidArgument: thiếu secret hoặc secret rỗng
        MalformedURI: scheme sai, digits/algorithm không hợp lệ
    """
    if not isinstance(uri, str):
        raise MalformedURI(repr(uri), "URI must be a string")
    try:
        parts = urlsplit(uri)
    except ValueError as e:
        # ví dụ "Invalid IPv6 URL" khi netloc chứa '[' không đóng
        raise MalformedURI(uri) from e
    if parts.scheme.lower() != URL_SCHEME:
        raise MalformedURI(uri, f"URI scheme must be '{URL_SCHEME}'")

    query = _query_items(parts.query)
    if SECRET not in query:
        raise InvalidArgument("Secret query parameter must be set")
    config = build_config(query[SECRET])

    try:
        if DIGITS in query:
            config = config.with_digits(int(query[DIGITS]))
        if ALGORITHM in query:
            config = config.with_algorithm(parse_algorithm(query[ALGORITHM].upper()))
    except (ValueError, OTPError) as e:
        raise MalformedURI(uri) from e

    label = unquote(parts.path.lstrip("/"))
    issuer = query.get(ISSUER)
    if issuer and label == issuer:
        account = ""
    elif issuer and label.startswith(issuer + ":"):
        # issuer có thể chứa ':' -> cắt đúng prefix thay vì tách ở ':' đầu tiên
        account = label[len(issuer) + 1:]
    else:
        label_issuer, _, account = label.partition(":")
        issuer = issuer or label_issuer
    return ProvisioningURI(config=config, issuer=issuer, account=account, counter=query.get(COUNTER))


def config_from_uri(uri: str) -> HOTPConfig:
    """Shortcut: chỉ lấy HOTPConfig từ otpauth URI."""
    return parse_uri(uri).config
