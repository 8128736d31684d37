"""
storage.py — Lưu / đọc cấu hình HOTP (secret, digits, algorithm, counter) ra file JSON.

Lưu ý bảo mật:
- Giữ file secret ở nơi an toàn (chmod 600), không commit lên VCS.
"""

import json
import logging
import os
import shutil

from .config import DEFAULT_ALGORITHM, DEFAULT_DIGITS, HOTPConfig, build_config
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


def save_secret(config: HOTPConfig, path: str, counter: int = 0) -> None:
    """
    Lưu cấu hình HOTP vào file JSON.

    - Nếu file đã tồn tại, tạo backup path + ".bak".
    - Thử chmod 600; không fatal nếu FS không hỗ trợ.

    Arguments:
        config: HOTPConfig cần lưu
        path: đường dẫn file
        counter: counter hiện tại của token
    """
    if os.path.exists(path):
        logger.debug("%s exists, keeping a backup at %s.bak", path, path)
        shutil.copy2(path, path + ".bak")

    data = {
        "secret": config.secret.decode("utf-8"),
        "digits": config.digits,
        "algorithm": config.algorithm.value,
        "counter": counter,
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    try:
        os.chmod(path, 0o600)
    except OSError:
        logger.warning("Unable to chmod %s to 600", path)
    logger.debug("Secret saved to %s", path)


def load_secret(path: str):
    """
    Đọc file JSON, trả về (HOTPConfig, counter).

    Raises:
        FileNotFoundError: file không tồn tại
        InvalidArgument: file hỏng (không phải JSON object, counter không phải số)
            hoặc dữ liệu trong file không hợp lệ
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as e:
        # JSONDecodeError / UnicodeDecodeError đều là ValueError
        raise InvalidArgument(f"Secret file {path} is corrupt: {e}") from e
    if not isinstance(data, dict):
        raise InvalidArgument(f"Secret file {path} is corrupt: expected a JSON object")

    config = build_config(
        data.get("secret", ""),
        digits=data.get("digits", DEFAULT_DIGITS),
        algorithm=data.get("algorithm", DEFAULT_ALGORITHM),
    )
    try:
        counter = int(data.get("counter", 0))
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Secret file {path} is corrupt: bad counter") from e
    return config, counter
