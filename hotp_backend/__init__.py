"""
Backend package: REST API cho HOTP dùng Flask.
Tích hợp với các hàm core trong hotp_core.
"""

from .app import create_app

__all__ = ["create_app"]
