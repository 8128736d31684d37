"""
FLASK APP MAIN ENTRY POINT - HOTP BACKEND SERVER
==================================================

File này thiết lập Flask app, cấu hình CORS, và đăng ký API routes.

CÁC TÍNH NĂNG CHÍNH
- App factory create_app() (dễ test với app.test_client())
- CORS enabled cho frontend integration
- Config đọc từ biến môi trường có prefix FLASK_ (ví dụ FLASK_HOTP_ISSUER=MyService)
- Trang chủ trả về danh sách API endpoints
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from hotp_core.otp_core import DEFAULT_ISSUER, DEFAULT_WINDOW

from .routes import hotp_bp

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "SECRET_KEY": "hotp_demo_secret_key",
    "HOTP_ISSUER": DEFAULT_ISSUER,
    "HOTP_DEFAULT_WINDOW": DEFAULT_WINDOW,
    "HOTP_MAX_WINDOW": 10,
}


def create_app(test_config=None) -> Flask:
    """
    Tạo Flask app.

    Thứ tự config: DEFAULT_CONFIG -> biến môi trường FLASK_* -> test_config.
    """
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env()
    if test_config:
        app.config.update(test_config)

    # BẬT CORS: cho phép frontend (domain/port khác) gọi API
    CORS(app)

    app.register_blueprint(hotp_bp)

    @app.route("/", methods=["GET"])
    def index():
        """Trang chủ API: liệt kê endpoints."""
        endpoints = sorted(
            f"{','.join(sorted(rule.methods - {'HEAD', 'OPTIONS'}))} {rule.rule}"
            for rule in app.url_map.iter_rules()
            if rule.endpoint != "static"
        )
        return jsonify({"service": "hotp-backend", "endpoints": endpoints})

    logger.debug("HOTP backend created (issuer=%s)", app.config["HOTP_ISSUER"])
    return app


# KHỞI CHẠY SERVER (development)
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True, host="0.0.0.0", port=5000)
