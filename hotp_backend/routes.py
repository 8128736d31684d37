"""
HOTP BACKEND API ROUTES - FLASK BLUEPRINT

Đây là file chứa các API endpoints cho HOTP (RFC 4226) và otpauth URI.
API stateless: client gửi secret trong JSON body, server không lưu gì.

VÍ DỤ:
curl -X POST http://localhost:5000/api/generate_secret -H "Content-Type: application/json" -d "{}"
curl -X POST http://localhost:5000/api/hotp -H "Content-Type: application/json" \
     -d '{"secret": "JBSWY3DPEHPK3PXP", "counter": 0}'
"""

import base64
import io
import logging

import qrcode
from flask import Blueprint, current_app, jsonify, request

from hotp_core.codecs import generate_base32_secret
from hotp_core.config import DEFAULT_ALGORITHM, DEFAULT_DIGITS, build_config
from hotp_core.errors import GenerationError, InvalidArgument, OTPError
from hotp_core.otp_core import generate, verify
from hotp_core.otpauth import build_uri, parse_uri

logger = logging.getLogger(__name__)

hotp_bp = Blueprint("hotp", __name__, url_prefix="/api")


@hotp_bp.errorhandler(OTPError)
def handle_otp_error(e: OTPError):
    """Bad input -> 400, môi trường không tính được HMAC -> 500."""
    if isinstance(e, GenerationError):
        logger.error("HOTP generation failed: %s", e)
        status = 500
    else:
        logger.info("Rejected request: %s", e)
        status = 400
    return jsonify({"error": str(e), "kind": e.kind.value}), status


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgument("JSON object body required")
    return data


def _require(data: dict, *fields):
    missing = [f for f in fields if f not in data]
    if missing:
        raise InvalidArgument(f"{', '.join(missing)} is required")


def _config_from(data: dict):
    _require(data, "secret")
    return build_config(
        data["secret"],
        digits=data.get("digits", DEFAULT_DIGITS),
        algorithm=data.get("algorithm", DEFAULT_ALGORITHM),
    )


@hotp_bp.route("/generate_secret", methods=["POST"])
def generate_secret():
    """
    TẠO SECRET KEY + otpauth URI

      curl -X POST http://localhost:5000/api/generate_secret -H "Content-Type: application/json" \
           -d '{"digits": 8, "algorithm": "SHA256", "issuer": "MyApp", "account": "alice"}'
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidArgument("JSON object body required")
    config = _config_from({**data, "secret": generate_base32_secret()})
    counter = data.get("counter", 0)
    issuer = data.get("issuer", current_app.config["HOTP_ISSUER"])
    uri = build_uri(config, counter, issuer, data.get("account", ""))

    logger.info("Generated secret with digits=%d, algorithm=%s", config.digits, config.algorithm.value)
    return jsonify({
        "secret": config.secret.decode("utf-8"),
        "digits": config.digits,
        "algorithm": config.algorithm.value,
        "counter": counter,
        "otp_uri": uri,
    })


@hotp_bp.route("/hotp", methods=["POST"])
def get_hotp():
    """
    LẤY MÃ HOTP

    Input (JSON body):
      {"secret": "JBSWY3DPEHPK3PXP", "counter": 1, "digits": 6, "algorithm": "SHA1"}
    Output:
      {"code": "123456"}
    """
    data = _json_body()
    _require(data, "counter")
    config = _config_from(data)
    return jsonify({"code": generate(config, data["counter"])})


@hotp_bp.route("/verify_hotp", methods=["POST"])
def verify_hotp_route():
    """
    XÁC MINH MÃ HOTP

    Input (JSON body):
      {
        "secret": "JBSWY3DPEHPK3PXP",  # BẮT BUỘC
        "code": "123456",              # BẮT BUỘC
        "counter": 1,                  # BẮT BUỘC - counter mong đợi
        "window": 1                    # Cho phép lệch +/- 1 counter
      }
    Output:
      {"valid": true}  hoặc  {"valid": false}
    """
    data = _json_body()
    _require(data, "code", "counter")
    config = _config_from(data)

    window = data.get("window", current_app.config["HOTP_DEFAULT_WINDOW"])
    max_window = current_app.config["HOTP_MAX_WINDOW"]
    if isinstance(window, int) and window > max_window:
        raise InvalidArgument(f"window must not exceed {max_window}")

    valid = verify(config, str(data["code"]), data["counter"], window)
    return jsonify({"valid": valid})


@hotp_bp.route("/otpauth_uri", methods=["POST"])
def get_otpauth_uri():
    """
    TẠO URI ĐỂ IMPORT VÀO AUTHENTICATOR APPS

    Input (JSON body):
      {"secret": "...", "counter": 0, "issuer": "MyApp", "account": "user@gmail.com"}
    """
    data = _json_body()
    config = _config_from(data)
    issuer = data.get("issuer", current_app.config["HOTP_ISSUER"])
    uri = build_uri(config, data.get("counter", 0), issuer, data.get("account", ""))
    return jsonify({"otp_uri": uri})


@hotp_bp.route("/parse_uri", methods=["POST"])
def parse_uri_route():
    """
    ĐỌC otpauth URI

    Input:  {"uri": "otpauth://hotp/MyApp:alice?secret=...&counter=0"}
    Output: {"issuer", "account", "digits", "algorithm", "counter"}
    """
    data = _json_body()
    _require(data, "uri")
    parsed = parse_uri(data["uri"])
    return jsonify({
        "issuer": parsed.issuer,
        "account": parsed.account,
        "digits": parsed.config.digits,
        "algorithm": parsed.config.algorithm.value,
        "counter": parsed.counter,
    })


@hotp_bp.route("/qr_code", methods=["POST"])
def get_qr_code():
    """
    TẠO QR CODE (PNG base64) CHO otpauth URI

    Input: {"uri": "otpauth://..."} hoặc các field như /otpauth_uri
    """
    data = _json_body()
    if "uri" in data:
        uri = data["uri"]
        parse_uri(uri)  # chỉ render URI hợp lệ
    else:
        config = _config_from(data)
        issuer = data.get("issuer", current_app.config["HOTP_ISSUER"])
        uri = build_uri(config, data.get("counter", 0), issuer, data.get("account", ""))

    qr = qrcode.QRCode(version=1, box_size=10, border=5)
    qr.add_data(uri)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    img_str = base64.b64encode(buffer.getvalue()).decode()

    return jsonify({"qr_code": f"data:image/png;base64,{img_str}", "otp_uri": uri})
