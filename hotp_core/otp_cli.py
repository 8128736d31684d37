#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper cho hotp_core

Cung cấp các subcommand:
- init      : tạo secret mới, lưu vào file, in ra otpauth URI
- hotp      : sinh mã HOTP cho một counter
- verify    : xác minh mã HOTP (có delay window)
- uri       : in ra otpauth URI từ secret đã lưu
- parse-uri : đọc otpauth URI và in ra các field

eg..:
    hotp-cli init --issuer MyService --account alice@example --digits 8
    hotp-cli hotp --counter 42
    hotp-cli hotp --secret JBSWY3DPEHPK3PXP --counter 0 --algorithm sha256
    hotp-cli verify --code 287082 --counter 0 --window 1
    hotp-cli uri --issuer MyService --account alice@example
    hotp-cli parse-uri "otpauth://hotp/MyService:alice?secret=JBSWY3DPEHPK3PXP&counter=0"
"""

import argparse
import logging
import sys

from .algorithms import HMACAlgorithm
from .codecs import generate_base32_secret
from .config import build_config
from .errors import OTPError
from .otp_core import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_ISSUER, DEFAULT_WINDOW, SECRET_FILE, generate, verify
from .otpauth import build_uri, parse_uri
from .storage import load_secret, save_secret

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = [a.value for a in HMACAlgorithm]


def _resolve(args):
    """Lấy (config, counter) từ --secret nếu có, ngược lại đọc từ file; áp dụng override."""
    if args.secret:
        config, counter = build_config(args.secret), 0
    else:
        config, counter = load_secret(args.file)
    if args.digits is not None:
        config = config.with_digits(args.digits)
    if args.algorithm is not None:
        config = config.with_algorithm(args.algorithm)
    if getattr(args, "counter", None) is not None:
        counter = args.counter
    return config, counter


# --- CLI command handlers ---
def cmd_init(args):
    secret = generate_base32_secret()
    config = build_config(
        secret,
        digits=args.digits if args.digits is not None else DEFAULT_DIGITS,
        algorithm=args.algorithm or DEFAULT_ALGORITHM,
    )
    save_secret(config, args.file, counter=args.counter or 0)
    logger.info("Secret saved to %s", args.file)

    print("[*] otpauth URI (import into authenticator apps):")
    print("    HOTP:", build_uri(config, args.counter or 0, args.issuer, args.account))


def cmd_hotp(args):
    config, counter = _resolve(args)
    code = generate(config, counter)
    print(f"HOTP({config.digits}d, {config.algorithm.value}, counter={counter}): {code}")


def cmd_verify(args):
    config, counter = _resolve(args)
    if verify(config, args.code, counter, args.window):
        print("[+] HOTP code is VALID")
        return 0
    print("[-] HOTP code is INVALID")
    return 1


def cmd_uri(args):
    config, counter = _resolve(args)
    print(build_uri(config, counter, args.issuer, args.account))


def cmd_parse_uri(args):
    parsed = parse_uri(args.uri)
    print(f"issuer    : {parsed.issuer}")
    print(f"account   : {parsed.account}")
    print(f"digits    : {parsed.config.digits}")
    print(f"algorithm : {parsed.config.algorithm.value}")
    print(f"counter   : {parsed.counter if parsed.counter is not None else '-'}")


def cmd_help(args):
    print("'hotp-cli -h' for help.")


# --- Argparse builder ---
def _add_common(p: argparse.ArgumentParser):
    p.add_argument("--secret", help="Base32 secret (overrides the stored secret file)")
    p.add_argument("--file", default=SECRET_FILE, help="Secret file (JSON)")
    p.add_argument("--digits", type=int, help="Override number of digits (6..8)")
    p.add_argument("--algorithm", type=str.upper, choices=ALGORITHM_CHOICES, help="Override HMAC algorithm")
    p.add_argument("--counter", type=int, help="HOTP counter (defaults to the stored counter)")
    p.add_argument("--verbose", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="HOTP (RFC 4226) generator / verifier CLI")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help, verbose=False)

    # init
    pi = sub.add_parser("init", help="Generate a new secret, save it and print the otpauth URI")
    pi.add_argument("--file", default=SECRET_FILE, help="Secret file (JSON)")
    pi.add_argument("--account", default="", help="Account label for otpauth URI")
    pi.add_argument("--issuer", default=DEFAULT_ISSUER, help="Issuer label for otpauth URI")
    pi.add_argument("--digits", type=int, help="Number of OTP digits (6..8)")
    pi.add_argument("--algorithm", type=str.upper, choices=ALGORITHM_CHOICES, help="HMAC algorithm")
    pi.add_argument("--counter", type=int, help="Initial counter")
    pi.add_argument("--verbose", action="store_true", help="Verbose output")
    pi.set_defaults(func=cmd_init)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_common(ph)
    ph.set_defaults(func=cmd_hotp)

    # verify
    pv = sub.add_parser("verify", help="Verify a HOTP code")
    _add_common(pv)
    pv.add_argument("--code", required=True, help="OTP code to verify")
    pv.add_argument("--window", type=int, default=DEFAULT_WINDOW, help="Allowed +/- counter window")
    pv.set_defaults(func=cmd_verify)

    # uri
    pu = sub.add_parser("uri", help="Print otpauth URI")
    _add_common(pu)
    pu.add_argument("--account", default="")
    pu.add_argument("--issuer", default=DEFAULT_ISSUER)
    pu.set_defaults(func=cmd_uri)

    # parse-uri
    pp = sub.add_parser("parse-uri", help="Parse an otpauth URI and print its fields")
    pp.add_argument("uri")
    pp.add_argument("--verbose", action="store_true")
    pp.set_defaults(func=cmd_parse_uri)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    try:
        return args.func(args) or 0
    except OTPError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"[!] Secret file not found: {e.filename}. Run 'hotp-cli init' first or pass --secret.",
              file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
