# Main Entry Point - Command Line
#
# securepass-vault generate-secret   new SECRET_KEY value
# securepass-vault encrypt TEXT      envelope for TEXT under SECRET_KEY
# securepass-vault decrypt ENVELOPE  plaintext for ENVELOPE under SECRET_KEY
# securepass-vault self-test         round-trip, wrong-key and format checks

import argparse
import sys
from typing import List, Optional

from . import __version__
from .core import (
    EventSeverity,
    EventType,
    VaultSettings,
    configure_audit_logger,
    generate_secret,
    get_audit_logger,
    load_settings,
)
from .vault import (
    AuthenticationFailure,
    ConfigurationError,
    EnvelopeCipher,
    EnvelopeError,
    InvalidEnvelopeFormat,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2

SELF_TEST_CASES = [
    ("MyPassword123!", "test-secret-key"),
    ("AnotherP@ssw0rd", "different-secret"),
    ("Short", "key123"),
    ("Very long password with special characters !@#$%^&*()_+-={}[]|\\:\";'<>?,./~`", "strong-secret-key"),
]


def _cipher_from_settings(settings: VaultSettings) -> EnvelopeCipher:
    return EnvelopeCipher(settings.require_secret_key())


def cmd_generate_secret(args, settings) -> int:
    print(generate_secret(args.bytes))
    return EXIT_OK


def cmd_encrypt(args, settings) -> int:
    cipher = _cipher_from_settings(settings)
    print(cipher.encrypt(args.text))
    get_audit_logger().log_event(
        event_type=EventType.ENVELOPE_ENCRYPTED,
        severity=EventSeverity.INFO,
        message="Value encrypted from command line",
    )
    return EXIT_OK


def cmd_decrypt(args, settings) -> int:
    cipher = _cipher_from_settings(settings)
    result = cipher.try_decrypt(args.envelope)
    if not result.ok:
        get_audit_logger().log_event(
            event_type=EventType.ENVELOPE_DECRYPT_FAILED,
            severity=EventSeverity.ALERT,
            message=EnvelopeError.PUBLIC_MESSAGE,
        )
        print(f"Error: {EnvelopeError.PUBLIC_MESSAGE}", file=sys.stderr)
        return EXIT_FAILURE
    print(result.plaintext)
    return EXIT_OK


def run_self_test() -> List[str]:
    """
    Run the built-in encryption checks.

    Returns:
        List of failure descriptions (empty when everything passed)
    """
    failures = []

    for index, (text, secret) in enumerate(SELF_TEST_CASES, start=1):
        cipher = EnvelopeCipher(secret)
        try:
            if cipher.decrypt(cipher.encrypt(text)) != text:
                failures.append(f"case {index}: decrypted text does not match")
        except EnvelopeError as e:
            failures.append(f"case {index}: {type(e).__name__}")

    envelope = EnvelopeCipher("correct-key").encrypt("test")
    try:
        EnvelopeCipher("wrong-key").decrypt(envelope)
        failures.append("wrong key: decryption did not fail")
    except AuthenticationFailure:
        pass

    try:
        EnvelopeCipher("some-key").decrypt("invalid:format")
        failures.append("invalid format: decryption did not fail")
    except InvalidEnvelopeFormat:
        pass

    return failures


def cmd_self_test(args, settings) -> int:
    failures = run_self_test()
    total = len(SELF_TEST_CASES) + 2

    if failures:
        for failure in failures:
            print(f"[FAILED] {failure}")
        get_audit_logger().log_event(
            event_type=EventType.SELFTEST_FAILED,
            severity=EventSeverity.CRITICAL,
            message=f"Self-test failed ({len(failures)} of {total} checks)",
            details={"failures": failures},
        )
        return EXIT_FAILURE

    print(f"[OK] All {total} checks passed")
    get_audit_logger().log_event(
        event_type=EventType.SELFTEST_PASSED,
        severity=EventSeverity.INFO,
        message=f"Self-test passed ({total} checks)",
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="securepass-vault",
        description="SecurePass Vault - encrypted-at-rest credential envelopes",
        epilog="encrypt/decrypt read SECRET_KEY from the environment or a .env file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SecurePass Vault v{__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser("generate-secret", help="Print a new random SECRET_KEY value")
    gen.add_argument("--bytes", type=int, default=32, help="Secret length in bytes (default: 32)")
    gen.set_defaults(func=cmd_generate_secret)

    enc = subparsers.add_parser("encrypt", help="Encrypt TEXT and print the envelope")
    enc.add_argument("text")
    enc.set_defaults(func=cmd_encrypt)

    dec = subparsers.add_parser("decrypt", help="Decrypt ENVELOPE and print the plaintext")
    dec.add_argument("envelope")
    dec.set_defaults(func=cmd_decrypt)

    test = subparsers.add_parser("self-test", help="Run built-in encryption checks")
    test.set_defaults(func=cmd_self_test)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for SecurePass Vault."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Every audit event, including startup, goes to settings.audit_log_dir
    settings = load_settings(require_secret=False)
    configure_audit_logger(settings.audit_log_dir)

    get_audit_logger().log_event(
        event_type=EventType.SYSTEM_START,
        severity=EventSeverity.INFO,
        message="SecurePass Vault command started",
        details={"version": __version__, "command": args.command}
    )

    try:
        return args.func(args, settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
